from typing import Callable, Dict, Optional

from errors import UnboundVariableError

# Valor do registrador de linha atual depois de um END
HALT = -1


class EvalState:
    """
    Estado de execução: valores das variáveis, o registrador de linha atual e
    as funções de entrada/saída usadas por INPUT e PRINT.

    Comandos de desvio (GOTO, IF, END) agem escrevendo em `current_line`; o laço
    de execução relê esse registrador depois de cada comando.
    """

    def __init__(self, read_input: Optional[Callable[[str], str]] = None,
                 write_output: Optional[Callable[[str], None]] = None):
        self.variables: Dict[str, int] = {}
        self.current_line: Optional[int] = None
        self.read_input = read_input or input
        self.write_output = write_output or print

    def set_value(self, name: str, value: int):
        self.variables[name] = value

    def get_value(self, name: str) -> int:
        if name not in self.variables:
            raise UnboundVariableError(name)
        return self.variables[name]

    def is_defined(self, name: str) -> bool:
        return name in self.variables

    def clear(self):
        self.variables.clear()
        self.current_line = None

    @property
    def halted(self):
        return self.current_line == HALT
