import logging
from bisect import bisect_left, bisect_right, insort
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from basic_ast import Statement
from errors import UnknownLineError

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


@dataclass
class ProgramLine:
    number: int
    source: str
    statement: Optional[Statement] = None


class Program:
    """
    Armazena as linhas de um programa BASIC em ordem de número de linha.

    Cada linha guarda o texto digitado pelo usuário e, depois da análise, o
    comando já convertido em AST. As linhas ficam num dicionário indexado pelo
    número, e a ordem crescente é mantida incrementalmente num índice ordenado
    a cada inserção ou remoção, de modo que percorrer o programa nunca exige
    reordenar.
    """

    def __init__(self):
        self._lines: Dict[int, ProgramLine] = {}
        self._order: List[int] = []

    def __len__(self):
        return len(self._lines)

    def __contains__(self, number):
        return number in self._lines

    def __iter__(self) -> Iterator[ProgramLine]:
        for number in self._order:
            yield self._lines[number]

    def clear(self):
        self._lines.clear()
        self._order.clear()
        logger.debug("Programa apagado")

    def upsert_line(self, number: int, text: str):
        """
        Adiciona uma linha ou substitui o texto de uma linha existente. Substituir
        o texto descarta o comando analisado anteriormente.
        """
        if number < 0:
            raise ValueError(f"Número de linha inválido: {number}")
        line = self._lines.get(number)
        if line is None:
            self._lines[number] = ProgramLine(number, text)
            insort(self._order, number)
        else:
            line.source = text
            line.statement = None
        logger.debug("Linha %d: %s", number, text)

    def remove_line(self, number: int):
        if self._lines.pop(number, None) is None:
            return
        del self._order[bisect_left(self._order, number)]
        logger.debug("Linha %d removida", number)

    def get_source_line(self, number: int) -> str:
        line = self._lines.get(number)
        return line.source if line else ""

    def set_parsed_statement(self, number: int, statement: Statement):
        line = self._lines.get(number)
        if line is None:
            raise UnknownLineError(f"Linha {number} não existe no programa")
        line.statement = statement

    def get_parsed_statement(self, number: int) -> Optional[Statement]:
        line = self._lines.get(number)
        return line.statement if line else None

    def first_line(self) -> Optional[int]:
        return self._order[0] if self._order else None

    def next_line(self, number: int) -> Optional[int]:
        """Menor número de linha maior que `number` (que não precisa existir)."""
        index = bisect_right(self._order, number)
        if index < len(self._order):
            return self._order[index]
        return None
