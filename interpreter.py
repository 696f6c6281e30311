import logging

from basic_ast import *
from errors import (
    BasicError, DivisionByZeroError, InputError, StepLimitError, UndefinedLineError,
    UnboundVariableError, UnparsedLineError,
)
from state import HALT, EvalState

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

INPUT_PROMPT = ' ? '


def _divide(left, right):
    # Divisão inteira truncada em direção a zero
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def evaluate(expr, bindings):
    """Avalia uma expressão com os valores de `bindings` (um dict ou um EvalState)."""
    if isinstance(expr, Constant):
        return expr.value
    elif isinstance(expr, Variable):
        if isinstance(bindings, dict):
            if expr.name not in bindings:
                raise UnboundVariableError(expr.name)
            return bindings[expr.name]
        return bindings.get_value(expr.name)
    elif isinstance(expr, BinaryOp):
        left_val = evaluate(expr.left, bindings)
        right_val = evaluate(expr.right, bindings)

        if expr.op == '+': return left_val + right_val
        if expr.op == '-': return left_val - right_val
        if expr.op == '*': return left_val * right_val
        if expr.op == '/':
            if right_val == 0:
                raise DivisionByZeroError("Divisão por zero")
            return _divide(left_val, right_val)
        raise ValueError(f"Operador desconhecido: {expr.op}")
    else:
        raise TypeError(f"Tipo de expressão inválido: {type(expr)}")


def evaluate_condition(left, op, right, bindings):
    left_val = evaluate(left, bindings)
    right_val = evaluate(right, bindings)

    if op == '=': return left_val == right_val
    if op == '<': return left_val < right_val
    if op == '>': return left_val > right_val
    raise ValueError(f"Operador relacional inválido: {op}")


def read_integer(state, var, retry=True):
    """
    Lê um inteiro pelo `read_input` do estado. No console uma resposta inválida
    é pedida de novo; sem `retry` ela vira InputError.
    """
    while True:
        raw = state.read_input(INPUT_PROMPT)
        try:
            return int(str(raw).strip())
        except ValueError:
            if not retry:
                raise InputError(f"Entrada para '{var}' deve ser um número inteiro")
            state.write_output("Entrada deve ser um número inteiro. Tente novamente.")


def execute(stmt, state, retry_input=True):
    """
    Executa um comando sobre o estado. GOTO, IF verdadeiro e END agem apenas
    escrevendo em state.current_line.
    """
    if isinstance(stmt, RemStatement):
        pass

    elif isinstance(stmt, LetStatement):
        state.set_value(stmt.var, evaluate(stmt.expr, state))

    elif isinstance(stmt, PrintStatement):
        state.write_output(str(evaluate(stmt.expr, state)))

    elif isinstance(stmt, InputStatement):
        state.set_value(stmt.var, read_integer(state, stmt.var, retry_input))

    elif isinstance(stmt, GotoStatement):
        state.current_line = stmt.target

    elif isinstance(stmt, IfStatement):
        if evaluate_condition(stmt.left, stmt.op, stmt.right, state):
            state.current_line = stmt.target

    elif isinstance(stmt, EndStatement):
        state.current_line = HALT

    else:
        raise TypeError(f"Comando desconhecido: {type(stmt).__name__}")


class Interpreter:
    """
    Executa um Program a partir da primeira linha até END, até o fim do
    programa ou até um erro. `max_steps` limita o número de comandos
    executados (None = sem limite).
    """
    def __init__(self, program, state=None, max_steps=None, retry_input=True):
        self.program = program
        self.state = state if state is not None else EvalState()
        self.max_steps = max_steps
        self.retry_input = retry_input
        self.steps = 0

    def _fetch(self, line_num, origin):
        if line_num not in self.program:
            raise UndefinedLineError(line_num, origin)
        stmt = self.program.get_parsed_statement(line_num)
        if stmt is None:
            raise UnparsedLineError("Linha sem comando analisado", line_num)
        return stmt

    def run(self):
        state = self.state
        state.current_line = self.program.first_line()
        origin = None
        self.steps = 0
        logger.debug("RUN a partir da linha %s", state.current_line)

        while state.current_line is not None and state.current_line != HALT:
            line_num = state.current_line
            stmt = self._fetch(line_num, origin)

            if self.max_steps is not None and self.steps >= self.max_steps:
                logger.warning("Limite de %d passos atingido na linha %d", self.max_steps, line_num)
                raise StepLimitError(f"Limite de {self.max_steps} passos excedido", line_num)
            self.steps += 1

            state.current_line = self.program.next_line(line_num)
            try:
                execute(stmt, state, self.retry_input)
            except BasicError as e:
                if e.line is None:
                    e.line = line_num
                raise
            origin = line_num

        logger.debug("Fim da execução após %d passos", self.steps)
        return state


def run(program, state, max_steps=None):
    """Executa o programa até o fim; ponto de entrada do laço de execução."""
    return Interpreter(program, state, max_steps=max_steps).run()
