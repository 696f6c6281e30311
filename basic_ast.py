from dataclasses import dataclass
from typing import Union

# --- Expressões ---

@dataclass(frozen=True)
class Constant:
    value: int

@dataclass(frozen=True)
class Variable:
    name: str

@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: 'Expression'
    right: 'Expression'

Expression = Union[Constant, Variable, BinaryOp]

# --- Comandos ---

@dataclass(frozen=True)
class RemStatement:
    pass

@dataclass(frozen=True)
class LetStatement:
    var: str
    expr: Expression

@dataclass(frozen=True)
class PrintStatement:
    expr: Expression

@dataclass(frozen=True)
class InputStatement:
    var: str

@dataclass(frozen=True)
class GotoStatement:
    target: int

@dataclass(frozen=True)
class IfStatement:
    left: Expression
    op: str
    right: Expression
    target: int

@dataclass(frozen=True)
class EndStatement:
    pass

Statement = Union[
    RemStatement, LetStatement, PrintStatement, InputStatement,
    GotoStatement, IfStatement, EndStatement,
]

COMPARISON_OPERATORS = ('=', '<', '>')


def ast_to_dict(node):
    """Converte um nó da AST em um dicionário serializável (usado pela API)."""
    result = {"type": type(node).__name__}
    for key, value in node.__dict__.items():
        if isinstance(value, (int, str)):
            result[key] = value
        else:
            result[key] = ast_to_dict(value)
    return result
