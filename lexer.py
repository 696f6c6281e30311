from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

OPERATORS = '+-*/=<>()'
DIGITS = '0123456789'

class TokenType(Enum):
    WORD = auto()
    NUMBER = auto()
    OPERATOR = auto()
    OTHER = auto()

@dataclass(frozen=True)
class Token:
    type: TokenType
    value: Any
    line: int
    column: int

    @property
    def text(self):
        return str(self.value)

class Lexer:
    """
    Quebra uma linha BASIC em tokens classificados (WORD, NUMBER, OPERATOR, OTHER).
    Espaços são ignorados; qualquer caractere desconhecido vira um token OTHER
    e fica a cargo do parser rejeitá-lo.
    """
    def __init__(self, source, line=1):
        self.source = source
        self.pos = 0
        self.line = line
        self.column = 1
        self.current_char = self.source[0] if source else None

    def advance(self):
        self.pos += 1
        self.column += 1
        if self.pos < len(self.source):
            self.current_char = self.source[self.pos]
        else:
            self.current_char = None

    def skip_whitespace(self):
        while self.current_char and self.current_char.isspace():
            self.advance()

    def number(self):
        start_pos = self.pos
        while self.current_char and self.current_char in DIGITS:
            self.advance()
        return int(self.source[start_pos:self.pos])

    def identifier(self):
        start_pos = self.pos
        while self.current_char and (self.current_char.isalnum() or self.current_char == '_'):
            self.advance()
        return self.source[start_pos:self.pos]

    def tokenize(self):
        tokens = []

        while self.current_char:
            start_column = self.column

            if self.current_char.isspace():
                self.skip_whitespace()
                continue

            if self.current_char in DIGITS:
                tokens.append(Token(TokenType.NUMBER, self.number(), self.line, start_column))
                continue

            if self.current_char.isalpha() or self.current_char == '_':
                tokens.append(Token(TokenType.WORD, self.identifier(), self.line, start_column))
                continue

            char = self.current_char
            self.advance()
            if char in OPERATORS:
                tokens.append(Token(TokenType.OPERATOR, char, self.line, start_column))
            else:
                tokens.append(Token(TokenType.OTHER, char, self.line, start_column))

        return tokens


class TokenStream:
    """Fluxo de tokens com lookahead e devolução de um token (save_token)."""

    def __init__(self, tokens):
        self.tokens = list(tokens)
        self.pos = 0

    @classmethod
    def from_text(cls, text, line=1):
        return cls(Lexer(text, line).tokenize())

    def peek(self):
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def next_token(self):
        token = self.peek()
        if token is not None:
            self.pos += 1
        return token

    def save_token(self, token):
        # Só é possível devolver o último token consumido
        if token is None:
            return
        if self.pos == 0 or self.tokens[self.pos - 1] is not token:
            raise ValueError(f"Token '{token.value}' não foi o último consumido")
        self.pos -= 1

    def has_more_tokens(self):
        return self.pos < len(self.tokens)

    def remaining(self):
        return self.tokens[self.pos:]
