import logging

from lexer import Lexer, TokenStream, TokenType
from program import Program
from basic_ast import *
from errors import (
    BadComparisonError, BasicError, ExpectedTokenError, IllegalTermError,
    MalformedAssignError, MissingThenError, TrailingTokenError,
    UnbalancedParenError, UnknownStatementError,
)

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def precedence(token):
    """Precedência de um token como operador binário; 0 significa "não é operador"."""
    if token is None or token.type != TokenType.OPERATOR:
        return 0
    if token.value in ('*', '/'):
        return 2
    if token.value in ('+', '-'):
        return 1
    return 0


class Parser:
    def __init__(self, stream):
        if not isinstance(stream, TokenStream):
            stream = TokenStream(stream)
        self.stream = stream

    def describe(self, token):
        if token is None:
            return "fim da linha"
        return f"'{token.value}'"

    def expect(self, token_type, error_class=ExpectedTokenError, what=None):
        token = self.stream.next_token()
        if token is None or token.type != token_type:
            raise error_class(
                f"Esperado {what or token_type.name}, encontrado {self.describe(token)}"
            )
        return token

    def expect_end(self):
        token = self.stream.next_token()
        if token is not None:
            raise TrailingTokenError(f"Token extra: {self.describe(token)}")

    # --- Expressões ---

    def read_expression(self, prec=0):
        """
        Lê uma expressão por "precedence climbing": em cada nível, junta termos
        da esquerda para a direita enquanto o próximo operador tiver precedência
        maior que a do nível. Um operador mais forte faz a chamada recursiva ler
        o lado direito inteiro como uma unidade. O token que encerra a expressão
        é devolvido ao fluxo.
        """
        expr = self.read_term()
        while True:
            token = self.stream.next_token()
            new_prec = precedence(token)
            if new_prec <= prec:
                break
            rhs = self.read_expression(new_prec)
            expr = BinaryOp(token.value, expr, rhs)
        self.stream.save_token(token)
        return expr

    def read_term(self):
        """Lê um termo: constante inteira, variável ou subexpressão entre parênteses."""
        token = self.stream.next_token()
        if token is None:
            raise IllegalTermError("Fim inesperado da linha durante análise de expressão")
        if token.type == TokenType.NUMBER:
            return Constant(token.value)
        if token.type == TokenType.WORD:
            return Variable(token.value)
        if token.type != TokenType.OPERATOR or token.value != '(':
            raise IllegalTermError(f"Termo inválido na expressão: {self.describe(token)}")
        expr = self.read_expression()
        closing = self.stream.next_token()
        if closing is None or closing.value != ')':
            raise UnbalancedParenError("Parênteses desbalanceados na expressão")
        return expr

    def parse_expression(self):
        expr = self.read_expression()
        self.expect_end()
        return expr

    # --- Comandos ---

    def parse_statement(self):
        token = self.stream.next_token()
        if token is None:
            raise UnknownStatementError("Linha sem comando")
        keyword = token.text.upper() if token.type == TokenType.WORD else token.text

        if keyword == 'REM':
            while self.stream.next_token() is not None:
                pass
            return RemStatement()

        elif keyword == 'LET':
            var = self.expect(TokenType.WORD, MalformedAssignError, "nome de variável").value
            equals = self.stream.next_token()
            if equals is None or equals.value != '=':
                raise MalformedAssignError(
                    "LET mal formado: use LET variavel = expressao"
                )
            expr = self.read_expression()
            self.expect_end()
            return LetStatement(var, expr)

        elif keyword == 'PRINT':
            expr = self.read_expression()
            self.expect_end()
            return PrintStatement(expr)

        elif keyword == 'INPUT':
            var = self.expect(TokenType.WORD, what="nome de variável").value
            self.expect_end()
            return InputStatement(var)

        elif keyword == 'GOTO':
            target = self.expect(TokenType.NUMBER, what="número de linha").value
            self.expect_end()
            return GotoStatement(target)

        elif keyword == 'IF':
            left = self.read_expression()
            op = self.stream.next_token()
            if op is None or op.type != TokenType.OPERATOR or op.value not in COMPARISON_OPERATORS:
                raise BadComparisonError(
                    f"Operador relacional inválido: {self.describe(op)} (use =, < ou >)"
                )
            right = self.read_expression()
            then = self.stream.next_token()
            if then is None or then.type != TokenType.WORD or then.text.upper() != 'THEN':
                raise MissingThenError("Condição do IF deve ser seguida de THEN")
            target = self.expect(TokenType.NUMBER, what="número de linha").value
            self.expect_end()
            return IfStatement(left, op.value, right, target)

        elif keyword == 'END':
            self.expect_end()
            return EndStatement()

        else:
            raise UnknownStatementError(f"Comando inválido: {token.value}")


def parse_expression(tokens):
    """Lê uma expressão que deve ocupar todos os tokens restantes."""
    return Parser(tokens).parse_expression()


def parse_statement(tokens):
    return Parser(tokens).parse_statement()


def parse_line(text, line=1):
    """
    Separa o número de linha (se houver) do restante de uma linha digitada.
    Retorna (numero_ou_None, TokenStream posicionado depois do número).
    """
    stream = TokenStream(Lexer(text, line).tokenize())
    first = stream.peek()
    if first is not None and first.type == TokenType.NUMBER:
        stream.next_token()
        return first.value, stream
    return None, stream


def parse_program(source, program=None):
    """
    Carrega um programa completo (uma linha numerada por linha de texto) em um
    Program, com as mesmas regras da digitação no console: ordem livre, número
    sozinho apaga a linha e número repetido substitui a anterior.
    """
    if program is None:
        program = Program()

    for source_line, raw in enumerate(source.splitlines(), start=1):
        text = raw.strip()
        if not text:
            continue
        try:
            line_number, stream = parse_line(text, source_line)
            if line_number is None:
                raise ExpectedTokenError("Esperado número de linha")
            if not stream.has_more_tokens():
                program.remove_line(line_number)
                continue
            statement = Parser(stream).parse_statement()
        except BasicError as e:
            if e.line is None:
                e.line = source_line
            raise
        program.upsert_line(line_number, text)
        program.set_parsed_statement(line_number, statement)

    logger.debug("Programa carregado com %d linhas", len(program))
    return program
