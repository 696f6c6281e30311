"""Tests for the lexer, expression parser and statement parser."""

import pytest

from basic_ast import *
from errors import (
    BadComparisonError, ExpectedTokenError, IllegalTermError,
    MalformedAssignError, MissingThenError, ParseError, TrailingTokenError,
    UnbalancedParenError, UnknownStatementError,
)
from interpreter import evaluate
from lexer import Lexer, TokenStream, TokenType
from parser import parse_expression, parse_line, parse_program, parse_statement, Parser


def tokens(text):
    return TokenStream.from_text(text)


def test_lexer_classifies_tokens():
    result = Lexer("LET x1 = (10+y) , ").tokenize()
    assert [t.type for t in result] == [
        TokenType.WORD, TokenType.WORD, TokenType.OPERATOR, TokenType.OPERATOR,
        TokenType.NUMBER, TokenType.OPERATOR, TokenType.WORD, TokenType.OPERATOR,
        TokenType.OTHER,
    ]
    assert result[4].value == 10
    assert result[1].column == 5


def test_lexer_keeps_only_ascii_digits_in_numbers():
    result = Lexer("10 PRINT ²").tokenize()
    assert result[-1].type == TokenType.OTHER
    assert result[-1].value == "²"
    with pytest.raises(IllegalTermError):
        parse_program("10 PRINT ²")


def test_token_stream_push_back():
    stream = tokens("A + B")
    first = stream.next_token()
    stream.save_token(first)
    assert stream.peek() is first
    stream.next_token()
    stream.next_token()
    stream.next_token()
    assert not stream.has_more_tokens()
    assert stream.next_token() is None


def test_precedence():
    assert evaluate(parse_expression(tokens("2 + 3 * 4")), {}) == 14
    assert evaluate(parse_expression(tokens("(2 + 3) * 4")), {}) == 20


def test_left_associative():
    expr = parse_expression(tokens("10 - 3 - 2"))
    assert expr == BinaryOp('-', BinaryOp('-', Constant(10), Constant(3)), Constant(2))
    assert evaluate(parse_expression(tokens("100 / 10 / 5")), {}) == 2


def test_expression_tree_shape():
    expr = parse_expression(tokens("A + B * 2"))
    assert expr == BinaryOp('+', Variable('A'), BinaryOp('*', Variable('B'), Constant(2)))


def test_read_expression_stops_before_trailing_tokens():
    stream = tokens("1 + 2 THEN 30")
    expr = Parser(stream).read_expression()
    assert expr == BinaryOp('+', Constant(1), Constant(2))
    assert stream.peek().value == "THEN"


def test_expression_errors():
    with pytest.raises(UnbalancedParenError):
        parse_expression(tokens("(1 + 2"))
    with pytest.raises(IllegalTermError):
        parse_expression(tokens("1 + "))
    with pytest.raises(IllegalTermError):
        parse_expression(tokens("-5"))
    with pytest.raises(TrailingTokenError):
        parse_expression(tokens("1 2"))


def test_parse_each_statement():
    assert parse_statement(tokens("REM qualquer coisa, até pontuação!")) == RemStatement()
    assert parse_statement(tokens("let X = 1 + 2")) == LetStatement('X', BinaryOp('+', Constant(1), Constant(2)))
    assert parse_statement(tokens("PRINT X")) == PrintStatement(Variable('X'))
    assert parse_statement(tokens("input n")) == InputStatement('n')
    assert parse_statement(tokens("GOTO 40")) == GotoStatement(40)
    assert parse_statement(tokens("IF X < 3 THEN 20")) == IfStatement(Variable('X'), '<', Constant(3), 20)
    assert parse_statement(tokens("if a + 1 = b then 10")) == IfStatement(
        BinaryOp('+', Variable('a'), Constant(1)), '=', Variable('b'), 10
    )
    assert parse_statement(tokens("END")) == EndStatement()


@pytest.mark.parametrize("text, error", [
    ("FOO X", UnknownStatementError),
    ("", UnknownStatementError),
    ("LET X 5", MalformedAssignError),
    ("LET = 5", MalformedAssignError),
    ("IF X < 3 20", MissingThenError),
    ("IF X <> 3 THEN 20", IllegalTermError),
    ("IF X THEN 20", BadComparisonError),
    ("IF X # 3 THEN 20", MissingThenError),
    ("IF X # 3 THEN 20", BadComparisonError),
    ("IF X < 3 THEN", ExpectedTokenError),
    ("GOTO X", ExpectedTokenError),
    ("INPUT 5", ExpectedTokenError),
    ("PRINT 1 2", TrailingTokenError),
    ("END NOW", TrailingTokenError),
    ("GOTO 10 20", TrailingTokenError),
    ("INPUT A B", TrailingTokenError),
    ("IF 1 = 1 THEN 10 20", TrailingTokenError),
])
def test_statement_errors(text, error):
    with pytest.raises(error):
        parse_statement(tokens(text))


def test_parse_line_splits_line_number():
    number, stream = parse_line("10 PRINT 5")
    assert number == 10
    assert parse_statement(stream) == PrintStatement(Constant(5))

    number, stream = parse_line("PRINT 5")
    assert number is None
    assert stream.peek().value == "PRINT"


def test_parse_program_rules():
    source = "30 END\n10 LET X = 1\n\n20 PRINT X\n20 PRINT X + 1\n40 REM\n40\n"
    program = parse_program(source)
    assert [line.number for line in program] == [10, 20, 30]
    assert program.get_parsed_statement(20) == PrintStatement(BinaryOp('+', Variable('X'), Constant(1)))
    assert program.get_source_line(20) == "20 PRINT X + 1"


def test_parse_program_reports_source_line():
    with pytest.raises(ParseError) as info:
        parse_program("10 LET X = 1\n20 PRNT X")
    assert info.value.line == 2
    assert str(info.value).startswith("Linha 2:")

    with pytest.raises(ExpectedTokenError):
        parse_program("PRINT 1")
