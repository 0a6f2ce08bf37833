"""
Tests for the Lox lexer.
"""
from decimal import Decimal

import pytest

from loxlang.exceptions import ScanError
from loxlang.lexer import tokenize
from loxlang.tokens import TokenType


def test_tokens_for_declaration():
    """
    A declaration scans into keyword, identifier, operator, literal and EOF tokens.
    """
    tokens = tokenize("var answer = 42;")
    assert [t.type for t in tokens] == [
        TokenType.VAR,
        TokenType.IDENTIFIER,
        TokenType.EQUAL,
        TokenType.NUMBER,
        TokenType.SEMICOLON,
        TokenType.EOF,
    ]
    assert tokens[1].lexeme == "answer"
    assert tokens[3].literal == Decimal("42")


def test_two_character_operators():
    """
    Two-character operators win over their one-character prefixes.
    """
    tokens = tokenize("! != = == < <= > >=")
    assert [t.type for t in tokens[:-1]] == [
        TokenType.BANG,
        TokenType.BANG_EQUAL,
        TokenType.EQUAL,
        TokenType.EQUAL_EQUAL,
        TokenType.LESS,
        TokenType.LESS_EQUAL,
        TokenType.GREATER,
        TokenType.GREATER_EQUAL,
    ]


def test_numbers_are_exact_decimals():
    """
    Number literals carry Decimal values, not floats.
    """
    tokens = tokenize("0.1 3")
    assert tokens[0].literal == Decimal("0.1")
    assert isinstance(tokens[1].literal, Decimal)


def test_trailing_dot_is_not_part_of_number():
    """
    A dot without digits after it is a separate token.
    """
    tokens = tokenize("1.")
    assert [t.type for t in tokens] == [TokenType.NUMBER, TokenType.DOT, TokenType.EOF]


def test_strings_and_line_numbers():
    """
    Strings keep their contents without quotes and may span lines.
    """
    tokens = tokenize('"first"\n"multi\nline"\nx')
    assert tokens[0].literal == "first"
    assert tokens[0].line == 1
    assert tokens[1].literal == "multi\nline"
    assert tokens[1].line == 2
    assert tokens[2].lexeme == "x"
    assert tokens[2].line == 4


def test_comments_are_skipped():
    """
    Line comments are dropped but still advance the line counter.
    """
    tokens = tokenize("// a comment\nprint 1; // trailing\n")
    assert [t.type for t in tokens] == [
        TokenType.PRINT,
        TokenType.NUMBER,
        TokenType.SEMICOLON,
        TokenType.EOF,
    ]
    assert tokens[0].line == 2


def test_keywords_and_identifiers():
    """
    Keywords are recognised only as whole words.
    """
    tokens = tokenize("class classy orchid or")
    assert [t.type for t in tokens[:-1]] == [
        TokenType.CLASS,
        TokenType.IDENTIFIER,
        TokenType.IDENTIFIER,
        TokenType.OR,
    ]


def test_errors_are_collected():
    """
    Several lexical errors are reported together after scanning finishes.
    """
    with pytest.raises(ScanError) as excinfo:
        tokenize("var a = @;\nvar b = #;\nprint \"open")
    errors = excinfo.value.errors
    assert len(errors) == 3
    assert "Unexpected character '@' on line 1" in errors[0]
    assert "Unexpected character '#' on line 2" in errors[1]
    assert "Unterminated string on line 3" in errors[2]


def test_only_ascii_digits_are_numbers():
    """
    Digits from other scripts are not number literals.
    """
    with pytest.raises(ScanError) as excinfo:
        tokenize("print \u0661\u0662;")
    assert len(excinfo.value.errors) == 2
    assert "Unexpected character" in excinfo.value.errors[0]


def test_empty_source_has_only_eof():
    """
    Scanning nothing still produces the end marker.
    """
    tokens = tokenize("")
    assert len(tokens) == 1
    assert tokens[0].type == TokenType.EOF
