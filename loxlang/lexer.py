"""Lexer for Lox.

This lexer performs a single pass over the source code using a combined
regular expression of named groups. Each match yields a :class:`Token`
containing its type, lexeme, literal value and source line number.

Tokens cover literals (numbers, strings), keywords (``var``, ``fun``,
``class`` …), operators and delimiters. Comment text beginning with ``//``
is skipped during tokenization. Strings may span several lines, so line
numbers are advanced by the newlines they contain.

Lexical errors do not stop the scan: every unexpected character and
unterminated string is recorded, and all of them are reported together in a
single :class:`ScanError` once the whole source has been consumed.


File: lexer.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from loxlang.exceptions import ScanError
from loxlang.tokens import KEYWORDS, TokenType

logger = logging.getLogger(__name__)


@dataclass(frozen=True, repr=False)
class Token:
    """
    Represents a lexical token with a type, lexeme, literal and line.
    """
    type: TokenType
    lexeme: str
    literal: Any
    line: int

    def __repr__(self) -> str:
        """
        Return a string representation of the token.
        """
        return f"Token({self.type}, {self.lexeme!r}, {self.literal!r}, line={self.line})"


TOKEN_SPECIFICATION: list[tuple[str, str]] = [
    # Literals
    ('NUMBER',        r'[0-9]+(?:\.[0-9]+)?'),
    ('STRING',        r'"[^"]*"'),
    ('UNTERMINATED',  r'"[^"]*'),
    ('IDENTIFIER',    r'[A-Za-z_][A-Za-z0-9_]*'),

    # Comments
    ('COMMENT',       r'//[^\n]*'),

    # Two character operators
    ('BANG_EQUAL',    r'!='),
    ('EQUAL_EQUAL',   r'=='),
    ('GREATER_EQUAL', r'>='),
    ('LESS_EQUAL',    r'<='),

    # Single character operators
    ('BANG',          r'!'),
    ('EQUAL',         r'='),
    ('GREATER',       r'>'),
    ('LESS',          r'<'),
    ('MINUS',         r'-'),
    ('PLUS',          r'\+'),
    ('SLASH',         r'/'),
    ('STAR',          r'\*'),

    # Delimiters
    ('LEFT_PAREN',    r'\('),
    ('RIGHT_PAREN',   r'\)'),
    ('LEFT_BRACE',    r'\{'),
    ('RIGHT_BRACE',   r'\}'),
    ('COMMA',         r','),
    ('DOT',           r'\.'),
    ('SEMICOLON',     r';'),

    # Miscellaneous
    ('NEWLINE',       r'\n'),
    ('SKIP',          r'[ \t\r]+'),
    ('MISMATCH',      r'.'),
]

TOKEN_REGEX = re.compile(
    '|'.join(f'(?P<{name}>{pattern})' for name, pattern in TOKEN_SPECIFICATION)
)


def tokenize(code: str) -> list[Token]:
    """
    Convert a string of source code into a list of tokens.

    Parameters:
        code (str): The source code to tokenize.

    Returns:
        list[Token]: A list of Token instances terminated by an EOF token.

    Raises:
        ScanError: If one or more lexical errors were encountered.
    """
    tokens: list[Token] = []
    errors: list[str] = []
    line_num = 1

    for match_obj in TOKEN_REGEX.finditer(code):
        kind = match_obj.lastgroup
        value = match_obj.group()

        if kind == 'NEWLINE':
            line_num += 1
            continue
        if kind in ('SKIP', 'COMMENT'):
            continue
        if kind == 'MISMATCH':
            errors.append(f"Unexpected character '{value}' on line {line_num}")
            continue
        if kind == 'UNTERMINATED':
            errors.append(f"Unterminated string on line {line_num}")
            line_num += value.count('\n')
            continue

        if kind == 'NUMBER':
            tokens.append(Token(TokenType.NUMBER, value, Decimal(value), line_num))
        elif kind == 'STRING':
            tokens.append(Token(TokenType.STRING, value, value[1:-1], line_num))
            line_num += value.count('\n')
        elif kind == 'IDENTIFIER':
            token_type = KEYWORDS.get(value, TokenType.IDENTIFIER)
            tokens.append(Token(token_type, value, None, line_num))
        else:
            tokens.append(Token(TokenType(kind), value, None, line_num))

    tokens.append(Token(TokenType.EOF, '', None, line_num))

    if errors:
        raise ScanError(errors)

    logger.debug("Scanned %d tokens", len(tokens))
    return tokens
