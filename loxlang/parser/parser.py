"""
Main parser entry point for Lox.

This module defines the `Parser` class, which coordinates the recursive
descent parsing process. The actual parsing routines are split across
`loxlang.parser.expressions` and `loxlang.parser.statements`.


File: parser.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import itertools
import logging

from loxlang.ast import Node, Stmt
from loxlang.exceptions import ParseError
from loxlang.lexer import Token
from loxlang.tokens import TokenType

from . import expressions as _expr
from . import statements as _stmt

logger = logging.getLogger(__name__)


class Parser:
    """Lox parser."""

    # Shared by every parser so node ids stay unique for the whole process.
    _node_ids = itertools.count(1)

    def __init__(self, tokens: list[Token], file: str = "<stdin>"):
        """
        Initialize the parser with a list of tokens.

        Parameters:
            tokens (list): A list of Token instances ending with EOF.
            file (str): The name of the script.
        """
        self.tokens = tokens
        self.position = 0
        self.curr_token = self.tokens[self.position]
        self.source_file = file

    def node(self, node_type: type, *fields) -> Node:
        """
        Construct an AST node stamped with the next node id.
        """
        return node_type(next(self._node_ids), *fields)

    def is_at_end(self) -> bool:
        """
        Check whether only the EOF token remains.
        """
        return self.curr_token.type == TokenType.EOF

    def check(self, *token_types: TokenType) -> bool:
        """
        Check whether the current token is one of the given types.
        """
        return self.curr_token.type in token_types

    def advance(self) -> Token:
        """
        Consume the current token and return it. EOF is never consumed.
        """
        tok = self.curr_token
        if not self.is_at_end():
            self.position += 1
            self.curr_token = self.tokens[self.position]
        return tok

    def match(self, *token_types: TokenType) -> Token | None:
        """
        Consume and return the current token if it is one of the given types.
        """
        if self.check(*token_types):
            return self.advance()
        return None

    def eat(self, token_type: TokenType, message: str) -> Token:
        """
        Consume the current token if it matches the expected type.

        Parameters:
            token_type (TokenType): The expected token type.
            message (str): Description of what was expected.

        Raises:
            ParseError: If the token does not match the expected type.
        """
        if self.check(token_type):
            return self.advance()
        raise self.error(self.curr_token, message)

    def error(self, tok: Token, message: str) -> ParseError:
        """
        Build a syntax error pointing at the given token.
        """
        found = "end of input" if tok.type == TokenType.EOF else f"'{tok.lexeme}'"
        return ParseError(f"{message} Got {found}", tok.line, self.source_file)


    # Expression wrappers
    def expr(self):
        """
        Parse a full expression starting from assignment.
        """
        return _expr.parse_expr(self)

    def assignment(self):
        """
        Parse an assignment or property assignment.
        """
        return _expr.parse_assignment(self)

    def logical_or(self):
        """
        Parse a logical OR expression.
        """
        return _expr.parse_logical_or(self)

    def logical_and(self):
        """
        Parse a logical AND expression.
        """
        return _expr.parse_logical_and(self)

    def equality(self):
        """
        Parse an equality expression (==, !=).
        """
        return _expr.parse_equality(self)

    def comparison(self):
        """
        Parse a comparison expression using relational operators.
        """
        return _expr.parse_comparison(self)

    def term(self):
        """
        Parse an addition or subtraction expression.
        """
        return _expr.parse_term(self)

    def factor(self):
        """
        Parse a multiplication or division expression.
        """
        return _expr.parse_factor(self)

    def unary(self):
        """
        Parse a unary negation or logical not.
        """
        return _expr.parse_unary(self)

    def call(self):
        """
        Parse calls and property accesses chained onto a primary expression.
        """
        return _expr.parse_call(self)

    def primary(self):
        """
        Parse a literal, identifier, `this`, `super` or parenthesized group.
        """
        return _expr.parse_primary(self)


    # Statement wrappers
    def declaration(self):
        """
        Parse a declaration or a statement.
        """
        return _stmt.parse_declaration(self)

    def statement(self):
        """
        Parse a single statement.
        """
        return _stmt.parse_statement(self)

    def block(self) -> list:
        """
        Parse the statements of a block after its opening brace.
        """
        return _stmt.parse_block(self)

    def function(self, kind: str):
        """
        Parse a function or method declaration after its keyword.
        """
        return _stmt.parse_function(self, kind)


    def parse(self) -> list[Stmt]:
        """
        Parse the full input into a list of statements.
        """
        statements = []
        while not self.is_at_end():
            statements.append(self.declaration())
        logger.debug("Parsed %d top-level statements from %s", len(statements), self.source_file)
        return statements
