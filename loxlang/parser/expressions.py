"""
Expression parsing utilities for Lox.

These functions operate on a `loxlang.parser.parser.Parser` instance and
implement the recursive descent logic for expressions, maintaining
operator precedence and associativity.


File: expressions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from loxlang.ast import (
    AssignExpr,
    BinaryExpr,
    CallExpr,
    Expr,
    GetExpr,
    GroupingExpr,
    LiteralExpr,
    LogicalExpr,
    SetExpr,
    SuperExpr,
    ThisExpr,
    UnaryExpr,
    VariableExpr,
)
from loxlang.tokens import TokenType as TT

if TYPE_CHECKING:
    from loxlang.parser import Parser


# ---- Entry point ----

def parse_expr(parser: 'Parser') -> Expr:
    """Parse an expression starting from the lowest-precedence operator."""
    return parser.assignment()


# ---- Lowest precedence ----

def parse_assignment(parser: 'Parser') -> Expr:
    """
    Parse an assignment.

    The left-hand side is parsed as an ordinary expression first and only
    then checked: a variable becomes an assignment, a property access
    becomes a property set, anything else is rejected.

    Syntax:
        <identifier> = <assignment> | <call>.<identifier> = <assignment>
    """
    target = parser.logical_or()

    equals = parser.match(TT.EQUAL)
    if equals is None:
        return target

    value = parser.assignment()
    if isinstance(target, VariableExpr):
        return parser.node(AssignExpr, target.name, value)
    if isinstance(target, GetExpr):
        return parser.node(SetExpr, target.object, target.name, value)
    raise parser.error(equals, "Invalid assignment target.")


def parse_logical_or(parser: 'Parser') -> Expr:
    """Parse logical OR expressions using the 'or' keyword."""
    result = parser.logical_and()
    while (op_tok := parser.match(TT.OR)) is not None:
        result = parser.node(LogicalExpr, result, op_tok, parser.logical_and())
    return result


def parse_logical_and(parser: 'Parser') -> Expr:
    """Parse logical AND expressions using the 'and' keyword."""
    result = parser.equality()
    while (op_tok := parser.match(TT.AND)) is not None:
        result = parser.node(LogicalExpr, result, op_tok, parser.equality())
    return result


def parse_equality(parser: 'Parser') -> Expr:
    """Parse equality expressions (==, !=)."""
    result = parser.comparison()
    while (op_tok := parser.match(TT.BANG_EQUAL, TT.EQUAL_EQUAL)) is not None:
        result = parser.node(BinaryExpr, result, op_tok, parser.comparison())
    return result


def parse_comparison(parser: 'Parser') -> Expr:
    """Parse comparison expressions (<, >, <=, >=)."""
    result = parser.term()
    while (op_tok := parser.match(
        TT.GREATER, TT.GREATER_EQUAL, TT.LESS, TT.LESS_EQUAL
    )) is not None:
        result = parser.node(BinaryExpr, result, op_tok, parser.term())
    return result


def parse_term(parser: 'Parser') -> Expr:
    """Parse addition and subtraction expressions."""
    result = parser.factor()
    while (op_tok := parser.match(TT.PLUS, TT.MINUS)) is not None:
        result = parser.node(BinaryExpr, result, op_tok, parser.factor())
    return result


def parse_factor(parser: 'Parser') -> Expr:
    """Parse multiplication and division expressions."""
    result = parser.unary()
    while (op_tok := parser.match(TT.STAR, TT.SLASH)) is not None:
        result = parser.node(BinaryExpr, result, op_tok, parser.unary())
    return result


def parse_unary(parser: 'Parser') -> Expr:
    """Parse prefix '!' and '-' operators."""
    op_tok = parser.match(TT.BANG, TT.MINUS)
    if op_tok is not None:
        return parser.node(UnaryExpr, op_tok, parser.unary())
    return parser.call()


def _finish_call(parser: 'Parser', callee: Expr) -> Expr:
    args = []
    if not parser.check(TT.RIGHT_PAREN):
        args.append(parser.expr())
        while parser.match(TT.COMMA) is not None:
            args.append(parser.expr())
    paren = parser.eat(TT.RIGHT_PAREN, "Expect ')' after arguments.")
    return parser.node(CallExpr, callee, paren, args)


def parse_call(parser: 'Parser') -> Expr:
    """
    Parse a primary expression followed by any chain of calls and
    property accesses, e.g. ``a.b.c(x)(y)``.
    """
    result = parser.primary()
    while True:
        if parser.match(TT.LEFT_PAREN) is not None:
            result = _finish_call(parser, result)
        elif parser.match(TT.DOT) is not None:
            name = parser.eat(TT.IDENTIFIER, "Expect property name after '.'.")
            result = parser.node(GetExpr, result, name)
        else:
            return result


# ---- Highest precedence ----

def parse_primary(parser: 'Parser') -> Expr:
    """Parse a literal, variable, `this`, `super`, or parenthesized expression."""
    tok = parser.curr_token

    if parser.match(TT.FALSE):
        return parser.node(LiteralExpr, False)
    if parser.match(TT.TRUE):
        return parser.node(LiteralExpr, True)
    if parser.match(TT.NIL):
        return parser.node(LiteralExpr, None)
    if parser.match(TT.NUMBER, TT.STRING):
        return parser.node(LiteralExpr, tok.literal)

    if parser.match(TT.SUPER):
        parser.eat(TT.DOT, "Expect '.' after 'super'.")
        method = parser.eat(TT.IDENTIFIER, "Expect superclass method name.")
        return parser.node(SuperExpr, tok, method)
    if parser.match(TT.THIS):
        return parser.node(ThisExpr, tok)
    if parser.match(TT.IDENTIFIER):
        return parser.node(VariableExpr, tok)

    if parser.match(TT.LEFT_PAREN):
        inner = parser.expr()
        parser.eat(TT.RIGHT_PAREN, "Expect ')' after expression.")
        return parser.node(GroupingExpr, inner)

    raise parser.error(tok, "Expect expression.")
