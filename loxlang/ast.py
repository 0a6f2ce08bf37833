"""AST node definitions for Lox.

Every node carries an ``id`` stamped by the parser from a process-wide
counter. The resolver keys its binding map by that id, so nodes compare by
identity (``eq=False``) and two occurrences that look alike, such as two
``this`` expressions in different methods, are never confused.


File: ast.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from loxlang.lexer import Token


@dataclass(eq=False)
class Node:
    id: int


class Expr(Node):
    """Base class for expression nodes."""


class Stmt(Node):
    """Base class for statement nodes."""


# ---- Expressions ----

@dataclass(eq=False)
class AssignExpr(Expr):
    name: Token
    value: Expr


@dataclass(eq=False)
class BinaryExpr(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(eq=False)
class CallExpr(Expr):
    callee: Expr
    paren: Token
    arguments: list[Expr]


@dataclass(eq=False)
class GetExpr(Expr):
    object: Expr
    name: Token


@dataclass(eq=False)
class GroupingExpr(Expr):
    expression: Expr


@dataclass(eq=False)
class LiteralExpr(Expr):
    value: Any


@dataclass(eq=False)
class LogicalExpr(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(eq=False)
class SetExpr(Expr):
    object: Expr
    name: Token
    value: Expr


@dataclass(eq=False)
class SuperExpr(Expr):
    keyword: Token
    method: Token


@dataclass(eq=False)
class ThisExpr(Expr):
    keyword: Token


@dataclass(eq=False)
class UnaryExpr(Expr):
    operator: Token
    right: Expr


@dataclass(eq=False)
class VariableExpr(Expr):
    name: Token


# ---- Statements ----

@dataclass(eq=False)
class BlockStmt(Stmt):
    statements: list[Stmt]


@dataclass(eq=False)
class FunctionStmt(Stmt):
    name: Token
    params: list[Token]
    body: list[Stmt]


@dataclass(eq=False)
class ClassStmt(Stmt):
    name: Token
    superclass: VariableExpr | None
    methods: list[FunctionStmt]


@dataclass(eq=False)
class ExpressionStmt(Stmt):
    expression: Expr


@dataclass(eq=False)
class IfStmt(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Stmt | None


@dataclass(eq=False)
class PrintStmt(Stmt):
    expression: Expr


@dataclass(eq=False)
class ReturnStmt(Stmt):
    keyword: Token
    value: Expr | None


@dataclass(eq=False)
class VarStmt(Stmt):
    name: Token
    initializer: Expr | None


@dataclass(eq=False)
class WhileStmt(Stmt):
    condition: Expr
    body: Stmt
