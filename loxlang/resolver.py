"""Resolver.

A static pass over the AST that runs after parsing and before execution.
It does two things:

1. Scoping rules
   Mistakes that can be found without running the program are reported
   here instead of being discovered by the interpreter: reading a local in
   its own initializer, declaring the same name twice in one local scope,
   ``return`` outside a function or with a value inside ``init``, ``this``
   outside a class, ``super`` outside a subclass, and a class inheriting
   from itself.

2. Binding distances
   For every variable reference and assignment the resolver records how
   many scopes separate the use from the scope that declares it. The
   interpreter reads this map, keyed by node id, and jumps straight to the
   right environment. Names found in no scope are left out and are looked
   up as globals at run time.

The scope stack here opens and closes at exactly the points where the
interpreter creates environments: blocks, function calls, the ``super``
scope of a subclass and the ``this`` scope of a bound method. Distances are
only valid while both sides keep that shape.


File: resolver.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging
from enum import Enum, auto

from loxlang.ast import (
    AssignExpr,
    BinaryExpr,
    BlockStmt,
    CallExpr,
    ClassStmt,
    Expr,
    ExpressionStmt,
    FunctionStmt,
    GetExpr,
    GroupingExpr,
    IfStmt,
    LiteralExpr,
    LogicalExpr,
    PrintStmt,
    ReturnStmt,
    SetExpr,
    Stmt,
    SuperExpr,
    ThisExpr,
    UnaryExpr,
    VarStmt,
    VariableExpr,
    WhileStmt,
)
from loxlang.exceptions import ResolveError
from loxlang.lexer import Token

logger = logging.getLogger(__name__)


class FunctionType(Enum):
    NONE = auto()
    FUNCTION = auto()
    INITIALIZER = auto()
    METHOD = auto()


class ClassType(Enum):
    NONE = auto()
    CLASS = auto()
    SUBCLASS = auto()


class Resolver:
    """Compute binding distances and enforce static scoping rules."""

    def __init__(self, file: str = "<stdin>"):
        self.file = file
        # Each scope maps a name to False while declared and True once defined.
        self.scopes: list[dict[str, bool]] = []
        self.locals: dict[int, int] = {}
        self.current_function = FunctionType.NONE
        self.current_class = ClassType.NONE

    def error(self, token: Token, message: str) -> ResolveError:
        return ResolveError(f"Error at '{token.lexeme}': {message}", token.line, self.file)

    # ------------------------------------------------------------------
    # Scope handling
    # ------------------------------------------------------------------

    def begin_scope(self) -> None:
        self.scopes.append({})

    def end_scope(self) -> None:
        self.scopes.pop()

    def declare(self, name: Token) -> None:
        """
        Add a name to the innermost scope as declared but not yet usable.

        Raises:
            ResolveError: If the name is already declared in that scope.
        """
        if not self.scopes:
            return
        scope = self.scopes[-1]
        if name.lexeme in scope:
            raise self.error(name, "Already a variable with this name in this scope.")
        scope[name.lexeme] = False

    def define(self, name: Token) -> None:
        if not self.scopes:
            return
        self.scopes[-1][name.lexeme] = True

    def resolve_local(self, expr: Expr, name: Token) -> None:
        """
        Record the distance from the innermost scope to the one declaring
        `name`. Nothing is recorded when no scope has it: it is a global.
        """
        for distance, scope in enumerate(reversed(self.scopes)):
            if name.lexeme in scope:
                self.locals[expr.id] = distance
                return

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def resolve(self, statements: list[Stmt]) -> dict[int, int]:
        """
        Resolve a list of statements and return the locals map.

        Raises:
            ResolveError: On the first static error.
        """
        for stmt in statements:
            self.resolve_stmt(stmt)
        return self.locals

    def resolve_function(self, function: FunctionStmt, function_type: FunctionType) -> None:
        """
        Resolve a function body in a new scope holding its parameters.
        """
        enclosing_function = self.current_function
        self.current_function = function_type

        self.begin_scope()
        for param in function.params:
            self.declare(param)
            self.define(param)
        self.resolve(function.body)
        self.end_scope()

        self.current_function = enclosing_function

    def resolve_class(self, stmt: ClassStmt) -> None:
        self.declare(stmt.name)
        self.define(stmt.name)

        enclosing_class = self.current_class
        self.current_class = ClassType.CLASS

        if stmt.superclass is not None:
            if stmt.superclass.name.lexeme == stmt.name.lexeme:
                raise self.error(stmt.superclass.name, "A class can't inherit from itself.")
            self.current_class = ClassType.SUBCLASS
            self.resolve_expr(stmt.superclass)

            self.begin_scope()
            self.scopes[-1]["super"] = True

        self.begin_scope()
        # Bound by the interpreter when a method is accessed, never declared.
        self.scopes[-1]["this"] = True

        for method in stmt.methods:
            if method.name.lexeme == "init":
                function_type = FunctionType.INITIALIZER
            else:
                function_type = FunctionType.METHOD
            self.resolve_function(method, function_type)

        self.end_scope()
        if stmt.superclass is not None:
            self.end_scope()

        self.current_class = enclosing_class

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def resolve_stmt(self, stmt: Stmt) -> None:
        match stmt:
            case BlockStmt(statements=statements):
                self.begin_scope()
                self.resolve(statements)
                self.end_scope()

            case ClassStmt():
                self.resolve_class(stmt)

            case ExpressionStmt(expression=expression) | PrintStmt(expression=expression):
                self.resolve_expr(expression)

            case FunctionStmt(name=name):
                # Defined before the body so the function can recurse.
                self.declare(name)
                self.define(name)
                self.resolve_function(stmt, FunctionType.FUNCTION)

            case IfStmt(condition=condition, then_branch=then_branch, else_branch=else_branch):
                self.resolve_expr(condition)
                self.resolve_stmt(then_branch)
                if else_branch is not None:
                    self.resolve_stmt(else_branch)

            case ReturnStmt(keyword=keyword, value=value):
                if self.current_function == FunctionType.NONE:
                    raise self.error(keyword, "Can't return from top-level code.")
                if value is not None:
                    if self.current_function == FunctionType.INITIALIZER and not _is_literal_nil(value):
                        raise self.error(keyword, "Can't return a value from an initializer.")
                    self.resolve_expr(value)

            case VarStmt(name=name, initializer=initializer):
                self.declare(name)
                if initializer is not None:
                    self.resolve_expr(initializer)
                self.define(name)

            case WhileStmt(condition=condition, body=body):
                self.resolve_expr(condition)
                self.resolve_stmt(body)

            case _:
                raise TypeError(f"Unknown statement type: {type(stmt).__name__}")

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def resolve_expr(self, expr: Expr) -> None:
        match expr:
            case VariableExpr(name=name):
                if self.scopes and self.scopes[-1].get(name.lexeme) is False:
                    raise self.error(name, "Can't read local variable in its own initializer.")
                self.resolve_local(expr, name)

            case AssignExpr(name=name, value=value):
                self.resolve_expr(value)
                self.resolve_local(expr, name)

            case BinaryExpr(left=left, right=right) | LogicalExpr(left=left, right=right):
                self.resolve_expr(left)
                self.resolve_expr(right)

            case CallExpr(callee=callee, arguments=arguments):
                self.resolve_expr(callee)
                for argument in arguments:
                    self.resolve_expr(argument)

            case GetExpr(object=obj):
                # Property names are looked up dynamically; only the object resolves.
                self.resolve_expr(obj)

            case SetExpr(object=obj, value=value):
                self.resolve_expr(value)
                self.resolve_expr(obj)

            case GroupingExpr(expression=inner):
                self.resolve_expr(inner)

            case UnaryExpr(right=right):
                self.resolve_expr(right)

            case LiteralExpr():
                pass

            case ThisExpr(keyword=keyword):
                if self.current_class == ClassType.NONE:
                    raise self.error(keyword, "Can't use 'this' outside of a class.")
                # Resolved like a variable named `this`, under this node's own id.
                self.resolve_expr(VariableExpr(expr.id, keyword))

            case SuperExpr(keyword=keyword):
                if self.current_class == ClassType.NONE:
                    raise self.error(keyword, "Can't use 'super' outside of a class.")
                if self.current_class == ClassType.CLASS:
                    raise self.error(keyword, "Can't use 'super' in a class with no superclass.")
                self.resolve_local(expr, keyword)

            case _:
                raise TypeError(f"Unknown expression type: {type(expr).__name__}")


def _is_literal_nil(expr: Expr) -> bool:
    return isinstance(expr, LiteralExpr) and expr.value is None


def resolve_locals(statements: list[Stmt], file: str = "<stdin>") -> dict[int, int]:
    """
    Run a fresh resolver over a program and return its locals map.
    """
    resolver = Resolver(file)
    locals_ = resolver.resolve(statements)
    logger.debug("Resolved %d local bindings in %s", len(locals_), file)
    return locals_
