"""Interpreter.

This is a tree-walk interpreter for evaluating the AST produced by the parser and
annotated by the resolver. It supports arithmetic, variables, closures, classes with
single inheritance, conditionals, loops, and output statements.

1. Execution Model
The interpreter evaluates the AST in a top-down, recursive manner. Statements are
executed via `execute()` and expressions are evaluated using `evaluate()`. Both
dispatch with a `match` over the closed set of node classes in `loxlang.ast`.
Programs run on a worker thread with a large stack and a raised recursion limit,
since every Lox call costs several Python frames.

2. Environment
The interpreter tracks the innermost live `Environment`. Blocks and calls create a
new environment enclosed by the scope they belong to (for a call, the function's
closure rather than the caller's scope) and restore the previous one afterwards.
Variable accesses use the distance recorded by the resolver for that node; names
with no recorded distance are globals.

3. Expression Evaluation
Arithmetic and ordering need two numbers, `+` also accepts two strings, and `==`
accepts anything. Anything else raises `LoxRuntimeError` naming the operator and
operands. Operands are evaluated left to right.

4. Control Flow
`return` raises `ReturnControlFlow`, which unwinds blocks, conditionals and loops
untouched and is caught only by the function call that owns it.

5. Error Handling
Runtime errors such as undefined variables, bad operand types, wrong arity or
property access on non-instances are surfaced as `LoxRuntimeError` with line numbers
and file context. They abort the rest of the program.


File: interpreter.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging
import sys
import threading
from decimal import Decimal
from typing import Any, Callable

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
from loxlang.ast_printer import format_expr
from loxlang.environment import Environment
from loxlang.exceptions import (
    LoxRuntimeError,
    ReturnControlFlow,
    UndefinedVariableException,
)
from loxlang.lexer import Token
from loxlang.natives import define_native_functions
from loxlang.runtime import (
    LoxCallable,
    LoxClass,
    LoxFunction,
    LoxInstance,
    is_equal,
    is_truthy,
    stringify,
)
from loxlang.tokens import TokenType as TT

logger = logging.getLogger(__name__)


ARITHMETIC = {TT.MINUS, TT.STAR, TT.SLASH}
ORDERING = {TT.GREATER, TT.GREATER_EQUAL, TT.LESS, TT.LESS_EQUAL}

# Every Lox call costs several Python frames.
RECURSION_LIMIT = 50_000
THREAD_STACK_SIZE = 256 * 1024 * 1024


def run_with_deep_stack(fn: Callable[..., Any], *args: Any) -> Any:
    """
    Call `fn` on a worker thread with a raised recursion limit and a large
    stack, so deeply recursive programs run. Whatever `fn` raises is
    re-raised in the calling thread.
    """
    outcome: dict[str, Any] = {}

    def target():
        try:
            outcome["value"] = fn(*args)
        except BaseException as e:  # re-raised below
            outcome["error"] = e

    previous_limit = sys.getrecursionlimit()
    previous_size = threading.stack_size()
    sys.setrecursionlimit(max(previous_limit, RECURSION_LIMIT))
    threading.stack_size(THREAD_STACK_SIZE)
    try:
        worker = threading.Thread(target=target, name="lox-interpreter", daemon=True)
        worker.start()
        worker.join()
    finally:
        threading.stack_size(previous_size)
        sys.setrecursionlimit(previous_limit)

    if "error" in outcome:
        raise outcome["error"]
    return outcome.get("value")


class Interpreter:
    """Tree-walk interpreter for Lox."""

    def __init__(self, file: str = "<stdin>", globals: Environment | None = None):
        """
        Initialize the interpreter.

        Parameters:
            file (str): The name of the script, used in error messages.
            globals (Environment): A pre-populated global environment. When
                omitted, a fresh one holding the standard natives is created.
        """
        if globals is None:
            globals = Environment()
            define_native_functions(globals)
        self.file = file
        self.globals = globals
        self.environment = globals
        self.locals: dict[int, int] = {}

    def error(self, token: Token, message: str) -> LoxRuntimeError:
        return LoxRuntimeError(message, token.line, self.file)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def interpret(self, statements: list[Stmt], locals_: dict[int, int]) -> None:
        """
        Execute a resolved program in the global environment.

        Parameters:
            statements (list): Top-level statements from the parser.
            locals_ (dict): The resolver's node id → distance map.

        Raises:
            LoxRuntimeError: On the first runtime error.
        """
        self.locals.update(locals_)
        run_with_deep_stack(self.execute_all, statements)

    def execute_all(self, statements: list[Stmt]) -> None:
        for stmt in statements:
            self.execute(stmt)

    def execute_block(self, statements: list[Stmt], environment: Environment) -> None:
        """
        Execute statements inside `environment`, restoring the current
        environment afterwards even when an error or `return` escapes.
        """
        previous = self.environment
        self.environment = environment
        try:
            for stmt in statements:
                self.execute(stmt)
        finally:
            self.environment = previous

    # ------------------------------------------------------------------
    # Variables
    # ------------------------------------------------------------------

    def look_up_variable(self, name: Token, expr: Expr) -> Any:
        distance = self.locals.get(expr.id)
        if distance is not None:
            return self.environment.get_at(distance, name.lexeme)
        if name.lexeme in self.globals:
            return self.globals.get(name.lexeme)
        raise UndefinedVariableException(name.lexeme, name.line, self.file)

    def assign_variable(self, name: Token, expr: Expr, value: Any) -> None:
        distance = self.locals.get(expr.id)
        if distance is not None:
            self.environment.assign_at(distance, name.lexeme, value)
        elif name.lexeme in self.globals:
            self.globals.assign(name.lexeme, value)
        else:
            raise UndefinedVariableException(name.lexeme, name.line, self.file)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def evaluate(self, expr: Expr) -> Any:
        """
        Recursively evaluate an expression node and return its value.

        Raises:
            UndefinedVariableException: If a global is read before it is defined.
            LoxRuntimeError: On any other runtime error.
        """
        match expr:
            case LiteralExpr(value=value):
                return value

            case GroupingExpr(expression=inner):
                return self.evaluate(inner)

            case VariableExpr(name=name):
                return self.look_up_variable(name, expr)

            case AssignExpr(name=name, value=value_expr):
                value = self.evaluate(value_expr)
                self.assign_variable(name, expr, value)
                return value

            case UnaryExpr(operator=op, right=right):
                operand = self.evaluate(right)
                if op.type == TT.BANG:
                    return not is_truthy(operand)
                if not isinstance(operand, Decimal):
                    raise self.error(
                        op, f"Operand must be a number for unary '-': {stringify(operand)}"
                    )
                return -operand

            case BinaryExpr():
                return self.evaluate_binary(expr)

            case LogicalExpr(left=left, operator=op, right=right):
                lhs = self.evaluate(left)
                if op.type == TT.OR:
                    if is_truthy(lhs):
                        return lhs
                elif not is_truthy(lhs):
                    return lhs
                return self.evaluate(right)

            case CallExpr():
                return self.evaluate_call(expr)

            case GetExpr(object=obj_expr, name=name):
                obj = self.evaluate(obj_expr)
                if not isinstance(obj, LoxInstance):
                    raise self.error(name, "Only instances have properties.")
                try:
                    return obj.get(name.lexeme)
                except KeyError:
                    raise self.error(name, f"Undefined property '{name.lexeme}'.") from None

            case SetExpr(object=obj_expr, name=name, value=value_expr):
                obj = self.evaluate(obj_expr)
                if not isinstance(obj, LoxInstance):
                    raise self.error(name, "Only instances have fields.")
                value = self.evaluate(value_expr)
                obj.set(name.lexeme, value)
                return value

            case ThisExpr(keyword=keyword):
                return self.look_up_variable(keyword, expr)

            case SuperExpr(method=method):
                distance = self.locals[expr.id]
                superclass = self.environment.get_at(distance, "super")
                # The `this` scope always sits directly inside the `super` scope.
                instance = self.environment.get_at(distance - 1, "this")
                function = superclass.find_method(method.lexeme)
                if function is None:
                    raise self.error(method, f"Undefined property '{method.lexeme}'.")
                return function.bind(instance)

            case _:
                raise TypeError(f"Unknown expression type: {type(expr).__name__}")

    def evaluate_binary(self, expr: BinaryExpr) -> Any:
        lhs = self.evaluate(expr.left)
        rhs = self.evaluate(expr.right)
        op = expr.operator

        match op.type:
            case TT.EQUAL_EQUAL:
                return is_equal(lhs, rhs)
            case TT.BANG_EQUAL:
                return not is_equal(lhs, rhs)

        if op.type == TT.PLUS and isinstance(lhs, str) and isinstance(rhs, str):
            return lhs + rhs
        if not (isinstance(lhs, Decimal) and isinstance(rhs, Decimal)):
            raise self.error(
                op,
                f"Unsupported types for binary operation: "
                f"{stringify(lhs)} {op.lexeme} {stringify(rhs)}",
            )

        match op.type:
            case TT.PLUS:
                return lhs + rhs
            case TT.MINUS:
                return lhs - rhs
            case TT.STAR:
                return lhs * rhs
            case TT.SLASH:
                if rhs == 0:
                    raise self.error(op, f"Division by zero. {format_expr(expr)}")
                return lhs / rhs
            case TT.GREATER:
                return lhs > rhs
            case TT.GREATER_EQUAL:
                return lhs >= rhs
            case TT.LESS:
                return lhs < rhs
            case TT.LESS_EQUAL:
                return lhs <= rhs
            case _:
                raise self.error(op, f"Unknown binary operator '{op.lexeme}'")

    def evaluate_call(self, expr: CallExpr) -> Any:
        callee = self.evaluate(expr.callee)
        arguments = [self.evaluate(argument) for argument in expr.arguments]

        if not isinstance(callee, LoxCallable):
            raise self.error(
                expr.paren,
                f"Can only call functions and classes. {format_expr(expr.callee)} is {stringify(callee)}",
            )
        if len(arguments) != callee.arity():
            raise self.error(
                expr.paren,
                f"Expected {callee.arity()} arguments but got {len(arguments)}.",
            )
        return callee.call(self, arguments)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def execute(self, stmt: Stmt) -> None:
        """
        Execute a single statement.

        Raises:
            ReturnControlFlow: For a `return`; caught by the enclosing call.
            LoxRuntimeError: On any runtime error.
        """
        match stmt:
            case ExpressionStmt(expression=expression):
                self.evaluate(expression)

            case PrintStmt(expression=expression):
                print(stringify(self.evaluate(expression)))

            case VarStmt(name=name, initializer=initializer):
                value = None if initializer is None else self.evaluate(initializer)
                self.environment.define(name.lexeme, value)

            case BlockStmt(statements=statements):
                self.execute_block(statements, Environment(self.environment))

            case IfStmt(condition=condition, then_branch=then_branch, else_branch=else_branch):
                if is_truthy(self.evaluate(condition)):
                    self.execute(then_branch)
                elif else_branch is not None:
                    self.execute(else_branch)

            case WhileStmt(condition=condition, body=body):
                while is_truthy(self.evaluate(condition)):
                    self.execute(body)

            case FunctionStmt(name=name):
                self.environment.define(name.lexeme, LoxFunction(stmt, self.environment))

            case ReturnStmt(value=value):
                raise ReturnControlFlow(None if value is None else self.evaluate(value))

            case ClassStmt():
                self.execute_class(stmt)

            case _:
                raise TypeError(f"Unknown statement type: {type(stmt).__name__}")

    def execute_class(self, stmt: ClassStmt) -> None:
        superclass = None
        if stmt.superclass is not None:
            superclass = self.evaluate(stmt.superclass)
            if not isinstance(superclass, LoxClass):
                raise self.error(stmt.superclass.name, "Superclass must be a class.")

        name = stmt.name.lexeme
        # Bound first so methods can refer to the class by name.
        self.environment.define(name, None)

        method_env = self.environment
        if superclass is not None:
            method_env = Environment(self.environment)
            method_env.define("super", superclass)

        methods = {
            method.name.lexeme: LoxFunction(method, method_env, method.name.lexeme == "init")
            for method in stmt.methods
        }
        klass = LoxClass(name, superclass, methods)
        self.environment.assign(name, klass)
        logger.debug("Defined class %s with %d methods", name, len(methods))
