"""AST printer.

Convert AST nodes back into a compact parenthesized prefix form such as
``(+ 1 (group (* 2 3)))``. Used for debug dumps and to show the offending
expression in runtime error messages.


File: ast_printer.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

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


def _parenthesize(name: str, *parts) -> str:
    return "(" + " ".join([name, *parts]) + ")"


def _literal(value) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f'"{value}"'
    return format(value, "f")


def format_expr(expr: Expr) -> str:
    """
    Convert an expression node back to a readable string.

    Args:
        expr (Expr): An expression node.

    Returns:
        str: A parenthesized representation of the expression.
    """
    match expr:
        case LiteralExpr(value=value):
            return _literal(value)
        case VariableExpr(name=name):
            return name.lexeme
        case AssignExpr(name=name, value=value):
            return _parenthesize("=", name.lexeme, format_expr(value))
        case BinaryExpr(left=left, operator=op, right=right) | LogicalExpr(left=left, operator=op, right=right):
            return _parenthesize(op.lexeme, format_expr(left), format_expr(right))
        case UnaryExpr(operator=op, right=right):
            return _parenthesize(op.lexeme, format_expr(right))
        case GroupingExpr(expression=inner):
            return _parenthesize("group", format_expr(inner))
        case CallExpr(callee=callee, arguments=arguments):
            return _parenthesize("call", format_expr(callee), *(format_expr(a) for a in arguments))
        case GetExpr(object=obj, name=name):
            return _parenthesize(".", format_expr(obj), name.lexeme)
        case SetExpr(object=obj, name=name, value=value):
            return _parenthesize("=", _parenthesize(".", format_expr(obj), name.lexeme), format_expr(value))
        case ThisExpr():
            return "this"
        case SuperExpr(method=method):
            return _parenthesize(".", "super", method.lexeme)
        case _:
            return f"<expr {type(expr).__name__}>"


def format_stmt(stmt: Stmt) -> str:
    """
    Convert a statement node back to a readable string.
    """
    match stmt:
        case ExpressionStmt(expression=expression):
            return _parenthesize(";", format_expr(expression))
        case PrintStmt(expression=expression):
            return _parenthesize("print", format_expr(expression))
        case VarStmt(name=name, initializer=initializer):
            if initializer is None:
                return _parenthesize("var", name.lexeme)
            return _parenthesize("var", name.lexeme, "=", format_expr(initializer))
        case BlockStmt(statements=statements):
            return _parenthesize("block", *(format_stmt(s) for s in statements))
        case IfStmt(condition=condition, then_branch=then_branch, else_branch=else_branch):
            if else_branch is None:
                return _parenthesize("if", format_expr(condition), format_stmt(then_branch))
            return _parenthesize(
                "if-else", format_expr(condition), format_stmt(then_branch), format_stmt(else_branch)
            )
        case WhileStmt(condition=condition, body=body):
            return _parenthesize("while", format_expr(condition), format_stmt(body))
        case FunctionStmt(name=name, params=params, body=body):
            signature = "(" + " ".join(p.lexeme for p in params) + ")"
            return _parenthesize("fun", name.lexeme, signature, *(format_stmt(s) for s in body))
        case ReturnStmt(value=value):
            if value is None:
                return "(return)"
            return _parenthesize("return", format_expr(value))
        case ClassStmt(name=name, superclass=superclass, methods=methods):
            parts = [name.lexeme]
            if superclass is not None:
                parts += ["<", superclass.name.lexeme]
            return _parenthesize("class", *parts, *(format_stmt(m) for m in methods))
        case _:
            return f"<stmt {type(stmt).__name__}>"
