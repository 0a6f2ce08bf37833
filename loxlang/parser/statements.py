"""Statement parsing utilities for Lox.

These functions operate on a `loxlang.parser.parser.Parser` instance and
handle the declaration and statement forms in the language such as blocks,
conditionals, loops, function and class definitions.


File: statements.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from loxlang.ast import (
    BlockStmt,
    ClassStmt,
    ExpressionStmt,
    FunctionStmt,
    IfStmt,
    LiteralExpr,
    PrintStmt,
    ReturnStmt,
    Stmt,
    VarStmt,
    VariableExpr,
    WhileStmt,
)
from loxlang.tokens import TokenType as TT

if TYPE_CHECKING:
    from loxlang.parser import Parser


def parse_declaration(parser: 'Parser') -> Stmt:
    """
    Parse a declaration, falling back to a plain statement.

    Syntax:
        <classDecl> | <funDecl> | <varDecl> | <statement>

    Args:
        parser: The parser instance.

    Returns:
        Stmt: the parsed declaration or statement node.
    """
    if parser.match(TT.CLASS):
        return parse_class(parser)
    if parser.match(TT.FUN):
        return parser.function("function")
    if parser.match(TT.VAR):
        return parse_var(parser)
    return parser.statement()


def parse_class(parser: 'Parser') -> ClassStmt:
    """
    Parse a class declaration.

    Syntax:
        class <identifier> ( < <identifier> )? { <method>* }
    """
    name = parser.eat(TT.IDENTIFIER, "Expect class name.")

    superclass = None
    if parser.match(TT.LESS):
        super_tok = parser.eat(TT.IDENTIFIER, "Expect superclass name.")
        superclass = parser.node(VariableExpr, super_tok)

    parser.eat(TT.LEFT_BRACE, "Expect '{' before class body.")
    methods = []
    while not parser.check(TT.RIGHT_BRACE) and not parser.is_at_end():
        methods.append(parser.function("method"))
    parser.eat(TT.RIGHT_BRACE, "Expect '}' after class body.")

    return parser.node(ClassStmt, name, superclass, methods)


def parse_function(parser: 'Parser', kind: str) -> FunctionStmt:
    """
    Parse a function or method declaration.

    Syntax:
        <identifier>(<params>) { <block> }

    Args:
        parser: The parser instance.
        kind: "function" or "method", used in error messages.
    """
    name = parser.eat(TT.IDENTIFIER, f"Expect {kind} name.")
    parser.eat(TT.LEFT_PAREN, f"Expect '(' after {kind} name.")
    params = []
    if not parser.check(TT.RIGHT_PAREN):
        params.append(parser.eat(TT.IDENTIFIER, "Expect parameter name."))
        while parser.match(TT.COMMA):
            params.append(parser.eat(TT.IDENTIFIER, "Expect parameter name."))
    parser.eat(TT.RIGHT_PAREN, "Expect ')' after parameters.")

    parser.eat(TT.LEFT_BRACE, f"Expect '{{' before {kind} body.")
    body = parser.block()
    return parser.node(FunctionStmt, name, params, body)


def parse_var(parser: 'Parser') -> VarStmt:
    """
    Parse a `var` declaration.

    Syntax:
        var <identifier> ( = <expression> )? ;
    """
    name = parser.eat(TT.IDENTIFIER, "Expect variable name.")
    initializer = None
    if parser.match(TT.EQUAL):
        initializer = parser.expr()
    parser.eat(TT.SEMICOLON, "Expect ';' after variable declaration.")
    return parser.node(VarStmt, name, initializer)


def parse_statement(parser: 'Parser') -> Stmt:
    """
    Parse a single statement.

    Syntax:
        <exprStmt> | <forStmt> | <ifStmt> | <printStmt>
        | <returnStmt> | <whileStmt> | <block>
    """
    if parser.match(TT.FOR):
        return parse_for(parser)
    if parser.match(TT.IF):
        return parse_if(parser)
    if parser.match(TT.PRINT):
        return parse_print(parser)
    if (keyword := parser.match(TT.RETURN)) is not None:
        return parse_return(parser, keyword)
    if parser.match(TT.WHILE):
        return parse_while(parser)
    if parser.match(TT.LEFT_BRACE):
        return parser.node(BlockStmt, parser.block())
    return parse_expression_statement(parser)


def parse_block(parser: 'Parser') -> list[Stmt]:
    """
    Parse the declarations of a block up to its closing brace.

    Syntax:
        { <declaration>* }
    """
    statements = []
    while not parser.check(TT.RIGHT_BRACE) and not parser.is_at_end():
        statements.append(parser.declaration())
    parser.eat(TT.RIGHT_BRACE, "Expect '}' after block.")
    return statements


def parse_for(parser: 'Parser') -> Stmt:
    """
    Parse a `for` loop and desugar it into a block holding a `while` loop.

    Syntax:
        for ( <varDecl> | <exprStmt> | ; <expression>? ; <expression>? ) <statement>

    Returns:
        Stmt: ``{ initializer; while (condition) { body; increment } }``
    """
    parser.eat(TT.LEFT_PAREN, "Expect '(' after 'for'.")

    if parser.match(TT.SEMICOLON):
        initializer = None
    elif parser.match(TT.VAR):
        initializer = parse_var(parser)
    else:
        initializer = parse_expression_statement(parser)

    condition = None
    if not parser.check(TT.SEMICOLON):
        condition = parser.expr()
    parser.eat(TT.SEMICOLON, "Expect ';' after loop condition.")

    increment = None
    if not parser.check(TT.RIGHT_PAREN):
        increment = parser.expr()
    parser.eat(TT.RIGHT_PAREN, "Expect ')' after for clauses.")

    body = parser.statement()

    if increment is not None:
        body = parser.node(
            BlockStmt, [body, parser.node(ExpressionStmt, increment)]
        )
    if condition is None:
        condition = parser.node(LiteralExpr, True)
    body = parser.node(WhileStmt, condition, body)
    if initializer is not None:
        body = parser.node(BlockStmt, [initializer, body])
    return body


def parse_if(parser: 'Parser') -> IfStmt:
    """
    Parse a conditional with an optional else branch.

    Syntax:
        if ( <condition> ) <statement> ( else <statement> )?
    """
    parser.eat(TT.LEFT_PAREN, "Expect '(' after 'if'.")
    condition = parser.expr()
    parser.eat(TT.RIGHT_PAREN, "Expect ')' after if condition.")

    then_branch = parser.statement()
    else_branch = None
    if parser.match(TT.ELSE):
        else_branch = parser.statement()
    return parser.node(IfStmt, condition, then_branch, else_branch)


def parse_print(parser: 'Parser') -> PrintStmt:
    """
    Parse a `print` statement.

    Syntax:
        print <expression> ;
    """
    value = parser.expr()
    parser.eat(TT.SEMICOLON, "Expect ';' after value.")
    return parser.node(PrintStmt, value)


def parse_return(parser: 'Parser', keyword) -> ReturnStmt:
    """
    Parse a `return` statement. A bare `return;` carries no value.

    Syntax:
        return <expression>? ;
    """
    value = None
    if not parser.check(TT.SEMICOLON):
        value = parser.expr()
    parser.eat(TT.SEMICOLON, "Expect ';' after return value.")
    return parser.node(ReturnStmt, keyword, value)


def parse_while(parser: 'Parser') -> WhileStmt:
    """
    Parse a `while` loop.

    Syntax:
        while ( <condition> ) <statement>
    """
    parser.eat(TT.LEFT_PAREN, "Expect '(' after 'while'.")
    condition = parser.expr()
    parser.eat(TT.RIGHT_PAREN, "Expect ')' after condition.")
    body = parser.statement()
    return parser.node(WhileStmt, condition, body)


def parse_expression_statement(parser: 'Parser') -> ExpressionStmt:
    """
    Parse an expression used as a statement.

    Syntax:
        <expression> ;
    """
    expr_node = parser.expr()
    parser.eat(TT.SEMICOLON, "Expect ';' after expression.")
    return parser.node(ExpressionStmt, expr_node)
