"""
Utility functions shared across Lox tests.
"""
from loxlang.interpreter import Interpreter
from loxlang.lexer import tokenize
from loxlang.parser import Parser
from loxlang.resolver import resolve_locals


def parse_source(source: str):
    """
    Parse source code and return the AST.
    """
    tokens = tokenize(source)
    parser = Parser(tokens, "<test>")
    return parser.parse()


def resolve_source(source: str):
    """
    Parse and resolve source code, returning the AST and the locals map.
    """
    ast = parse_source(source)
    return ast, resolve_locals(ast, "<test>")


def run_source(source: str) -> Interpreter:
    """
    Run source code and return the interpreter instance after execution.
    """
    ast, locals_ = resolve_source(source)
    interpreter = Interpreter("<test>")
    interpreter.interpret(ast, locals_)
    return interpreter


def output_lines(capsys) -> list[str]:
    """
    Return the captured stdout split into lines.
    """
    return capsys.readouterr().out.strip().splitlines()
