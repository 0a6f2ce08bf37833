"""Lox language package.

Source text goes through four stages:

1. ``lexer.tokenize`` turns it into tokens.
2. ``parser.Parser`` builds the AST.
3. ``resolver.resolve_locals`` checks scoping and computes binding distances.
4. ``interpreter.Interpreter`` runs the program.

:func:`run_source` chains them.


File: __init__.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging

from loxlang.interpreter import Interpreter
from loxlang.lexer import tokenize
from loxlang.parser import Parser
from loxlang.resolver import resolve_locals

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())


def run_source(source: str, file: str = "<stdin>", interpreter: Interpreter | None = None) -> Interpreter:
    """
    Scan, parse, resolve and execute a program.

    Parameters:
        source (str): The program text.
        file (str): The name used in error messages.
        interpreter (Interpreter): An interpreter to reuse, so that globals
            persist between calls. A new one is created when omitted.

    Returns:
        Interpreter: The interpreter the program ran in.

    Raises:
        ScanError, ParseError, ResolveError: Before anything runs.
        LoxRuntimeError: If execution fails.
    """
    if interpreter is None:
        interpreter = Interpreter(file)
    tokens = tokenize(source)
    statements = Parser(tokens, file).parse()
    locals_ = resolve_locals(statements, file)
    interpreter.interpret(statements, locals_)
    return interpreter


__all__ = ["Interpreter", "Parser", "resolve_locals", "run_source", "tokenize"]
