"""Errors.

Lexical errors are collected and reported together, syntax and static
errors stop at the first one found, and runtime errors abort the rest of
the program. ``ReturnControlFlow`` is not an error: it carries the value of
a ``return`` statement up to the function call that catches it.


File: exceptions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""


def _located(message, line=None, file=None):
    if line is not None:
        message += f" on line {line}"
    if file is not None:
        message += f" in {file}"
    return message


class ScanError(Exception):
    """
    Error for one or more lexical errors found while scanning.
    """
    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("\n".join(self.errors))


class ParseError(SyntaxError):
    """
    Error for the first syntax error found while parsing.
    """
    def __init__(self, message, line=None, file=None):
        self.line = line
        self.file = file
        super().__init__(_located(message, line, file))


class ResolveError(Exception):
    """
    Error for static scoping violations found by the resolver.
    """
    def __init__(self, message, line=None, file=None):
        self.line = line
        self.file = file
        super().__init__(_located(message, line, file))


class LoxRuntimeError(RuntimeError):
    """
    Error raised while executing a program.
    """
    def __init__(self, message, line=None, file=None):
        self.line = line
        self.file = file
        super().__init__(_located(message, line, file))


class UndefinedVariableException(LoxRuntimeError):
    """
    Error for undefined variables.
    """
    def __init__(self, varname, line=None, file=None):
        self.varname = varname
        super().__init__(f"Undefined variable '{varname}'", line, file)


class ReturnControlFlow(Exception):
    """
    Control flow handling for return statements.
    """
    def __init__(self, value):
        super().__init__()
        self.value = value
