"""
Lox Language Interpreter

This is the main entry point for the Lox language interpreter.

Workflow:
1. The source script is read from the file specified on the command line.
2. The Lexer tokenizes the source code into meaningful tokens.
3. The Parser processes tokens into an AST following the language grammar.
4. The Resolver checks scoping rules and computes variable binding distances.
5. The Interpreter walks the AST, evaluating expressions and executing statements.

Set LOXDEBUG to any non-empty value to dump tokens and the AST before running
and to turn on debug logging.


File: lox.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
import logging
import os
import sys

from loxlang.ast_printer import format_stmt
from loxlang.exceptions import (
    LoxRuntimeError,
    ParseError,
    ResolveError,
    ScanError,
)
from loxlang.interpreter import Interpreter
from loxlang.lexer import tokenize
from loxlang.parser import Parser
from loxlang.resolver import resolve_locals

EXIT_OK = 0
EXIT_USAGE = 64
EXIT_STATIC_ERROR = 65
EXIT_NO_INPUT = 66
EXIT_RUNTIME_ERROR = 70


def debug_enabled() -> bool:
    """
    Check whether LOXDEBUG is set.
    """
    return bool(os.environ.get('LOXDEBUG'))


def print_usage():
    """
    Print usage.
    """
    print()
    print("Lox Language Interpreter")
    print()
    print("Usage:")
    print("    lox [script.lox]")
    print()
    print("Arguments:")
    print("    <script.lox>")
    print("        Path to a Lox source file to execute.")
    print()
    print("Example:")
    print("    lox hello.lox")
    print()
    print("Or run with no arguments to enter interactive mode (REPL).")
    print()
    print("Options:")
    print("    -h, --help")
    print("        Show this help message and exit.")
    print()
    print("Environment:")
    print("    LOXDEBUG")
    print("        Print tokens and AST before running, and log debug output.")


def report(error: Exception):
    """
    Print an error to stderr. Every collected scan error gets its own line.
    """
    if isinstance(error, ScanError):
        for message in error.errors:
            print(f"{type(error).__name__}: {message}", file=sys.stderr)
    else:
        print(f"{type(error).__name__}: {error}", file=sys.stderr)


def debug_print_tokens_ast(tokens, ast):
    """
    Print tokenized source and AST
    """
    print("\nTokens:\n")
    print(tokens)
    print("\nAST:\n")
    for stmt in ast:
        print(format_stmt(stmt))
    print(" ")


def run(source: str, file: str, interpreter: Interpreter) -> int:
    """
    Run a chunk of source in the given interpreter and map failures to an
    exit code.
    """
    try:
        tokens = tokenize(source)
        ast = Parser(tokens, file).parse()
        if debug_enabled():
            debug_print_tokens_ast(tokens, ast)
        locals_ = resolve_locals(ast, file)
    except (ScanError, ParseError, ResolveError) as e:
        report(e)
        return EXIT_STATIC_ERROR

    try:
        interpreter.interpret(ast, locals_)
    except (LoxRuntimeError, RecursionError) as e:
        report(e)
        return EXIT_RUNTIME_ERROR
    return EXIT_OK


def run_script(script_name: str) -> int:
    """
    Run a Lox script
    """
    try:
        with open(script_name, "r", encoding="utf-8") as f:
            code = f.read()
    except OSError as e:
        report(e)
        return EXIT_NO_INPUT

    return run(code, script_name, Interpreter(script_name))


def is_incomplete(source: str) -> bool:
    """
    Check whether the parser ran out of input before finishing a statement.
    """
    try:
        Parser(tokenize(source), "<stdin>").parse()
    except ParseError as e:
        return "end of input" in str(e)
    except ScanError:
        return False
    return False


def run_repl():
    """
    Run the interactive REPL
    """
    print("Lox Language Interpreter - REPL")
    print("Type `exit` or `quit` to leave.")
    interpreter = Interpreter("<stdin>")
    buffer: list[str] = []
    while True:
        try:
            prompt = ">>> " if not buffer else "... "
            line = input(prompt)
            if not buffer and line.strip() in {"exit", "quit"}:
                break
            buffer.append(line)
            source = "\n".join(buffer)
            # Keep reading lines until the statement is complete.
            if is_incomplete(source):
                continue
            run(source, "<stdin>", interpreter)
            buffer.clear()
        except KeyboardInterrupt:
            print("\nInterrupted.")
            break
        except EOFError:
            print()
            break


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the CLI.

    Behaviour:
    - No arguments: enter the REPL.
    - One argument equal to ``-h`` or ``--help``: print usage and exit.
    - One argument that is not an option: treat it as the path to a script and run it.
    - Any other pattern: print usage and return exit code 64.
    """
    if argv is None:
        argv = sys.argv
    if debug_enabled():
        logging.basicConfig(level=logging.DEBUG)

    args = argv[1:]
    if not args:
        run_repl()
        return EXIT_OK
    if len(args) == 1 and args[0] in ('-h', '--help'):
        print_usage()
        return EXIT_OK
    if len(args) == 1 and not args[0].startswith('-'):
        return run_script(args[0])
    print_usage()
    return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main(sys.argv))
