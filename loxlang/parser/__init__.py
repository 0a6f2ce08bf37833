"""Parser package for Lox.

Recursive-descent parser for Lox. `parser.py` holds the token cursor and
node-id stamping, `expressions.py` the precedence ladder and `statements.py`
the declarations and statements (with `for` desugared to `while`).


File: __init__.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from .parser import Parser

__all__ = ["Parser"]
