"""Native functions.

Natives are host functions exposed to Lox programs as ordinary callable
values in the global environment. Registering a native is the only way a
program gains access to I/O or other system facilities.


File: natives.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging
import time
from decimal import Decimal
from typing import Any, Callable

from loxlang.environment import Environment
from loxlang.runtime import LoxCallable

logger = logging.getLogger(__name__)


class NativeFunction(LoxCallable):
    """A host function with a fixed arity."""

    def __init__(self, name: str, arity: int, fn: Callable[..., Any]):
        self.name = name
        self._arity = arity
        self.fn = fn

    def arity(self) -> int:
        return self._arity

    def call(self, interpreter, arguments: list) -> Any:
        return self.fn(*arguments)

    def __str__(self) -> str:
        return f"<fn {self.name}>"

    __repr__ = __str__


def define_native(env: Environment, name: str, arity: int, fn: Callable[..., Any]) -> NativeFunction:
    """
    Register a host function under `name` in the given (global) environment.
    """
    if name in env:
        logger.debug("Overwriting global %s with a native function", name)
    native = NativeFunction(name, arity, fn)
    env.define(name, native)
    return native


def _clock() -> Decimal:
    return Decimal(str(time.time()))


def define_native_functions(env: Environment) -> None:
    """
    Install the standard natives.
    """
    define_native(env, "clock", 0, _clock)
