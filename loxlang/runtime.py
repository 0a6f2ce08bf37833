"""Runtime values.

Lox values map onto Python objects:

- ``nil`` is ``None``, booleans are ``bool``, strings are ``str``.
- Numbers are ``decimal.Decimal`` so that ``0.1 + 0.2 == 0.3`` holds.
- Functions, classes and instances are the classes defined here.

Instances have reference semantics: every variable holding an instance
refers to the same Python object, so a field set through one alias is seen
through all of them.


File: runtime.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any

from loxlang.ast import FunctionStmt
from loxlang.environment import Environment
from loxlang.exceptions import ReturnControlFlow

if TYPE_CHECKING:
    from loxlang.interpreter import Interpreter


class LoxCallable:
    """Base class for every value that can be called."""

    name: str

    def arity(self) -> int:
        raise NotImplementedError

    def call(self, interpreter: 'Interpreter', arguments: list) -> Any:
        raise NotImplementedError


class LoxFunction(LoxCallable):
    """A user-defined function or method together with its closure."""

    def __init__(self, declaration: FunctionStmt, closure: Environment, is_initializer: bool = False):
        self.declaration = declaration
        self.closure = closure
        self.is_initializer = is_initializer

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    def arity(self) -> int:
        return len(self.declaration.params)

    def bind(self, instance: LoxInstance) -> LoxFunction:
        """
        Return a copy of this method whose closure binds `this` to `instance`.
        """
        environment = Environment(self.closure)
        environment.define("this", instance)
        return LoxFunction(self.declaration, environment, self.is_initializer)

    def call(self, interpreter: 'Interpreter', arguments: list) -> Any:
        """
        Run the body in a fresh environment enclosed by the closure.

        A ``return`` anywhere in the body stops here. Initializers always
        produce the bound instance, whatever the body returned.
        """
        environment = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)

        try:
            interpreter.execute_block(self.declaration.body, environment)
        except ReturnControlFlow as ret:
            if self.is_initializer:
                return self.closure.get_at(0, "this")
            return ret.value

        if self.is_initializer:
            return self.closure.get_at(0, "this")
        return None

    def __str__(self) -> str:
        return f"<fn {self.name}>"

    __repr__ = __str__


class LoxClass(LoxCallable):
    """A class: a name, a method table and an optional superclass."""

    def __init__(self, name: str, superclass: LoxClass | None, methods: dict[str, LoxFunction]):
        self.name = name
        self.superclass = superclass
        self.methods = methods

    def find_method(self, name: str) -> LoxFunction | None:
        """
        Look a method up on this class, then along the superclass chain.
        """
        klass = self
        while klass is not None:
            if name in klass.methods:
                return klass.methods[name]
            klass = klass.superclass
        return None

    def arity(self) -> int:
        initializer = self.find_method("init")
        return 0 if initializer is None else initializer.arity()

    def call(self, interpreter: 'Interpreter', arguments: list) -> LoxInstance:
        instance = LoxInstance(self)
        initializer = self.find_method("init")
        if initializer is not None:
            initializer.bind(instance).call(interpreter, arguments)
        return instance

    def __str__(self) -> str:
        return f"<class {self.name}>"

    __repr__ = __str__


class LoxInstance:
    """An instance of a class with its own mutable fields."""

    def __init__(self, klass: LoxClass):
        self.klass = klass
        self.fields: dict[str, Any] = {}

    def get(self, name: str) -> Any:
        """
        Read a field, or else a method bound to this instance.

        Raises:
            KeyError: If neither a field nor a method has that name.
        """
        if name in self.fields:
            return self.fields[name]
        method = self.klass.find_method(name)
        if method is not None:
            return method.bind(self)
        raise KeyError(name)

    def set(self, name: str, value: Any) -> None:
        self.fields[name] = value

    def __str__(self) -> str:
        return f"<instance {self.klass.name}>"

    __repr__ = __str__


def is_truthy(value: Any) -> bool:
    """`nil` and `false` are falsy; everything else, `0` and `""` included, is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(left: Any, right: Any) -> bool:
    """
    Compare two values. Values of different kinds are never equal, so
    ``true == 1`` is false even though Python would say otherwise.
    """
    if left is None or right is None:
        return left is right
    if type(left) is not type(right):
        return False
    return left == right


def stringify(value: Any) -> str:
    """Render a value the way `print` shows it."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Decimal):
        if value == 0:
            # Negative zero prints as 0.
            value = abs(value)
        return format(value, "f")
    return str(value)
