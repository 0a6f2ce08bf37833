"""Runtime environments.

An environment maps names to values and links to the environment that
encloses it. Blocks, function calls and bound methods each create a new
environment whose parent is the scope they close over, so several
environments, and the closures that captured them, may share one parent.
Lifetimes are left to Python's garbage collector: an environment lives as
long as the longest-lived closure, call or instance that still refers to it.

Lookups normally arrive with a distance computed by the resolver and hop
exactly that many parents; unresolved names go straight to the globals.


File: environment.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from __future__ import annotations

from typing import Any


class Environment:
    """A scope of name → value bindings with an optional enclosing scope."""

    def __init__(self, enclosing: Environment | None = None):
        self.values: dict[str, Any] = {}
        self.enclosing = enclosing

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def define(self, name: str, value: Any) -> None:
        """Bind a name in this scope, replacing any previous binding."""
        self.values[name] = value

    def get(self, name: str) -> Any:
        """Read a name bound directly in this scope. Raises KeyError."""
        return self.values[name]

    def assign(self, name: str, value: Any) -> None:
        """Rebind a name that is already bound directly in this scope."""
        if name not in self.values:
            raise KeyError(name)
        self.values[name] = value

    def ancestor(self, distance: int) -> Environment:
        """
        Return the environment `distance` hops up the chain.

        Raises:
            RuntimeError: If the chain is shorter than `distance`.
        """
        environment = self
        for _ in range(distance):
            if environment.enclosing is None:
                raise RuntimeError(f"No enclosing environment at distance {distance}")
            environment = environment.enclosing
        return environment

    def get_at(self, distance: int, name: str) -> Any:
        return self.ancestor(distance).values[name]

    def assign_at(self, distance: int, name: str, value: Any) -> None:
        self.ancestor(distance).values[name] = value

    def __repr__(self) -> str:
        depth = 0
        env = self.enclosing
        while env is not None:
            depth += 1
            env = env.enclosing
        return f"<Environment depth={depth} names={sorted(self.values)}>"
