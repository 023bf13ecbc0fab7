"""Chained symbol tables implementing Lox's lexical scoping."""

from lox.lang.error import LoxRuntimeError


class Environment:
    """One scope: its own bindings plus a reference to the enclosing scope (None for globals). A scope may be enclosing
    several live scopes at once (a block, a closure declared in it, a running call), and every one of them sees the
    same mutable bindings; it stays alive as long as any of them references it.
    """

    def __init__(self, enclosing=None):
        self.values = {}
        self.enclosing = enclosing

    @classmethod
    def nested_in(cls, outer):
        """New empty scope whose enclosing scope is outer."""
        return cls(outer)

    def define(self, name, value):
        """Binds name in this scope, never in an enclosing one. Redefining a name overwrites it."""
        self.values[name] = value

    def get(self, name):
        """Value bound to token name in the nearest scope that defines it."""
        return self._resolve(name).values[name.lexeme]

    def assign(self, name, value):
        """Overwrites the existing binding of token name in the nearest scope that defines it. Assignment never
        creates a binding.
        """
        self._resolve(name).values[name.lexeme] = value

    def _resolve(self, name):
        environment = self
        while environment is not None:
            if name.lexeme in environment.values:
                return environment
            environment = environment.enclosing
        raise LoxRuntimeError(f"Undefined variable '{name.lexeme}'.", token=name)

    def __contains__(self, name):
        environment = self
        while environment is not None:
            if name in environment.values:
                return True
            environment = environment.enclosing
        return False

    def __repr__(self):
        depth = 0
        environment = self.enclosing
        while environment is not None:
            depth += 1
            environment = environment.enclosing
        return f"Environment(names={sorted(self.values)}, depth={depth})"
