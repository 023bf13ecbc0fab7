"""Invocation contract shared by user-defined and native functions."""

from abc import ABC, abstractmethod

from lox.core.environment import Environment


class LoxCallable(ABC):
    """Anything a Lox call expression can invoke. The interpreter checks the argument count against arity() before
    calling, so call() can assume it gets exactly that many arguments.
    """

    @abstractmethod
    def arity(self):
        """Number of arguments the callable takes."""

    @abstractmethod
    def call(self, interpreter, arguments):
        """Invokes the callable and returns its (Lox) value."""


class LoxFunction(LoxCallable):
    """Function declared in Lox source. Keeps the environment that was active where it was declared (its closure), so
    free variables resolve in the defining scope, not the caller's.
    """

    def __init__(self, declaration, closure):
        self.declaration = declaration
        self.closure = closure

    def arity(self):
        return len(self.declaration.params)

    def call(self, interpreter, arguments):
        environment = Environment.nested_in(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)

        # the body is not lexically inside the caller's loops
        loop_depth, interpreter.loop_depth = interpreter.loop_depth, 0
        try:
            interpreter.execute_block(self.declaration.body, environment)
        finally:
            interpreter.loop_depth = loop_depth

        return None  # there is no return statement: every call evaluates to nil

    def __str__(self):
        return f"<fn {self.declaration.name.lexeme}>"

    def __repr__(self):
        return f"LoxFunction({self.declaration.name.lexeme!r}, arity={self.arity()})"
