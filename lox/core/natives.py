"""Native (host-provided) functions and the point where the host installs them into a Lox global environment."""

import time

from lox.core.callable import LoxCallable
from lox.lang.error import LoxSystemError


class NativeFunction(LoxCallable):
    """Wraps a Python function taking (interpreter, arguments) so that Lox code can call it."""

    def __init__(self, name, arity, function):
        self.name = name
        self._arity = arity
        self.function = function

    def arity(self):
        return self._arity

    def call(self, interpreter, arguments):
        return self.function(interpreter, arguments)

    def __str__(self):
        return f"<native fn {self.name}>"

    def __repr__(self):
        return f"NativeFunction({self.name!r}, arity={self._arity})"


def clock(interpreter, arguments):
    """Milliseconds since the Unix epoch, as a Lox number."""
    try:
        return float(time.time_ns() // 1_000_000)
    except OSError as error:
        raise LoxSystemError(f"System clock returned invalid value: {error}")


# name: (arity, function)
NATIVES = {
    "clock": (0, clock),
}


def install(environment, natives=None):
    """Defines every native function in environment (normally the interpreter's globals)."""
    if natives is None:
        natives = NATIVES

    for name, (arity, function) in natives.items():
        environment.define(name, NativeFunction(name, arity, function))
