"""Tree-walking evaluation of Lox programs.

Lox values are plain Python values:

```
Lox type   Python
--------   ------
number     float
string     str
boolean    bool
nil        None
function   LoxCallable
```
"""

import operator
import sys
from decimal import Decimal

from lox.core.ast import UNSET, ExprVisitor, StmtVisitor
from lox.core.callable import LoxCallable, LoxFunction
from lox.core.environment import Environment
from lox.core.natives import NativeFunction, install
from lox.core.tokens import TokenType
from lox.lang.error import BreakSignal, LoxError, LoxRuntimeError


# operators that only accept two numbers
NUMERIC = {
    TokenType.MINUS: operator.sub,
    TokenType.STAR: operator.mul,
    TokenType.SLASH: operator.truediv,
    TokenType.GREATER: operator.gt,
    TokenType.GREATER_EQUAL: operator.ge,
    TokenType.LESS: operator.lt,
    TokenType.LESS_EQUAL: operator.le,
}


def is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_truthy(value):
    """Only nil and false are falsy."""
    return not (value is None or value is False)


def is_equal(left, right):
    """Lox equality. Never fails: values of different types are simply not equal."""
    if is_number(left) and is_number(right):
        return left == right
    if isinstance(left, bool) or isinstance(right, bool) or left is None or right is None:
        return left is right
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    return left is right  # functions compare by identity


def stringify(value):
    """Display form of a Lox value, as used by print and string concatenation."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        value = float(value)
        if value.is_integer():
            return str(int(value))
        text = repr(value)  # shortest digits that round-trip
        return format(Decimal(text), "f") if "e" in text else text
    return str(value)


class Interpreter(ExprVisitor, StmtVisitor):
    """Evaluates expressions to values and executes statements for their effects.

    The current environment is swapped on entry to a block or a call and always restored on the way out, however the
    block is left. loop_depth counts the while loops being executed in the current function body and is only used to
    reject a break that has no loop to leave.
    """

    def __init__(self, output=None, natives=None):
        """Initializes an Interpreter

        :param output: print sink, any object with a write method (defaults to sys.stdout)
        :param natives: dict of name: (arity, function) to install as globals (defaults to natives.NATIVES)
        """
        self.globals = Environment()
        self.environment = self.globals
        self.loop_depth = 0
        self.output = output if output is not None else sys.stdout

        install(self.globals, natives)

    def define_native(self, name, arity, function):
        """Installs a host function as a global. function is called with (interpreter, arguments)."""
        self.globals.define(name, NativeFunction(name, arity, function))

    def interpret(self, statements):
        """Executes statements in order. The first error aborts the run and is raised to the caller."""
        for statement in statements:
            self.execute(statement)

    def evaluate(self, expr):
        return expr.accept(self)

    def execute(self, stmt):
        stmt.accept(self)

    def execute_block(self, statements, environment):
        """Executes statements with environment as the current scope."""
        previous = self.environment
        try:
            self.environment = environment
            for statement in statements:
                self.execute(statement)
        finally:
            self.environment = previous

    # statements

    def visit_block_stmt(self, stmt):
        self.execute_block(stmt.statements, Environment.nested_in(self.environment))

    def visit_break_stmt(self, stmt):
        if self.loop_depth == 0:
            raise LoxRuntimeError("Break statement outside of a loop.", token=stmt.token)
        raise BreakSignal(stmt.token)

    def visit_expression_stmt(self, stmt):
        self.evaluate(stmt.expression)

    def visit_function_stmt(self, stmt):
        self.environment.define(stmt.name.lexeme, LoxFunction(stmt, self.environment))

    def visit_if_stmt(self, stmt):
        if is_truthy(self.evaluate(stmt.condition)):
            self.execute(stmt.then_branch)
        elif stmt.else_branch is not None:
            self.execute(stmt.else_branch)

    def visit_print_stmt(self, stmt):
        value = self.evaluate(stmt.expression)
        self.output.write(stringify(value) + "\n")

    def visit_var_stmt(self, stmt):
        value = None
        if stmt.initializer is not None:
            value = self.evaluate(stmt.initializer)
        self.environment.define(stmt.name.lexeme, value)

    def visit_while_stmt(self, stmt):
        self.loop_depth += 1
        try:
            while is_truthy(self.evaluate(stmt.condition)):
                try:
                    self.execute(stmt.body)
                except BreakSignal:
                    break
        finally:
            self.loop_depth -= 1

    # expressions

    def visit_assign_expr(self, expr):
        value = self.evaluate(expr.value)
        self.environment.assign(expr.name, value)
        return value

    def visit_binary_expr(self, expr):
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        type_ = expr.operator.type

        if type_ is TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        if type_ is TokenType.BANG_EQUAL:
            return not is_equal(left, right)

        if type_ is TokenType.PLUS:
            if is_number(left) and is_number(right):
                return left + right
            if isinstance(left, str) and (isinstance(right, str) or is_number(right)):
                return left + stringify(right)
            if is_number(left) and isinstance(right, str):
                return stringify(left) + right
            raise LoxRuntimeError("Operands must be numbers or strings.", token=expr.operator)

        if type_ not in NUMERIC:
            raise LoxError(f"Unknown binary operator '{expr.operator.lexeme}'.", token=expr.operator, internal=True)

        if not (is_number(left) and is_number(right)):
            raise LoxRuntimeError("Operands must be numbers.", token=expr.operator)
        if type_ is TokenType.SLASH and right == 0:
            raise LoxRuntimeError("Division by zero.", token=expr.operator)

        return NUMERIC[type_](left, right)

    def visit_call_expr(self, expr):
        callee = self.evaluate(expr.callee)
        arguments = [self.evaluate(argument) for argument in expr.arguments]

        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError("Can only call functions.", token=expr.paren)
        if len(arguments) != callee.arity():
            msg = f"Expected {callee.arity()} arguments but got {len(arguments)}."
            raise LoxRuntimeError(msg, token=expr.paren)

        return callee.call(self, arguments)

    def visit_grouping_expr(self, expr):
        return self.evaluate(expr.expression)

    def visit_literal_expr(self, expr):
        if expr.value is UNSET:
            raise LoxError("Cannot evaluate a literal without a value.", internal=True)
        return expr.value

    def visit_logical_expr(self, expr):
        left = self.evaluate(expr.left)

        if expr.operator.type is TokenType.OR:
            if is_truthy(left):
                return left
        elif not is_truthy(left):
            return left

        return self.evaluate(expr.right)

    def visit_unary_expr(self, expr):
        right = self.evaluate(expr.right)

        if expr.operator.type is TokenType.MINUS:
            return -right if is_number(right) else None  # negating a non-number gives nil, not an error
        if expr.operator.type is TokenType.BANG:
            return not is_truthy(right)

        raise LoxError(f"Unknown unary operator '{expr.operator.lexeme}'.", token=expr.operator, internal=True)

    def visit_variable_expr(self, expr):
        return self.environment.get(expr.name)
