"""Abstract syntax tree for Lox. There are two closed families of nodes, expressions (Expr) and statements (Stmt), and a
visitor interface for each. Every node dispatches to the visitor method for its own variant, so a new operation over
the tree (interpreting, printing) is a new visitor rather than a change to the nodes. Visitors are abstract base
classes: one that forgets a variant cannot be instantiated.

Nodes own their children exclusively; the tree has no sharing and no cycles.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from lox.core.tokens import Token


class _Unset:

    def __repr__(self):
        return "<unset>"


UNSET = _Unset()  # value of a Literal built without one (nil is None, so None cannot mark "missing")


class ExprVisitor(ABC):

    @abstractmethod
    def visit_assign_expr(self, expr): ...

    @abstractmethod
    def visit_binary_expr(self, expr): ...

    @abstractmethod
    def visit_call_expr(self, expr): ...

    @abstractmethod
    def visit_grouping_expr(self, expr): ...

    @abstractmethod
    def visit_literal_expr(self, expr): ...

    @abstractmethod
    def visit_logical_expr(self, expr): ...

    @abstractmethod
    def visit_unary_expr(self, expr): ...

    @abstractmethod
    def visit_variable_expr(self, expr): ...


class StmtVisitor(ABC):

    @abstractmethod
    def visit_block_stmt(self, stmt): ...

    @abstractmethod
    def visit_break_stmt(self, stmt): ...

    @abstractmethod
    def visit_expression_stmt(self, stmt): ...

    @abstractmethod
    def visit_function_stmt(self, stmt): ...

    @abstractmethod
    def visit_if_stmt(self, stmt): ...

    @abstractmethod
    def visit_print_stmt(self, stmt): ...

    @abstractmethod
    def visit_var_stmt(self, stmt): ...

    @abstractmethod
    def visit_while_stmt(self, stmt): ...


class Expr(ABC):

    @abstractmethod
    def accept(self, visitor):
        """Calls the visitor method matching this node's variant and returns its result."""


class Stmt(ABC):

    @abstractmethod
    def accept(self, visitor):
        """Calls the visitor method matching this node's variant and returns its result."""


# expressions

@dataclass
class Assign(Expr):
    name: Token
    value: Expr

    def accept(self, visitor):
        return visitor.visit_assign_expr(self)


@dataclass
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr

    def accept(self, visitor):
        return visitor.visit_binary_expr(self)


@dataclass
class Call(Expr):
    callee: Expr
    paren: Token  # closing paren, used to locate call errors
    arguments: List[Expr] = field(default_factory=list)

    def accept(self, visitor):
        return visitor.visit_call_expr(self)


@dataclass
class Grouping(Expr):
    expression: Expr

    def accept(self, visitor):
        return visitor.visit_grouping_expr(self)


@dataclass
class Literal(Expr):
    value: object = UNSET

    def accept(self, visitor):
        return visitor.visit_literal_expr(self)


@dataclass
class Logical(Expr):
    left: Expr
    operator: Token
    right: Expr

    def accept(self, visitor):
        return visitor.visit_logical_expr(self)


@dataclass
class Unary(Expr):
    operator: Token
    right: Expr

    def accept(self, visitor):
        return visitor.visit_unary_expr(self)


@dataclass
class Variable(Expr):
    name: Token

    def accept(self, visitor):
        return visitor.visit_variable_expr(self)


# statements

@dataclass
class Block(Stmt):
    statements: List[Stmt] = field(default_factory=list)

    def accept(self, visitor):
        return visitor.visit_block_stmt(self)


@dataclass
class Break(Stmt):
    token: Token

    def accept(self, visitor):
        return visitor.visit_break_stmt(self)


@dataclass
class Expression(Stmt):
    expression: Expr

    def accept(self, visitor):
        return visitor.visit_expression_stmt(self)


@dataclass
class Function(Stmt):
    name: Token
    params: List[Token]
    body: List[Stmt]

    def accept(self, visitor):
        return visitor.visit_function_stmt(self)


@dataclass
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt] = None

    def accept(self, visitor):
        return visitor.visit_if_stmt(self)


@dataclass
class Print(Stmt):
    expression: Expr

    def accept(self, visitor):
        return visitor.visit_print_stmt(self)


@dataclass
class Var(Stmt):
    name: Token
    initializer: Optional[Expr] = None

    def accept(self, visitor):
        return visitor.visit_var_stmt(self)


@dataclass
class While(Stmt):
    condition: Expr
    body: Stmt

    def accept(self, visitor):
        return visitor.visit_while_stmt(self)
