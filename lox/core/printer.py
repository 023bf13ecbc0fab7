"""Canonical, fully parenthesized rendering of the AST. Operators come first, so `-123 * (45.67)` renders as
`(* (- 123) (group 45.67))`. Used to check the parser and by `lox --ast`.
"""

from lox.core.ast import ExprVisitor, StmtVisitor
from lox.core.interpreter import stringify


class AstPrinter(ExprVisitor, StmtVisitor):

    def print(self, node):
        """Renders an expression or a statement."""
        return node.accept(self)

    def parenthesize(self, name, *parts):
        result = "(" + name
        for part in parts:
            result += " " + (part if isinstance(part, str) else part.accept(self))
        return result + ")"

    # expressions

    def visit_assign_expr(self, expr):
        return self.parenthesize("=", expr.name.lexeme, expr.value)

    def visit_binary_expr(self, expr):
        return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_call_expr(self, expr):
        return self.parenthesize("call", expr.callee, *expr.arguments)

    def visit_grouping_expr(self, expr):
        return self.parenthesize("group", expr.expression)

    def visit_literal_expr(self, expr):
        return stringify(expr.value)

    def visit_logical_expr(self, expr):
        return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_unary_expr(self, expr):
        return self.parenthesize(expr.operator.lexeme, expr.right)

    def visit_variable_expr(self, expr):
        return expr.name.lexeme

    # statements

    def visit_block_stmt(self, stmt):
        return self.parenthesize("block", *stmt.statements)

    def visit_break_stmt(self, stmt):
        return "(break)"

    def visit_expression_stmt(self, stmt):
        return self.parenthesize(";", stmt.expression)

    def visit_function_stmt(self, stmt):
        params = "(" + " ".join(param.lexeme for param in stmt.params) + ")"
        return self.parenthesize("fun " + stmt.name.lexeme, params, *stmt.body)

    def visit_if_stmt(self, stmt):
        if stmt.else_branch is None:
            return self.parenthesize("if", stmt.condition, stmt.then_branch)
        return self.parenthesize("if", stmt.condition, stmt.then_branch, stmt.else_branch)

    def visit_print_stmt(self, stmt):
        return self.parenthesize("print", stmt.expression)

    def visit_var_stmt(self, stmt):
        if stmt.initializer is None:
            return self.parenthesize("var", stmt.name.lexeme)
        return self.parenthesize("var", stmt.name.lexeme, stmt.initializer)

    def visit_while_stmt(self, stmt):
        return self.parenthesize("while", stmt.condition, stmt.body)
