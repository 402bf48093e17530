"""Parse and validate relative-color expression strings into typed nodes."""

import ast
import math
import re

from huebridge import defaults
from .errors import LimitExceededError, ParseError, ValidationError
from .nodes import BinOp, Neg, Node, Number, Percentage, Ref

# CSS calc() keywords
CONSTANTS: dict[str, float] = {
    'pi': math.pi,
    'e': math.e,
    'infinity': math.inf,
    'nan': math.nan,
}

BINOPS: dict[type, str] = {
    ast.Add: "+",
    ast.Sub: "-",
    ast.Mult: "*",
    ast.Div: "/",
}

# Internal marker call that `50%` is rewritten to before ast.parse
_PERCENT_FN = "__percent__"
_PERCENT_RE = re.compile(r"(?<![\w.])(\d+(?:\.\d*)?|\.\d+)%")


def _preprocess(expr: str) -> str:
    return _PERCENT_RE.sub(rf"{_PERCENT_FN}(\1)", expr.strip())


class ExprBuilder(ast.NodeVisitor):
    """Validates a Python AST and converts it into typed expression nodes."""

    def __init__(self, max_depth: int = defaults.EXPR_MAX_DEPTH, max_nodes: int = defaults.EXPR_MAX_NODES):
        self.max_depth = max_depth
        self.max_nodes = max_nodes
        self.depth = 0
        self.node_count = 0
        self.variables: set[str] = set()

    def visit(self, node) -> Node:
        self.node_count += 1
        if self.node_count > self.max_nodes:
            raise LimitExceededError(f"Expression exceeds {self.max_nodes} nodes")

        self.depth += 1
        if self.depth > self.max_depth:
            raise LimitExceededError(f"Expression exceeds depth {self.max_depth}")

        result = super().visit(node)
        self.depth -= 1
        return result

    def visit_Expression(self, node):
        return self.visit(node.body)

    def visit_Constant(self, node):
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            raise ValidationError(
                f"Only numeric constants allowed, got {type(node.value).__name__}"
            )
        return Number(float(node.value))

    def visit_Name(self, node):
        if node.id in CONSTANTS:
            return Number(CONSTANTS[node.id])
        self.variables.add(node.id)
        return Ref(node.id)

    def visit_BinOp(self, node):
        op = BINOPS.get(type(node.op))
        if op is None:
            raise ValidationError(f"Operator {type(node.op).__name__} not allowed")
        return BinOp(op, self.visit(node.left), self.visit(node.right))

    def visit_UnaryOp(self, node):
        if isinstance(node.op, ast.USub):
            return Neg(self.visit(node.operand))
        if isinstance(node.op, ast.UAdd):
            return self.visit(node.operand)
        raise ValidationError(
            f"Unary operator {type(node.op).__name__} not allowed"
        )

    def visit_Call(self, node):
        if not isinstance(node.func, ast.Name):
            raise ValidationError("Only direct function calls allowed")

        if node.keywords:
            raise ValidationError("Keyword arguments not allowed")

        func_name = node.func.id
        if len(node.args) != 1:
            raise ValidationError(f"{func_name} expects 1 arg, got {len(node.args)}")

        if func_name == _PERCENT_FN:
            arg = self.visit(node.args[0])
            if not isinstance(arg, Number):
                raise ValidationError("Percentages must be numeric literals")
            return Percentage(arg.value)
        if func_name == "calc":
            return self.visit(node.args[0])
        raise ValidationError(f"Unknown function: {func_name}")

    def generic_visit(self, node):
        raise ValidationError(f"Construct not allowed: {type(node).__name__}")


def parse(
    expr: str,
    max_depth: int = defaults.EXPR_MAX_DEPTH,
    max_nodes: int = defaults.EXPR_MAX_NODES,
) -> tuple[Node, set[str]]:
    """Parse and validate an expression string.

    Returns:
        (tree, variables): The typed tree and set of component names referenced
    """
    if '%' in _PERCENT_RE.sub("", expr):
        raise ParseError(f"Misplaced '%' in expression: {expr}")

    try:
        tree = ast.parse(_preprocess(expr), mode='eval')
    except SyntaxError as e:
        raise ParseError(f"Syntax error: {e}")

    builder = ExprBuilder(max_depth, max_nodes)
    return builder.visit(tree), builder.variables
