"""Evaluate typed expression trees."""

import math
from typing import Callable

from .errors import UnknownVariableError
from .nodes import BinOp, Neg, Node, Number, Percentage, Ref


def _divide(left: float, right: float) -> float:
    # IEEE semantics, as in CSS calc(): x/0 is +-infinity, 0/0 is NaN
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def evaluate(node: Node, bindings: dict[str, float], reference: float = 100.0) -> float:
    """Evaluate a node.

    Args:
        bindings: Component name -> current value
        reference: Magnitude that 100% resolves to
    """
    if isinstance(node, Number):
        return node.value
    if isinstance(node, Percentage):
        return node.value / 100 * reference
    if isinstance(node, Ref):
        if node.name not in bindings:
            raise UnknownVariableError(
                f"Unknown variable: {node.name}. Available: {sorted(bindings)}"
            )
        return float(bindings[node.name])
    if isinstance(node, Neg):
        return -evaluate(node.operand, bindings, reference)
    if isinstance(node, BinOp):
        left = evaluate(node.left, bindings, reference)
        right = evaluate(node.right, bindings, reference)
        if node.op == "+":
            return left + right
        if node.op == "-":
            return left - right
        if node.op == "*":
            return left * right
        return _divide(left, right)
    raise TypeError(f"Unhandled node: {type(node).__name__}")


def compile_expr(
    tree: Node, variables: set[str]
) -> Callable[..., float]:
    """Compile a typed tree to a callable.

    Args:
        tree: Tree from parser.parse()
        variables: Set of component names the expression references

    Returns:
        Callable taking (bindings, reference=100.0) and returning a float
    """

    def run(bindings: dict[str, float], reference: float = 100.0) -> float:
        missing = variables - set(bindings.keys())
        if missing:
            raise UnknownVariableError(f"Missing variables: {sorted(missing)}")
        return evaluate(tree, bindings, reference)

    return run
