"""Relative-color channel expressions.

Expressions are parsed into a small typed tree (numbers, percentages,
component references, + - * / and unary minus) and evaluated without a
general interpreter.

Example:
    from huebridge.expr import compile_expression

    fn = compile_expression("l * 0.8")
    fn({'l': 62.0, 'c': 40.0, 'h': 30.0, 'alpha': 1.0})  # 49.6

    # Percentages resolve against the addressed component's reference
    compile_expression("50%")({}, reference=255.0)  # 127.5
"""

from typing import Callable

from huebridge import defaults
from .compiler import compile_expr, evaluate
from .errors import (
    ExprError,
    LimitExceededError,
    ParseError,
    UnknownVariableError,
    ValidationError,
)
from .nodes import BinOp, Neg, Node, Number, Percentage, Ref
from .parser import CONSTANTS, parse


def compile_expression(
    expr: str,
    max_depth: int = defaults.EXPR_MAX_DEPTH,
    max_nodes: int = defaults.EXPR_MAX_NODES,
) -> Callable[..., float]:
    """Parse and compile an expression string.

    Args:
        expr: Expression string like "l * 0.8" or "calc(h + 180)"
        max_depth: Maximum tree depth (default 20)
        max_nodes: Maximum tree nodes (default 100)

    Returns:
        Callable taking (bindings, reference=100.0) and returning a float

    Raises:
        ParseError: If expression has syntax errors
        ValidationError: If expression uses disallowed constructs
        LimitExceededError: If expression exceeds safety limits
    """
    tree, variables = parse(expr, max_depth, max_nodes)
    return compile_expr(tree, variables)


def get_variables(expr: str) -> set[str]:
    """Get the set of component names referenced in an expression (constants excluded)."""
    _, variables = parse(expr)
    return variables


def list_constants() -> dict[str, float]:
    """List available built-in constants."""
    return dict(CONSTANTS)


__all__ = [
    'compile_expression',
    'get_variables',
    'list_constants',
    'parse',
    'evaluate',
    # Nodes
    'Node',
    'Number',
    'Percentage',
    'Ref',
    'Neg',
    'BinOp',
    # Errors
    'ExprError',
    'ParseError',
    'ValidationError',
    'UnknownVariableError',
    'LimitExceededError',
]
