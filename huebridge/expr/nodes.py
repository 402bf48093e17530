"""Typed expression tree for relative-color channel expressions.

The tree is closed: numbers, percentages, component references, negation
and the four arithmetic operators. Nothing else can be represented.
"""

from dataclasses import dataclass
from typing import Literal, Union

BinaryOperator = Literal["+", "-", "*", "/"]


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Percentage:
    """`value`% of the addressed component's reference magnitude."""
    value: float


@dataclass(frozen=True)
class Ref:
    """Current value of a component (or alpha) of the base color."""
    name: str


@dataclass(frozen=True)
class Neg:
    operand: "Node"


@dataclass(frozen=True)
class BinOp:
    op: BinaryOperator
    left: "Node"
    right: "Node"


Node = Union[Number, Percentage, Ref, Neg, BinOp]
