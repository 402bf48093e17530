"""Canonical converter.

Every model reaches xyz-d65 through its precomputed hop list. Conversions
between two models only walk up to their lowest common ancestor, so e.g.
hsl -> hwb goes through rgb and never touches XYZ.
"""

from typing import Sequence

import numpy as np

from .registry import ModelRegistry


def _as_vector(coords: Sequence[float]) -> np.ndarray:
    v = np.asarray(coords, dtype=float)
    if v.shape[0] < 3:
        raise ValueError(f"Expected 3 coordinates, got {v.shape[0]}")
    return v[:3]


def to_canonical(model: str, coords: Sequence[float]) -> np.ndarray:
    """Model coordinates -> XYZ D65.

    Raises:
        UnknownModelError: If model is not registered.
    """
    v = _as_vector(coords)
    for hop in ModelRegistry.chain(model):
        v = hop.to_bridge(v)
    return v


def from_canonical(model: str, xyz: Sequence[float]) -> np.ndarray:
    """XYZ D65 -> model coordinates.

    Raises:
        UnknownModelError: If model is not registered.
    """
    v = _as_vector(xyz)
    for hop in reversed(ModelRegistry.chain(model)):
        v = hop.from_bridge(v)
    return v


def convert(coords: Sequence[float], source: str, target: str) -> np.ndarray:
    """Convert coordinates between two models via their common ancestor."""
    v = _as_vector(coords)
    if source == target:
        ModelRegistry.get(source)
        return v.copy()

    up = ModelRegistry.chain(source)
    down = ModelRegistry.chain(target)

    # Drop the shared tail of both hop lists
    shared = 0
    while (
        shared < min(len(up), len(down))
        and up[-1 - shared].name == down[-1 - shared].name
    ):
        shared += 1

    for hop in up[:len(up) - shared]:
        v = hop.to_bridge(v)
    for hop in reversed(down[:len(down) - shared]):
        v = hop.from_bridge(v)
    return v
