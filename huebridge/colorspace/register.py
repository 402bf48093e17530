"""
Model registration module.

register_builtin_models() runs once when huebridge.colorspace is imported;
call it again to reset the registry to the built-in table.
"""

from typing import Literal, Sequence

import numpy as np

from .models import Transfer, builtin_models, rgb_space
from .registry import ModelRegistry
from .schema import ModelDescriptor


def register_builtin_models() -> None:
    """
    Register all built-in models with the global registry.

    Registration order matters: every bridge is registered before the
    models that hop through it.
    """
    # Clear any existing registrations
    ModelRegistry.clear()

    for model in builtin_models():
        ModelRegistry.register(model)


def register_rgb_space(
    name: str,
    to_linear: Transfer,
    from_linear: Transfer,
    to_xyz: Sequence[Sequence[float]],
    from_xyz: Sequence[Sequence[float]],
    white_point: Literal["D65", "D50"] = "D65",
    components: Sequence[str] = ("r", "g", "b"),
) -> ModelDescriptor:
    """Register a custom RGB-like space and return its descriptor.

    Args:
        name: Registry key; must not already be registered
        to_linear: Per-channel decoding of encoded values to linear light
        from_linear: Inverse of to_linear
        to_xyz: 3x3 matrix from linear RGB to XYZ (relative to white_point)
        from_xyz: 3x3 matrix from XYZ to linear RGB
        white_point: "D65" or "D50"
        components: Axis names, default ("r", "g", "b")

    Raises:
        RegistrationError: If the name is taken or the schema is malformed
    """
    model = rgb_space(
        name,
        to_linear,
        from_linear,
        np.asarray(to_xyz, dtype=float),
        np.asarray(from_xyz, dtype=float),
        white_point=white_point,
        components=components,
    )
    ModelRegistry.register(model)
    return model
