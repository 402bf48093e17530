"""
huebridge: CSS Color 4 conversion and gamut mapping.

Example:
    from huebridge import Color

    color = Color.from_coords("lch", [79.7256, 40.448, 84.771])
    color.in_model("srgb").get_coords()  # ~[0.926, 0.750, 0.393, 1.0]
    color.in_model("oklch").set({"c": lambda c: c * 2}).in_gamut("srgb")
"""

from .errors import (
    ColorError,
    InvalidFitMethodError,
    RegistrationError,
    UnknownComponentError,
    UnknownModelError,
)
from .colorspace import (
    ModelDescriptor,
    convert,
    fit,
    from_canonical,
    get_model,
    list_models,
    register_builtin_models,
    register_model,
    register_rgb_space,
    to_canonical,
)
from .color import Color, ModelInterface
from .mixing import EASINGS

__version__ = "0.1.0"

__all__ = [
    'Color',
    'ModelInterface',
    'ModelDescriptor',
    'EASINGS',
    # Engine
    'convert',
    'fit',
    'from_canonical',
    'to_canonical',
    # Registry
    'get_model',
    'list_models',
    'register_builtin_models',
    'register_model',
    'register_rgb_space',
    # Errors
    'ColorError',
    'InvalidFitMethodError',
    'RegistrationError',
    'UnknownComponentError',
    'UnknownModelError',
]
