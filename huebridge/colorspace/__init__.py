"""Color models, canonical conversion, gamut fitting and color difference.

This module provides:
- Model descriptors for the CSS Color 4 models and RGB-like spaces
- A registry resolving each model's hop list toward XYZ D65
- to_canonical / from_canonical / convert
- fit(): none, round-only, clip, chroma-reduction, css-gamut-map

Example:
    from huebridge.colorspace import convert, fit

    srgb = convert([79.7256, 40.448, 84.771], "lch", "srgb")
    fit(srgb, "srgb", "clip")  # ~[0.926, 0.750, 0.393]
"""

from .schema import ALPHA, HUE, PERCENTAGE, UNIT, Component, Domain, ModelDescriptor, bounded
from .registry import ModelRegistry, get_model, list_models, register_model
from .register import register_builtin_models, register_rgb_space
from .convert import convert, from_canonical, to_canonical
from .difference import DELTA_E_METHODS, delta_e, delta_e_ok
from .gamut import clip_coords, fit, is_in_gamut, lightness_range, round_coords

# Built-in models are available as soon as the package is imported
if not ModelRegistry.list_available():
    register_builtin_models()

__all__ = [
    # Schema
    'ALPHA',
    'HUE',
    'PERCENTAGE',
    'UNIT',
    'Component',
    'Domain',
    'ModelDescriptor',
    'bounded',
    # Registry
    'ModelRegistry',
    'get_model',
    'list_models',
    'register_model',
    'register_builtin_models',
    'register_rgb_space',
    # Conversion
    'convert',
    'from_canonical',
    'to_canonical',
    # Difference
    'DELTA_E_METHODS',
    'delta_e',
    'delta_e_ok',
    # Gamut
    'clip_coords',
    'fit',
    'is_in_gamut',
    'lightness_range',
    'round_coords',
]
