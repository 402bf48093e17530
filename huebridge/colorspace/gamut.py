"""Gamut fitting for model coordinates.

Not every coordinate triple of a model is displayable. fit() reconciles
coordinates with the model's domains and, for the search methods, with its
target gamut.

Methods:
- none: coordinates are returned untouched
- round-only: round to each component's precision, no clamping
- clip: wrap hues, clamp everything else, then round
- chroma-reduction: keep L and H in OKLCH, bisect chroma until the color
  (or its clipped projection) is acceptable
- css-gamut-map: CSS Color 4 section 13.2 binary search with a JND test
"""

import logging
from typing import Sequence

import numpy as np

from huebridge import defaults
from huebridge.errors import InvalidFitMethodError
from .convert import from_canonical, to_canonical
from .difference import delta_e_ok
from .registry import ModelRegistry
from .schema import ModelDescriptor

logger = logging.getLogger(__name__)

OKLAB_WHITE = (1.0, 0.0, 0.0)
OKLAB_BLACK = (0.0, 0.0, 0.0)


# === Per-axis helpers ===

def round_coords(coords: Sequence[float], model: ModelDescriptor, precision: int | None = None) -> list[float]:
    """Round each axis to the component precision (or a uniform override)."""
    return [
        round(float(value), comp.precision if precision is None else precision)
        for value, comp in zip(coords, model.components)
    ]


def clip_coords(coords: Sequence[float], model: ModelDescriptor) -> list[float]:
    """Wrap circular axes into [min, max), clamp bounded ones to [min, max]."""
    return [comp.domain.clip(float(value)) for value, comp in zip(coords, model.components)]


def within_domain(coords: Sequence[float], model: ModelDescriptor, epsilon: float = 0.0) -> bool:
    """True if every non-hue axis lies within its domain +/- epsilon."""
    return all(
        comp.domain.contains(float(value), epsilon)
        for value, comp in zip(coords, model.components)
        if not comp.domain.circular
    )


# === Gamut checking ===

def is_in_gamut(xyz: Sequence[float], gamut: str, epsilon: float = defaults.GAMUT_EPSILON) -> bool:
    """Check if canonical coordinates fall inside a model's gamut.

    Models without a target gamut (XYZ, Lab, OKLCH, ...) are unbounded and
    always report True.
    """
    model = ModelRegistry.get(gamut)
    if model.target_gamut is None:
        return True
    return within_domain(from_canonical(gamut, xyz), model, epsilon)


def _oklch_xyz(L: float, C: float, H: float) -> np.ndarray:
    return to_canonical("oklch", (L, C, H))


def lightness_range(
    hue: float,
    gamut: str,
    epsilon: float = defaults.LIGHTNESS_RANGE_EPSILON,
) -> tuple[float, float]:
    """OKLCH lightness interval at `hue` that keeps a small chroma inside `gamut`.

    Two independent bisections over L in [0, 1], one converging on the lower
    boundary and one on the upper.
    """
    C = defaults.LIGHTNESS_RANGE_CHROMA

    def inside(L: float) -> bool:
        return is_in_gamut(_oklch_xyz(L, C, hue), gamut, epsilon)

    low, high = 0.0, 1.0
    while high - low > epsilon:
        mid = (low + high) / 2
        if inside(mid):
            high = mid
        else:
            low = mid
    L_min = high

    low, high = 0.0, 1.0
    while high - low > epsilon:
        mid = (low + high) / 2
        if inside(mid):
            low = mid
        else:
            high = mid
    L_max = low

    return L_min, L_max


# === Fitting ===

def fit(
    coords: Sequence[float],
    model: str,
    method: str = defaults.DEFAULT_FIT_METHOD,
    precision: int | None = None,
) -> list[float]:
    """Fit model coordinates according to `method`.

    Args:
        coords: 3 model coordinates, optionally followed by alpha
        model: Registered model name
        method: One of defaults.FIT_METHODS
        precision: Decimal places overriding every component's precision

    Returns:
        Fitted coordinates as a list; a trailing alpha is passed through
        unchanged.

    Raises:
        InvalidFitMethodError: If method is not a supported fitting method
        UnknownModelError: If model is not registered
    """
    if method not in defaults.FIT_METHODS:
        raise InvalidFitMethodError(
            f"Invalid fit method: {method}. Available: {list(defaults.FIT_METHODS)}"
        )

    descriptor = ModelRegistry.get(model)
    values = [float(c) for c in coords]
    if len(values) not in (3, 4):
        raise ValueError(f"Expected 3 or 4 coordinates, got {len(values)}")
    axes, alpha = values[:3], values[3:]

    if method == "none":
        fitted = axes
    elif method == "round-only":
        fitted = round_coords(axes, descriptor, precision)
    elif method == "clip":
        fitted = _clip_and_round(axes, descriptor, precision)
    elif method == "chroma-reduction":
        fitted = _chroma_reduction(axes, descriptor, precision)
    else:
        fitted = _css_gamut_map(axes, descriptor, precision)

    return fitted + alpha


def _clip_and_round(coords: Sequence[float], model: ModelDescriptor, precision: int | None) -> list[float]:
    # Rounding can push a wrapped hue up to max (359.999999 -> 360.0); wrap again
    return clip_coords(round_coords(clip_coords(coords, model), model, precision), model)


def _clipped_projection(xyz: np.ndarray, model: ModelDescriptor, precision: int | None) -> list[float]:
    return _clip_and_round(from_canonical(model.name, xyz), model, precision)


def _chroma_reduction(coords: list[float], model: ModelDescriptor, precision: int | None) -> list[float]:
    gamut = model.target_gamut
    xyz = to_canonical(model.name, coords)
    if gamut is None or is_in_gamut(xyz, gamut, defaults.GAMUT_EPSILON):
        return round_coords(coords, model, precision)

    L, _, H = from_canonical("oklch", xyz)
    L_min, L_max = lightness_range(H, gamut)
    L = min(L_max, max(L_min, L))

    C_low = 0.0
    C_high = defaults.CHROMA_REDUCTION_MAX_CHROMA
    while C_high - C_low > defaults.CHROMA_REDUCTION_EPSILON:
        C_mid = (C_low + C_high) / 2
        candidate = _oklch_xyz(L, C_mid, H)

        if is_in_gamut(candidate, gamut, defaults.GAMUT_EPSILON):
            C_low = C_mid
            continue

        clipped = _clipped_projection(candidate, model, precision)
        if delta_e_ok(candidate, to_canonical(model.name, clipped)) < defaults.CHROMA_REDUCTION_THRESHOLD:
            return clipped
        C_high = C_mid

    logger.debug("Chroma reduction in %s converged to L=%.5f C=%.6f H=%.3f", model.name, L, C_low, H)
    return round_coords(from_canonical(model.name, _oklch_xyz(L, C_low, H)), model, precision)


def _css_gamut_map(coords: list[float], model: ModelDescriptor, precision: int | None) -> list[float]:
    gamut = model.target_gamut
    if gamut is None:
        return round_coords(coords, model, precision)

    xyz = to_canonical(model.name, coords)
    L, C, H = (float(c) for c in from_canonical("oklch", xyz))

    if L >= 1.0:
        return round_coords(from_canonical(model.name, to_canonical("oklab", OKLAB_WHITE)), model, precision)
    if L <= 0.0:
        return round_coords(from_canonical(model.name, to_canonical("oklab", OKLAB_BLACK)), model, precision)

    if is_in_gamut(xyz, gamut, defaults.GAMUT_EPSILON):
        return round_coords(coords, model, precision)

    JND = defaults.CSS_GAMUT_MAP_JND
    epsilon = defaults.CSS_GAMUT_MAP_EPSILON

    current = _oklch_xyz(L, C, H)
    clipped = _clipped_projection(current, model, precision)
    if delta_e_ok(current, to_canonical(model.name, clipped)) < JND:
        return clipped

    low, high = 0.0, C
    low_in_gamut = True
    while high - low > epsilon:
        chroma = (low + high) / 2
        candidate = _oklch_xyz(L, chroma, H)

        if low_in_gamut and is_in_gamut(candidate, gamut, defaults.GAMUT_EPSILON):
            low = chroma
            continue

        clipped = _clipped_projection(candidate, model, precision)
        E = delta_e_ok(candidate, to_canonical(model.name, clipped))
        if E < JND:
            if JND - E < epsilon:
                return clipped
            low_in_gamut = False
            low = chroma
        else:
            high = chroma

    logger.debug("CSS gamut map in %s collapsed at C=%.5f", model.name, low)
    return clipped
