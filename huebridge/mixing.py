"""Easing curves and component interpolation used by mix() and scale()."""

from typing import Callable, Sequence

from huebridge.colorspace import ModelDescriptor

Easing = Callable[[float], float]

HUE_INTERPOLATIONS = ("shorter", "longer", "increasing", "decreasing")


def _ease_out_cubic(t: float) -> float:
    t -= 1
    return t * t * t + 1


EASINGS: dict[str, Easing] = {
    "linear": lambda t: t,
    "ease-in": lambda t: t * t,
    "ease-out": lambda t: t * (2 - t),
    "ease-in-out": lambda t: 2 * t * t if t < 0.5 else -1 + (4 - 2 * t) * t,
    "ease-in-cubic": lambda t: t * t * t,
    "ease-out-cubic": _ease_out_cubic,
    "ease-in-out-cubic": lambda t: 4 * t * t * t if t < 0.5 else 1 - (-2 * t + 2) ** 3 / 2,
}


def resolve_easing(easing: str | Easing) -> Easing:
    """Look up a named easing; callables pass through."""
    if callable(easing):
        return easing
    if easing not in EASINGS:
        raise ValueError(f"Unknown easing: {easing}. Available: {list(EASINGS.keys())}")
    return EASINGS[easing]


def _shorter_delta(a: float, b: float) -> float:
    """Signed shortest angle from a to b, in [-180, 180]."""
    d = (b - a) % 360
    return d - 360 if d > 180 else d


def interpolate_hue(a: float, b: float, t: float, method: str = "shorter") -> float:
    """Interpolate from hue a toward hue b; t=0 gives a, t=1 gives b.

    Result is normalized into [0, 360).
    """
    if method == "shorter":
        hue = a + t * _shorter_delta(a, b)
    elif method == "longer":
        d = _shorter_delta(a, b)
        hue = a + t * (d - 360 if d >= 0 else d + 360)
    elif method == "increasing":
        hue = a * (1 - t) + (b + 360 if b < a else b) * t
    elif method == "decreasing":
        hue = a * (1 - t) + (b - 360 if b > a else b) * t
    else:
        raise ValueError(
            f"Unknown hue interpolation: {method}. Available: {list(HUE_INTERPOLATIONS)}"
        )
    return hue % 360


def interpolate_components(
    start: Sequence[float],
    end: Sequence[float],
    model: ModelDescriptor,
    t: float,
    hue: str = "shorter",
) -> list[float]:
    """Interpolate [c0, c1, c2, alpha] from start (t=0) to end (t=1).

    When either color is translucent, non-hue channels are blended
    premultiplied by their own alpha and un-premultiplied afterwards.
    Hue axes never get premultiplied.
    """
    if hue not in HUE_INTERPOLATIONS:
        raise ValueError(
            f"Unknown hue interpolation: {hue}. Available: {list(HUE_INTERPOLATIONS)}"
        )

    a0, a1 = start[3], end[3]
    alpha = a0 + (a1 - a0) * t
    premultiply = a0 < 1 or a1 < 1

    mixed = []
    for comp in model.components:
        i = comp.index
        if comp.domain.circular:
            mixed.append(interpolate_hue(start[i], end[i], t, hue))
        elif premultiply:
            value = start[i] * a0 * (1 - t) + end[i] * a1 * t
            mixed.append(value / alpha if alpha != 0 else 0.0)
        else:
            mixed.append(start[i] + (end[i] - start[i]) * t)

    return mixed + [alpha]
