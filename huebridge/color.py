"""Immutable color values and per-model channel access.

A Color stores CIE XYZ (D65) plus alpha. Every write returns a new Color
that also remembers the exact model coordinates it was written from, so a
read in that same model gets them back without a canonical round trip.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Mapping, Sequence, Union

from huebridge import defaults
from huebridge.cluster import cluster as cluster_colors
from huebridge.colorspace import (
    UNIT,
    ModelDescriptor,
    delta_e,
    delta_e_ok,
    fit as fit_coords,
    from_canonical,
    get_model,
    lightness_range,
    to_canonical,
)
from huebridge.colorspace.gamut import within_domain
from huebridge.expr import compile_expression
from huebridge.mixing import interpolate_components, resolve_easing

logger = logging.getLogger(__name__)

Updater = Union[float, Callable[[float], float]]
Update = Union[Mapping[str, Updater], Callable[[dict[str, float]], Mapping[str, float]]]


@dataclass(frozen=True)
class Color:
    """A color in canonical XYZ D65 with alpha.

    Attributes:
        x, y, z: CIE XYZ relative to D65
        alpha: Opacity, stored as written and reported clamped to [0, 1]
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    alpha: float = 1.0
    # (model name, coordinates) of the last write
    _cache: tuple[str, tuple[float, float, float]] | None = field(
        default=None, repr=False, compare=False
    )

    def __post_init__(self):
        for name in ("x", "y", "z", "alpha"):
            object.__setattr__(self, name, float(getattr(self, name)))

    # === Construction ===

    @classmethod
    def from_coords(cls, model: str, coords: Sequence[float | None]) -> Color:
        """Create a color from model coordinates, optionally followed by alpha."""
        return cls().in_model(model).set_coords(coords)

    @classmethod
    def from_values(cls, model: str, **values: float) -> Color:
        """Create a color from named components, e.g. from_values("hsl", h=120, s=100, l=50)."""
        return cls().in_model(model).set(values)

    @property
    def xyz(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @property
    def opacity(self) -> float:
        """Alpha clamped to [0, 1]."""
        return UNIT.clip(self.alpha)

    def in_model(self, model: str) -> ModelInterface:
        """Channel access in `model`.

        Raises:
            UnknownModelError: If model is not registered
        """
        return ModelInterface(self, model)

    # === Gamut and difference ===

    def in_gamut(self, gamut: str = "srgb", epsilon: float = defaults.GAMUT_EPSILON) -> bool:
        """True if the unfitted coordinates in `gamut` lie within its domains.

        Hue axes are ignored; models without a target gamut always return True.
        """
        interface = self.in_model(gamut)
        if interface.model.target_gamut is None:
            return True
        return within_domain(interface.get_coords("none")[:3], interface.model, epsilon)

    def delta_e_ok(self, other: Color) -> float:
        """OKLab Euclidean distance x100 (~2 is a just-noticeable difference)."""
        return delta_e_ok(self.xyz, other.xyz)

    def delta_e(self, other: Color, method: str = defaults.DEFAULT_DELTA_E_METHOD) -> float:
        """CIE76, CIE94 or CIEDE2000 difference in Lab."""
        return delta_e(self.xyz, other.xyz, method)

    def luminance(self, background: Color | None = None) -> float:
        """Relative luminance (Y), composited over `background` (default white) when translucent."""
        alpha = self.opacity
        if alpha >= 1:
            return self.y
        if background is None:
            background = Color.from_coords("srgb", (1.0, 1.0, 1.0))
        return (1 - alpha) * background.y + alpha * self.y

    def contrast(self, other: Color) -> float:
        """WCAG 2.1 contrast ratio of this color over `other`, in [1, 21]."""
        L_bg = other.luminance()
        L_fg = self.luminance(other)
        return (max(L_fg, L_bg) + 0.05) / (min(L_fg, L_bg) + 0.05)

    def contrast_color(self) -> Color:
        """Black for light colors (luminance > 0.5), white otherwise."""
        return Color.from_coords("srgb", (0.0, 0.0, 0.0) if self.luminance() > 0.5 else (1.0, 1.0, 1.0))

    def lightness_range(
        self,
        gamut: str = "srgb",
        epsilon: float = defaults.LIGHTNESS_RANGE_EPSILON,
    ) -> tuple[float, float]:
        """OKLCH lightness interval at this color's hue that keeps low chroma inside `gamut`."""
        hue = self.in_model("oklch").get_component("h", fit="none")
        return lightness_range(hue, gamut, epsilon)

    # === Sequences ===

    def scale(
        self,
        target: Color,
        steps: int = defaults.DEFAULT_SCALE_STEPS,
        model: str = defaults.DEFAULT_SCALE_MODEL,
        easing: str | Callable[[float], float] = defaults.DEFAULT_EASING,
        hue: str = defaults.DEFAULT_HUE_INTERPOLATION,
    ) -> list[Color]:
        """Colors interpolated from this color to `target` in `model`, both ends included."""
        if steps < 2:
            raise ValueError(f"Scale must include at least 2 steps, got {steps}")

        ease = resolve_easing(easing)
        start = self.in_model(model)
        end = target.in_model(model)
        start_coords = start.get_coords("none")
        end_coords = end.get_coords("none")

        return [
            start.set_coords(
                interpolate_components(start_coords, end_coords, start.model, ease(i / (steps - 1)), hue)
            )
            for i in range(steps)
        ]

    @staticmethod
    def cluster(
        colors: Sequence[Color],
        k: int,
        runs: int = defaults.CLUSTER_RUNS,
        max_iterations: int = defaults.CLUSTER_MAX_ITERATIONS,
        seed: int | None = None,
    ) -> list[Color]:
        """k dominant colors of a palette (k-means++ in OKLab)."""
        return cluster_colors(colors, k, runs, max_iterations, seed)

    # === Comparison ===

    def equals(self, other: Color, precision: int = defaults.DEFAULT_PRECISION) -> bool:
        """Equal when canonical coordinates and alpha agree after rounding."""
        return all(
            round(a, precision) == round(b, precision)
            for a, b in zip((*self.xyz, self.opacity), (*other.xyz, other.opacity))
        )


class ModelInterface:
    """Read and write a Color through one model's components.

    Built on demand by Color.in_model(); holds no state besides the color
    and the model descriptor.
    """

    def __init__(self, color: Color, model: str):
        self.color = color
        self.model: ModelDescriptor = get_model(model)

    def __repr__(self) -> str:
        return f"ModelInterface({self.color!r}, {self.model.name!r})"

    # === Reads ===

    def _raw(self) -> list[float]:
        """Unfitted coordinates: the last write if it was in this model, else recomputed."""
        cache = self.color._cache
        if cache is not None and cache[0] == self.model.name:
            return list(cache[1])
        return [float(c) for c in from_canonical(self.model.name, self.color.xyz)]

    def get_coords(self, fit: str = defaults.DEFAULT_FIT_METHOD, precision: int | None = None) -> list[float]:
        """[c0, c1, c2, alpha] fitted with `fit`; alpha is clamped, never fitted."""
        return fit_coords(self._raw(), self.model.name, fit, precision) + [self.color.opacity]

    def get(self, fit: str = defaults.DEFAULT_FIT_METHOD, precision: int | None = None) -> dict[str, float]:
        """Component name -> value in component order, plus alpha."""
        names = self.model.component_names + ("alpha",)
        return dict(zip(names, self.get_coords(fit, precision)))

    def get_component(self, name: str, fit: str = defaults.DEFAULT_FIT_METHOD) -> float:
        comp = self.model.component(name)
        return self.get_coords(fit)[comp.index]

    # === Writes ===

    def _write(self, coords: Sequence[float], alpha: float) -> Color:
        coords = tuple(float(c) for c in coords)
        x, y, z = to_canonical(self.model.name, coords)
        return Color(x, y, z, alpha, _cache=(self.model.name, coords))

    def set(self, update: Update) -> Color:
        """Return a new color with some components replaced.

        Args:
            update: {name: value | fn(prev) -> value}, or fn(current) -> {name: value}.
                    Updaters see unfitted coordinates; "alpha" is addressable.

        NaN becomes 0 and infinities become the component's domain bounds.
        """
        current = dict(zip(self.model.component_names, self._raw()))
        current["alpha"] = self.color.alpha

        if callable(update):
            update = update(dict(current))

        values = dict(current)
        for name, value in update.items():
            comp = self.model.component(name)
            if callable(value):
                value = value(current[name])
            values[name] = comp.domain.normalize(float(value))

        return self._write([values[n] for n in self.model.component_names], values["alpha"])

    def set_coords(self, coords: Sequence[float | None]) -> Color:
        """Positional write; None leaves an axis unchanged, a 4th slot sets alpha."""
        if len(coords) not in (3, 4):
            raise ValueError(f"Expected 3 or 4 coordinates, got {len(coords)}")

        values = self._raw() + [self.color.alpha]
        domains = [c.domain for c in self.model.components] + [UNIT]
        for i, value in enumerate(coords):
            if value is not None:
                values[i] = domains[i].normalize(float(value))

        return self._write(values[:3], values[3])

    def set_relative(self, expressions: Mapping[str, str]) -> Color:
        """Set components from expressions over the current components.

        e.g. {"l": "l * 0.8", "h": "calc(h + 180)", "alpha": "50%"}.
        Percentages resolve against the addressed component's domain.
        """
        bindings = dict(zip(self.model.component_names, self._raw()))
        bindings["alpha"] = self.color.alpha

        update = {}
        for name, expr in expressions.items():
            comp = self.model.component(name)
            update[name] = compile_expression(expr)(bindings, reference=comp.domain.reference)
            logger.debug("Relative %s.%s = %s -> %r", self.model.name, name, expr, update[name])

        return self.set(update)

    def mix(
        self,
        other: Color,
        amount: float = defaults.DEFAULT_MIX_AMOUNT,
        hue: str = defaults.DEFAULT_HUE_INTERPOLATION,
        easing: str | Callable[[float], float] = defaults.DEFAULT_EASING,
        gamma: float = defaults.DEFAULT_MIX_GAMMA,
    ) -> Color:
        """Mix with `other` in this model.

        amount=0 keeps this color, amount=1 yields `other` re-expressed here.
        Translucent colors are blended premultiplied.
        """
        if gamma <= 0:
            raise ValueError(f"gamma must be positive, got {gamma}")

        ease = resolve_easing(easing)
        amount = min(1.0, max(0.0, amount))
        start = self._raw() + [self.color.opacity]
        end = other.in_model(self.model.name).get_coords("none")

        if amount == 0:
            return self.set_coords(start)
        if amount == 1:
            return self.set_coords(end)

        # w weights this color, 1 - w weights the other
        w = ease(1 - amount) ** (1 / gamma)
        return self.set_coords(interpolate_components(start, end, self.model, 1 - w, hue))
