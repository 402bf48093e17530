"""Per-model component metadata.

A model descriptor records the axis order, the numeric domain of each axis,
the rounding precision, the model's target gamut and the single bridge hop
that leads toward the canonical space.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Literal

import numpy as np

from huebridge import defaults
from huebridge.errors import RegistrationError, UnknownComponentError

DomainKind = Literal["bounded", "hue", "percentage"]
BridgeFn = Callable[[np.ndarray], np.ndarray]


@dataclass(frozen=True)
class Domain:
    """Numeric domain of a single axis."""
    kind: DomainKind
    min: float
    max: float

    @property
    def circular(self) -> bool:
        return self.kind == "hue"

    @property
    def width(self) -> float:
        return self.max - self.min

    def clip(self, value: float) -> float:
        """Wrap circular values into [min, max), clamp the rest to [min, max]."""
        if self.circular:
            return self.min + (value - self.min) % self.width
        return min(self.max, max(self.min, value))

    def normalize(self, value: float) -> float:
        """Map NaN to 0 and infinities to the domain bounds."""
        if math.isnan(value):
            return 0.0
        if math.isinf(value):
            return self.max if value > 0 else self.min
        return value

    def contains(self, value: float, epsilon: float = 0.0) -> bool:
        return self.min - epsilon <= value <= self.max + epsilon

    @property
    def reference(self) -> float:
        """Magnitude that 100% resolves to in relative expressions."""
        return max(abs(self.min), abs(self.max))


def bounded(lo: float, hi: float) -> Domain:
    return Domain("bounded", float(lo), float(hi))


HUE = Domain("hue", 0.0, 360.0)
PERCENTAGE = Domain("percentage", 0.0, 100.0)
UNIT = bounded(0.0, 1.0)


@dataclass(frozen=True)
class Component:
    """A named axis of a model."""
    name: str
    index: int
    domain: Domain
    precision: int = defaults.DEFAULT_PRECISION


# Never rounded or fitted
ALPHA = Component("alpha", 3, UNIT)


@dataclass(frozen=True)
class ModelDescriptor:
    """Immutable description of one coordinate system.

    Attributes:
        name: Registry key, e.g. "oklch" or "display-p3"
        components: The three axes in index order
        bridge: Model reached by one hop (None only for the canonical space)
        to_bridge: Maps a 3-vector in this model to the bridge model
        from_bridge: Maps a 3-vector in the bridge model to this model
        target_gamut: RGB-like model whose unit cube bounds this model,
                      or None when the model has no finite gamut
    """
    name: str
    components: tuple[Component, ...]
    bridge: str | None
    to_bridge: BridgeFn
    from_bridge: BridgeFn
    target_gamut: str | None = None
    description: str = ""

    def __post_init__(self):
        if len(self.components) != 3:
            raise RegistrationError(
                f"Model '{self.name}' must define 3 components, got {len(self.components)}"
            )
        names = [c.name for c in self.components]
        if len(set(names)) != 3:
            raise RegistrationError(f"Model '{self.name}' has duplicate component names: {names}")
        if ALPHA.name in names:
            raise RegistrationError(f"Model '{self.name}' may not define an 'alpha' component")
        for expected, comp in enumerate(self.components):
            if comp.index != expected:
                raise RegistrationError(
                    f"Component '{comp.name}' of '{self.name}' has index {comp.index}, expected {expected}"
                )

    @property
    def component_names(self) -> tuple[str, ...]:
        return tuple(c.name for c in self.components)

    def component(self, name: str) -> Component:
        """Look up a component by name; 'alpha' is always available."""
        if name == ALPHA.name:
            return ALPHA
        for comp in self.components:
            if comp.name == name:
                return comp
        raise UnknownComponentError(
            f"Model '{self.name}' has no component '{name}'. "
            f"Available: {list(self.component_names) + [ALPHA.name]}"
        )
