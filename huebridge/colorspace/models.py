"""Built-in model descriptors (CSS Color Module Level 4).

Bridge tree:

    xyz-d65 (canonical)
    |-- xyz, srgb, srgb-linear, display-p3, rec2020, a98-rgb
    |-- rgb <- hsl, hwb
    |-- oklab <- oklch
    `-- xyz-d50 <- lab <- lch
                `-- prophoto-rgb
"""

from __future__ import annotations

from typing import Callable, Literal, Sequence

import numpy as np

from . import cylindrical, matrices, transfer
from .oklch import (
    lab_to_lch,
    lab_to_xyz,
    lch_to_lab,
    oklab_to_oklch,
    oklab_to_xyz,
    oklch_to_oklab,
    xyz_to_lab,
    xyz_to_oklab,
)
from huebridge import defaults
from .schema import HUE, PERCENTAGE, UNIT, Component, Domain, ModelDescriptor, bounded

Transfer = Callable[[np.ndarray], np.ndarray]


def _channelwise(fn: Callable[..., tuple]) -> Callable[[np.ndarray], np.ndarray]:
    """Adapt a (c0, c1, c2) -> tuple function to the 3-vector bridge signature."""
    def bridge(v: np.ndarray) -> np.ndarray:
        return np.array(fn(*(float(c) for c in v)), dtype=float)
    bridge.__name__ = fn.__name__
    return bridge


def _matrix(m: np.ndarray) -> Callable[[np.ndarray], np.ndarray]:
    def bridge(v: np.ndarray) -> np.ndarray:
        return m @ np.asarray(v, dtype=float)
    return bridge


def _components(
    *specs: tuple[str, Domain],
    precision: int | Sequence[int] = defaults.DEFAULT_PRECISION,
) -> tuple[Component, ...]:
    if isinstance(precision, int):
        precision = (precision,) * len(specs)
    return tuple(
        Component(name, index, domain, p)
        for index, ((name, domain), p) in enumerate(zip(specs, precision))
    )


def rgb_space(
    name: str,
    to_linear: Transfer,
    from_linear: Transfer,
    to_xyz: np.ndarray,
    from_xyz: np.ndarray,
    white_point: Literal["D65", "D50"] = "D65",
    components: Sequence[str] = ("r", "g", "b"),
    description: str = "",
) -> ModelDescriptor:
    """Build an RGB-like descriptor from a transfer pair and XYZ matrices.

    The space is its own target gamut (its unit cube). D65 spaces bridge to
    xyz-d65 directly; D50 spaces bridge to xyz-d50.
    """
    if white_point not in ("D65", "D50"):
        raise ValueError(f"Unknown white point: {white_point}")

    to_xyz = np.asarray(to_xyz, dtype=float)
    from_xyz = np.asarray(from_xyz, dtype=float)

    def to_bridge(v: np.ndarray) -> np.ndarray:
        return to_xyz @ to_linear(v)

    def from_bridge(xyz: np.ndarray) -> np.ndarray:
        return from_linear(from_xyz @ np.asarray(xyz, dtype=float))

    return ModelDescriptor(
        name=name,
        components=_components(*((c, UNIT) for c in components)),
        bridge="xyz-d65" if white_point == "D65" else "xyz-d50",
        to_bridge=to_bridge,
        from_bridge=from_bridge,
        target_gamut=name,
        description=description,
    )


def _xyz_space(name: str, bridge: str | None, to_bridge, from_bridge, description: str) -> ModelDescriptor:
    return ModelDescriptor(
        name=name,
        components=_components(("x", UNIT), ("y", UNIT), ("z", UNIT)),
        bridge=bridge,
        to_bridge=to_bridge,
        from_bridge=from_bridge,
        target_gamut=None,
        description=description,
    )


# === 8-bit sRGB ===

def _rgb_to_xyz(v: np.ndarray) -> np.ndarray:
    return matrices.SRGB_TO_XYZ_D65 @ transfer.srgb_to_linear(np.asarray(v, dtype=float) / 255)


def _xyz_to_rgb(xyz: np.ndarray) -> np.ndarray:
    return transfer.linear_to_srgb(matrices.XYZ_D65_TO_SRGB @ np.asarray(xyz, dtype=float)) * 255


def _hsl_to_rgb(h: float, s: float, l: float) -> tuple[float, float, float]:
    return tuple(c * 255 for c in cylindrical.hsl_to_srgb(h, s, l))


def _rgb_to_hsl(r: float, g: float, b: float) -> tuple[float, float, float]:
    return cylindrical.srgb_to_hsl(r / 255, g / 255, b / 255)


def _hwb_to_rgb(h: float, w: float, bl: float) -> tuple[float, float, float]:
    return tuple(c * 255 for c in cylindrical.hwb_to_srgb(h, w, bl))


def _rgb_to_hwb(r: float, g: float, b: float) -> tuple[float, float, float]:
    return cylindrical.srgb_to_hwb(r / 255, g / 255, b / 255)


# === CIE Lab ===
# Lab XYZ is scaled by the D50 white but used as D65 XYZ without adaptation.
# The hop into xyz-d50 pre-applies D65->D50 so the xyz-d50 -> xyz-d65 hop cancels it.

def _lab_to_xyz_d50(v: np.ndarray) -> np.ndarray:
    return matrices.D65_TO_D50 @ np.array(lab_to_xyz(*(float(c) for c in v)), dtype=float)


def _xyz_d50_to_lab(xyz: np.ndarray) -> np.ndarray:
    return np.array(xyz_to_lab(*(matrices.D50_TO_D65 @ np.asarray(xyz, dtype=float))), dtype=float)


def builtin_models() -> list[ModelDescriptor]:
    """All built-in descriptors, in registration order (bridges first)."""
    xyz_d65 = _xyz_space(
        "xyz-d65", None, transfer.identity, transfer.identity,
        "CIE XYZ relative to D65 (canonical space)",
    )
    xyz = _xyz_space(
        "xyz", "xyz-d65", transfer.identity, transfer.identity,
        "Alias of xyz-d65",
    )
    xyz_d50 = _xyz_space(
        "xyz-d50", "xyz-d65", _matrix(matrices.D50_TO_D65), _matrix(matrices.D65_TO_D50),
        "CIE XYZ relative to D50",
    )

    srgb = rgb_space(
        "srgb", transfer.srgb_to_linear, transfer.linear_to_srgb,
        matrices.SRGB_TO_XYZ_D65, matrices.XYZ_D65_TO_SRGB,
        description="sRGB (IEC 61966-2-1)",
    )
    srgb_linear = rgb_space(
        "srgb-linear", transfer.identity, transfer.identity,
        matrices.SRGB_TO_XYZ_D65, matrices.XYZ_D65_TO_SRGB,
        description="Linear-light sRGB",
    )
    display_p3 = rgb_space(
        "display-p3", transfer.srgb_to_linear, transfer.linear_to_srgb,
        matrices.P3_TO_XYZ_D65, matrices.XYZ_D65_TO_P3,
        description="Display P3",
    )
    rec2020 = rgb_space(
        "rec2020", transfer.rec2020_to_linear, transfer.linear_to_rec2020,
        matrices.REC2020_TO_XYZ_D65, matrices.XYZ_D65_TO_REC2020,
        description="ITU-R BT.2020",
    )
    a98 = rgb_space(
        "a98-rgb", transfer.a98_to_linear, transfer.linear_to_a98,
        matrices.A98_TO_XYZ_D65, matrices.XYZ_D65_TO_A98,
        description="Adobe RGB (1998) compatible",
    )
    prophoto = rgb_space(
        "prophoto-rgb", transfer.prophoto_to_linear, transfer.linear_to_prophoto,
        matrices.PROPHOTO_TO_XYZ_D50, matrices.XYZ_D50_TO_PROPHOTO,
        white_point="D50",
        description="ProPhoto RGB (ROMM)",
    )

    rgb = ModelDescriptor(
        name="rgb",
        components=_components(
            ("r", bounded(0, 255)), ("g", bounded(0, 255)), ("b", bounded(0, 255)),
            precision=0,
        ),
        bridge="xyz-d65",
        to_bridge=_rgb_to_xyz,
        from_bridge=_xyz_to_rgb,
        target_gamut="srgb",
        description="8-bit sRGB, channels in [0, 255]",
    )
    hsl = ModelDescriptor(
        name="hsl",
        components=_components(("h", HUE), ("s", PERCENTAGE), ("l", PERCENTAGE), precision=(0, 1, 1)),
        bridge="rgb",
        to_bridge=_channelwise(_hsl_to_rgb),
        from_bridge=_channelwise(_rgb_to_hsl),
        target_gamut="srgb",
    )
    hwb = ModelDescriptor(
        name="hwb",
        components=_components(("h", HUE), ("w", PERCENTAGE), ("b", PERCENTAGE), precision=3),
        bridge="rgb",
        to_bridge=_channelwise(_hwb_to_rgb),
        from_bridge=_channelwise(_rgb_to_hwb),
        target_gamut="srgb",
    )

    lab = ModelDescriptor(
        name="lab",
        components=_components(("l", bounded(0, 100)), ("a", bounded(-125, 125)), ("b", bounded(-125, 125))),
        bridge="xyz-d50",
        to_bridge=_lab_to_xyz_d50,
        from_bridge=_xyz_d50_to_lab,
        description="CIE Lab, D50 white, not chromatically adapted",
    )
    lch = ModelDescriptor(
        name="lch",
        components=_components(("l", bounded(0, 100)), ("c", bounded(0, 150)), ("h", HUE)),
        bridge="lab",
        to_bridge=_channelwise(lch_to_lab),
        from_bridge=_channelwise(lab_to_lch),
        description="CIE LCH, polar form of lab",
    )
    oklab = ModelDescriptor(
        name="oklab",
        components=_components(("l", UNIT), ("a", bounded(-0.4, 0.4)), ("b", bounded(-0.4, 0.4))),
        bridge="xyz-d65",
        to_bridge=_channelwise(oklab_to_xyz),
        from_bridge=_channelwise(xyz_to_oklab),
    )
    oklch = ModelDescriptor(
        name="oklch",
        components=_components(("l", UNIT), ("c", bounded(0, 0.4)), ("h", HUE)),
        bridge="oklab",
        to_bridge=_channelwise(oklch_to_oklab),
        from_bridge=_channelwise(oklab_to_oklch),
    )

    return [
        xyz_d65, xyz, xyz_d50,
        srgb, srgb_linear, display_p3, rec2020, a98, prophoto,
        rgb, hsl, hwb,
        lab, lch,
        oklab, oklch,
    ]
