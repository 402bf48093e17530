"""Color difference metrics on canonical (XYZ D65) coordinates."""

import math

import numpy as np

from huebridge import defaults
from .convert import from_canonical

DELTA_E_METHODS = ("76", "94", "2000")


def delta_e_ok(xyz_a, xyz_b) -> float:
    """Euclidean distance in OKLab, scaled x100 so ~2 is a just-noticeable difference."""
    a = from_canonical("oklab", xyz_a)
    b = from_canonical("oklab", xyz_b)
    return float(np.linalg.norm(a - b)) * defaults.DELTA_E_OK_SCALE


def delta_e(xyz_a, xyz_b, method: str = defaults.DEFAULT_DELTA_E_METHOD) -> float:
    """CIE color difference in Lab (D50).

    Args:
        method: "76" (Euclidean), "94" (graphic arts weights) or "2000"

    Raises:
        ValueError: If method is not one of DELTA_E_METHODS
    """
    L1, a1, b1 = (float(c) for c in from_canonical("lab", xyz_a))
    L2, a2, b2 = (float(c) for c in from_canonical("lab", xyz_b))

    if method == "76":
        return math.sqrt((L1 - L2) ** 2 + (a1 - a2) ** 2 + (b1 - b2) ** 2)
    if method == "94":
        return _cie94(L1, a1, b1, L2, a2, b2)
    if method == "2000":
        return _ciede2000(L1, a1, b1, L2, a2, b2)
    raise ValueError(f"Unsupported delta E method: {method}. Available: {list(DELTA_E_METHODS)}")


def _cie94(L1, a1, b1, L2, a2, b2) -> float:
    K1 = 0.045
    K2 = 0.015

    C1 = math.hypot(a1, b1)
    C2 = math.hypot(a2, b2)
    dL = L1 - L2
    dC = C1 - C2
    da = a1 - a2
    db = b1 - b2
    dH = math.sqrt(max(0.0, da * da + db * db - dC * dC))

    sC = 1 + K1 * C1
    sH = 1 + K2 * C1
    return math.sqrt(dL ** 2 + (dC / sC) ** 2 + (dH / sH) ** 2)


def _ciede2000(L1, a1, b1, L2, a2, b2) -> float:
    G7 = 25 ** 7

    C_bar = (math.hypot(a1, b1) + math.hypot(a2, b2)) / 2
    C_bar7 = C_bar ** 7
    G = 0.5 * (1 - math.sqrt(C_bar7 / (C_bar7 + G7)))

    a1p = (1 + G) * a1
    a2p = (1 + G) * a2
    C1p = math.hypot(a1p, b1)
    C2p = math.hypot(a2p, b2)

    h1p = 0.0 if a1p == 0 and b1 == 0 else math.degrees(math.atan2(b1, a1p)) % 360
    h2p = 0.0 if a2p == 0 and b2 == 0 else math.degrees(math.atan2(b2, a2p)) % 360

    dL = L2 - L1
    dC = C2p - C1p

    h_diff = h2p - h1p
    h_sum = h1p + h2p
    if C1p * C2p == 0:
        dh = 0.0
    elif abs(h_diff) <= 180:
        dh = h_diff
    elif h_diff > 180:
        dh = h_diff - 360
    else:
        dh = h_diff + 360
    dH = 2 * math.sqrt(C1p * C2p) * math.sin(math.radians(dh) / 2)

    L_bar = (L1 + L2) / 2
    Cp_bar = (C1p + C2p) / 2
    Cp_bar7 = Cp_bar ** 7

    if C1p == 0 and C2p == 0:
        hp_bar = h_sum
    elif abs(h_diff) <= 180:
        hp_bar = h_sum / 2
    elif h_sum < 360:
        hp_bar = (h_sum + 360) / 2
    else:
        hp_bar = (h_sum - 360) / 2

    lsq = (L_bar - 50) ** 2
    SL = 1 + 0.015 * lsq / math.sqrt(20 + lsq)
    SC = 1 + 0.045 * Cp_bar
    T = (
        1
        - 0.17 * math.cos(math.radians(hp_bar - 30))
        + 0.24 * math.cos(math.radians(2 * hp_bar))
        + 0.32 * math.cos(math.radians(3 * hp_bar + 6))
        - 0.20 * math.cos(math.radians(4 * hp_bar - 63))
    )
    SH = 1 + 0.015 * Cp_bar * T

    d_theta = 30 * math.exp(-(((hp_bar - 275) / 25) ** 2))
    RC = 2 * math.sqrt(Cp_bar7 / (Cp_bar7 + G7))
    RT = -math.sin(math.radians(2 * d_theta)) * RC

    return math.sqrt(
        (dL / SL) ** 2
        + (dC / SC) ** 2
        + (dH / SH) ** 2
        + RT * (dC / SC) * (dH / SH)
    )
