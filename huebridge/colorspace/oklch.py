"""Perceptual space conversions: OKLab/OKLCH and CIE Lab/LCH.

Reference: https://bottosson.github.io/posts/oklab/

All functions accept floats or numpy arrays, channel by channel.
"""

from math import pi

import numpy as np

from .matrices import (
    D50,
    LMS_TO_OKLAB,
    LMS_TO_XYZ_D65,
    OKLAB_TO_LMS,
    XYZ_D65_TO_LMS,
)

# CIE Lab constants (exact rationals)
LAB_KAPPA = 24389 / 27
LAB_EPSILON = 216 / 24389


# === Polar <-> rectangular ===

def polar_to_rect(L, C, H):
    """(L, C, H) -> (L, a, b). H in degrees."""
    H_rad = H * (pi / 180)
    a = C * np.cos(H_rad)
    b = C * np.sin(H_rad)
    return L, a, b


def rect_to_polar(L, a, b):
    """(L, a, b) -> (L, C, H). Returns H in degrees [0, 360)."""
    C = np.sqrt(a**2 + b**2)
    H = np.arctan2(b, a) * (180 / pi)
    # Wrap to [0, 360)
    H = H % 360
    return L, C, H


oklch_to_oklab = polar_to_rect
oklab_to_oklch = rect_to_polar
lch_to_lab = polar_to_rect
lab_to_lch = rect_to_polar


# === OKLab <-> XYZ D65 ===

def oklab_to_xyz(L, a, b):
    """OKLab -> XYZ D65 via LMS intermediate."""
    # OKLab -> LMS (cube root space)
    lms_ = OKLAB_TO_LMS @ np.array([L, a, b], dtype=float)

    # Cube to get LMS
    lms = lms_**3

    X, Y, Z = LMS_TO_XYZ_D65 @ lms
    return X, Y, Z


def xyz_to_oklab(X, Y, Z):
    """XYZ D65 -> OKLab via LMS intermediate."""
    lms = XYZ_D65_TO_LMS @ np.array([X, Y, Z], dtype=float)

    # Cube root (sign-preserving for edge cases)
    lms_ = np.cbrt(lms)

    L, a, b = LMS_TO_OKLAB @ lms_
    return L, a, b


# === CIE Lab <-> XYZ ===

def lab_to_xyz(L, a, b):
    """CIE Lab -> XYZ, scaled by the D50 white.

    No chromatic adaptation: the result is used directly as canonical XYZ.
    """
    fy = (L + 16) / 116
    fx = a / 500 + fy
    fz = fy - b / 200

    fx3, fz3 = fx**3, fz**3
    xr = np.where(fx3 > LAB_EPSILON, fx3, (116 * fx - 16) / LAB_KAPPA)
    yr = np.where(L > LAB_KAPPA * LAB_EPSILON, fy**3, L / LAB_KAPPA)
    zr = np.where(fz3 > LAB_EPSILON, fz3, (116 * fz - 16) / LAB_KAPPA)

    return xr * D50[0], yr * D50[1], zr * D50[2]


def xyz_to_lab(X, Y, Z):
    """XYZ -> CIE Lab against the D50 white, without chromatic adaptation."""
    xyz = np.array([X, Y, Z], dtype=float) / D50
    f = np.where(xyz > LAB_EPSILON, np.cbrt(xyz), (LAB_KAPPA * xyz + 16) / 116)
    fx, fy, fz = f
    return 116 * fy - 16, 500 * (fx - fy), 200 * (fy - fz)
