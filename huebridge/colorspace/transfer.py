"""Transfer functions (gamma encoding/decoding) for RGB-like spaces.

Each function works per channel on numpy arrays and is extended to negative
values by mirroring, so out-of-gamut colors survive a round trip.
"""

import numpy as np


def _mirrored(fn):
    """Apply fn to |x| and restore the sign."""
    def wrapped(x: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        return np.sign(x) * fn(np.abs(x))
    wrapped.__name__ = fn.__name__
    wrapped.__doc__ = fn.__doc__
    return wrapped


def identity(x: np.ndarray) -> np.ndarray:
    return np.asarray(x, dtype=float)


@_mirrored
def srgb_to_linear(x: np.ndarray) -> np.ndarray:
    """sRGB -> Linear RGB gamma decoding (per channel)."""
    threshold = 0.04045
    low = x / 12.92
    high = np.power((x + 0.055) / 1.055, 2.4)
    return np.where(x <= threshold, low, high)


@_mirrored
def linear_to_srgb(x: np.ndarray) -> np.ndarray:
    """Linear RGB -> sRGB gamma encoding (per channel)."""
    threshold = 0.0031308
    low = x * 12.92
    high = 1.055 * np.power(x, 1 / 2.4) - 0.055
    return np.where(x <= threshold, low, high)


# ITU-R BT.2020 constants
_REC2020_ALPHA = 1.09929682680944
_REC2020_BETA = 0.018053968510807


@_mirrored
def rec2020_to_linear(x: np.ndarray) -> np.ndarray:
    low = x / 4.5
    high = np.power((x + _REC2020_ALPHA - 1) / _REC2020_ALPHA, 1 / 0.45)
    return np.where(x < _REC2020_BETA * 4.5, low, high)


@_mirrored
def linear_to_rec2020(x: np.ndarray) -> np.ndarray:
    low = x * 4.5
    high = _REC2020_ALPHA * np.power(x, 0.45) - (_REC2020_ALPHA - 1)
    return np.where(x > _REC2020_BETA, high, low)


@_mirrored
def a98_to_linear(x: np.ndarray) -> np.ndarray:
    return np.power(x, 563 / 256)


@_mirrored
def linear_to_a98(x: np.ndarray) -> np.ndarray:
    return np.power(x, 256 / 563)


# ROMM RGB thresholds
_PROPHOTO_ET = 1 / 512
_PROPHOTO_ET2 = 16 / 512


@_mirrored
def prophoto_to_linear(x: np.ndarray) -> np.ndarray:
    return np.where(x <= _PROPHOTO_ET2, x / 16, np.power(x, 1.8))


@_mirrored
def linear_to_prophoto(x: np.ndarray) -> np.ndarray:
    return np.where(x >= _PROPHOTO_ET, np.power(x, 1 / 1.8), x * 16)
