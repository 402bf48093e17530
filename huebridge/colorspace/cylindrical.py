"""HSL and HWB <-> sRGB conversions.

sRGB channels here are in [0, 1]; HSL saturation/lightness and HWB
whiteness/blackness are percentages in [0, 100]. Values outside those ranges
are converted without clamping so out-of-gamut colors keep their identity.
"""


def _srgb_hue(r: float, g: float, b: float) -> float:
    """Hue angle in degrees of an sRGB triple; 0 for achromatic colors."""
    hi = max(r, g, b)
    lo = min(r, g, b)
    d = hi - lo
    if d == 0:
        return 0.0

    if hi == r:
        hue = (g - b) / d + (6 if g < b else 0)
    elif hi == g:
        hue = (b - r) / d + 2
    else:
        hue = (r - g) / d + 4
    return (hue * 60) % 360


def hsl_to_srgb(h: float, s: float, l: float) -> tuple[float, float, float]:
    """HSL -> sRGB, CSS Color 4 section 7.1."""
    s /= 100
    l /= 100
    a = s * min(l, 1 - l)

    def f(n: int) -> float:
        k = (n + h / 30) % 12
        return l - a * max(-1.0, min(k - 3, 9 - k, 1.0))

    return f(0), f(8), f(4)


def srgb_to_hsl(r: float, g: float, b: float) -> tuple[float, float, float]:
    """sRGB -> HSL. Achromatic colors get hue 0."""
    hi = max(r, g, b)
    lo = min(r, g, b)
    light = (hi + lo) / 2
    d = hi - lo

    hue = 0.0
    sat = 0.0
    if d != 0:
        sat = 0.0 if light in (0, 1) else (hi - light) / min(light, 1 - light)
        hue = _srgb_hue(r, g, b)

    # Negative saturation (out-of-gamut input) flips the hue
    if sat < 0:
        hue = (hue + 180) % 360
        sat = abs(sat)

    return hue, sat * 100, light * 100


def hwb_to_srgb(h: float, w: float, bl: float) -> tuple[float, float, float]:
    """HWB -> sRGB, CSS Color 4 section 8.1."""
    w /= 100
    bl /= 100
    if w + bl >= 1:
        gray = w / (w + bl)
        return gray, gray, gray

    r, g, b = hsl_to_srgb(h, 100, 50)
    scale = 1 - w - bl
    return r * scale + w, g * scale + w, b * scale + w


def srgb_to_hwb(r: float, g: float, b: float) -> tuple[float, float, float]:
    """sRGB -> HWB. Achromatic colors get hue 0."""
    hue = _srgb_hue(r, g, b)
    white = min(r, g, b)
    black = 1 - max(r, g, b)
    return hue, white * 100, black * 100
