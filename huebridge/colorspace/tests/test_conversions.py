"""Tests for model conversions through the canonical space."""

import numpy as np
import pytest

from huebridge.colorspace import (
    ModelRegistry,
    convert,
    from_canonical,
    list_models,
    to_canonical,
)
from huebridge.colorspace.matrices import D50
from huebridge.errors import UnknownModelError

# In-domain, chromatic sample coordinates per model
SAMPLES = {
    'rgb': (200.0, 100.0, 50.0),
    'hsl': (200.0, 60.0, 40.0),
    'hwb': (200.0, 20.0, 30.0),
    'lab': (50.0, 20.0, -30.0),
    'lch': (50.0, 40.0, 200.0),
    'oklab': (0.6, 0.1, -0.05),
    'oklch': (0.6, 0.1, 200.0),
    'xyz': (0.3, 0.4, 0.5),
    'xyz-d65': (0.3, 0.4, 0.5),
    'xyz-d50': (0.3, 0.4, 0.5),
    'srgb': (0.2, 0.5, 0.8),
    'srgb-linear': (0.2, 0.5, 0.8),
    'display-p3': (0.2, 0.5, 0.8),
    'rec2020': (0.2, 0.5, 0.8),
    'a98-rgb': (0.2, 0.5, 0.8),
    'prophoto-rgb': (0.2, 0.5, 0.8),
}


class TestBasicConversions:
    """Test well-known reference colors."""

    def test_srgb_white_is_d65(self):
        """sRGB white maps to the D65 white point."""
        xyz = to_canonical('srgb', [1, 1, 1])
        np.testing.assert_allclose(xyz, [0.95046, 1.0, 1.08906], atol=1e-4)

    def test_black(self):
        for model in ('srgb', 'rgb', 'display-p3', 'lab', 'oklab'):
            xyz = to_canonical(model, [0, 0, 0])
            np.testing.assert_allclose(xyz, [0, 0, 0], atol=1e-9)

    def test_white_oklab(self):
        """White has L=1 and no chroma in OKLab."""
        oklab = from_canonical('oklab', to_canonical('srgb', [1, 1, 1]))
        np.testing.assert_allclose(oklab, [1, 0, 0], atol=1e-4)

    def test_red_oklch(self):
        oklch = from_canonical('oklch', to_canonical('srgb', [1, 0, 0]))
        np.testing.assert_allclose(oklch, [0.62796, 0.25768, 29.2339], atol=1e-3)

    def test_lab_uses_unadapted_d50_white(self):
        """Lab scales by the D50 white and feeds XYZ D65 directly."""
        np.testing.assert_allclose(to_canonical('lab', [100, 0, 0]), D50, atol=1e-9)
        np.testing.assert_allclose(from_canonical('lab', D50), [100, 0, 0], atol=1e-9)

    def test_lch_to_xyz(self):
        xyz = to_canonical('lch', [79.7256, 40.448, 84.771])
        np.testing.assert_allclose(xyz, [0.55656, 0.56197, 0.20030], atol=1e-4)

    def test_white_xyz_d50(self):
        """Chromatic adaptation takes D65 white to D50 white."""
        xyz_d50 = from_canonical('xyz-d50', to_canonical('srgb', [1, 1, 1]))
        np.testing.assert_allclose(xyz_d50, D50, atol=1e-4)

    def test_lch_to_srgb(self):
        srgb = convert([79.7256, 40.448, 84.771], 'lch', 'srgb')
        np.testing.assert_allclose(srgb, [0.92605, 0.75038, 0.39305], atol=1e-3)

    def test_hsl_primaries(self):
        np.testing.assert_allclose(convert([0, 100, 50], 'hsl', 'rgb'), [255, 0, 0], atol=1e-9)
        np.testing.assert_allclose(convert([120, 100, 50], 'hsl', 'rgb'), [0, 255, 0], atol=1e-9)
        np.testing.assert_allclose(convert([240, 100, 50], 'hsl', 'srgb'), [0, 0, 1], atol=1e-5)

    def test_rgb_to_hsl_and_hwb(self):
        np.testing.assert_allclose(convert([255, 0, 0], 'rgb', 'hsl'), [0, 100, 50], atol=1e-9)
        np.testing.assert_allclose(convert([255, 0, 0], 'rgb', 'hwb'), [0, 0, 0], atol=1e-9)

    def test_hwb_gray_when_whiteness_and_blackness_saturate(self):
        """w + b >= 100 gives a gray of w / (w + b)."""
        rgb = convert([0, 60, 60], 'hwb', 'rgb')
        np.testing.assert_allclose(rgb, [127.5, 127.5, 127.5], atol=1e-9)

    def test_achromatic_hsl_hue_is_zero(self):
        hsl = convert([128, 128, 128], 'rgb', 'hsl')
        assert hsl[0] == 0
        assert hsl[1] == 0

    def test_display_p3_red_exceeds_srgb(self):
        srgb = convert([1, 0, 0], 'display-p3', 'srgb')
        assert srgb[0] > 1
        assert srgb[1] < 0
        assert srgb[2] < 0

    def test_xyz_is_alias_of_canonical(self):
        xyz = [0.3, 0.4, 0.5]
        np.testing.assert_allclose(convert(xyz, 'xyz', 'xyz-d65'), xyz)


class TestRoundTrip:
    """from_canonical(M, to_canonical(M, c)) recovers c."""

    def test_all_builtin_models(self):
        for model, coords in SAMPLES.items():
            back = from_canonical(model, to_canonical(model, coords))
            np.testing.assert_allclose(back, coords, atol=1e-4, err_msg=model)

    def test_covers_every_registered_model(self):
        assert set(SAMPLES) == set(list_models())

    def test_negative_linear_values_survive(self):
        """Transfer functions are mirrored for out-of-gamut channels."""
        coords = [-0.2, 0.5, 1.3]
        for model in ('srgb', 'display-p3', 'rec2020', 'a98-rgb', 'prophoto-rgb'):
            back = from_canonical(model, to_canonical(model, coords))
            np.testing.assert_allclose(back, coords, atol=1e-6, err_msg=model)

    def test_convert_matches_canonical_path(self):
        """Shortcut through a common ancestor equals the full canonical path."""
        pairs = [('hsl', 'hwb'), ('lch', 'lab'), ('lab', 'lch'), ('oklch', 'srgb'), ('prophoto-rgb', 'lch')]
        for source, target in pairs:
            coords = SAMPLES[source]
            direct = convert(coords, source, target)
            full = from_canonical(target, to_canonical(source, coords))
            np.testing.assert_allclose(direct, full, atol=1e-6, err_msg=f"{source}->{target}")

    def test_convert_same_model_copies(self):
        coords = np.array([0.1, 0.2, 0.3])
        out = convert(coords, 'srgb', 'srgb')
        np.testing.assert_array_equal(out, coords)
        assert out is not coords


class TestHopLists:
    """Precomputed bridge chains."""

    def test_chains(self):
        expected = {
            'hsl': ('hsl', 'rgb'),
            'hwb': ('hwb', 'rgb'),
            'rgb': ('rgb',),
            'lch': ('lch', 'lab', 'xyz-d50'),
            'oklch': ('oklch', 'oklab'),
            'prophoto-rgb': ('prophoto-rgb', 'xyz-d50'),
            'display-p3': ('display-p3',),
            'xyz': ('xyz',),
            'xyz-d65': (),
        }
        for model, chain in expected.items():
            assert tuple(m.name for m in ModelRegistry.chain(model)) == chain

    def test_unknown_model(self):
        with pytest.raises(UnknownModelError, match="Unknown model"):
            to_canonical('cmyk', [0, 0, 0])
        with pytest.raises(UnknownModelError):
            from_canonical('cmyk', [0, 0, 0])
        with pytest.raises(KeyError):
            convert([0, 0, 0], 'srgb', 'cmyk')
