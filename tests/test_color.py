"""Tests for Color values and the per-model interface."""

import dataclasses
import math

import numpy as np
import pytest

from huebridge import Color, ModelInterface
from huebridge.errors import (
    InvalidFitMethodError,
    UnknownComponentError,
    UnknownModelError,
)
from huebridge.expr import ValidationError

RED = Color.from_coords('srgb', (1, 0, 0))
LIME = Color.from_coords('srgb', (0, 1, 0))
WHITE = Color.from_coords('srgb', (1, 1, 1))
BLACK = Color.from_coords('srgb', (0, 0, 0))


class TestConstruction:
    """Test creating colors."""

    def test_default_is_opaque_black(self):
        color = Color()
        assert color.xyz == (0.0, 0.0, 0.0)
        assert color.alpha == 1.0

    def test_from_canonical_coordinates(self):
        color = Color(0.2, 0.3, 0.4, 0.5)
        assert color.in_model('xyz-d65').get_coords('none') == [0.2, 0.3, 0.4, 0.5]

    def test_from_coords_with_alpha(self):
        color = Color.from_coords('rgb', (255, 0, 0, 0.25))
        assert color.alpha == 0.25
        np.testing.assert_allclose(color.xyz, RED.xyz)

    def test_from_values(self):
        color = Color.from_values('hsl', h=120, s=100, l=50)
        np.testing.assert_allclose(color.in_model('srgb').get_coords(), [0, 1, 0, 1], atol=1e-5)

    def test_lch_to_srgb(self):
        color = Color.from_coords('lch', (79.7256, 40.448, 84.771))
        np.testing.assert_allclose(
            color.in_model('srgb').get_coords()[:3], [0.92605, 0.75038, 0.39305], atol=1e-3
        )

    def test_unknown_model(self):
        with pytest.raises(UnknownModelError):
            RED.in_model('cmyk')

    def test_in_model_returns_interface(self):
        interface = RED.in_model('oklch')
        assert isinstance(interface, ModelInterface)
        assert interface.model.name == 'oklch'


class TestImmutability:
    """Writes return new colors and never touch the original."""

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            RED.x = 0.5

    def test_set_returns_new_color(self):
        darker = RED.in_model('hsl').set({'l': 25})
        assert darker is not RED
        assert RED.in_model('hsl').get_component('l') == 50.0
        assert darker.in_model('hsl').get_component('l') == 25.0

    def test_equality_and_hash_ignore_cache(self):
        a = Color(0.1, 0.2, 0.3)
        b = Color(0.1, 0.2, 0.3, _cache=('srgb', (0.0, 0.0, 0.0)))
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_repr_hides_cache(self):
        assert '_cache' not in repr(RED)


class TestCache:
    """A read in the model of the last write returns the written coordinates."""

    def test_same_model_read_is_exact(self):
        coords = [0.712345678901, 0.123456789012, 123.456789012]
        color = Color.from_coords('oklch', coords)
        assert color.in_model('oklch').get_coords('none')[:3] == coords

    def test_set_then_read_is_exact(self):
        color = RED.in_model('lab').set({'a': 33.333333333333})
        assert color.in_model('lab').get_component('a', fit='none') == 33.333333333333

    def test_out_of_gamut_write_survives(self):
        """No fitting on write: unfitted reads see the raw value."""
        color = Color.from_coords('srgb', (1.5, -0.25, 0.5))
        assert color.in_model('srgb').get_coords('none')[:3] == [1.5, -0.25, 0.5]
        assert color.in_model('srgb').get_coords('clip')[:3] == [1.0, 0.0, 0.5]

    def test_other_model_recomputes(self):
        color = Color.from_coords('hsl', (120, 100, 50))
        np.testing.assert_allclose(color.in_model('rgb').get_coords('none')[:3], [0, 255, 0], atol=1e-6)

    def test_cache_follows_last_write(self):
        color = Color.from_coords('hsl', (200, 50, 50)).in_model('srgb').set({'r': 0.1})
        assert color.in_model('srgb').get_component('r', fit='none') == 0.1
        # hsl is now recomputed from the canonical tuple
        hsl = color.in_model('hsl').get_coords('none')
        assert hsl[0] != 200 or hsl[1] != 50


class TestGet:
    """Test get / get_coords / get_component."""

    def test_get_returns_named_components(self):
        values = RED.in_model('hsl').get()
        assert list(values) == ['h', 's', 'l', 'alpha']
        assert values == {'h': 0.0, 's': 100.0, 'l': 50.0, 'alpha': 1.0}

    def test_get_coords_appends_alpha(self):
        color = Color.from_coords('srgb', (0.2, 0.4, 0.6, 0.3))
        assert color.in_model('srgb').get_coords() == [0.2, 0.4, 0.6, 0.3]

    def test_alpha_reported_clamped(self):
        color = Color(0.2, 0.2, 0.2, 1.7)
        assert color.alpha == 1.7
        assert color.in_model('srgb').get_coords('none')[3] == 1.0
        assert color.in_model('srgb').get_component('alpha') == 1.0

    def test_precision_override(self):
        coords = WHITE.in_model('oklch').get_coords('clip', precision=2)
        assert coords[0] == 1.0
        assert coords[1] == 0.0

    def test_invalid_fit(self):
        with pytest.raises(InvalidFitMethodError):
            RED.in_model('srgb').get_coords('nearest')

    def test_unknown_component(self):
        with pytest.raises(UnknownComponentError):
            RED.in_model('srgb').get_component('h')


class TestSet:
    """Test set / set_coords."""

    def test_partial_update(self):
        color = RED.in_model('srgb').set({'g': 0.5})
        assert color.in_model('srgb').get_coords() == [1.0, 0.5, 0.0, 1.0]

    def test_updater_function_per_component(self):
        color = RED.in_model('hsl').set({'l': lambda l: l / 2, 'h': lambda h: h + 120})
        assert color.in_model('hsl').get_coords()[:3] == [120.0, 100.0, 25.0]

    def test_updater_function_for_all(self):
        color = RED.in_model('srgb').set(lambda v: {'g': v['r'], 'b': v['r'] / 2})
        np.testing.assert_allclose(color.in_model('srgb').get_coords()[:3], [1, 1, 0.5], atol=1e-5)

    def test_updaters_see_unfitted_values(self):
        color = Color.from_coords('srgb', (1.5, 0, 0))
        seen = []
        color.in_model('srgb').set({'r': lambda r: seen.append(r) or r})
        assert seen == [1.5]

    def test_alpha_addressable(self):
        color = RED.in_model('oklch').set({'alpha': 0.4})
        assert color.alpha == 0.4
        assert color.in_model('srgb').get_coords()[3] == 0.4

    def test_nan_becomes_zero(self):
        color = RED.in_model('oklch').set({'c': math.nan})
        assert color.in_model('oklch').get_component('c', fit='none') == 0.0

    def test_infinity_becomes_domain_bounds(self):
        color = RED.in_model('oklch').set({'c': math.inf, 'l': -math.inf})
        coords = color.in_model('oklch').get_coords('none')
        assert coords[0] == 0.0
        assert coords[1] == 0.4

    def test_infinite_alpha(self):
        assert RED.in_model('rgb').set({'alpha': math.inf}).alpha == 1.0
        assert RED.in_model('rgb').set({'alpha': -math.inf}).alpha == 0.0

    def test_unknown_component(self):
        with pytest.raises(UnknownComponentError):
            RED.in_model('srgb').set({'x': 1})

    def test_set_coords_none_keeps_axis(self):
        color = Color.from_coords('rgb', (10, 20, 30)).in_model('rgb').set_coords([None, 99, None])
        assert color.in_model('rgb').get_coords('none') == [10.0, 99.0, 30.0, 1.0]

    def test_set_coords_alpha_slot(self):
        color = RED.in_model('srgb').set_coords([None, None, None, 0.5])
        assert color.alpha == 0.5
        np.testing.assert_allclose(color.xyz, RED.xyz)

    def test_set_coords_normalizes(self):
        color = RED.in_model('hsl').set_coords([math.nan, math.inf, -math.inf])
        assert color.in_model('hsl').get_coords('none')[:3] == [0.0, 100.0, 0.0]

    def test_set_coords_length(self):
        with pytest.raises(ValueError):
            RED.in_model('srgb').set_coords([1, 2])


class TestSetRelative:
    """Test expression-based updates."""

    def test_component_arithmetic(self):
        color = Color.from_coords('rgb', (100, 50, 200)).in_model('rgb').set_relative({'r': 'r * 2', 'g': 'b - g'})
        assert color.in_model('rgb').get_coords('none')[:3] == [200.0, 150.0, 200.0]

    def test_percentage_uses_component_range(self):
        color = Color.from_coords('rgb', (100, 50, 200)).in_model('rgb').set_relative({'b': '50%'})
        assert color.in_model('rgb').get_component('b', fit='none') == 127.5

    def test_complementary_hue(self):
        color = RED.in_model('hsl').set_relative({'h': 'calc(h + 180)'})
        assert color.in_model('hsl').get_component('h') == 180.0

    def test_alpha_expression(self):
        color = RED.in_model('oklch').set_relative({'alpha': 'alpha / 4'})
        assert color.alpha == 0.25

    def test_invalid_expression(self):
        with pytest.raises(ValidationError):
            RED.in_model('hsl').set_relative({'h': 'h ** 2'})


class TestGamut:
    """Test in_gamut on colors."""

    def test_display_p3_red(self):
        color = Color.from_coords('display-p3', (1, 0, 0))
        assert not color.in_gamut('srgb')
        assert color.in_gamut('display-p3')
        assert color.in_gamut('xyz')

    def test_default_gamut_is_srgb(self):
        assert RED.in_gamut()
        assert not Color.from_coords('srgb', (1.1, 0, 0)).in_gamut()

    def test_fitted_reads_are_in_gamut(self):
        color = Color.from_coords('oklch', (0.7, 0.35, 150))
        for method in ('clip', 'chroma-reduction', 'css-gamut-map'):
            fitted = Color.from_coords('srgb', color.in_model('srgb').get_coords(method))
            assert fitted.in_gamut('srgb', epsilon=1e-4), method

    def test_lightness_range(self):
        L_min, L_max = RED.lightness_range('srgb')
        assert 0 <= L_min < L_max <= 1


class TestDifferenceAndContrast:
    """Test delta E, luminance and contrast."""

    def test_delta_e_ok(self):
        assert RED.delta_e_ok(RED) == 0
        assert WHITE.delta_e_ok(BLACK) == pytest.approx(100, abs=1e-2)

    def test_delta_e_methods(self):
        for method in ('76', '94', '2000'):
            assert RED.delta_e(LIME, method) > 0
        with pytest.raises(ValueError):
            RED.delta_e(LIME, '1976')

    def test_black_white_contrast(self):
        assert BLACK.contrast(WHITE) == pytest.approx(21, rel=1e-4)
        assert WHITE.contrast(BLACK) == pytest.approx(21, rel=1e-4)

    def test_same_color_contrast(self):
        assert RED.contrast(RED) == pytest.approx(1)

    def test_luminance(self):
        assert WHITE.luminance() == pytest.approx(1, abs=1e-4)
        assert BLACK.luminance() == 0

    def test_translucent_luminance_composites(self):
        half_black = BLACK.in_model('srgb').set({'alpha': 0.5})
        assert half_black.luminance() == pytest.approx(0.5, abs=1e-4)
        assert half_black.luminance(BLACK) == 0


class TestEquals:
    """Test rounded equality."""

    def test_same_color_from_different_models(self):
        assert RED.equals(Color.from_coords('rgb', (255, 0, 0)))
        assert RED.equals(Color.from_coords('hsl', (0, 100, 50)))

    def test_different_colors(self):
        assert not RED.equals(LIME)

    def test_alpha_matters(self):
        assert not RED.equals(RED.in_model('srgb').set({'alpha': 0.5}))

    def test_precision(self):
        nearby = Color(RED.x + 1e-4, RED.y, RED.z)
        assert not RED.equals(nearby)
        assert RED.equals(nearby, precision=3)


class TestScale:
    """Test scale generation."""

    def test_endpoints_and_length(self):
        steps = RED.scale(LIME, steps=5, model='srgb')
        assert len(steps) == 5
        assert steps[0].equals(RED)
        assert steps[-1].equals(LIME)

    def test_linear_midpoint(self):
        steps = BLACK.scale(WHITE, steps=3, model='srgb')
        np.testing.assert_allclose(steps[1].in_model('srgb').get_coords()[:3], [0.5, 0.5, 0.5])

    def test_default_model_is_lab(self):
        steps = BLACK.scale(WHITE, steps=3)
        assert steps[1].in_model('lab').get_component('l') == pytest.approx(50, abs=1e-3)

    def test_easing(self):
        steps = BLACK.scale(WHITE, steps=3, model='srgb', easing='ease-in')
        assert steps[1].in_model('srgb').get_component('r') == 0.25

    def test_too_few_steps(self):
        with pytest.raises(ValueError, match="at least 2"):
            RED.scale(LIME, steps=1)


class TestContrastColor:
    """Black or white text color for a background."""

    def test_light_backgrounds_get_black(self):
        for color in (WHITE, Color.from_coords('srgb', (1, 1, 0)), LIME):
            assert color.contrast_color().equals(BLACK)

    def test_dark_backgrounds_get_white(self):
        for color in (BLACK, RED, Color.from_coords('srgb', (0, 0, 1))):
            assert color.contrast_color().equals(WHITE)

    def test_result_is_srgb(self):
        assert WHITE.contrast_color().in_model('srgb').get_coords('none') == [0.0, 0.0, 0.0, 1.0]


class TestCluster:
    """Test dominant color extraction."""

    REDS = [(1, 0, 0), (0.95, 0.05, 0), (0.9, 0, 0.05)]
    BLUES = [(0, 0, 1), (0.05, 0, 0.95), (0, 0.05, 0.9)]

    def _palette(self):
        return [Color.from_coords('srgb', rgb) for rgb in self.REDS + self.BLUES]

    def test_two_groups(self):
        dominant = Color.cluster(self._palette(), 2, seed=1)
        assert len(dominant) == 2
        coords = sorted(c.in_model('srgb').get_coords()[:3] for c in dominant)
        blue, red = coords
        assert red[0] > 0.8 and red[2] < 0.2
        assert blue[2] > 0.8 and blue[0] < 0.2

    def test_single_cluster_is_oklab_mean(self):
        palette = self._palette()
        mean = np.mean([c.in_model('oklab').get_coords()[:3] for c in palette], axis=0)
        (dominant,) = Color.cluster(palette, 1, seed=3)
        np.testing.assert_allclose(dominant.in_model('oklab').get_coords('none')[:3], mean, atol=1e-9)

    def test_k_equals_palette_size(self):
        palette = self._palette()
        dominant = Color.cluster(palette, len(palette), seed=7)
        for color in palette:
            assert min(color.delta_e_ok(d) for d in dominant) < 1e-2

    def test_seed_is_reproducible(self):
        a = Color.cluster(self._palette(), 3, seed=42)
        b = Color.cluster(self._palette(), 3, seed=42)
        assert all(x.equals(y) for x, y in zip(a, b))

    def test_results_are_opaque(self):
        palette = [c.in_model('srgb').set({'alpha': 0.3}) for c in self._palette()]
        assert all(c.alpha == 1.0 for c in Color.cluster(palette, 2, seed=0))

    def test_invalid_k(self):
        with pytest.raises(ValueError, match="k must be"):
            Color.cluster(self._palette(), 0)
        with pytest.raises(ValueError, match="k must be"):
            Color.cluster(self._palette(), 7)

    def test_too_few_distinct_colors(self):
        with pytest.raises(ValueError, match="distinct"):
            Color.cluster([RED, RED, RED], 2, seed=0)
