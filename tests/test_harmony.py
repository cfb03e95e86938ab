"""Tests for harmony hue generation and random palettes."""

import numpy as np
import pytest

from color_space import hex_to_hsl, hsl_to_hex, is_valid_hex
from harmony import (
    HARMONY_DESCRIPTIONS,
    ColorHarmony,
    generate_harmony_colors,
    generate_random_palette,
    hex_to_hue,
    random_hue,
)
from palette import ROLES


class TestHarmonyColors:
    @pytest.mark.parametrize("harmony,base,expected", [
        ('complementary', 200, [200, 20]),
        ('analogous', 10, [10, 40, 340]),
        ('triadic', 300, [300, 60, 180]),
        ('split-complementary', 100, [100, 250, 310]),
        ('monochromatic', 45, [45, 45, 45]),
    ])
    def test_offsets(self, harmony, base, expected):
        assert generate_harmony_colors(base, harmony) == expected

    def test_accepts_enum(self):
        assert generate_harmony_colors(0, ColorHarmony.TRIADIC) == [0, 120, 240]

    @pytest.mark.parametrize("base", range(0, 360, 15))
    def test_complementary_hues_are_opposite(self, base):
        first, second = generate_harmony_colors(base, 'complementary')
        assert (second - first) % 360 == 180

    @pytest.mark.parametrize("harmony", list(ColorHarmony))
    def test_hues_wrap_into_range(self, harmony):
        for hue in generate_harmony_colors(359.5, harmony):
            assert 0 <= hue < 360

    def test_unknown_harmony(self):
        with pytest.raises(ValueError):
            generate_harmony_colors(0, 'tetradic')

    def test_every_harmony_is_described(self):
        assert set(HARMONY_DESCRIPTIONS) == set(ColorHarmony)


class TestRandomPalette:
    def test_explicit_hue_is_deterministic(self):
        first = generate_random_palette('complementary', False, 200)
        second = generate_random_palette('complementary', False, 200)
        assert first == second
        assert first.colors() == second.colors()

    def test_light_recipe(self):
        palette = generate_random_palette('complementary', False, 200)
        assert palette.name == 'Random complementary Light'
        assert palette.primary == hsl_to_hex(200, 70, 45)
        assert palette.secondary == hsl_to_hex(20, 65, 50)
        assert palette.background == hsl_to_hex(200, 20, 98)
        assert palette.text == hsl_to_hex(200, 20, 15)

    def test_dark_recipe(self):
        palette = generate_random_palette(ColorHarmony.TRIADIC, True, 90)
        assert palette.name == 'Random triadic Dark'
        assert palette.primary == hsl_to_hex(90, 70, 60)
        assert palette.secondary == hsl_to_hex(210, 65, 55)
        assert palette.background == hsl_to_hex(90, 15, 12)
        assert palette.border == hsl_to_hex(90, 10, 25)

    def test_dark_background_is_darker_than_light(self):
        dark = generate_random_palette('analogous', True, 30)
        light = generate_random_palette('analogous', False, 30)
        assert hex_to_hsl(dark.background)[2] < 20
        assert hex_to_hsl(light.background)[2] > 90

    def test_hue_zero_secondary_is_not_replaced(self):
        palette = generate_random_palette('complementary', False, 180)
        assert palette.secondary == hsl_to_hex(0, 65, 50)

    def test_seeded_random_hue_is_repeatable(self):
        first = generate_random_palette('split-complementary', True, rng=42)
        second = generate_random_palette('split-complementary', True, rng=np.random.default_rng(42))
        assert first == second

    @pytest.mark.parametrize("harmony", list(ColorHarmony))
    @pytest.mark.parametrize("is_dark", [False, True])
    def test_palette_is_complete(self, harmony, is_dark):
        palette = generate_random_palette(harmony, is_dark)
        for role in ROLES:
            value = getattr(palette, role)
            assert len(value) == 7
            assert is_valid_hex(value)
            assert value == value.lower()


class TestHue:
    def test_hex_to_hue(self):
        assert hex_to_hue('#00ff00') == pytest.approx(120)
        assert hex_to_hue('#0000ff') == pytest.approx(240)
        assert hex_to_hue('#808080') == 0

    def test_random_hue_range(self):
        rng = np.random.default_rng(7)
        hues = [random_hue(rng) for _ in range(200)]
        assert all(0 <= h < 360 for h in hues)
        assert all(isinstance(h, int) for h in hues)
