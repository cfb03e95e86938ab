"""Tests for WCAG contrast checks and fixes."""

import pytest

from color_space import hex_to_hsl
from contrast import (
    WCAGLevel,
    apply_suggested_fixes,
    check_contrast,
    check_palette_contrast,
    fix_contrast,
    get_contrast_ratio,
    get_suggested_fixes,
)
from palette import ColorPalette

PAIRS = [
    ('#264653', '#e9c46a'),
    ('#000000', '#777777'),
    ('#ff0000', '#00ff00'),
    ('#137cbd', '#ffffff'),
    ('#fefefe', '#010101'),
]


@pytest.fixture
def passing_palette() -> ColorPalette:
    return ColorPalette(
        name='Passing',
        primary='#0000ff',
        secondary='#008000',
        background='#ffffff',
        surface='#f5f5f5',
        text='#000000',
        text_muted='#595959',
        border='#dddddd',
    )


@pytest.fixture
def washed_out_palette() -> ColorPalette:
    return ColorPalette(
        name='Washed Out',
        primary='#ffff00',
        secondary='#00ff00',
        background='#ffffff',
        surface='#fafafa',
        text='#eeeeee',
        text_muted='#dddddd',
        border='#cccccc',
    )


class TestContrastRatio:
    def test_black_on_white_is_maximum(self):
        assert get_contrast_ratio('#000000', '#ffffff') == pytest.approx(21.0)

    @pytest.mark.parametrize("color", ['#000000', '#ffffff', '#264653', '#e76f51'])
    def test_same_color_is_one(self, color):
        assert get_contrast_ratio(color, color) == 1.0

    @pytest.mark.parametrize("a,b", PAIRS)
    def test_symmetric(self, a, b):
        assert get_contrast_ratio(a, b) == get_contrast_ratio(b, a)

    @pytest.mark.parametrize("a,b", PAIRS)
    def test_within_bounds(self, a, b):
        assert 1.0 <= get_contrast_ratio(a, b) <= 21.0


class TestCheckContrast:
    def test_aaa(self):
        result = check_contrast('#000000', '#ffffff')
        assert result.level == WCAGLevel.AAA
        assert result.passes_aaa and result.passes_aa and result.passes_aa_large

    def test_aa(self):
        result = check_contrast('#767676', '#ffffff')
        assert result.level == 'AA'
        assert result.passes_aa and result.passes_aa_large
        assert not result.passes_aaa

    def test_aa_large(self):
        result = check_contrast('#949494', '#ffffff')
        assert result.level == 'AA-large'
        assert result.passes_aa_large
        assert not result.passes_aa

    def test_identical_colors_fail(self):
        result = check_contrast('#336699', '#336699')
        assert result.ratio == 1.0
        assert result.level == WCAGLevel.FAIL
        assert not (result.passes_aa_large or result.passes_aa or result.passes_aaa)


class TestFixContrast:
    def test_passing_color_is_returned_unchanged(self):
        assert fix_contrast('#000000', '#ffffff', 4.5) == '#000000'
        assert fix_contrast('#767676', '#ffffff') == '#767676'

    @pytest.mark.parametrize("fg,bg", [
        ('#aaaaaa', '#ffffff'),
        ('#e9c46a', '#ffffff'),
        ('#333333', '#000000'),
        ('#264653', '#1c2127'),
        ('#2a9d8f', '#fdf6e3'),
    ])
    def test_fixed_color_passes_aa(self, fg, bg):
        fixed = fix_contrast(fg, bg, 4.5)
        assert check_contrast(fixed, bg).passes_aa

    def test_stays_close_to_the_threshold(self):
        fixed = fix_contrast('#aaaaaa', '#ffffff', 4.5)
        assert 4.5 <= get_contrast_ratio(fixed, '#ffffff') < 4.7

    def test_darkens_on_light_background(self):
        fixed = fix_contrast('#e9c46a', '#ffffff')
        assert hex_to_hsl(fixed)[2] < hex_to_hsl('#e9c46a')[2]

    def test_lightens_on_dark_background(self):
        fixed = fix_contrast('#264653', '#1c2127')
        assert hex_to_hsl(fixed)[2] > hex_to_hsl('#264653')[2]

    def test_keeps_hue(self):
        fixed = fix_contrast('#e9c46a', '#ffffff')
        assert hex_to_hsl(fixed)[0] == pytest.approx(hex_to_hsl('#e9c46a')[0], abs=3)

    def test_unreachable_target_returns_boundary(self):
        assert fix_contrast('#808080', '#808080', 21.0) == '#000000'
        assert fix_contrast('#404040', '#404040', 21.0) == '#ffffff'


class TestSuggestedFixes:
    def test_no_fixes_needed(self, passing_palette):
        assert get_suggested_fixes(passing_palette) == {
            'text': None,
            'textMuted': None,
            'primary': None,
            'secondary': None,
        }

    def test_fixes_failing_roles(self, washed_out_palette):
        fixes = get_suggested_fixes(washed_out_palette)
        assert set(fixes) == {'text', 'textMuted', 'primary', 'secondary'}
        assert check_contrast(fixes['text'], '#ffffff').passes_aa
        assert check_contrast(fixes['textMuted'], '#ffffff').passes_aa
        assert check_contrast(fixes['primary'], '#ffffff').passes_aa_large
        assert check_contrast(fixes['secondary'], '#ffffff').passes_aa_large

    def test_accents_only_need_aa_large(self, washed_out_palette):
        fixes = get_suggested_fixes(washed_out_palette)
        assert get_contrast_ratio(fixes['primary'], '#ffffff') < 4.5

    def test_apply_returns_new_palette(self, washed_out_palette):
        fixed = apply_suggested_fixes(washed_out_palette)
        assert fixed is not washed_out_palette
        assert washed_out_palette.text == '#eeeeee'
        assert fixed.background == washed_out_palette.background
        assert check_contrast(fixed.text_muted, fixed.background).passes_aa

    def test_apply_keeps_passing_palette(self, passing_palette):
        assert apply_suggested_fixes(passing_palette) is passing_palette


class TestPaletteReport:
    def test_report_pairs(self, passing_palette):
        report = check_palette_contrast(passing_palette)
        assert report.text_on_background.level == 'AAA'
        assert report.text_on_surface.passes_aa
        assert report.primary_on_background.ratio == pytest.approx(
            get_contrast_ratio('#0000ff', '#ffffff'))
