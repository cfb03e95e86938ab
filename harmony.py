"""
Hue-rotation color harmonies and random palettes built from them.
"""

from enum import Enum
from typing import Optional, Union

import numpy as np

from color_space import hex_to_hsl, hsl_to_hex
from palette import ColorPalette


class ColorHarmony(str, Enum):
    COMPLEMENTARY = 'complementary'
    ANALOGOUS = 'analogous'
    TRIADIC = 'triadic'
    SPLIT_COMPLEMENTARY = 'split-complementary'
    MONOCHROMATIC = 'monochromatic'


# Hue offsets in degrees from the base hue
HARMONY_OFFSETS = {
    ColorHarmony.COMPLEMENTARY: (0, 180),
    ColorHarmony.ANALOGOUS: (0, 30, 330),
    ColorHarmony.TRIADIC: (0, 120, 240),
    ColorHarmony.SPLIT_COMPLEMENTARY: (0, 150, 210),
    ColorHarmony.MONOCHROMATIC: (0, 0, 0),
}

HARMONY_DESCRIPTIONS = {
    ColorHarmony.COMPLEMENTARY: 'Opposite colors for high contrast',
    ColorHarmony.ANALOGOUS: 'Adjacent colors for harmony',
    ColorHarmony.TRIADIC: 'Three evenly spaced colors',
    ColorHarmony.SPLIT_COMPLEMENTARY: 'Base + two adjacent to complement',
    ColorHarmony.MONOCHROMATIC: 'Single hue with varied lightness',
}

# (hue source, saturation, lightness) per role. Text roles are tinted
# toward the primary hue and are not contrast checked.
DARK_RECIPE = {
    'primary': ('primary', 70, 60),
    'secondary': ('secondary', 65, 55),
    'background': ('primary', 15, 12),
    'surface': ('primary', 12, 18),
    'text': ('primary', 10, 90),
    'text_muted': ('primary', 8, 60),
    'border': ('primary', 10, 25),
}

LIGHT_RECIPE = {
    'primary': ('primary', 70, 45),
    'secondary': ('secondary', 65, 50),
    'background': ('primary', 20, 98),
    'surface': ('primary', 25, 94),
    'text': ('primary', 20, 15),
    'text_muted': ('primary', 15, 45),
    'border': ('primary', 15, 85),
}


def generate_harmony_colors(base_hue: float, harmony: Union[ColorHarmony, str]) -> list[float]:
    """Hues related to base_hue by the harmony, each wrapped into [0, 360).

    Raises:
        ValueError: If harmony is not a known harmony name
    """
    offsets = HARMONY_OFFSETS[ColorHarmony(harmony)]
    return [(base_hue + offset) % 360 for offset in offsets]


def hex_to_hue(hex_color: str) -> float:
    """Hue of a hex color in degrees."""
    return hex_to_hsl(hex_color)[0]


def random_hue(rng: Union[np.random.Generator, int, None] = None) -> int:
    """Uniform integer hue in [0, 360)."""
    return int(np.random.default_rng(rng).integers(0, 360))


def generate_random_palette(harmony: Union[ColorHarmony, str], is_dark: bool,
                            base_hue: Optional[float] = None,
                            rng: Union[np.random.Generator, int, None] = None) -> ColorPalette:
    """
    Build a full palette from one base hue and a harmony.

    If base_hue is None a hue is drawn from rng; with an explicit base_hue
    the result is fully deterministic.
    """
    harmony = ColorHarmony(harmony)
    hue = random_hue(rng) if base_hue is None else base_hue
    hues = generate_harmony_colors(hue, harmony)

    primary_hue = hues[0]
    secondary_hue = hues[1] if len(hues) > 1 else (primary_hue + 60) % 360
    source_hues = {'primary': primary_hue, 'secondary': secondary_hue}

    recipe = DARK_RECIPE if is_dark else LIGHT_RECIPE
    roles = {
        role: hsl_to_hex(source_hues[source], saturation, lightness)
        for role, (source, saturation, lightness) in recipe.items()
    }

    mode = 'Dark' if is_dark else 'Light'
    return ColorPalette(name=f"Random {harmony.value} {mode}", **roles)
