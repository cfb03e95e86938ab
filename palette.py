"""
The seven-role theme palette and the heuristics that fill it from a loose
list of colors.
"""

import math
from dataclasses import dataclass, replace as _replace
from typing import Callable, Iterable, Optional

from color_space import adjust_lightness, hex_luminance, hex_to_rgb, parse_hex


# =============================================================================
# Constants
# =============================================================================

# Role order used for display and serialization
ROLES = ('primary', 'secondary', 'background', 'surface', 'text', 'text_muted', 'border')

# Theme files and CSS templates use camelCase role keys
_ROLE_KEYS = {role: ('textMuted' if role == 'text_muted' else role) for role in ROLES}
_KEY_ROLES = {key: role for role, key in _ROLE_KEYS.items()}


# =============================================================================
# Palette value
# =============================================================================

@dataclass(frozen=True)
class ColorPalette:
    """A named bundle of seven semantic hex colors.

    Instances are immutable: regenerating or fixing a color yields a new
    palette via replace().
    """
    name: str
    primary: str
    secondary: str
    background: str
    surface: str
    text: str
    text_muted: str
    border: str

    def __post_init__(self):
        for role in ROLES:
            object.__setattr__(self, role, parse_hex(getattr(self, role)))

    def colors(self) -> dict:
        """Role colors keyed the way theme files spell them (textMuted)."""
        return {_ROLE_KEYS[role]: getattr(self, role) for role in ROLES}

    def replace(self, **changes) -> 'ColorPalette':
        changes = {_KEY_ROLES.get(key, key): value for key, value in changes.items()}
        return _replace(self, **changes)

    @classmethod
    def from_colors(cls, name: str, colors: dict) -> 'ColorPalette':
        """Build from a role mapping using either camelCase or snake_case keys.

        Raises:
            KeyError: If a role is missing
        """
        roles = {}
        for key, value in colors.items():
            role = _KEY_ROLES.get(key, key)
            if role in ROLES:
                roles[role] = value
        missing = [_ROLE_KEYS[r] for r in ROLES if r not in roles]
        if missing:
            raise KeyError(f"Palette '{name}' is missing roles: {', '.join(missing)}")
        return cls(name=name, **roles)


# =============================================================================
# Role assignment
# =============================================================================

def weighted_brightness(hex_color: str) -> float:
    """Luma-weighted channel sum on raw 0-255 values (no gamma decoding)."""
    r, g, b = hex_to_rgb(hex_color)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def sort_by_luminance(colors: Iterable[str],
                      key: Callable[[str], float] = hex_luminance) -> list[str]:
    """Normalize colors and sort them lightest first. Ties keep input order."""
    normalized = [parse_hex(c) for c in colors]
    return sorted(normalized, key=key, reverse=True)


def pick(sorted_colors: list[str], fraction: float, fallback: str) -> str:
    """
    Pick the color at floor(len * fraction), or the fallback if there is none.

    fraction=1.0 is treated as "last element" (the darkest of a
    lightest-first list).
    """
    if not sorted_colors:
        return fallback
    if fraction >= 1.0:
        return sorted_colors[-1]
    index = math.floor(len(sorted_colors) * fraction)
    if index >= len(sorted_colors):
        return fallback
    return sorted_colors[index]


def assign_extracted_roles(colors: Iterable[str], is_dark: bool,
                           name: Optional[str] = None) -> ColorPalette:
    """
    Map colors pulled from an image onto the seven palette roles.

    The list is sorted by relative luminance, lightest first. Backgrounds
    and borders are derived from the extracted colors by scaling their RGB
    channels; text colors are fixed neutrals.

    Dark mode:
        background  darkest color, darkened 30%     (fallback #1a1a2e)
        surface     color at 70%, darkened 20%      (fallback #16213e)
        border      color at 70%, lightened 10%
        primary     color at 30%                    (fallback #e94560)
        secondary   color at 40%                    (fallback #0f3460)

    Light mode:
        background  lightest color, lightened 20%   (fallback #ffffff)
        surface     color at 20%, lightened 10%     (fallback #f5f5f5)
        border      color at 20%, darkened 15%
        primary     color at 50%                    (fallback #3498db)
        secondary   color at 60%                    (fallback #e74c3c)
    """
    ranked = sort_by_luminance(colors)

    if is_dark:
        darkest = pick(ranked, 1.0, '#1a1a2e')
        mid_dark = pick(ranked, 0.7, '#16213e')
        return ColorPalette(
            name=name or 'Extracted Dark',
            primary=pick(ranked, 0.3, '#e94560'),
            secondary=pick(ranked, 0.4, '#0f3460'),
            background=adjust_lightness(darkest, -30),
            surface=adjust_lightness(mid_dark, -20),
            text='#f0f0f0',
            text_muted='#a0a0a0',
            border=adjust_lightness(mid_dark, 10),
        )

    lightest = pick(ranked, 0.0, '#ffffff')
    mid_light = pick(ranked, 0.2, '#f5f5f5')
    return ColorPalette(
        name=name or 'Extracted Light',
        primary=pick(ranked, 0.5, '#3498db'),
        secondary=pick(ranked, 0.6, '#e74c3c'),
        background=adjust_lightness(lightest, 20),
        surface=adjust_lightness(mid_light, 10),
        text='#1a1a1a',
        text_muted='#6b7280',
        border=adjust_lightness(mid_light, -15),
    )


def assign_url_roles(colors: Iterable[str], is_dark: bool,
                     name: Optional[str] = None) -> ColorPalette:
    """
    Map colors parsed from a palette link onto the seven palette roles.

    Only primary and secondary come from the input (ranked by weighted
    brightness, lightest first); the neutrals are fixed.
    """
    ranked = sort_by_luminance(colors, key=weighted_brightness)

    if is_dark:
        return ColorPalette(
            name=name or 'Imported Dark',
            primary=pick(ranked, 0.3, '#60a5fa'),
            secondary=pick(ranked, 0.5, '#a78bfa'),
            background='#0f0f0f',
            surface='#1a1a1a',
            text='#f0f0f0',
            text_muted='#9ca3af',
            border='#2a2a2a',
        )

    return ColorPalette(
        name=name or 'Imported Light',
        primary=pick(ranked, 0.6, '#3b82f6'),
        secondary=pick(ranked, 0.4, '#8b5cf6'),
        background='#ffffff',
        surface='#f9fafb',
        text='#111827',
        text_muted='#6b7280',
        border='#e5e7eb',
    )


# =============================================================================
# Presets
# =============================================================================

@dataclass(frozen=True)
class PalettePreset:
    """A curated light/dark palette pair."""
    id: str
    name: str
    light: ColorPalette
    dark: ColorPalette


def _preset(preset_id: str, name: str, light: tuple, dark: tuple,
            light_name: Optional[str] = None, dark_name: Optional[str] = None) -> PalettePreset:
    return PalettePreset(
        id=preset_id,
        name=name,
        light=ColorPalette(light_name or f"{name} Light", *light),
        dark=ColorPalette(dark_name or f"{name} Dark", *dark),
    )


# (primary, secondary, background, surface, text, text_muted, border)
PALETTE_PRESETS = [
    _preset('default', 'Default',
            ('#137cbd', '#d9822b', '#ffffff', '#f5f8fa', '#182026', '#5c7080', '#d8e1e8'),
            ('#48aff0', '#ffb366', '#1c2127', '#252a31', '#f5f8fa', '#a7b6c2', '#394b59')),
    _preset('nord', 'Nord',
            ('#5e81ac', '#bf616a', '#eceff4', '#e5e9f0', '#2e3440', '#4c566a', '#d8dee9'),
            ('#88c0d0', '#bf616a', '#2e3440', '#3b4252', '#eceff4', '#d8dee9', '#4c566a')),
    _preset('dracula', 'Dracula',
            ('#9580ff', '#ff80bf', '#f8f8f2', '#f0f0e8', '#282a36', '#6272a4', '#d0d0c8'),
            ('#bd93f9', '#ff79c6', '#282a36', '#44475a', '#f8f8f2', '#6272a4', '#44475a')),
    _preset('solarized', 'Solarized',
            ('#268bd2', '#d33682', '#fdf6e3', '#eee8d5', '#657b83', '#93a1a1', '#eee8d5'),
            ('#268bd2', '#d33682', '#002b36', '#073642', '#839496', '#586e75', '#073642')),
    _preset('gruvbox', 'Gruvbox',
            ('#458588', '#d65d0e', '#fbf1c7', '#ebdbb2', '#3c3836', '#665c54', '#d5c4a1'),
            ('#83a598', '#fe8019', '#282828', '#3c3836', '#ebdbb2', '#a89984', '#504945')),
    _preset('one-dark', 'One Dark',
            ('#4078f2', '#a626a4', '#fafafa', '#f0f0f0', '#383a42', '#a0a1a7', '#e5e5e6'),
            ('#61afef', '#c678dd', '#282c34', '#21252b', '#abb2bf', '#5c6370', '#3e4451'),
            light_name='One Light', dark_name='One Dark'),
]


def get_preset(preset_id: str) -> Optional[PalettePreset]:
    for preset in PALETTE_PRESETS:
        if preset.id == preset_id:
            return preset
    return None
