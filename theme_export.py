"""
Render palettes as a CSS custom-property stylesheet or a portable JSON
theme file.
"""

import json
from typing import Optional

from palette import ColorPalette


THEME_FILE_VERSION = 1
THEME_MODES = ('light', 'dark', 'system')


class ThemeFileError(ValueError):
    """Raised when a theme file is malformed."""


# =============================================================================
# CSS
# =============================================================================

def palette_variables(palette: ColorPalette) -> dict[str, str]:
    """CSS custom properties for a palette. Tag and highlight backgrounds
    carry a hex alpha suffix."""
    return {
        '--page-link-color': palette.primary,
        '--tag-bg-color': f"{palette.secondary}20",
        '--tag-font-color': palette.secondary,
        '--body-bg': palette.background,
        '--sidebar-bg': palette.surface,
        '--main-font-color': palette.text,
        '--page-bracket-color': palette.text_muted,
        '--highlight-background-color': f"{palette.primary}30",
    }


def _root_block(palette: ColorPalette, indent: str = '') -> str:
    lines = [f"{indent}:root {{"]
    for name, value in palette_variables(palette).items():
        lines.append(f"{indent}  {name}: {value};")
    lines.append(f"{indent}}}")
    return '\n'.join(lines)


def generate_css(light: ColorPalette, dark: ColorPalette, mode: str = 'system') -> str:
    """
    Build the stylesheet for a theme.

    'light' and 'dark' emit a single :root block; 'system' emits both inside
    prefers-color-scheme media queries.

    Raises:
        ValueError: If mode is not light, dark or system
    """
    if mode == 'light':
        return f"/* Light Mode */\n{_root_block(light)}\n"
    if mode == 'dark':
        return f"/* Dark Mode */\n{_root_block(dark)}\n"
    if mode != 'system':
        raise ValueError(f"Unknown theme mode: {mode!r}")

    return (
        "/* Theme - Auto Light/Dark */\n\n"
        "/* Light Mode */\n"
        "@media (prefers-color-scheme: light) {\n"
        f"{_root_block(light, '  ')}\n"
        "}\n\n"
        "/* Dark Mode */\n"
        "@media (prefers-color-scheme: dark) {\n"
        f"{_root_block(dark, '  ')}\n"
        "}\n"
    )


# =============================================================================
# JSON theme file
# =============================================================================

def palette_to_dict(palette: ColorPalette) -> dict:
    return {'name': palette.name, 'colors': palette.colors()}


def palette_from_dict(data: dict) -> ColorPalette:
    if not isinstance(data, dict) or not isinstance(data.get('colors'), dict):
        raise ThemeFileError("Palette entry must be an object with a 'colors' object")
    try:
        return ColorPalette.from_colors(str(data.get('name', '')), data['colors'])
    except (KeyError, ValueError) as e:
        raise ThemeFileError(f"Invalid palette: {e}") from e


def theme_to_dict(light: ColorPalette, dark: ColorPalette, mode: str = 'system') -> dict:
    return {
        'version': THEME_FILE_VERSION,
        'mode': mode,
        'light': palette_to_dict(light),
        'dark': palette_to_dict(dark),
    }


def theme_from_dict(data: dict) -> tuple[ColorPalette, ColorPalette, str]:
    """
    Read a theme document.

    Returns:
        Tuple of (light, dark, mode)

    Raises:
        ThemeFileError: If the document is not a valid theme
    """
    if not isinstance(data, dict):
        raise ThemeFileError("Theme must be a JSON object")

    version = data.get('version', THEME_FILE_VERSION)
    if version != THEME_FILE_VERSION:
        raise ThemeFileError(f"Unsupported theme version: {version}")

    mode = data.get('mode', 'system')
    if mode not in THEME_MODES:
        raise ThemeFileError(f"Unknown theme mode: {mode!r}")

    for key in ('light', 'dark'):
        if key not in data:
            raise ThemeFileError(f"Theme is missing the '{key}' palette")

    return palette_from_dict(data['light']), palette_from_dict(data['dark']), mode


def dumps_theme(light: ColorPalette, dark: ColorPalette, mode: str = 'system',
                indent: Optional[int] = 2) -> str:
    return json.dumps(theme_to_dict(light, dark, mode), indent=indent)


def loads_theme(text: str) -> tuple[ColorPalette, ColorPalette, str]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ThemeFileError(f"Theme is not valid JSON: {e}") from e
    return theme_from_dict(data)
