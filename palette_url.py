"""
Read color lists out of palette-sharing links or free text.

Formats are tried in order:
    coolors.co/264653-2a9d8f-e9c46a            (or coolors.co/palette/...)
    colorhunt.co/palette/222831393e4600adb5    (6-digit groups, no separator)
    any text containing 6-digit hex codes, with or without '#'
"""

import re
from dataclasses import dataclass
from typing import Optional

from palette import ColorPalette, assign_url_roles

COOLORS_PATTERN = re.compile(r'coolors\.co/(?:palette/)?([a-f0-9]{6}(?:-[a-f0-9]{6})*)', re.IGNORECASE)
COLORHUNT_PATTERN = re.compile(r'colorhunt\.co/palette/([a-f0-9]+)', re.IGNORECASE)
HEX_TOKEN_PATTERN = re.compile(r'#?([a-f0-9]{6})', re.IGNORECASE)


@dataclass(frozen=True)
class ParsedPalette:
    """Colors found in the input and which format matched."""
    colors: tuple[str, ...]
    source: str  # 'coolors', 'colorhunt', 'unknown' ('adobe' reserved)


def parse_coolors_url(url: str) -> Optional[list[str]]:
    match = COOLORS_PATTERN.search(url)
    if not match:
        return None
    return [f"#{c.lower()}" for c in match.group(1).split('-')]


def parse_colorhunt_url(url: str) -> Optional[list[str]]:
    """Split a ColorHunt run of hex digits into 6-character colors.

    Trailing digits that do not fill a full color are ignored.
    """
    match = COLORHUNT_PATTERN.search(url)
    if not match:
        return None
    digits = match.group(1).lower()
    colors = [f"#{digits[i:i + 6]}" for i in range(0, len(digits) - 5, 6)]
    return colors or None


def parse_plain_hex_codes(text: str) -> Optional[list[str]]:
    colors = [f"#{m.lower()}" for m in HEX_TOKEN_PATTERN.findall(text)]
    return colors or None


def parse_color_palette_url(text: str) -> Optional[ParsedPalette]:
    """
    Extract colors from a palette URL or free text.

    Returns:
        ParsedPalette, or None when nothing recognizable is found
    """
    trimmed = text.strip()

    colors = parse_coolors_url(trimmed)
    if colors:
        return ParsedPalette(colors=tuple(colors), source='coolors')

    colors = parse_colorhunt_url(trimmed)
    if colors:
        return ParsedPalette(colors=tuple(colors), source='colorhunt')

    colors = parse_plain_hex_codes(trimmed)
    if colors:
        return ParsedPalette(colors=tuple(colors), source='unknown')

    return None


def generate_palette_from_url_colors(colors: list[str], is_dark: bool,
                                     name: Optional[str] = None) -> ColorPalette:
    """Fill the seven palette roles from parsed colors (accents only)."""
    return assign_url_roles(colors, is_dark, name=name)
