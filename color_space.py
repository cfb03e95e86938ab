"""
Conversions between hex strings, RGB triples and HSL triples.

Hex is the external representation (#rrggbb, lowercase). HSL uses hue in
degrees and saturation/lightness as percentages.
"""

import re


class InvalidColorError(ValueError):
    """Raised when a string cannot be read as a hex color."""


_HEX_PATTERN = re.compile(r'^#?([0-9a-f]{6}|[0-9a-f]{3})$', re.IGNORECASE)

# WCAG relative luminance
SRGB_THRESHOLD = 0.03928
LUMINANCE_WEIGHTS = (0.2126, 0.7152, 0.0722)


# =============================================================================
# Hex parsing
# =============================================================================

def parse_hex(value: str) -> str:
    """
    Normalize a user supplied color to canonical #rrggbb.

    Accepts an optional leading '#', either case and the 3-digit short form.

    Raises:
        InvalidColorError: If the value is not a 3 or 6 digit hex color
    """
    if not isinstance(value, str):
        raise InvalidColorError(f"Expected a hex color string, got {type(value).__name__}")

    match = _HEX_PATTERN.match(value.strip())
    if not match:
        raise InvalidColorError(f"Invalid hex color: {value!r}")

    digits = match.group(1).lower()
    if len(digits) == 3:
        digits = ''.join(c * 2 for c in digits)
    return f"#{digits}"


def is_valid_hex(value: str) -> bool:
    try:
        parse_hex(value)
    except InvalidColorError:
        return False
    return True


# =============================================================================
# Hex <-> RGB
# =============================================================================

def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convert a hex color to an (r, g, b) tuple of 0-255 ints."""
    digits = parse_hex(hex_color)
    return (int(digits[1:3], 16), int(digits[3:5], 16), int(digits[5:7], 16))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """
    Convert RGB channels to hex, rounding each to the nearest integer.

    Channels are not clamped; callers keep them within 0-255.
    """
    return '#' + ''.join(f"{int(round(c)):02x}" for c in (r, g, b))


# =============================================================================
# Hex <-> HSL
# =============================================================================

def rgb_to_hsl(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Convert 0-255 RGB to (hue 0-360, saturation 0-100, lightness 0-100)."""
    r, g, b = r / 255, g / 255, b / 255
    high = max(r, g, b)
    low = min(r, g, b)
    h = s = 0.0
    l = (high + low) / 2

    if high != low:
        d = high - low
        s = d / (2 - high - low) if l > 0.5 else d / (high + low)
        if high == r:
            h = ((g - b) / d + (6 if g < b else 0)) / 6
        elif high == g:
            h = ((b - r) / d + 2) / 6
        else:
            h = ((r - g) / d + 4) / 6

    return (h * 360, s * 100, l * 100)


def hex_to_hsl(hex_color: str) -> tuple[float, float, float]:
    """Convert hex to HSL. Hue is 0 for grays."""
    return rgb_to_hsl(*hex_to_rgb(hex_color))


def hsl_to_hex(h: float, s: float, l: float) -> str:
    """
    Convert HSL to hex.

    Saturation and lightness are clamped to [0, 100] and hue is wrapped into
    [0, 360) here, so intermediate HSL math may leave the nominal ranges.
    """
    h = h % 360
    s = max(0.0, min(100.0, s)) / 100
    l = max(0.0, min(100.0, l)) / 100

    c = (1 - abs(2 * l - 1)) * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = l - c / 2

    if h < 60:
        r, g, b = c, x, 0.0
    elif h < 120:
        r, g, b = x, c, 0.0
    elif h < 180:
        r, g, b = 0.0, c, x
    elif h < 240:
        r, g, b = 0.0, x, c
    elif h < 300:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    return rgb_to_hex((r + m) * 255, (g + m) * 255, (b + m) * 255)


# =============================================================================
# Luminance and adjustment
# =============================================================================

def relative_luminance(r: float, g: float, b: float) -> float:
    """WCAG relative luminance of 0-255 RGB channels."""
    linear = []
    for c in (r, g, b):
        s = c / 255
        linear.append(s / 12.92 if s <= SRGB_THRESHOLD else ((s + 0.055) / 1.055) ** 2.4)
    wr, wg, wb = LUMINANCE_WEIGHTS
    return wr * linear[0] + wg * linear[1] + wb * linear[2]


def hex_luminance(hex_color: str) -> float:
    return relative_luminance(*hex_to_rgb(hex_color))


def adjust_lightness(hex_color: str, amount: float) -> str:
    """
    Scale every RGB channel by (1 + amount / 100), clamped to 0-255.

    Negative amounts darken, positive amounts lighten. Pure black stays black.
    """
    factor = 1 + amount / 100
    return rgb_to_hex(*(max(0.0, min(255.0, c * factor)) for c in hex_to_rgb(hex_color)))
