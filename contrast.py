"""
WCAG 2.1 contrast ratios between palette colors, and lightness-only fixes
for pairs that fall short.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from color_space import hex_to_hsl, hex_to_rgb, hsl_to_hex, relative_luminance

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

AAA_RATIO = 7.0
AA_RATIO = 4.5  # Normal text
AA_LARGE_RATIO = 3.0  # 18pt+ or 14pt+ bold

FIX_ITERATIONS = 20  # Binary search steps over lightness 0-100


class WCAGLevel:
    AAA = 'AAA'
    AA = 'AA'
    AA_LARGE = 'AA-large'
    FAIL = 'fail'


# =============================================================================
# Ratios
# =============================================================================

def get_luminance(r: float, g: float, b: float) -> float:
    """Relative luminance of 0-255 RGB channels."""
    return relative_luminance(r, g, b)


def get_contrast_ratio(color1: str, color2: str) -> float:
    """Contrast ratio between two hex colors, from 1.0 to 21.0."""
    l1 = get_luminance(*hex_to_rgb(color1))
    l2 = get_luminance(*hex_to_rgb(color2))

    lighter = max(l1, l2)
    darker = min(l1, l2)

    return (lighter + 0.05) / (darker + 0.05)


@dataclass(frozen=True)
class ContrastResult:
    """Contrast ratio with the WCAG level it reaches."""
    ratio: float
    level: str  # 'AAA', 'AA', 'AA-large', 'fail'
    passes_aa: bool
    passes_aaa: bool
    passes_aa_large: bool


def check_contrast(foreground: str, background: str) -> ContrastResult:
    ratio = get_contrast_ratio(foreground, background)

    passes_aaa = ratio >= AAA_RATIO
    passes_aa = ratio >= AA_RATIO
    passes_aa_large = ratio >= AA_LARGE_RATIO

    if passes_aaa:
        level = WCAGLevel.AAA
    elif passes_aa:
        level = WCAGLevel.AA
    elif passes_aa_large:
        level = WCAGLevel.AA_LARGE
    else:
        level = WCAGLevel.FAIL

    return ContrastResult(
        ratio=ratio,
        level=level,
        passes_aa=passes_aa,
        passes_aaa=passes_aaa,
        passes_aa_large=passes_aa_large,
    )


@dataclass(frozen=True)
class PaletteContrastReport:
    """Contrast of every foreground/background pairing a theme renders."""
    text_on_background: ContrastResult
    text_muted_on_background: ContrastResult
    primary_on_background: ContrastResult
    secondary_on_background: ContrastResult
    text_on_surface: ContrastResult


def check_palette_contrast(palette) -> PaletteContrastReport:
    return PaletteContrastReport(
        text_on_background=check_contrast(palette.text, palette.background),
        text_muted_on_background=check_contrast(palette.text_muted, palette.background),
        primary_on_background=check_contrast(palette.primary, palette.background),
        secondary_on_background=check_contrast(palette.secondary, palette.background),
        text_on_surface=check_contrast(palette.text, palette.surface),
    )


# =============================================================================
# Fixes
# =============================================================================

def fix_contrast(foreground: str, background: str, target_ratio: float = AA_RATIO) -> str:
    """
    Move the foreground's lightness until it reaches target_ratio.

    Hue and saturation are held. On a dark background (L < 50) the
    foreground is lightened, otherwise darkened. A fixed-length binary
    search converges on the lightness closest to the original that still
    passes.

    Returns:
        The foreground unchanged if it already passes. If no lightness in
        the search direction passes, the boundary color (L=0 or L=100) is
        returned.
    """
    if get_contrast_ratio(foreground, background) >= target_ratio:
        return foreground

    fg_h, fg_s, fg_l = hex_to_hsl(foreground)
    _, _, bg_l = hex_to_hsl(background)

    go_lighter = bg_l < 50

    low = fg_l if go_lighter else 0.0
    high = 100.0 if go_lighter else fg_l
    best = None

    for _ in range(FIX_ITERATIONS):
        mid = (low + high) / 2
        candidate = hsl_to_hex(fg_h, fg_s, mid)

        if get_contrast_ratio(candidate, background) >= target_ratio:
            best = candidate
            # Passing: pull back toward the original lightness
            if go_lighter:
                high = mid
            else:
                low = mid
        elif go_lighter:
            low = mid
        else:
            high = mid

    if best is None:
        best = hsl_to_hex(fg_h, fg_s, 100.0 if go_lighter else 0.0)
        logger.debug("Target %.2f unreachable for %s on %s, using %s",
                     target_ratio, foreground, background, best)

    return best


# Role -> minimum ratio against the background
FIX_TARGETS = {
    'text': AA_RATIO,
    'textMuted': AA_RATIO,
    'primary': AA_LARGE_RATIO,
    'secondary': AA_LARGE_RATIO,
}


def get_suggested_fixes(palette) -> dict[str, Optional[str]]:
    """
    Suggest replacements for roles that fail against the background.

    Text roles must reach AA (4.5), accent roles AA-large (3.0). Roles that
    already pass map to None.
    """
    colors = palette.colors()
    fixes = {}
    for role, target in FIX_TARGETS.items():
        if get_contrast_ratio(colors[role], colors['background']) >= target:
            fixes[role] = None
        else:
            fixes[role] = fix_contrast(colors[role], colors['background'], target)
    return fixes


def apply_suggested_fixes(palette):
    """Return a copy of the palette with every suggested fix applied."""
    changes = {role: fix for role, fix in get_suggested_fixes(palette).items() if fix is not None}
    if not changes:
        return palette
    logger.info("Adjusted %s in '%s'", ', '.join(sorted(changes)), palette.name)
    return palette.replace(**changes)
