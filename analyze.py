#!/usr/bin/env python3
"""
Command line front end for building theme palettes.

Palettes come from an image, a palette link, a harmony or a preset, and
can be written out as a stylesheet or a JSON theme file.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from color_space import InvalidColorError, parse_hex
from contrast import (
    AA_RATIO, apply_suggested_fixes, check_contrast, check_palette_contrast, fix_contrast,
)
from extract_colors import (
    DEFAULT_NUM_COLORS, EmptyPaletteError, ImageLoadError, extract_colors,
    generate_palette_from_colors,
)
from harmony import HARMONY_DESCRIPTIONS, ColorHarmony, generate_random_palette
from palette import PALETTE_PRESETS, ROLES, ColorPalette, get_preset
from palette_url import generate_palette_from_url_colors, parse_color_palette_url
from theme_export import THEME_MODES, dumps_theme, generate_css

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


# =============================================================================
# Rendering
# =============================================================================

def render_palette(palette: ColorPalette) -> str:
    """Plain-text listing of a palette with its contrast against the background."""
    report = check_palette_contrast(palette)
    checks = {
        'text': report.text_on_background,
        'text_muted': report.text_muted_on_background,
        'primary': report.primary_on_background,
        'secondary': report.secondary_on_background,
    }

    lines = [palette.name]
    for role in ROLES:
        line = f"  {role:<11} {getattr(palette, role)}"
        if role in checks:
            result = checks[role]
            line += f"  {result.ratio:5.2f}:1 {result.level}"
        lines.append(line)
    return '\n'.join(lines)


def write_outputs(light: ColorPalette, dark: ColorPalette, mode: str,
                  css_path: Optional[str], json_path: Optional[str]) -> None:
    if css_path:
        Path(css_path).write_text(generate_css(light, dark, mode))
        print(f"Wrote: {css_path}")
    if json_path:
        Path(json_path).write_text(dumps_theme(light, dark, mode))
        print(f"Wrote: {json_path}")


# =============================================================================
# Commands
# =============================================================================

def cmd_extract(args) -> int:
    colors = extract_colors(args.image, args.colors, args.seed)
    print(f"Extracted: {' '.join(colors)}")

    stem = Path(args.image).stem
    light = generate_palette_from_colors(colors, False, name=f"{stem} Light")
    dark = generate_palette_from_colors(colors, True, name=f"{stem} Dark")
    if args.fix:
        light, dark = apply_suggested_fixes(light), apply_suggested_fixes(dark)

    print(render_palette(dark if args.dark else light))
    write_outputs(light, dark, args.mode, args.css, args.json)
    return 0


def cmd_parse(args) -> int:
    parsed = parse_color_palette_url(args.text)
    if parsed is None:
        print("Could not find any colors in the input", file=sys.stderr)
        return 1

    print(f"Source: {parsed.source}")
    print(f"Colors: {' '.join(parsed.colors)}")
    palette = generate_palette_from_url_colors(parsed.colors, args.dark)
    print(render_palette(palette))
    return 0


def cmd_random(args) -> int:
    palette = generate_random_palette(args.harmony, args.dark, args.hue, args.seed)
    if args.fix:
        palette = apply_suggested_fixes(palette)
    print(render_palette(palette))
    return 0


def cmd_contrast(args) -> int:
    result = check_contrast(args.foreground, args.background)
    print(f"Ratio: {result.ratio:.2f}:1")
    print(f"Level: {result.level}")
    print(f"AA large: {'pass' if result.passes_aa_large else 'fail'}")
    print(f"AA:       {'pass' if result.passes_aa else 'fail'}")
    print(f"AAA:      {'pass' if result.passes_aaa else 'fail'}")
    return 0


def cmd_fix(args) -> int:
    fixed = fix_contrast(parse_hex(args.foreground), args.background, args.target)
    result = check_contrast(fixed, args.background)
    print(f"{fixed}  {result.ratio:.2f}:1 {result.level}")
    return 0 if result.ratio >= args.target else 1


def cmd_preset(args) -> int:
    preset = get_preset(args.id)
    if preset is None:
        known = ', '.join(p.id for p in PALETTE_PRESETS)
        print(f"Error: Unknown preset '{args.id}' (known: {known})", file=sys.stderr)
        return 1

    print(render_palette(preset.light))
    print(render_palette(preset.dark))
    write_outputs(preset.light, preset.dark, args.mode, args.css, args.json)
    return 0


# =============================================================================
# CLI
# =============================================================================

def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Build light/dark theme palettes and export them as CSS or JSON.'
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    commands = parser.add_subparsers(dest='command', required=True)

    extract = commands.add_parser('extract', help='Build a palette from an image')
    extract.add_argument('image', help='Path to the image file')
    extract.add_argument('--colors', '-n', type=positive_int, default=DEFAULT_NUM_COLORS,
                         help='Number of colors to extract')
    extract.add_argument('--seed', type=int, default=None,
                         help='Seed for clustering (repeatable results)')

    parse = commands.add_parser('parse', help='Build a palette from a palette link or hex codes')
    parse.add_argument('text', help='Coolors/ColorHunt URL or text with hex codes')

    harmony_help = '; '.join(f"{h.value}: {d}" for h, d in HARMONY_DESCRIPTIONS.items())
    random = commands.add_parser('random', help='Generate a palette from a color harmony')
    random.add_argument('--harmony', choices=[h.value for h in ColorHarmony],
                        default=ColorHarmony.COMPLEMENTARY.value, help=harmony_help)
    random.add_argument('--hue', type=float, default=None, help='Base hue in degrees')
    random.add_argument('--seed', type=int, default=None, help='Seed for the random hue')

    contrast = commands.add_parser('contrast', help='Check WCAG contrast of two colors')
    contrast.add_argument('foreground')
    contrast.add_argument('background')

    fix = commands.add_parser('fix', help='Adjust a foreground color to reach a contrast ratio')
    fix.add_argument('foreground')
    fix.add_argument('background')
    fix.add_argument('--target', type=float, default=AA_RATIO, help='Target contrast ratio')

    preset = commands.add_parser('preset', help='Show or export a built-in palette')
    preset.add_argument('id', help=', '.join(p.id for p in PALETTE_PRESETS))

    for sub in (extract, parse, random):
        sub.add_argument('--dark', action='store_true', help='Show the dark variant')
    for sub in (extract, random):
        sub.add_argument('--fix', action='store_true',
                         help='Adjust colors that fail contrast against the background')
    for sub in (extract, preset):
        sub.add_argument('--mode', choices=THEME_MODES, default='system',
                         help='Which variants the exported theme contains')
        sub.add_argument('--css', default=None, help='Write a stylesheet to this path')
        sub.add_argument('--json', default=None, help='Write a theme file to this path')

    extract.set_defaults(func=cmd_extract)
    parse.set_defaults(func=cmd_parse)
    random.set_defaults(func=cmd_random)
    contrast.set_defaults(func=cmd_contrast)
    fix.set_defaults(func=cmd_fix)
    preset.set_defaults(func=cmd_preset)
    return parser


def main(argv: Optional[list] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format=LOG_FORMAT)

    try:
        return args.func(args)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (InvalidColorError, ImageLoadError, EmptyPaletteError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
