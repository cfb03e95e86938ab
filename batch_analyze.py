#!/usr/bin/env python3
"""Batch extract themes from images and write stylesheets and theme files."""

import argparse
import logging
import sys
import time
from pathlib import Path

from analyze import positive_int
from extract_colors import DEFAULT_NUM_COLORS, extract_colors, generate_palette_from_colors
from theme_export import dumps_theme, generate_css

logger = logging.getLogger(__name__)


def find_images(directory: Path) -> list[Path]:
    """Find all image files in directory."""
    extensions = {'.jpg', '.jpeg', '.png', '.webp', '.gif', '.bmp'}
    return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in extensions)


def process_image(image_path: Path, output_dir: Path, num_colors: int,
                  seed=None) -> list[Path]:
    """Extract one image's theme and write <stem>-theme.css and <stem>-theme.json."""
    colors = extract_colors(str(image_path), num_colors, seed)
    light = generate_palette_from_colors(colors, False, name=f"{image_path.stem} Light")
    dark = generate_palette_from_colors(colors, True, name=f"{image_path.stem} Dark")

    written = []
    for suffix, content in (('css', generate_css(light, dark)), ('json', dumps_theme(light, dark))):
        output_file = output_dir / f"{image_path.stem}-theme.{suffix}"
        if output_file.exists():
            print(f"  Warning: Overwriting {output_file.name}", file=sys.stderr)
        output_file.write_text(content)
        written.append(output_file)
    return written


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description='Batch extract themes from images.'
    )
    parser.add_argument(
        '--input', '-i',
        required=True,
        help='Directory containing images to analyze'
    )
    parser.add_argument(
        '--output', '-o',
        required=True,
        help='Directory for CSS and JSON output files'
    )
    parser.add_argument(
        '--colors', '-n',
        type=positive_int,
        default=DEFAULT_NUM_COLORS,
        help='Number of colors to extract per image'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Seed for clustering (repeatable results)'
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s")

    input_dir = Path(args.input)
    output_dir = Path(args.output)

    # Validate input directory
    if not input_dir.is_dir():
        print(f"Error: Input directory not found: {input_dir}", file=sys.stderr)
        return 2

    output_dir.mkdir(parents=True, exist_ok=True)

    images = find_images(input_dir)
    if not images:
        print(f"No images found in {input_dir}", file=sys.stderr)
        return 2

    total = len(images)
    succeeded = 0
    failed = []

    batch_start = time.perf_counter()

    for i, image_path in enumerate(images, 1):
        try:
            img_start = time.perf_counter()
            process_image(image_path, output_dir, args.colors, args.seed)
            img_elapsed = time.perf_counter() - img_start

            print(f"[{i}/{total}] {image_path.name} → {image_path.stem}-theme ({img_elapsed:.2f}s)")
            succeeded += 1

        except (OSError, ValueError) as e:
            error_msg = f"{type(e).__name__}: {e}"
            logger.debug("Failed on %s", image_path, exc_info=True)
            print(f"[{i}/{total}] {image_path.name} → ERROR: {error_msg}", file=sys.stderr)
            failed.append((image_path.name, error_msg))

    batch_elapsed = time.perf_counter() - batch_start

    # Summary
    print()
    print(f"Completed: {succeeded}/{total} succeeded in {batch_elapsed:.2f}s")
    if succeeded > 0:
        print(f"Average: {batch_elapsed / succeeded:.2f}s per image")
    if failed:
        print(f"Failed ({len(failed)}):")
        for name, error in failed:
            print(f"  - {name}: {error}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
