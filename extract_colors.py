"""
Extract dominant colors from an image with k-means clustering.

Three stages: Load (decode + downscale) → Sample (stride + filters) →
Cluster (k-means, then rank by saturation and luminance).
"""

import asyncio
import io
import logging
import warnings
from pathlib import Path
from typing import BinaryIO, Optional, Union

import numpy as np
from PIL import Image, UnidentifiedImageError
from scipy.cluster.vq import kmeans2

from color_space import LUMINANCE_WEIGHTS, SRGB_THRESHOLD, rgb_to_hex
from palette import ColorPalette, assign_extracted_roles

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

MAX_SAMPLE_SIZE = 100  # Longest edge after downscaling
PIXEL_STRIDE = 4  # Keep every 4th pixel
MIN_ALPHA = 128
MIN_LUMINANCE = 0.05  # Exclusive bounds: drop near-black
MAX_LUMINANCE = 0.95  # and near-white pixels
KMEANS_ITERATIONS = 15
CLUSTER_OVERSAMPLING = 2  # k = num_colors * 2
DEFAULT_NUM_COLORS = 6

# Image size limits (security: prevent decompression bombs)
MAX_IMAGE_PIXELS = 50_000_000  # 50 megapixels
MAX_IMAGE_DIMENSION = 10_000  # 10k pixels per side

ImageSource = Union[str, Path, bytes, BinaryIO, Image.Image]
RandomSource = Union[np.random.Generator, int, None]


class ImageLoadError(ValueError):
    """Raised when an image cannot be decoded or exceeds size limits."""


class EmptyPaletteError(ValueError):
    """Raised when no pixel survives the alpha and luminance filters."""


# =============================================================================
# Stage 1: Load
# =============================================================================

def _open_image(source: ImageSource) -> Image.Image:
    if isinstance(source, Image.Image):
        return source
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    try:
        return Image.open(source)
    except FileNotFoundError:
        raise FileNotFoundError(f"Image not found: {source}")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise ImageLoadError(f"Could not open image: {e}") from e


def load_pixels(source: ImageSource, max_size: int = MAX_SAMPLE_SIZE) -> np.ndarray:
    """
    Decode an image and downscale it so its longest edge is at most max_size.

    Args:
        source: File path, raw bytes, binary file object or PIL image
        max_size: Longest edge in pixels (images are never upscaled)

    Returns:
        uint8 array of shape (height, width, 4) in RGBA order

    Raises:
        FileNotFoundError: If a path does not exist
        ImageLoadError: If the data is not a decodable image or is too large
    """
    img = _open_image(source)

    width, height = img.size
    if width > MAX_IMAGE_DIMENSION or height > MAX_IMAGE_DIMENSION:
        raise ImageLoadError(
            f"Image dimensions {width}x{height} exceed maximum "
            f"{MAX_IMAGE_DIMENSION}x{MAX_IMAGE_DIMENSION}"
        )
    if width * height > MAX_IMAGE_PIXELS:
        raise ImageLoadError(
            f"Image has {width * height:,} pixels, exceeding maximum {MAX_IMAGE_PIXELS:,}"
        )

    try:
        img = img.convert('RGBA')
    except OSError as e:
        raise ImageLoadError(f"Could not decode image: {e}") from e

    scale = min(max_size / width, max_size / height, 1.0)
    if scale < 1.0:
        size = (max(1, int(width * scale)), max(1, int(height * scale)))
        img = img.resize(size, Image.Resampling.BILINEAR)

    return np.array(img)


# =============================================================================
# Stage 2: Sample
# =============================================================================

def luminance(rgb: np.ndarray) -> np.ndarray:
    """WCAG relative luminance for an (n, 3) array of 0-255 RGB values."""
    s = rgb.astype(np.float64) / 255.0
    linear = np.where(s <= SRGB_THRESHOLD, s / 12.92, ((s + 0.055) / 1.055) ** 2.4)
    return linear @ np.array(LUMINANCE_WEIGHTS)


def sample_pixels(rgba: np.ndarray) -> np.ndarray:
    """
    Keep every 4th pixel that is opaque and neither near-black nor near-white.

    Returns:
        float64 array of shape (n, 3) with RGB values
    """
    flat = rgba.reshape(-1, 4)[::PIXEL_STRIDE]
    opaque = flat[flat[:, 3] >= MIN_ALPHA, :3]

    lum = luminance(opaque)
    keep = (lum > MIN_LUMINANCE) & (lum < MAX_LUMINANCE)
    return opaque[keep].astype(np.float64)


# =============================================================================
# Stage 3: Cluster
# =============================================================================

def kmeans(colors: np.ndarray, k: int, iterations: int = KMEANS_ITERATIONS,
           rng: RandomSource = None) -> np.ndarray:
    """
    Cluster RGB colors with a fixed number of k-means iterations.

    Initial centroids are k distinct samples chosen at random. A centroid
    whose cluster empties keeps its previous position.

    Args:
        colors: Array of shape (n, 3)
        k: Number of clusters
        iterations: Assignment/update rounds (no early exit)
        rng: numpy Generator or seed; None draws from OS entropy

    Returns:
        Array of shape (k, 3) with centroids, or the input itself when
        there are no more than k colors
    """
    if len(colors) == 0:
        return np.empty((0, 3))
    if len(colors) <= k:
        return colors.copy()

    rng = np.random.default_rng(rng)
    # missing='warn' leaves an empty cluster's centroid where it was
    with warnings.catch_warnings():
        warnings.simplefilter('ignore', UserWarning)
        centroids, _ = kmeans2(colors, k, iter=iterations, minit='points',
                               missing='warn', seed=rng)
    return centroids


def rank_centroids(centroids: np.ndarray, num_colors: int) -> list[str]:
    """
    Keep the num_colors most saturated centroids, lightest first.

    Saturation here is the spread between the largest and smallest channel.
    """
    saturation = centroids.max(axis=1) - centroids.min(axis=1)
    # Stable sort keeps cluster order among equal scores
    top = centroids[np.argsort(-saturation, kind='stable')[:num_colors]]

    lum = luminance(top)
    ordered = top[np.argsort(-lum, kind='stable')]
    return [rgb_to_hex(*c) for c in ordered]


def extract_colors(source: ImageSource, num_colors: int = DEFAULT_NUM_COLORS,
                   rng: RandomSource = None) -> list[str]:
    """
    Extract the dominant colors of an image.

    Centroid initialization is random, so repeated runs on the same image
    can differ slightly unless rng is seeded.

    Args:
        source: File path, raw bytes, binary file object or PIL image
        num_colors: Number of colors to return
        rng: numpy Generator or seed for centroid initialization

    Returns:
        Up to num_colors hex strings sorted by descending luminance

    Raises:
        EmptyPaletteError: If no pixel survives filtering
        ValueError: If num_colors is below 1
    """
    rgba = load_pixels(source)
    return cluster_pixels(rgba, num_colors, rng)


def cluster_pixels(rgba: np.ndarray, num_colors: int = DEFAULT_NUM_COLORS,
                   rng: RandomSource = None) -> list[str]:
    """Sample and cluster an already decoded RGBA array."""
    if num_colors < 1:
        raise ValueError(f"num_colors must be at least 1, got {num_colors}")
    samples = sample_pixels(rgba)
    if len(samples) == 0:
        raise EmptyPaletteError("No colors found in image")

    k = num_colors * CLUSTER_OVERSAMPLING
    centroids = kmeans(samples, k, KMEANS_ITERATIONS, rng)
    colors = rank_centroids(centroids, num_colors)

    logger.debug("Sampled %d pixels from %dx%d, %d clusters -> %d colors",
                 len(samples), rgba.shape[1], rgba.shape[0], len(centroids), len(colors))
    return colors


async def extract_colors_async(source: ImageSource, num_colors: int = DEFAULT_NUM_COLORS,
                               rng: RandomSource = None) -> list[str]:
    """
    Async variant of extract_colors.

    Decoding runs in a worker thread; clustering then runs to completion
    without yielding. Each call owns its buffers, so calls may run
    concurrently.
    """
    rgba = await asyncio.to_thread(load_pixels, source)
    return cluster_pixels(rgba, num_colors, rng)


def generate_palette_from_colors(extracted_colors: list[str], is_dark: bool,
                                 name: Optional[str] = None) -> ColorPalette:
    """Fill the seven palette roles from extracted colors."""
    return assign_extracted_roles(extracted_colors, is_dark, name=name)
