"""Shared pytest fixtures: small synthetic images built with Pillow."""

import io
import struct
import zlib

import pytest
from PIL import Image

STRIPE_COLORS = [(200, 40, 40), (40, 160, 60), (50, 70, 200), (230, 200, 60)]


def make_stripes(colors, stripe_width=20, height=40) -> Image.Image:
    """Vertical stripes, one per color."""
    img = Image.new('RGB', (stripe_width * len(colors), height))
    for i, color in enumerate(colors):
        img.paste(color, (i * stripe_width, 0, (i + 1) * stripe_width, height))
    return img


@pytest.fixture
def stripes_image() -> Image.Image:
    return make_stripes(STRIPE_COLORS)


@pytest.fixture
def stripes_png(stripes_image) -> bytes:
    buffer = io.BytesIO()
    stripes_image.save(buffer, format='PNG')
    return buffer.getvalue()


@pytest.fixture
def stripes_path(tmp_path, stripes_image):
    path = tmp_path / 'stripes.png'
    stripes_image.save(path)
    return path


@pytest.fixture
def transparent_image() -> Image.Image:
    return Image.new('RGBA', (10, 10), (120, 80, 200, 0))


@pytest.fixture
def black_and_white_image() -> Image.Image:
    return make_stripes([(0, 0, 0), (255, 255, 255)], stripe_width=10, height=10)


def _png_chunk(kind: bytes, data: bytes) -> bytes:
    return struct.pack('>I', len(data)) + kind + data + struct.pack('>I', zlib.crc32(kind + data))


@pytest.fixture
def png_header():
    """Build a PNG that declares a size but carries no pixel data.

    Pillow reads the size from the header without decoding, so huge
    dimensions cost nothing until the image is converted.
    """
    def build(width: int, height: int) -> bytes:
        ihdr = struct.pack('>IIBBBBB', width, height, 8, 2, 0, 0, 0)
        return b'\x89PNG\r\n\x1a\n' + _png_chunk(b'IHDR', ihdr) + _png_chunk(b'IDAT', b'')
    return build
