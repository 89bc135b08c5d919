import pytest

from pixmap.image import ImageBuffer
from pixmap.pixel import PixelFormat


def make_bilevel_row(bits):
    """A single-row bi-level image with one pixel per entry of bits (truthy = set)."""
    image = ImageBuffer(PixelFormat.BILEVEL, len(bits), 1)
    for x, bit in enumerate(bits):
        image.set(x, 0, bool(bit))
    return image


@pytest.fixture
def gray8_image():
    """3x2 grayscale image whose pixel at (x, y) is 10 * y + x."""
    image = ImageBuffer(PixelFormat.GRAYSCALE8, 3, 2)
    image.fill_with(lambda x, y: 10 * y + x)
    return image


@pytest.fixture
def rgb8_image():
    image = ImageBuffer(PixelFormat.RGB8, 2, 2)
    image.set(0, 0, (0, 255, 16))
    image.set(1, 0, (1, 2, 3))
    image.set(0, 1, (255, 255, 255))
    image.set(1, 1, (128, 64, 32))
    return image
