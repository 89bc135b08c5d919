import numpy as np

from pixmap.image import ImageBuffer
from pixmap.pixel import PixelFormat

DEFAULT_SIZE = 512
MAX_ITERATIONS = 200
ESCAPE_RADIUS = 2.0


def escape_time(width: int, height: int, max_iterations: int = MAX_ITERATIONS) -> np.ndarray:
    """Normalized escape iteration for every pixel. Returns float32 array of shape (height, width).

    Pixel (x, y) maps to c = (2x/width - 1.5) + (2y/height - 1)i. The value is
    i / max_iterations for the first iteration i at which |z| exceeds 2, or 0.0
    when the orbit stays bounded.
    """
    xs = (np.arange(width, dtype=np.float32) * 2.0 / width - 1.5).astype(np.float32)
    ys = (np.arange(height, dtype=np.float32) * 2.0 / height - 1.0).astype(np.float32)
    c = (xs[np.newaxis, :] + 1j * ys[:, np.newaxis]).astype(np.complex64)

    z = np.zeros_like(c)
    result = np.zeros(c.shape, dtype=np.float32)
    active = np.ones(c.shape, dtype=bool)
    for i in range(max_iterations):
        z[active] = z[active] * z[active] + c[active]
        escaped = active & (np.abs(z) > ESCAPE_RADIUS)
        result[escaped] = i / max_iterations
        active &= ~escaped
        if not active.any():
            break
    return result


def to_pixel_values(pixel_format: PixelFormat, values: np.ndarray) -> np.ndarray:
    """Map values in [0, 1) to channel data of shape (height, width, components).

    Bi-level pixels are set wherever the value is non-zero, grayscale scales to
    the format's maximum and RGB puts the scaled value in the red channel.
    """
    if pixel_format.max_value is None:
        return (values != 0)[:, :, np.newaxis]
    scaled = (values.astype(np.float64) * pixel_format.max_value).astype(pixel_format.dtype)
    if pixel_format.component_count == 1:
        return scaled[:, :, np.newaxis]
    zeros = np.zeros_like(scaled)
    return np.stack([scaled, zeros, zeros], axis=-1)


def render(
    pixel_format: PixelFormat,
    width: int = DEFAULT_SIZE,
    height: int = DEFAULT_SIZE,
    max_iterations: int = MAX_ITERATIONS,
) -> ImageBuffer:
    # Reject bad dimensions before doing any work
    ImageBuffer(pixel_format, width, height)
    values = escape_time(width, height, max_iterations)
    return ImageBuffer.from_array(pixel_format, to_pixel_values(pixel_format, values))
