import numpy as np
from PIL import Image

from pixmap.errors import UnsupportedPillowModeError
from pixmap.image import ImageBuffer
from pixmap.pixel import PixelFormat

# Pillow has no 16-bit-per-channel RGB mode, so RGB16 is absent
PIL_MODES = {
    PixelFormat.BILEVEL: "1",
    PixelFormat.GRAYSCALE8: "L",
    PixelFormat.GRAYSCALE16: "I;16",
    PixelFormat.RGB8: "RGB",
}
_FORMATS_BY_MODE = {mode: fmt for fmt, mode in PIL_MODES.items()}


def to_pil(image: ImageBuffer) -> Image.Image:
    if image.pixel_format not in PIL_MODES:
        raise UnsupportedPillowModeError(f"No Pillow mode holds {image.pixel_format.name_id} pixels")
    arr = image.to_array()
    if image.pixel_format.component_count == 1:
        arr = arr[:, :, 0]
    return Image.fromarray(np.ascontiguousarray(arr))


def from_pil(image: Image.Image) -> ImageBuffer:
    """Copy a Pillow image into a buffer of the matching format, without colour conversion."""
    fmt = _FORMATS_BY_MODE.get(image.mode)
    if fmt is None:
        raise UnsupportedPillowModeError(
            f"Unsupported Pillow mode {image.mode!r}, expected one of: {', '.join(_FORMATS_BY_MODE)}"
        )
    return ImageBuffer.from_array(fmt, np.asarray(image))
