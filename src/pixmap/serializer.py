from enum import Enum
from pathlib import Path

import numpy as np

from pixmap.errors import UnknownModeError
from pixmap.image import ImageBuffer
from pixmap.pixel import PixelFormat


class Mode(Enum):
    TEXT = "text"
    BINARY = "binary"


def make_header(image: ImageBuffer, mode: Mode) -> bytes:
    """Build the `P<id> <width> <height>\\n[<maxval>\\n]` header.

    Bi-level images have no maximum value line.
    """
    fmt = image.pixel_format
    format_id = fmt.binary_id if mode is Mode.BINARY else fmt.text_id
    header = f"P{format_id} {image.width} {image.height}\n"
    if fmt.max_value is not None:
        header += f"{fmt.max_value}\n"
    return header.encode("ascii")


def serialize_text(image: ImageBuffer) -> bytes:
    """Every channel as decimal digits followed by a single space, row-major."""
    values = image.to_array().ravel().astype(np.uint32).tolist()
    body = "".join(f"{v} " for v in values)
    return make_header(image, Mode.TEXT) + body.encode("ascii")


def serialize_binary(image: ImageBuffer, byteorder: str = "little") -> bytes:
    """Raw samples, or inverted 1-bit rows for bi-level images.

    Multi-byte samples are written least significant byte first unless
    byteorder is "big", which is the order the Netpbm tools expect.
    """
    if byteorder not in ("little", "big"):
        raise ValueError(f"byteorder must be 'little' or 'big', got {byteorder!r}")

    fmt = image.pixel_format
    data = image.to_array()
    if fmt is PixelFormat.BILEVEL:
        # packbits fills bit 7 first and pads each row's last byte with zero bits
        packed = np.packbits(data[:, :, 0], axis=1)
        body = np.invert(packed).tobytes()
    else:
        prefix = "<" if byteorder == "little" else ">"
        body = data.astype(f"{prefix}u{fmt.sample_bytes}").tobytes()
    return make_header(image, Mode.BINARY) + body


def serialize(image: ImageBuffer, mode: Mode | str) -> bytes:
    try:
        mode = Mode(mode)
    except ValueError:
        raise UnknownModeError(f"Unknown mode {mode!r}, expected one of: {', '.join(m.value for m in Mode)}") from None
    if mode is Mode.BINARY:
        return serialize_binary(image)
    return serialize_text(image)


def save(image: ImageBuffer, path: str | Path, mode: Mode | str = Mode.BINARY) -> int:
    """Write the serialized image to path and return the number of bytes written."""
    data = serialize(image, mode)
    path = Path(path)
    with path.open("wb") as f:
        f.write(data)
    return len(data)
