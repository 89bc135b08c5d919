from enum import Enum

import numpy as np

from pixmap.errors import ChannelIndexError, InvalidValueError, UnknownFormatError

# Binary format ids are the text ids shifted by this amount (P1 -> P4, ...)
BINARY_ID_OFFSET = 3


class PixelFormat(Enum):
    """The closed set of Netpbm pixel encodings.

    Each member carries its traits: user-facing name, channel count, maximum
    channel value (None for bi-level), text format id and storage dtype.
    """

    BILEVEL = ("bw", 1, None, 1, "bool")
    GRAYSCALE8 = ("grayscale8", 1, 0xFF, 2, "uint8")
    GRAYSCALE16 = ("grayscale16", 1, 0xFFFF, 2, "uint16")
    RGB8 = ("rgb8", 3, 0xFF, 3, "uint8")
    RGB16 = ("rgb16", 3, 0xFFFF, 3, "uint16")

    def __init__(self, name_id: str, component_count: int, max_value: int | None, text_id: int, dtype: str):
        self.name_id = name_id
        self.component_count = component_count
        self.max_value = max_value
        self.text_id = text_id
        self.dtype = np.dtype(dtype)

    @property
    def binary_id(self) -> int:
        return self.text_id + BINARY_ID_OFFSET

    @property
    def sample_bytes(self) -> int:
        """Bytes per channel in the binary body; 0 for bit-packed bi-level."""
        if self.max_value is None:
            return 0
        return self.dtype.itemsize

    def zero(self) -> "Pixel":
        return Pixel(self)

    def check_value(self, value) -> bool | int:
        """Validate a single channel value and return it as a plain Python scalar."""
        if self.max_value is None:
            if isinstance(value, (bool, np.bool_)):
                return bool(value)
            if isinstance(value, (int, np.integer)) and value in (0, 1):
                return bool(value)
            raise InvalidValueError(f"Bi-level channel value must be a boolean, got {value!r}")
        if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
            raise InvalidValueError(f"{self.name_id} channel value must be an integer, got {value!r}")
        if not 0 <= value <= self.max_value:
            raise InvalidValueError(f"{self.name_id} channel value {value} outside 0..{self.max_value}")
        return int(value)


FORMATS = {fmt.name_id: fmt for fmt in PixelFormat}


def format_from_name(name: str) -> PixelFormat:
    try:
        return FORMATS[name]
    except KeyError:
        raise UnknownFormatError(f"Unknown pixel format {name!r}, expected one of: {', '.join(FORMATS)}") from None


class Pixel:
    """A fixed-arity, mutable tuple of channel values for one pixel format.

    Channels are indexed 0 for monochrome formats and 0-2 (R, G, B) for colour
    formats. Indexing outside that range raises ChannelIndexError; negative
    indices do not wrap around.
    """

    __slots__ = ("pixel_format", "_channels")

    def __init__(self, pixel_format: PixelFormat, *channels):
        self.pixel_format = pixel_format
        if not channels:
            channels = (0,) * pixel_format.component_count
        if len(channels) != pixel_format.component_count:
            raise InvalidValueError(
                f"{pixel_format.name_id} pixel takes {pixel_format.component_count} channel(s), got {len(channels)}"
            )
        self._channels = [pixel_format.check_value(c) for c in channels]

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.pixel_format.component_count:
            raise ChannelIndexError(f"{self.pixel_format.name_id} pixel channel index {index} out of range")

    def __getitem__(self, index: int) -> bool | int:
        self._check_index(index)
        return self._channels[index]

    def __setitem__(self, index: int, value) -> None:
        self._check_index(index)
        self._channels[index] = self.pixel_format.check_value(value)

    def __len__(self) -> int:
        return len(self._channels)

    def __iter__(self):
        return iter(self._channels)

    def __eq__(self, other):
        if isinstance(other, Pixel):
            return self.pixel_format is other.pixel_format and self._channels == other._channels
        if isinstance(other, tuple):
            return tuple(self._channels) == other
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        values = ", ".join(repr(c) for c in self._channels)
        return f"Pixel({self.pixel_format.name}, {values})"

    def _rgb(self, index: int) -> int:
        if self.pixel_format.component_count != 3:
            raise AttributeError(f"{self.pixel_format.name_id} pixel has no colour channels")
        return self._channels[index]

    @property
    def r(self) -> int:
        return self._rgb(0)

    @property
    def g(self) -> int:
        return self._rgb(1)

    @property
    def b(self) -> int:
        return self._rgb(2)
