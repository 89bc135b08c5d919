import operator
from typing import Callable

import numpy as np

from pixmap.errors import CoordinateError, InvalidDimensionsError, InvalidValueError
from pixmap.pixel import Pixel, PixelFormat

# Dimensions are stored as unsigned 16-bit values
MAX_DIMENSION = 0xFFFF


def _check_dimension(axis: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidDimensionsError(f"Image {axis} must be an integer, got {value!r}")
    if not 0 < value <= MAX_DIMENSION:
        raise InvalidDimensionsError(f"Image {axis} must be in 1..{MAX_DIMENSION}, got {value}")
    return int(value)


class ImageBuffer:
    """Fixed-size 2-D grid of pixels of a single pixel format.

    Pixels are stored row-major in a numpy array of shape
    (height, width, component_count). Width and height are set once at
    construction and never change.
    """

    def __init__(self, pixel_format: PixelFormat, width: int, height: int, fill=None):
        self._format = pixel_format
        self._width = _check_dimension("width", width)
        self._height = _check_dimension("height", height)
        self._data = np.zeros((self._height, self._width, pixel_format.component_count), dtype=pixel_format.dtype)
        if fill is not None:
            self._data[:, :] = self._coerce(fill)

    @classmethod
    def from_array(cls, pixel_format: PixelFormat, array) -> "ImageBuffer":
        """Build a buffer from an array of shape (height, width[, components])."""
        arr = np.asarray(array)
        if arr.ndim == 2 and pixel_format.component_count == 1:
            arr = arr[:, :, np.newaxis]
        if arr.ndim != 3 or arr.shape[2] != pixel_format.component_count:
            raise InvalidValueError(f"Array of shape {arr.shape} does not match {pixel_format.name_id} pixels")

        image = cls(pixel_format, arr.shape[1], arr.shape[0])
        if arr.dtype.kind not in "biu":
            raise InvalidValueError(f"Expected an integer or boolean array, got {arr.dtype}")
        if arr.dtype.kind == "b" and pixel_format.max_value is not None:
            raise InvalidValueError(f"{pixel_format.name_id} pixels need integer values, got a boolean array")
        limit = 1 if pixel_format.max_value is None else pixel_format.max_value
        if arr.dtype.kind != "b" and (arr.min() < 0 or arr.max() > limit):
            raise InvalidValueError(f"Array values outside 0..{limit}")
        image._data[...] = arr.astype(pixel_format.dtype)
        return image

    @property
    def pixel_format(self) -> PixelFormat:
        return self._format

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _check_coordinates(self, x: int, y: int) -> tuple[int, int]:
        x = operator.index(x)
        y = operator.index(y)
        if not 0 <= x < self._width:
            raise CoordinateError(f"X coordinate {x} is out of bounds for width {self._width}")
        if not 0 <= y < self._height:
            raise CoordinateError(f"Y coordinate {y} is out of bounds for height {self._height}")
        return x, y

    def _coerce(self, value) -> list:
        """Turn a Pixel, a channel sequence or a bare scalar into validated channel values."""
        if isinstance(value, Pixel):
            if value.pixel_format is not self._format:
                raise InvalidValueError(
                    f"Cannot store a {value.pixel_format.name_id} pixel in a {self._format.name_id} image"
                )
            return list(value)
        if isinstance(value, (tuple, list)):
            return list(Pixel(self._format, *value))
        return list(Pixel(self._format, value))

    def get(self, x: int, y: int) -> Pixel:
        x, y = self._check_coordinates(x, y)
        return Pixel(self._format, *self._data[y, x].tolist())

    def set(self, x: int, y: int, value) -> None:
        x, y = self._check_coordinates(x, y)
        self._data[y, x] = self._coerce(value)

    def fill_with(self, func: Callable[[int, int], object]) -> None:
        """Store func(x, y) at every coordinate, in row-major order."""
        for y in range(self._height):
            for x in range(self._width):
                self.set(x, y, func(x, y))

    def to_array(self) -> np.ndarray:
        return self._data.copy()

    def __getitem__(self, key: tuple[int, int]) -> Pixel:
        x, y = key
        return self.get(x, y)

    def __setitem__(self, key: tuple[int, int], value) -> None:
        x, y = key
        self.set(x, y, value)

    def __len__(self) -> int:
        return self._width * self._height

    def __eq__(self, other):
        if not isinstance(other, ImageBuffer):
            return NotImplemented
        return self._format is other._format and np.array_equal(self._data, other._data)

    __hash__ = None

    def __repr__(self) -> str:
        return f"ImageBuffer({self._format.name}, width={self._width}, height={self._height})"
