class PixmapError(Exception):
    """Base class for every error raised by pixmap."""


class InvalidDimensionsError(PixmapError, ValueError):
    pass


class CoordinateError(PixmapError, IndexError):
    pass


class ChannelIndexError(PixmapError, IndexError):
    pass


class InvalidValueError(PixmapError, ValueError):
    pass


class UnknownFormatError(PixmapError, ValueError):
    pass


class UnsupportedPillowModeError(PixmapError, ValueError):
    pass


class UnknownModeError(PixmapError, ValueError):
    pass
