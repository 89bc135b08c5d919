import io

import pytest
from PIL import Image

from pixmap.errors import PixmapError, UnknownModeError
from pixmap.image import ImageBuffer
from pixmap.pixel import PixelFormat
from pixmap.serializer import Mode, make_header, save, serialize, serialize_binary, serialize_text
from tests.conftest import make_bilevel_row


def test_grayscale_headers(gray8_image):
    assert serialize(gray8_image, Mode.TEXT).startswith(b"P2 3 2\n255\n")
    assert serialize(gray8_image, Mode.BINARY).startswith(b"P5 3 2\n255\n")


@pytest.mark.parametrize(
    "fmt, mode, expected",
    [
        (PixelFormat.BILEVEL, Mode.TEXT, b"P1 7 4\n"),
        (PixelFormat.BILEVEL, Mode.BINARY, b"P4 7 4\n"),
        (PixelFormat.GRAYSCALE16, Mode.TEXT, b"P2 7 4\n65535\n"),
        (PixelFormat.RGB8, Mode.BINARY, b"P6 7 4\n255\n"),
        (PixelFormat.RGB16, Mode.TEXT, b"P3 7 4\n65535\n"),
    ],
)
def test_header(fmt, mode, expected):
    assert make_header(ImageBuffer(fmt, 7, 4), mode) == expected


def test_text_body(gray8_image):
    assert serialize_text(gray8_image) == b"P2 3 2\n255\n0 1 2 10 11 12 "


def test_text_zero_is_single_digit():
    image = ImageBuffer(PixelFormat.GRAYSCALE16, 1, 1)
    assert serialize_text(image) == b"P2 1 1\n65535\n0 "


def test_text_rgb_channels_in_order(rgb8_image):
    data = serialize_text(rgb8_image)
    assert data == b"P3 2 2\n255\n0 255 16 1 2 3 255 255 255 128 64 32 "


def test_text_bilevel_values():
    image = make_bilevel_row([1, 0, 1])
    assert serialize_text(image) == b"P1 3 1\n1 0 1 "


def test_binary_bilevel_packing():
    image = make_bilevel_row([1, 0, 1, 1, 0, 0, 0, 1, 1, 1])
    assert serialize_binary(image) == b"P4 10 1\n" + bytes([0x4E, 0x3F])


def test_binary_bilevel_rows_start_new_byte():
    image = ImageBuffer(PixelFormat.BILEVEL, 3, 2)
    image.set(0, 1, True)
    # Each 3-pixel row takes a full byte; unset and padding bits both end up as 1
    assert serialize_binary(image) == b"P4 3 2\n" + bytes([0xFF, 0x7F])


def test_binary_bilevel_exact_byte_width():
    image = make_bilevel_row([1] * 16)
    assert serialize_binary(image) == b"P4 16 1\n\x00\x00"


def test_binary_gray8_body(gray8_image):
    assert serialize_binary(gray8_image) == b"P5 3 2\n255\n" + bytes([0, 1, 2, 10, 11, 12])


def test_binary_rgb16_little_endian():
    image = ImageBuffer(PixelFormat.RGB16, 1, 1, fill=(1, 256, 65535))
    assert serialize_binary(image) == b"P6 1 1\n65535\n" + bytes([0x01, 0x00, 0x00, 0x01, 0xFF, 0xFF])


def test_binary_gray16_little_endian():
    image = ImageBuffer(PixelFormat.GRAYSCALE16, 2, 1)
    image.set(0, 0, 0x1234)
    image.set(1, 0, 0xFF00)
    assert serialize_binary(image) == b"P5 2 1\n65535\n" + bytes([0x34, 0x12, 0x00, 0xFF])


def test_binary_rgb16_big_endian():
    image = ImageBuffer(PixelFormat.RGB16, 1, 1, fill=(1, 256, 65535))
    body = serialize_binary(image, byteorder="big")[len(b"P6 1 1\n65535\n") :]
    assert body == bytes([0x00, 0x01, 0x01, 0x00, 0xFF, 0xFF])


def test_binary_invalid_byteorder(gray8_image):
    with pytest.raises(ValueError, match="byteorder"):
        serialize_binary(gray8_image, byteorder="middle")


@pytest.mark.parametrize("mode", [Mode.TEXT, Mode.BINARY])
def test_deterministic(rgb8_image, mode):
    assert serialize(rgb8_image, mode) == serialize(rgb8_image, mode)


def test_serialize_accepts_mode_names(gray8_image):
    assert serialize(gray8_image, "text") == serialize_text(gray8_image)
    assert serialize(gray8_image, "binary") == serialize_binary(gray8_image)


def test_serialize_rejects_unknown_mode(gray8_image):
    with pytest.raises(UnknownModeError, match="'ascii'"):
        serialize(gray8_image, "ascii")


def test_unknown_mode_is_a_pixmap_error(gray8_image):
    with pytest.raises(PixmapError):
        serialize(gray8_image, "ascii")


def test_serialize_does_not_mutate(rgb8_image):
    before = rgb8_image.to_array()
    serialize(rgb8_image, Mode.BINARY)
    serialize(rgb8_image, Mode.TEXT)
    assert (rgb8_image.to_array() == before).all()


def test_pillow_reads_binary_grayscale(gray8_image):
    with Image.open(io.BytesIO(serialize_binary(gray8_image))) as img:
        assert img.mode == "L"
        assert img.size == (3, 2)
        assert img.getpixel((2, 1)) == 12


def test_pillow_reads_binary_rgb(rgb8_image):
    with Image.open(io.BytesIO(serialize_binary(rgb8_image))) as img:
        assert img.mode == "RGB"
        assert img.getpixel((0, 0)) == (0, 255, 16)
        assert img.getpixel((1, 1)) == (128, 64, 32)


def test_pillow_reads_binary_bilevel():
    image = make_bilevel_row([1, 0, 0, 1, 1, 0, 1, 0, 1])
    with Image.open(io.BytesIO(serialize_binary(image))) as img:
        assert img.mode == "1"
        assert img.size == (9, 1)
        # Set pixels are stored as 0 bits, which Netpbm readers treat as white
        assert [bool(img.getpixel((x, 0))) for x in range(9)] == [True, False, False, True, True, False, True, False, True]


def test_save(tmp_path, gray8_image):
    path = tmp_path / "out.pgm"
    written = save(gray8_image, path, Mode.BINARY)
    assert path.read_bytes() == serialize_binary(gray8_image)
    assert written == len(path.read_bytes())


def test_save_text(tmp_path, gray8_image):
    path = tmp_path / "out.pgm"
    save(gray8_image, str(path), "text")
    assert path.read_bytes() == serialize_text(gray8_image)
