from __future__ import annotations

import io
import struct

import pytest
from PIL import Image

from metadata_assets.dimensions import ImageDimensions, read_dimensions, read_file_dimensions, read_word
from metadata_assets.errors import TruncatedImageError


@pytest.mark.parametrize("width,height", [(1, 1), (1024, 1024), (2048, 1024), (0xFFFFFFFF, 7)])
def test_png_dimensions_from_ihdr(make_png, width, height):
    assert read_dimensions(make_png(width, height, length=64)) == ImageDimensions(width, height)


def test_png_chunk_type_is_not_checked(make_png):
    data = bytearray(make_png(640, 480, length=64))
    data[12:16] = b"XXXX"
    assert read_dimensions(bytes(data)) == ImageDimensions(640, 480)


@pytest.mark.parametrize("marker", [0xC0, 0xC1, 0xC2, 0xC3])
def test_jpeg_sof_markers(make_jpeg, marker):
    assert read_dimensions(make_jpeg(300, 200, sof_marker=marker)) == ImageDimensions(300, 200)


def test_jpeg_scans_past_intermediate_segments(make_jpeg, make_segment):
    extras = (
        make_segment(0xDB, b"\x00" * 65),
        make_segment(0xE1, b"Exif\x00\x00" + b"\x11" * 500),
        make_segment(0xC4, b"\x00" * 30),
    )
    assert read_dimensions(make_jpeg(1024, 768, extra_segments=extras)) == ImageDimensions(1024, 768)


def test_jpeg_first_sof_wins(make_jpeg, make_segment):
    first = make_segment(0xC0, struct.pack(">BHHB", 8, 10, 20, 1) + b"\x01\x11\x00")
    assert read_dimensions(make_jpeg(1024, 1024, extra_segments=(first,))) == ImageDimensions(20, 10)


def test_jpeg_unrecognised_sof_scans_into_eoi(make_jpeg):
    # SOF5 is skipped, so the scan reads a length from the bare EOI marker.
    data = make_jpeg(64, 32, sof_marker=0xC5)
    with pytest.raises(TruncatedImageError):
        read_dimensions(data)


def test_jpeg_without_sof_is_not_an_image():
    data = b"\xff\xd8" + b"\xff\xe0" + struct.pack(">H", 16) + b"\x00" * 14
    assert read_dimensions(data) is None


@pytest.mark.parametrize(
    "data",
    [b"", b"GIF89a" + b"\x00" * 32, b"\x89PNG\r\n\x1a", b"\xff", b"BM" + b"\x00" * 60],
)
def test_other_bytes_are_not_an_image(data):
    assert read_dimensions(data) is None


def test_truncated_png_raises():
    with pytest.raises(TruncatedImageError):
        read_dimensions(b"\x89PNG\r\n\x1a\n" + b"\x00" * 8)


def test_truncated_jpeg_segment_header_raises():
    with pytest.raises(TruncatedImageError):
        read_dimensions(b"\xff\xd8\xff")


def test_truncated_sof_raises():
    with pytest.raises(TruncatedImageError):
        read_dimensions(b"\xff\xd8\xff\xc0\x00\x11\x08\x04")


def test_input_is_not_mutated(make_png):
    data = bytearray(make_png(1024, 1024, length=64))
    before = bytes(data)
    read_dimensions(data)
    assert bytes(data) == before


def test_read_word_bounds():
    assert read_word(b"\x00\x00\x01\x00", 0) == 256
    with pytest.raises(TruncatedImageError):
        read_word(b"\x00\x00\x01\x00", 1)
    with pytest.raises(TruncatedImageError):
        read_word(b"\x00\x00\x01\x00", -1)


@pytest.mark.parametrize("fmt,kwargs", [("PNG", {}), ("JPEG", {}), ("JPEG", {"progressive": True})])
def test_real_encoder_output(tmp_path, fmt, kwargs):
    buf = io.BytesIO()
    Image.new("RGB", (300, 200), (200, 40, 40)).save(buf, fmt, **kwargs)
    path = tmp_path / f"sample.{fmt.lower()}"
    path.write_bytes(buf.getvalue())
    assert read_file_dimensions(path) == ImageDimensions(300, 200)
