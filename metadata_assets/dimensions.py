"""Read pixel dimensions straight from PNG and JPEG headers.

Only the header bytes are inspected; no pixel data is decoded. Anything that is
neither a PNG nor a JPEG with a baseline/extended/progressive frame header comes
back as ``None`` so callers can decide how severe "not an image" is.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path

from metadata_assets.errors import TruncatedImageError

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
JPEG_SOI = b"\xff\xd8"
# SOF0..SOF3 only; differential and arithmetic-coded frames are not recognised.
SOF_MARKERS = range(0xC0, 0xC4)

PNG_WIDTH_OFFSET = 16
PNG_HEIGHT_OFFSET = 20


@dataclass(frozen=True)
class ImageDimensions:
    width: int
    height: int

    @property
    def is_square(self) -> bool:
        return self.width == self.height

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


def _unpack(fmt: str, data: bytes, offset: int) -> int:
    size = struct.calcsize(fmt)
    if offset < 0 or offset + size > len(data):
        raise TruncatedImageError(
            f"cannot read {size} bytes at offset {offset} from a {len(data)}-byte buffer"
        )
    return struct.unpack_from(fmt, data, offset)[0]


def read_u16(data: bytes, offset: int) -> int:
    return _unpack(">H", data, offset)


def read_word(data: bytes, offset: int) -> int:
    return _unpack(">I", data, offset)


def read_png_dimensions(data: bytes) -> ImageDimensions:
    # IHDR is always the first chunk: length(4) + "IHDR"(4) + width(4) + height(4).
    return ImageDimensions(
        width=read_word(data, PNG_WIDTH_OFFSET),
        height=read_word(data, PNG_HEIGHT_OFFSET),
    )


def read_jpeg_dimensions(data: bytes) -> ImageDimensions | None:
    i = 2
    while i < len(data):
        seg_len = read_u16(data, i + 2)
        if data[i] == 0xFF and data[i + 1] in SOF_MARKERS:
            height = read_u16(data, i + 5)
            width = read_u16(data, i + 7)
            return ImageDimensions(width=width, height=height)
        i += seg_len + 2
    return None


def read_dimensions(data: bytes) -> ImageDimensions | None:
    """Return the dimensions encoded in ``data``, or ``None`` if it is not an image.

    Raises :class:`TruncatedImageError` when a recognised header points past the
    end of the buffer.
    """
    if data[:8] == PNG_SIGNATURE:
        return read_png_dimensions(data)
    if data[:2] == JPEG_SOI:
        return read_jpeg_dimensions(data)
    return None


def read_file_dimensions(path: Path) -> ImageDimensions | None:
    return read_dimensions(path.read_bytes())
