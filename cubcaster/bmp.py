"""Saving a rendered frame as a 32-bit BMP image."""

import struct

from .core import CubError

_FILE_HEADER_SIZE = 14
_INFO_HEADER_SIZE = 40
_BITS_PER_PIXEL = 32


def bmp_header(width, height):
    """The file and info headers of a bottom-up 32-bit BMP image."""
    file_header = struct.pack(
        "<2sIHHI", b"BM", 0, 0, 0, _FILE_HEADER_SIZE + _INFO_HEADER_SIZE
    )
    info_header = struct.pack(
        "<IiiHHIIiiII",
        _INFO_HEADER_SIZE,
        width,
        height,
        1,
        _BITS_PER_PIXEL,
        0,
        0,
        0,
        0,
        0,
        0,
    )
    return file_header + info_header


def bmp_bytes(frame):
    """The whole BMP file for ``frame``: headers, rows bottom-up, a zero row."""
    row_bytes = frame.width * 4
    rows = (
        bytes(frame.data[y * frame.size_line:y * frame.size_line + row_bytes])
        for y in reversed(range(frame.height))
    )
    return bmp_header(frame.width, frame.height) + b"".join(rows) + bytes(row_bytes)


def save_bmp(frame, path):
    """Write ``frame`` to ``path`` as a BMP file."""
    try:
        with open(path, "wb") as fh:
            fh.write(bmp_bytes(frame))
    except OSError as exc:
        raise CubError("cannot write screenshot") from exc