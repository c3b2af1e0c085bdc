import struct

import pytest

from cubcaster.bmp import bmp_bytes, bmp_header, save_bmp
from cubcaster.core import CubError
from cubcaster.render import FrameBuffer


def _frame():
    frame = FrameBuffer(2, 3)
    frame.put(0, 0, 0x01020304)
    frame.put(1, 2, 0x0A0B0C0D)
    return frame


def test_header_layout():
    header = bmp_header(5, 3)
    assert len(header) == 54
    assert header[:2] == b"BM"
    assert struct.unpack_from("<IHHI", header, 2) == (0, 0, 0, len(header))
    size, width, height, planes, bpp = struct.unpack_from("<IiiHH", header, 14)
    assert size == 40
    assert (width, height, planes, bpp) == (5, 3, 1, 32)


def test_header_trailing_fields_are_zero():
    header = bmp_header(7, 9)
    assert header[30:] == bytes(24)


def test_pixel_rows_are_bottom_up():
    frame = _frame()
    data = bmp_bytes(frame)[54:]
    row = frame.width * 4
    assert data[4:8] == (0x0A0B0C0D).to_bytes(4, "little")
    assert data[2 * row:2 * row + 4] == (0x01020304).to_bytes(4, "little")


def test_file_ends_with_zero_row():
    frame = _frame()
    data = bmp_bytes(frame)
    row = frame.width * 4
    assert len(data) == 54 + frame.width * frame.height * 4 + row
    assert data[-row:] == bytes(row)


def test_bmp_starts_with_its_header():
    frame = _frame()
    assert bmp_bytes(frame)[:54] == bmp_header(frame.width, frame.height)


def test_save_bmp_writes_file(tmp_path):
    frame = _frame()
    path = tmp_path / "shot.bmp"
    save_bmp(frame, path)
    assert path.read_bytes() == bmp_bytes(frame)


def test_save_bmp_missing_directory(tmp_path):
    with pytest.raises(CubError):
        save_bmp(_frame(), tmp_path / "missing" / "shot.bmp")