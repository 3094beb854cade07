import struct

import pytest

from gtecore.font import (
    Bitmap,
    BitmapError,
    Font,
    format_number,
    glyph_quad,
    parse_bmp,
    read_bmp,
)


def _bmp_windows(width, height, bits, rows, compression=0):
    info = struct.pack("<IiiHHIIiiII", 40, width, height, 1, bits, compression, 0, 0, 0, 0, 0)
    body = b"".join(rows)
    header = b"BM" + struct.pack("<IHHI", 14 + len(info) + len(body), 0, 0, 54)
    return header + info + body


def _bmp_os2(width, height, bits, rows):
    info = struct.pack("<IHHHH", 12, width, height, 1, bits)
    body = b"".join(rows)
    header = b"BM" + struct.pack("<IHHI", 14 + len(info) + len(body), 0, 0, 26)
    return header + info + body


def _two_by_two_24():
    # BGR pixels, rows padded to 8 bytes
    row0 = bytes((10, 20, 30, 0, 0, 0)) + b"\xee\xee"
    row1 = bytes((255, 0, 0, 1, 2, 3)) + b"\xee\xee"
    return _bmp_windows(2, 2, 24, [row0, row1])


def test_parse_24_bit_swaps_channels_and_sets_alpha():
    bmp = parse_bmp(_two_by_two_24())
    assert (bmp.width, bmp.height) == (2, 2)
    assert bmp.pixel(0, 0) == (30, 20, 10, 255)
    assert bmp.pixel(1, 0) == (0, 0, 0, 0)
    assert bmp.pixel(0, 1) == (0, 0, 255, 255)
    assert bmp.pixel(1, 1) == (3, 2, 1, 255)
    assert len(bmp.pixels) == 4 * 2 * 2


def test_parse_32_bit_keeps_alpha():
    row = bytes((1, 2, 3, 4, 5, 6, 7, 8))
    bmp = parse_bmp(_bmp_windows(2, 1, 32, [row]))
    assert bmp.pixel(0, 0) == (3, 2, 1, 4)
    assert bmp.pixel(1, 0) == (7, 6, 5, 8)


def test_parse_os2_bitmap():
    row = bytes((9, 8, 7)) + b"\x00"
    bmp = parse_bmp(_bmp_os2(1, 1, 24, [row]))
    assert bmp == Bitmap(1, 1, bytes((7, 8, 9, 255)))


def test_os2_requires_24_bits():
    with pytest.raises(BitmapError):
        parse_bmp(_bmp_os2(1, 1, 32, [bytes(4)]))


def test_bad_magic_rejected():
    data = b"XX" + _two_by_two_24()[2:]
    with pytest.raises(BitmapError):
        parse_bmp(data)


def test_compressed_rejected():
    with pytest.raises(BitmapError):
        parse_bmp(_bmp_windows(1, 1, 24, [bytes(4)], compression=1))


def test_eight_bit_rejected():
    with pytest.raises(BitmapError):
        parse_bmp(_bmp_windows(1, 1, 8, [bytes(4)]))


def test_truncated_data_rejected():
    with pytest.raises(BitmapError):
        parse_bmp(_two_by_two_24()[:-3])


def test_read_bmp_from_file(tmp_path):
    path = tmp_path / "font.bmp"
    path.write_bytes(_two_by_two_24())
    assert read_bmp(path) == parse_bmp(_two_by_two_24())


def test_read_bmp_missing_file(tmp_path):
    with pytest.raises(BitmapError):
        read_bmp(tmp_path / "missing.bmp")


def test_font_load_sets_size(tmp_path):
    path = tmp_path / "font.bmp"
    path.write_bytes(_two_by_two_24())
    font = Font()
    bmp = font.load(path)
    assert font.bitmap is bmp
    assert (font.width, font.height) == (2, 2)


def test_format_number_limits():
    assert format_number(1000000) == "1000000"
    assert format_number(-1000000) == "-1000000"
    with pytest.raises(ValueError):
        format_number(1000001)
    with pytest.raises(ValueError):
        format_number(-1000001)


def test_glyph_vertices_follow_size():
    size = 20.0
    quad = glyph_quad(65, size)
    assert quad.vertices[0] == (0.0, 0.0)
    assert quad.vertices[2] == (pytest.approx(size * 0.7), pytest.approx(size * 0.8))
    assert quad.next_x == int(size * 0.5)


def test_glyph_tex_coords_layout():
    a = glyph_quad(65, 10)
    b = glyph_quad(66, 10)
    below = glyph_quad(65 + 16, 10)
    for u, v in a.tex_coords:
        assert 0.0 <= u <= 1.0 and 0.0 <= v <= 1.0
    assert b.tex_coords[0][0] == pytest.approx(a.tex_coords[0][0] + 1 / 16)
    assert below.tex_coords[0][0] == pytest.approx(a.tex_coords[0][0])
    assert below.tex_coords[0][1] == pytest.approx(a.tex_coords[0][1] - 1 / 16)
    # code 0 sits in the top row of the sheet
    assert glyph_quad(0, 10).tex_coords[2][1] > glyph_quad(255, 10).tex_coords[2][1]


def test_glyph_code_out_of_range():
    with pytest.raises(ValueError):
        glyph_quad(256, 10)
    with pytest.raises(ValueError):
        glyph_quad(-1, 10)


def test_layout_text_advances():
    font = Font(size=10)
    quads = font.layout_text(3, 7, "abc")
    assert [q.code for q in quads] == [ord(c) for c in "abc"]
    assert quads[0].x == 3
    assert all(q.y == 7 for q in quads)
    step = quads[1].x - quads[0].x
    assert step > 0
    assert quads[2].x - quads[1].x == step
    assert all(q.next_x == nxt.x for q, nxt in zip(quads, quads[1:]))


def test_layout_text_rejects_wide_characters():
    with pytest.raises(ValueError):
        Font().layout_text(0, 0, "\u20ac")


def test_layout_number_matches_text():
    font = Font(size=12)
    assert font.layout_number(5, 5, -42) == font.layout_text(5, 5, "-42")
    assert font.layout_number(5, 5, 2000000) == []