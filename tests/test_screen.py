import io
import os
from unittest.mock import patch

import pytest

from termview3d import screen
from termview3d.screen import PixelKind, Point, Screen


def make_screen(width=10, height=8):
    s = Screen(output=io.StringIO())
    s.resize(width, height)
    return s


def set_cells(s):
    return {(x, y) for y, row in enumerate(s.content) for x, value in enumerate(row) if value}


def test_block_blank_and_full():
    assert PixelKind.BLOCK.to_char([[False, False], [False, False]]) == " "
    assert PixelKind.BLOCK.to_char([[True, True], [True, True]]) == "█"


@pytest.mark.parametrize(
    "cells, expected",
    [
        ([[True, False], [False, False]], "▘"),
        ([[False, False], [True, True]], "▄"),
        ([[False, True], [True, False]], "▞"),
        ([[True, False], [True, False]], "▌"),
    ],
)
def test_block_chars(cells, expected):
    assert PixelKind.BLOCK.to_char(cells) == expected


def test_braille_blank():
    assert PixelKind.BRAILLE.to_char(PixelKind.BRAILLE.blank()) == chr(0x28 << 8)


def test_braille_all_patterns_distinct():
    chars = set()
    for code in range(256):
        cells = [[bool(code >> (row * 2 + col) & 1) for col in range(2)] for row in range(4)]
        chars.add(PixelKind.BRAILLE.to_char(cells))
    assert len(chars) == 256
    assert all(0x2800 <= ord(c) <= 0x28FF for c in chars)


def test_to_char_wrong_shape():
    with pytest.raises(ValueError):
        PixelKind.BLOCK.to_char(PixelKind.BRAILLE.blank())


def test_new_screen_clears_terminal():
    out = io.StringIO()
    s = Screen(output=out)
    assert out.getvalue() == screen.CURSOR_HOME + screen.CLEAR_ALL
    assert (s.width, s.height, s.content) == (0, 0, [])


def test_write_inside_and_origin_ignored():
    s = make_screen()
    s.write(True, Point(3, 2))
    s.write(True, Point(0, 0))
    s.write(True, Point(10, 2))
    s.write(True, Point(3, -1))
    assert set_cells(s) == {(3, 2)}


def test_clear_resets_content():
    s = make_screen()
    s.write(True, Point(3, 2))
    s.clear()
    assert set_cells(s) == set()
    assert len(s.content) == s.height
    assert all(len(row) == s.width for row in s.content)


def test_resize_keeps_and_crops():
    s = make_screen(10, 8)
    s.write(True, Point(2, 2))
    s.write(True, Point(8, 7))
    s.resize(20, 12)
    assert (s.width, s.height) == (20, 12)
    assert len(s.content) == 12 and all(len(row) == 20 for row in s.content)
    assert set_cells(s) == {(2, 2), (8, 7)}
    s.resize(5, 5)
    assert len(s.content) == 5 and all(len(row) == 5 for row in s.content)
    assert set_cells(s) == {(2, 2)}


def test_resize_negative_rejected():
    with pytest.raises(ValueError):
        make_screen().resize(-1, 3)


def test_line_excludes_end_point():
    s = make_screen(20, 20)
    s.line(Point(2, 3), Point(7, 3))
    assert set_cells(s) == {(x, 3) for x in range(2, 7)}


def test_line_single_point():
    s = make_screen()
    s.line(Point(4, 4), Point(4, 4))
    assert set_cells(s) == {(4, 4)}


@pytest.mark.parametrize(
    "start, end",
    [((2, 2), (15, 9)), ((15, 9), (2, 2)), ((3, 17), (12, 1)), ((5, 5), (5, 18))],
)
def test_line_cell_count_and_connectivity(start, end):
    s = make_screen(20, 20)
    s.line(Point(*start), Point(*end))
    cells = set_cells(s)
    assert len(cells) == max(abs(end[0] - start[0]), abs(end[1] - start[1]))
    assert start in cells and end not in cells
    for x, y in cells:
        if (x, y) != start:
            assert any((x + dx, y + dy) in cells for dx in (-1, 0, 1) for dy in (-1, 0, 1) if dx or dy)


@pytest.mark.parametrize("kind", list(PixelKind))
def test_render_layout(kind):
    out = io.StringIO()
    s = Screen(output=out)
    s.resize(7, 9)
    out.truncate(0)
    out.seek(0)
    s.render(kind)
    text = out.getvalue()
    assert text.startswith(screen.CURSOR_HOME)
    rows = text[len(screen.CURSOR_HOME):].split("\r\n")
    assert rows[-1] == ""
    rows = rows[:-1]
    assert len(rows) == -(-9 // kind.height)
    assert all(row == kind.to_char(kind.blank()) * 4 for row in rows)


def test_render_places_pixels():
    out = io.StringIO()
    s = Screen(output=out)
    s.resize(4, 4)
    s.write(True, Point(1, 1))
    s.write(True, Point(3, 3))
    out.truncate(0)
    out.seek(0)
    s.render(PixelKind.BLOCK)
    rows = out.getvalue()[len(screen.CURSOR_HOME):].split("\r\n")[:-1]
    top_left = PixelKind.BLOCK.to_char([[False, False], [False, True]])
    assert rows == [top_left + " ", " " + top_left]


@pytest.mark.parametrize("kind", list(PixelKind))
def test_fit_to_terminal(kind):
    s = make_screen()
    with patch("termview3d.screen.shutil.get_terminal_size", return_value=os.terminal_size((30, 11))):
        s.fit_to_terminal(kind)
    assert s.width == 30 * kind.width
    assert s.height == 10 * kind.height
    assert len(s.content) == s.height