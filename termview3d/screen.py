"""Terminal drawing surface made of sub-character pixels."""

from __future__ import annotations

import enum
import shutil
import sys
from dataclasses import dataclass
from typing import Iterator, Sequence, TextIO

DEFAULT_TERMINAL_SIZE = (80, 24)

CURSOR_HOME = "\x1b[H"
CLEAR_ALL = "\x1b[2J"

_BLOCK_CHARS = " ▘▝▀▖▌▞▛▗▚▐▜▄▙▟█"
_BRAILLE_BASE = 0x28 << 8
# (row, column, bit) for each dot of a braille cell.
_BRAILLE_DOTS = (
    (0, 0, 0),
    (1, 0, 1),
    (2, 0, 2),
    (0, 1, 3),
    (1, 1, 4),
    (2, 1, 5),
    (3, 0, 6),
    (3, 1, 7),
)


class PixelKind(enum.Enum):
    """A character cell layout: (columns, rows) of sub-pixels per character."""

    BLOCK = (2, 2)
    BRAILLE = (2, 4)

    @property
    def width(self) -> int:
        return self.value[0]

    @property
    def height(self) -> int:
        return self.value[1]

    def blank(self) -> list[list[bool]]:
        """Return an empty grid of sub-pixels for one character."""
        return [[False] * self.width for _ in range(self.height)]

    def to_char(self, cells: Sequence[Sequence[bool]]) -> str:
        """Return the character showing the given grid of sub-pixels."""
        rows = [[bool(value) for value in row] for row in cells]
        if len(rows) != self.height or any(len(row) != self.width for row in rows):
            raise ValueError(
                f"{self.name.lower()} pixel needs {self.height} rows of {self.width} cells"
            )
        if self is PixelKind.BLOCK:
            (top_left, top_right), (bottom_left, bottom_right) = rows
            index = top_left + 2 * top_right + 4 * bottom_left + 8 * bottom_right
            return _BLOCK_CHARS[index]
        code = _BRAILLE_BASE
        for row, column, bit in _BRAILLE_DOTS:
            if rows[row][column]:
                code |= 1 << bit
        return chr(code)


@dataclass
class Point:
    """A position on the screen, in sub-pixels."""

    x: int
    y: int


class Screen:
    """A grid of on/off sub-pixels rendered to a terminal stream."""

    def __init__(self, output: TextIO | None = None) -> None:
        self.output = output if output is not None else sys.stdout
        self.width = 0
        self.height = 0
        self.content: list[list[bool]] = []
        self._emit(CURSOR_HOME + CLEAR_ALL)

    def _emit(self, text: str) -> None:
        self.output.write(text)
        self.output.flush()

    def fit_to_terminal(self, kind: PixelKind) -> None:
        """Resize so that one character row is left free at the bottom."""
        columns, lines = shutil.get_terminal_size(DEFAULT_TERMINAL_SIZE)
        self.resize(columns * kind.width, max(lines - 1, 0) * kind.height)

    def write(self, value: bool, point: Point) -> None:
        """Set one sub-pixel; points outside the screen are ignored."""
        if 0 < point.x < self.width and 0 < point.y < self.height:
            self.content[point.y][point.x] = value

    def clear(self) -> None:
        self.content = [[False] * self.width for _ in range(self.height)]

    def resize(self, width: int, height: int) -> None:
        """Crop or extend the image with empty cells to the given size."""
        if width < 0 or height < 0:
            raise ValueError("screen dimensions must not be negative")
        rows = self.content[:height]
        rows.extend([] for _ in range(height - len(rows)))
        self.content = [row[:width] + [False] * (width - len(row[:width])) for row in rows]
        self.width = width
        self.height = height

    def line(self, start: Point, end: Point) -> None:
        """Draw a line with Bresenham's algorithm; the end point itself is not set."""
        delta_x = abs(end.x - start.x)
        step_x = 1 if start.x < end.x else -1
        delta_y = -abs(end.y - start.y)
        step_y = 1 if start.y < end.y else -1
        err = delta_x + delta_y
        x, y = start.x, start.y

        self.write(True, Point(x, y))
        while not (x == end.x and y == end.y):
            self.write(True, Point(x, y))
            current = err
            if 2 * current >= delta_y:
                err += delta_y
                x += step_x
            if 2 * current <= delta_x:
                err += delta_x
                y += step_y

    def _text_rows(self, kind: PixelKind) -> Iterator[str]:
        across = -(-self.width // kind.width)
        for top in range(0, self.height, kind.height):
            pixels = [kind.blank() for _ in range(across)]
            for sub_y, row in enumerate(self.content[top : top + kind.height]):
                for x, value in enumerate(row):
                    pixels[x // kind.width][sub_y][x % kind.width] = value
            yield "".join(kind.to_char(pixel) for pixel in pixels)

    def render(self, kind: PixelKind) -> None:
        """Draw the screen from the top-left corner of the terminal."""
        parts = [CURSOR_HOME]
        parts.extend(row + "\r\n" for row in self._text_rows(kind))
        self._emit("".join(parts))