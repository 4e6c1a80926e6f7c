"""Interactive terminal viewer for .obj models."""

from __future__ import annotations

import contextlib
import enum
import math
import os
import re
import select
import shutil
import sys
import time
from dataclasses import dataclass, replace
from typing import Iterator, Sequence, TextIO, Union

from termview3d.model import Model
from termview3d.screen import DEFAULT_TERMINAL_SIZE, PixelKind, Screen
from termview3d.three import Camera, Point

VERSION = "0.1.1"

VIEWPORT_FOV = 1.7
VIEWPORT_DISTANCE = 0.1
FRAME_SECONDS = (1000 // 60) / 1000
MOUSE_SPEED_MULTIPLIER = 30.0
INITIAL_DISTANCE_MULTIPLIER = 1.5
SCROLL_MULTIPLIER = 0.03
PAN_MULTIPLIER = 0.1

HELP_FLAGS = ("-h", "-help", "--h", "--help")
VERSION_FLAGS = ("-v", "-version", "--v", "--version")

HELP_MSG = """\
\x1b[1mt3d\x1b[0m: Visualize .obj files in the terminal!

\x1b[1mUsage\x1b[0m:
    "t3d <filepath.obj>": Interactively view the provided .obj file.
    "t3d --h", "t3d --help", "t3d -h", "t3d -help", "t3d": Help and info.
    "t3d --v", "t3d --version", "t3d -v", "t3d -version": Get version info.

\x1b[1mControls\x1b[0m:
    Scroll down to zoom out, scroll up to zoom in.
    Click and drag the mouse to rotate around the model.
    Click and drag the mouse while holding [shift] to pan.

    Press [b] to toggle block mode.
    Press [p] to toggle vertices mode.
"""

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_MOUSE_ON = "\x1b[?1000h\x1b[?1002h\x1b[?1003h\x1b[?1015h\x1b[?1006h"
_MOUSE_OFF = "\x1b[?1006l\x1b[?1015l\x1b[?1003l\x1b[?1002l\x1b[?1000l"
_CLEAR_LINE = "\x1b[2K"

_INPUT = re.compile(
    r"(?P<mouse>\x1b\[<(?P<button>\d+);(?P<column>\d+);(?P<row>\d+)(?P<final>[Mm]))"
    r"|(?P<csi>\x1b\[[0-?]*[ -/]*[@-~])"
    r"|(?P<escape>\x1b.?)"
    r"|(?P<char>.)",
    re.DOTALL,
)


class UsageError(ValueError):
    """Raised when the command line cannot be understood."""


class Action(enum.Enum):
    HELP = "help"
    VERSION = "version"
    VIEW = "view"


@dataclass(frozen=True)
class Command:
    action: Action
    path: str | None = None


def parse_args(argv: Sequence[str]) -> Command:
    """Decide what to do from the arguments that follow the program name."""
    args = list(argv)
    if len(args) > 1:
        raise UsageError("Please supply only one file path to visualize.")
    if not args or args[0] in HELP_FLAGS:
        return Command(Action.HELP)
    if args[0] in VERSION_FLAGS:
        return Command(Action.VERSION)
    return Command(Action.VIEW, args[0])


def status_message(
    points_mode: bool,
    braille_mode: bool,
    width: int,
    height: int,
    fps: float,
    terminal_width: int,
) -> str:
    """Return the longest status line that fits in the terminal width."""
    points_msg = f"rendering: {'vertices' if points_mode else 'edges'}"
    braille_msg = f"display mode: {'braile' if braille_mode else 'blocks'}"
    fps_msg = f"fps: {fps:3.0f}"
    resolution_msg = f"resolution: {width} x {height}"
    candidates = (
        " | ".join((points_msg, braille_msg, resolution_msg, fps_msg)),
        " | ".join((points_msg, braille_msg, resolution_msg)),
        " | ".join((points_msg, braille_msg)),
        points_msg,
    )
    return next((msg for msg in candidates if terminal_width > len(msg)), "")


@dataclass(frozen=True)
class _Key:
    char: str
    ctrl: bool = False


class _MouseKind(enum.Enum):
    DOWN = enum.auto()
    UP = enum.auto()
    DRAG = enum.auto()
    MOVE = enum.auto()
    SCROLL_UP = enum.auto()
    SCROLL_DOWN = enum.auto()
    OTHER = enum.auto()


@dataclass(frozen=True)
class _Mouse:
    kind: _MouseKind
    column: int
    row: int
    shift_only: bool


_Event = Union[_Key, _Mouse]


def _decode_mouse(button: int, column: int, row: int, final: str) -> _Mouse:
    shift, alt, ctrl = bool(button & 4), bool(button & 8), bool(button & 16)
    base = button & 3
    if button & 64:
        kind = {0: _MouseKind.SCROLL_UP, 1: _MouseKind.SCROLL_DOWN}.get(base, _MouseKind.OTHER)
    elif button & 32:
        kind = _MouseKind.MOVE if base == 3 else _MouseKind.DRAG
    elif final == "m" or base == 3:
        kind = _MouseKind.UP
    else:
        kind = _MouseKind.DOWN
    return _Mouse(kind, max(column - 1, 0), max(row - 1, 0), shift and not alt and not ctrl)


def _parse_input(data: str) -> Iterator[_Event]:
    """Turn raw terminal input into key and mouse events."""
    for match in _INPUT.finditer(data):
        if match["mouse"]:
            yield _decode_mouse(
                int(match["button"]), int(match["column"]), int(match["row"]), match["final"]
            )
        elif match["char"]:
            char = match["char"]
            if "\x01" <= char <= "\x1a" and char not in "\t\n\r":
                yield _Key(chr(ord(char) + 96), ctrl=True)
            else:
                yield _Key(char)


@contextlib.contextmanager
def _raw_terminal(output: TextIO) -> Iterator[int]:
    """Put the terminal in raw mode with mouse reporting for the duration."""
    import termios
    import tty

    fd = sys.stdin.fileno()
    saved = termios.tcgetattr(fd)
    tty.setraw(fd)
    output.write(_HIDE_CURSOR + _MOUSE_ON)
    output.flush()
    try:
        yield fd
    finally:
        output.write(_SHOW_CURSOR + _MOUSE_OFF)
        output.flush()
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def _read_pending(fd: int) -> str:
    chunks = []
    while select.select([fd], [], [], 0)[0]:
        data = os.read(fd, 4096)
        if not data:
            break
        chunks.append(data)
    return b"".join(chunks).decode("utf-8", "replace")


class _Viewer:
    """Orbiting camera state driven by mouse and key events."""

    def __init__(self, model: Model, output: TextIO) -> None:
        self.model = model
        low, high = model.world_bounds()
        self.center = model.model_to_world(
            Point((low.x + high.x) / 2.0, (low.y + high.y) / 2.0, (low.z + high.z) / 2.0)
        )
        self.diagonal = math.dist((low.x, low.y, low.z), (high.x, high.y, high.z))
        self.camera = Camera(
            replace(self.center),
            viewport_distance=VIEWPORT_DISTANCE,
            viewport_fov=VIEWPORT_FOV,
            screen=Screen(output),
            braille_mode=True,
        )
        self.view_yaw = 0.0
        self.view_pitch = 0.0
        self.distance = self.diagonal * INITIAL_DISTANCE_MULTIPLIER
        self.points_mode = False
        self.braille_mode = True
        self.pan_mode = False
        self.mouse_speed = (0.0, 0.0)
        self.last_mouse = (0, 0)

    def handle(self, events: Iterator[_Event]) -> bool:
        """Apply one frame's events; return False when asked to quit."""
        start = self.last_mouse
        count = 0
        for event in events:
            if isinstance(event, _Key):
                if event.ctrl and event.char == "c":
                    return False
                if event.char == "p":
                    self.points_mode = not self.points_mode
                if event.char == "b":
                    self.braille_mode = not self.braille_mode
                    self.camera.braille_mode = self.braille_mode
                continue

            position = (event.column, event.row)
            if event.kind is _MouseKind.DOWN:
                self.pan_mode = event.shift_only
                self.last_mouse = start = position
                count += 1
            elif event.kind is _MouseKind.DRAG:
                self.pan_mode = event.shift_only
                width = max(self.camera.screen.width, 1)
                delta_x = event.column - start[0]
                delta_y = start[1] - event.row
                self.mouse_speed = (
                    delta_x / width * MOUSE_SPEED_MULTIPLIER,
                    delta_y / width * MOUSE_SPEED_MULTIPLIER,
                )
                self.last_mouse = position
                count += 1
            elif event.kind is _MouseKind.SCROLL_DOWN:
                self.distance += self.diagonal * SCROLL_MULTIPLIER
            elif event.kind is _MouseKind.SCROLL_UP:
                self.distance = max(self.distance - self.diagonal * SCROLL_MULTIPLIER, 0.0)

        if count == 0:
            self.mouse_speed = (0.0, 0.0)
            self.pan_mode = False
        return True

    def update_camera(self) -> None:
        speed_x, speed_y = self.mouse_speed
        camera = self.camera
        if self.pan_mode:
            pan = self.diagonal * PAN_MULTIPLIER
            center = self.center
            center.x -= speed_x * math.cos(camera.yaw) * pan
            center.z += speed_x * math.sin(camera.yaw) * pan
            center.y -= speed_y * math.cos(camera.pitch) * pan
            center.x += speed_y * math.sin(camera.yaw) * math.sin(camera.pitch) * pan
            center.z += speed_y * math.cos(camera.yaw) * math.sin(camera.pitch) * pan
        else:
            self.view_yaw -= speed_x
            self.view_pitch -= speed_y

        cos_pitch = math.cos(self.view_pitch)
        camera.coordinates.z = -math.cos(self.view_yaw) * cos_pitch * self.distance + self.center.z
        camera.coordinates.x = math.sin(self.view_yaw) * cos_pitch * self.distance + self.center.x
        camera.coordinates.y = math.sin(self.view_pitch) * self.distance + self.center.y
        camera.yaw = -self.view_yaw
        camera.pitch = -self.view_pitch

    def draw(self) -> None:
        kind = PixelKind.BRAILLE if self.braille_mode else PixelKind.BLOCK
        screen = self.camera.screen
        screen.fit_to_terminal(kind)
        screen.clear()
        if self.points_mode:
            self.camera.plot_model_points(self.model)
        else:
            self.camera.plot_model_edges(self.model)
        screen.render(kind)


def _run(model: Model, output: TextIO) -> None:
    with _raw_terminal(output) as fd:
        viewer = _Viewer(model, output)
        while True:
            start = time.monotonic()
            if not viewer.handle(_parse_input(_read_pending(fd))):
                return
            viewer.update_camera()
            viewer.draw()

            remaining = FRAME_SECONDS - (time.monotonic() - start)
            if remaining > 0:
                time.sleep(remaining)

            elapsed = time.monotonic() - start
            fps = 1.0 / elapsed if elapsed > 0 else math.inf
            screen = viewer.camera.screen
            message = status_message(
                viewer.points_mode,
                viewer.braille_mode,
                screen.width,
                screen.height,
                fps,
                shutil.get_terminal_size(DEFAULT_TERMINAL_SIZE).columns,
            )
            output.write(_CLEAR_LINE + message)
            output.flush()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the viewer; return the process exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        command = parse_args(args)
    except UsageError as error:
        print(error, file=sys.stderr)
        return 1

    if command.action is Action.HELP:
        sys.stdout.write(HELP_MSG)
        return 0
    if command.action is Action.VERSION:
        print(VERSION)
        return 0

    try:
        model = Model.from_obj(command.path or "")
    except (OSError, ValueError) as error:
        print(error, file=sys.stderr)
        return 1

    try:
        _run(model, sys.stdout)
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())