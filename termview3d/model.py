"""Wireframe models and a reader for Wavefront .obj files."""

from __future__ import annotations

import functools
import math
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from termview3d.three import Point

_FLOAT = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_INDEX = re.compile(r"\+?[0-9]+")


class ObjParseError(ValueError):
    """Raised when the text of an .obj file cannot be understood."""

    def __init__(self, message: str = "Error parsing .obj file.") -> None:
        super().__init__(message)


def _parse_float(token: str) -> float:
    if not _FLOAT.fullmatch(token):
        raise ObjParseError()
    return float(token)


def _parse_indices(tokens: Iterable[str], max_parts: int) -> list[int]:
    """Turn vertex references such as '3', '3/1' or '3/1/2' into 0-based indices."""
    indices = []
    for token in tokens:
        parts = token.split("/")
        if len(parts) > max_parts or not _INDEX.fullmatch(parts[0]):
            raise ObjParseError()
        index = int(parts[0]) - 1
        if index < 0:
            raise ObjParseError()
        indices.append(index)
    return indices


def _fmin(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return min(a, b)


def _fmax(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return max(a, b)


def _copy(point: Point) -> Point:
    return Point(point.x, point.y, point.z)


@dataclass
class Model:
    """Points and edges defined in model space, placed at a world position."""

    points: list[Point] = field(default_factory=list)
    edges: list[tuple[Point, Point]] = field(default_factory=list)
    position: Point = field(default_factory=lambda: Point(0.0, 0.0, 0.0))

    @classmethod
    def cube(cls, side_length: float, position: Point | None = None) -> Model:
        """Return the twelve edges of a cube centred on the model origin."""
        half = side_length / 2.0
        front = [(-half, -half, half), (-half, half, half), (half, half, half), (half, -half, half)]
        rear = [(x, y, -z) for x, y, z in front]

        corner_pairs = []
        for face in (front, rear):
            corner_pairs.extend(zip(face, face[1:] + face[:1]))
        corner_pairs.extend(zip(rear, front))

        edges = [(Point(*start), Point(*end)) for start, end in corner_pairs]
        return cls([], edges, position if position is not None else Point(0.0, 0.0, 0.0))

    @classmethod
    def parse_obj(cls, text: str, position: Point | None = None) -> Model:
        """Build a model from the vertices, lines and faces of .obj text."""
        vertices: list[Point] = []
        chains: list[tuple[list[int], bool]] = []

        for line in text.replace("\\\n", " ").split("\n"):
            tokens = line.split()
            if not tokens:
                continue
            keyword, args = tokens[0], tokens[1:]
            if keyword == "v":
                if len(args) not in (3, 4):
                    raise ObjParseError()
                x, y, z = (_parse_float(token) for token in args[:3])
                vertices.append(Point(x, y, z))
            elif keyword == "l":
                chains.append((_parse_indices(args, 2), False))
            elif keyword in ("f", "fo"):
                chains.append((_parse_indices(args, 3), True))

        pairs: set[tuple[int, int]] = set()
        for indices, closed in chains:
            if len(indices) >= 2:
                pairs.update(zip(indices, indices[1:]))
                if closed:
                    pairs.add((indices[-1], indices[0]))

        def vertex(index: int) -> Point:
            if index >= len(vertices):
                raise ObjParseError()
            return _copy(vertices[index])

        edges = [(vertex(start), vertex(end)) for start, end in sorted(pairs)]
        return cls(vertices, edges, position if position is not None else Point(0.0, 0.0, 0.0))

    @classmethod
    def from_obj(cls, path: str | os.PathLike[str], position: Point | None = None) -> Model:
        """Read and parse an .obj file."""
        return cls.parse_obj(Path(path).read_text(encoding="utf-8"), position)

    def model_to_world(self, point: Point) -> Point:
        return Point(
            point.x + self.position.x,
            point.y + self.position.y,
            point.z + self.position.z,
        )

    def world_bounds(self) -> tuple[Point, Point]:
        """Return the minimum and maximum corners of the model's bounding box."""
        corners = [point for edge in self.edges for point in edge] + self.points
        if not corners:
            return Point(0.0, 0.0, 0.0), Point(0.0, 0.0, 0.0)
        first = self.points[0] if self.points else corners[0]
        ordered = [first, *corners]

        def fold(function, axis: str) -> float:
            return functools.reduce(function, (getattr(point, axis) for point in ordered))

        low = Point(*(fold(_fmin, axis) for axis in "xyz"))
        high = Point(*(fold(_fmax, axis) for axis in "xyz"))
        return low, high