# termview3d

View 3D models in your terminal. `termview3d` reads a Wavefront `.obj` file
and draws its wireframe, or only its vertices, with Unicode braille or block
characters. It redraws at up to about 60 frames a second.

## Installation

```
pip install termview3d
```

The interactive viewer puts the terminal into raw mode with `termios` and
`tty`, so it needs a POSIX system and a terminal that reports mouse events
(SGR mouse mode). The library modules have no such requirement.

## Usage

```
t3d model.obj      # view a model interactively
t3d --help         # help and controls
t3d --version      # print the version
```

`-h`, `-help`, `--h` and `--help` show the help text, as does running `t3d`
with no arguments. `-v`, `-version`, `--v` and `--version` print the version.
Passing more than one argument, or a file that cannot be read or parsed,
prints an error to standard error and exits with status 1.

## Controls

- Scroll down to zoom out, scroll up to zoom in.
- Click and drag the mouse to rotate around the model.
- Click and drag while holding **Shift** to pan.
- Press **b** to switch between braille and block display.
- Press **p** to switch between drawing edges and drawing vertices.
- Press **Ctrl+C** to quit.

The bottom line of the terminal is a status line. It shows the rendering
mode, the display mode, the resolution in sub-pixels and the frame rate.
Parts are dropped from the end when the terminal is too narrow for them.

## Supported .obj content

- Vertices (`v`) take three coordinates. An optional fourth value is allowed
  and ignored.
- Lines (`l`) become the edges between consecutive vertices.
- Faces (`f`, `fo`) become closed outlines.
- Only the vertex index of a reference such as `3/1/2` is used.
- A backslash at the end of a line continues that line onto the next.
- Comments and all other statements are ignored.

Malformed input raises `termview3d.model.ObjParseError`, a `ValueError`.
This covers a vertex statement with the wrong number of values, a
coordinate that is not a number, an index that is zero, negative or not an
integer, and an edge that refers to a vertex that does not exist.
Duplicate edges are merged.

## Using it as a library

```python
from termview3d.model import Model
from termview3d.three import Point

cube = Model.cube(2.0, Point(0.0, 0.0, 0.0))
low, high = cube.world_bounds()

mesh = Model.parse_obj("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n", Point(0.0, 0.0, 0.0))
print(len(mesh.edges))  # 3
```

`Model.from_obj(path, position)` reads and parses a file.

### termview3d.screen

`termview3d.screen.Screen` is a grid of on/off sub-pixels, written to a text
stream (standard output by default). It supports these methods:

- `resize` changes the grid's size.
- `fit_to_terminal` matches the grid to the terminal.
- `write` sets a single sub-pixel. Points outside the grid are ignored.
- `line` draws a line with Bresenham's algorithm.
- `clear` turns every sub-pixel off.
- `render` draws the grid from the top-left corner of the terminal.

`PixelKind.BRAILLE` packs 2×4 sub-pixels into each character, and
`PixelKind.BLOCK` packs 2×2. `PixelKind.to_char` gives the character for one
cell.

### termview3d.three

`termview3d.three.Camera` is a pinhole camera. It has a position and yaw,
pitch and roll angles, and it projects world points onto its screen.

- `write` plots a single point.
- `edge` plots an edge, clipped against the viewport plane.
- `plot_model_points` plots every vertex of a model.
- `plot_model_edges` plots every edge of a model.

## Limitations

Models are drawn only as wireframes or point clouds. Faces are not filled or
shaded. Texture coordinates, normals and materials are ignored, and relative
(negative) vertex indices are rejected as parse errors.