# cubcaster

cubcaster is a grid-based raycasting engine. It reads a `.cub` scene file,
which describes wall textures, a sprite texture, floor and ceiling colours,
a resolution and a map. It then either shows the scene in a window that you
can walk around in, or writes a single frame to a BMP file.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Running

Open a scene in a window:

```
cubcaster maps/level.cub
```

Render the first frame and save it as `screen/Cub3D.bmp` without opening a
window:

```
cubcaster maps/level.cub --save
```

The `screen` directory must already exist. The file name must end in `.cub`
and be longer than the suffix alone. Any other arguments are rejected with
`ERROR : invalid argument` on standard error and exit status 1. An error in
the scene file is reported as `ERROR : <message>` and also ends with status 1.

### Controls

| Key           | Action                          |
|---------------|---------------------------------|
| `W` / `S`     | move forward / backward         |
| `A` / `D`     | strafe left / right             |
| `←` / `→`     | turn left / right               |
| `Tab`         | switch between 3D view and map  |
| `Esc`         | quit                            |

Each key press moves or turns once; holding a key down does not repeat it.
Closing the window also quits.

## Scene files

A scene file starts with settings, one per line, in any order, with blank
lines allowed between them. The map begins at the first line whose first
non-space character is `1`.

```
R 1280 720
NO textures/north.xpm
SO textures/south.xpm
WE textures/west.xpm
EA textures/east.xpm
S textures/sprite.xpm
F 120,80,40
C 100,160,255
111111
1020N1
100001
111111
```

* `R width height` sets the window size. It is capped at the size of the
  display when one is available, and must be at least 60×60.
* `NO`, `SO`, `WE`, `EA` name the wall textures and `S` the sprite texture.
  Textures are read with Pillow, so XPM, PNG and the other formats it reads
  all work. Fully transparent pixels are treated as black, and black pixels
  of the sprite are not drawn.
* `F` and `C` set the floor and ceiling colours as `R,G,B`, each at most 255.

Map cells are `1` for a wall, `0` for floor, `2` for a sprite, a space for
empty space, and one of `N`, `S`, `E`, `W` for where the player starts and
which way they face. Shorter rows are padded with spaces. The first and last
rows may hold only walls and spaces, every row must start and end with a wall
or a space, a space may only touch walls or other spaces, and there must be
exactly one player.

Every setting must appear exactly once; a missing, repeated or unknown
setting stops the program with a message naming the problem.

## Using it from Python

The parts can be used on their own, for example to check a scene or draw a
frame in a script:

```python
from cubcaster.config import load_scene
from cubcaster.render import Renderer
from cubcaster.bmp import save_bmp

scene = load_scene("maps/level.cub")
frame = Renderer(scene).render()
save_bmp(frame, "frame.bmp")
```

* `cubcaster.config` — `load_scene(path, screen_size=None, texture_loader=load_texture)`
  reads a scene file and `parse_scene` does the same for a list of lines;
  both return a `SceneConfig`. Pass your own `texture_loader` to avoid
  reading image files. `parse_color`, `parse_resolution`, `split_fields` and
  `atoi` parse the individual settings.
* `cubcaster.mapgrid` — `parse_map_lines` and `validate_map` check a map and
  return a `GameMap` and its `Player`.
* `cubcaster.world` — `World` holds the grid and the player, with `move`,
  `rotate` and `cell`.
* `cubcaster.raycast` — `cast_rays(world, width)` returns one `RayHit` per
  screen column.
* `cubcaster.render` — `Renderer.render(show_map=False)` draws the 3D view,
  or the top-down map, into a `FrameBuffer` and returns it.
  `FrameBuffer.pixel(x, y)` and `FrameBuffer.put(x, y, argb)` read and write
  single pixels.
* `cubcaster.bmp` — `bmp_bytes(frame)` builds a bottom-up 32-bit BMP (the
  pixel rows are followed by one extra row of zero bytes) and
  `save_bmp(frame, path)` writes it.
* `cubcaster.app` — `Game` ties a scene to a renderer: `handle_key` takes the
  key codes defined in `cubcaster.core`, `step` renders one frame, and `run`
  opens the pygame window. `main(argv=None)` is the `cubcaster` command.

Errors in scene files and screenshots are raised as `cubcaster.core.CubError`.