"""Scene file parsing: textures, resolution, colours and the map."""

from dataclasses import dataclass, field

from .core import CubError, minimap_scale
from .mapgrid import GameMap, parse_map_lines
from .texture import Texture, load_texture

MIN_RESOLUTION = 60

_TEXTURE_KEYS = {
    "NO ": "north",
    "SO ": "south",
    "WE ": "west",
    "EA ": "east",
    "S ": "sprite",
}
_COLOR_KEYS = {"F ": "floor", "C ": "ceiling"}
_ATOI_SPACE = {" ", "\b", "\t", "\n", "\v", "\f", "\r"}


@dataclass
class SceneConfig:
    """Everything a scene file describes, validated and ready to render."""

    north: Texture
    south: Texture
    west: Texture
    east: Texture
    sprite: Texture
    width: int
    height: int
    floor: int
    ceiling: int
    game_map: GameMap
    minimap_cell: int = field(init=False)
    player_radius: float = field(init=False)

    def __post_init__(self):
        self.minimap_cell, self.player_radius = minimap_scale(
            self.width, self.height, self.game_map.width, self.game_map.height
        )


def split_fields(text, sep):
    """Split ``text`` on ``sep``, dropping empty pieces."""
    return [piece for piece in text.split(sep) if piece]


def atoi(text):
    """Parse a leading decimal integer, ignoring what follows; 0 if none."""
    pos = 0
    while pos < len(text) and text[pos] in _ATOI_SPACE:
        pos += 1
    sign = 1
    if pos < len(text) and text[pos] in "+-":
        if text[pos] == "-":
            sign = -1
        pos += 1
    value = 0
    while pos < len(text) and "0" <= text[pos] <= "9":
        value = value * 10 + ord(text[pos]) - ord("0")
        pos += 1
    return sign * value


def parse_color(text):
    """Turn ``"R,G,B"`` into a 0xRRGGBB integer."""
    fields = split_fields(text, ",")
    color = 0
    for index, piece in enumerate(fields):
        value = atoi(piece)
        if value > 255 or index > 2:
            raise CubError("invalid color")
        color = (color << 8) + value
    if len(fields) < 3:
        raise CubError("invalid color")
    return color


def parse_resolution(line, screen_size):
    """Read an ``R width height`` line, capped to ``screen_size`` if given."""
    fields = split_fields(line, " ")
    if len(fields) != 3:
        raise CubError("with R")
    width, height = atoi(fields[1]), atoi(fields[2])
    if screen_size is not None:
        width = min(width, screen_size[0])
        height = min(height, screen_size[1])
    if width < MIN_RESOLUTION or height < MIN_RESOLUTION:
        raise CubError("with R")
    return width, height


def _load(line, texture_loader):
    fields = split_fields(line, " ")
    if len(fields) != 2:
        raise CubError("invalid text or 2 times text")
    try:
        return texture_loader(fields[1])
    except (CubError, OSError, ValueError) as exc:
        raise CubError("invalid text") from exc


def _parse_setting(line, settings, screen_size, texture_loader):
    for prefix, name in _TEXTURE_KEYS.items():
        if line.startswith(prefix):
            if settings.get(name) is not None:
                raise CubError("invalid text or 2 times text")
            settings[name] = _load(line, texture_loader)
            return
    if line.startswith("R "):
        if settings.get("width") is not None:
            raise CubError("with R")
        settings["width"], settings["height"] = parse_resolution(
            line, screen_size
        )
        return
    for prefix, name in _COLOR_KEYS.items():
        if line.startswith(prefix):
            if settings.get(name) is not None:
                raise CubError("two times color")
            settings[name] = parse_color(line[2:])
            return
    raise CubError("unknown parameter")


def _check_complete(settings):
    for name, label in (
        ("north", "NO"),
        ("south", "SO"),
        ("west", "WE"),
        ("east", "EA"),
        ("sprite", "S"),
    ):
        if settings.get(name) is None:
            raise CubError(f"missing {label}")
    if settings.get("width") is None or settings.get("height") is None:
        raise CubError("missing R")
    for name, label in (("floor", "F"), ("ceiling", "C")):
        value = settings.get(name)
        if value is None or value < 0:
            raise CubError(f"missing {label}")


def _is_map_start(line):
    return line.lstrip(" ").startswith("1")


def parse_scene(lines, screen_size=None, texture_loader=load_texture):
    """Build a SceneConfig from the lines of a scene file."""
    lines = list(lines)
    settings = {}
    map_start = None
    for index, line in enumerate(lines):
        if _is_map_start(line):
            map_start = index
            break
        if line:
            _parse_setting(line, settings, screen_size, texture_loader)
    if map_start is None:
        raise CubError("no map in scene file")
    _check_complete(settings)
    game_map = parse_map_lines(lines[map_start:])
    return SceneConfig(game_map=game_map, **settings)


def load_scene(path, screen_size=None, texture_loader=load_texture):
    """Read and parse the scene file at ``path``.

    Only newline-terminated lines count; text after the last newline is
    ignored.
    """
    try:
        with open(path, encoding="utf-8", errors="replace", newline="") as fh:
            text = fh.read()
    except OSError as exc:
        raise CubError("cannot open scene file") from exc
    lines = text.split("\n")[:-1]
    return parse_scene(lines, screen_size, texture_loader)