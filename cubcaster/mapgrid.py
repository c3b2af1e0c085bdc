"""Map grid parsing and validation, and the player's starting position."""

import math
from dataclasses import dataclass

from .core import DIMENSION, CubError

MAP_CHARS = " 0WENS12"
BORDER_CHARS = " 1"
_CLOSED = (" ", "1")
_START_VIEWS = {
    "E": 0.0,
    "S": math.pi / 2,
    "W": math.pi,
    "N": 3 * math.pi / 2,
}


@dataclass
class Player:
    """Position, view angle and last movement vector of the player."""

    x: float
    y: float
    view: float
    vx: float
    vy: float


@dataclass
class GameMap:
    """A validated, rectangular map grid with the player's start."""

    grid: list
    player: Player
    width: int
    height: int


def player_start(c, x, y):
    """Player standing in the middle of cell (x, y) facing the direction ``c``."""
    try:
        view = _START_VIEWS[c]
    except KeyError:
        raise ValueError(f"not a start direction: {c!r}") from None
    return Player(
        x=x * DIMENSION + DIMENSION * 0.5,
        y=y * DIMENSION + DIMENSION * 0.5,
        view=view,
        vx=math.cos(view),
        vy=math.sin(view),
    )


def pad_rows(rows):
    """Pad every row with spaces to the width of the longest one."""
    width = max(map(len, rows), default=0)
    return [row.ljust(width) for row in rows]


def _at(row, i):
    return row[i] if i < len(row) else ""


def check_void(rows, i, j):
    """Reject a space at column ``i`` of row ``j`` that touches open floor."""
    row = rows[j]
    neighbours = []
    if j > 0:
        neighbours.append(_at(rows[j - 1], i))
    if j + 1 < len(rows):
        neighbours.append(_at(rows[j + 1], i))
    if i > 0:
        neighbours.append(row[i - 1])
    if i + 1 < len(row):
        neighbours.append(row[i + 1])
    if any(c not in _CLOSED for c in neighbours):
        raise CubError("invalid map")


def _check_row(rows, j, accept, player):
    row = rows[j]
    if not row:
        raise CubError("invalid map")
    for i, c in enumerate(row):
        if c == " ":
            check_void(rows, i, j)
        elif c in _START_VIEWS:
            if player is not None:
                raise CubError("2 characters or more on map")
            player = player_start(c, i, j)
        if c not in accept:
            raise CubError("invalid map")
    if row[-1] not in _CLOSED or row[0] not in _CLOSED:
        raise CubError("invalid map")
    return player


def validate_map(rows):
    """Check that the map is closed and holds one player; return that player."""
    if not rows:
        raise CubError("invalid map")
    player = _check_row(rows, 0, BORDER_CHARS, None)
    for j in range(len(rows) - 1):
        player = _check_row(rows, j, MAP_CHARS, player)
    if player is None:
        raise CubError("no player on map")
    _check_row(rows, len(rows) - 1, BORDER_CHARS, player)
    return player


def parse_map_lines(lines):
    """Build a GameMap from the map lines of a scene file."""
    text = "/".join(line if line else " " for line in lines)
    rows = pad_rows([piece for piece in text.split("/") if piece])
    player = validate_map(rows)
    width = len(rows[0])
    return GameMap([list(row) for row in rows], player, width, len(rows))