"""Shared constants, the error type and small numeric helpers."""

import math

# Key codes as reported by the window system.
UP = 119
DOWN = 115
LEFT = 97
RIGHT = 100
ROTATE_LEFT = 65361
ROTATE_RIGHT = 65363
ESC = 65307
TAB = 65289

# Colours as 0xAARRGGBB integers.
RED = 16711680
GREEN = 2088960
BLUE = 255
WHITE = 16777215
BLACK = 0
YELLOW = 16776960
GREY = 13882323
PURPLE = 8388736
TGREY = 3372220415

# World geometry.
DIMENSION = 1
EYE = 0.5
DIMENSION_PLAYER = 0.2
DIMENSION_SPRITE = 1
RATIO = 3
FIELD_OF_VIEW = math.pi / 3

# Movement.
SPEED = 0.1
ROTATE_SPEED = 0.1308


class CubError(Exception):
    """A scene, map or runtime error whose message is shown to the user."""


def distance(dx, dy):
    """Length of the vector (dx, dy)."""
    return math.sqrt(dx * dx + dy * dy)


def color_to_argb(color):
    """Split a 32-bit colour into its (alpha, red, green, blue) bytes."""
    color &= 0xFFFFFFFF
    return (
        (color >> 24) & 0xFF,
        (color >> 16) & 0xFF,
        (color >> 8) & 0xFF,
        color & 0xFF,
    )


def normalize_angle(angle):
    """Bring an angle into the range [0, 2*pi]."""
    while angle > 2 * math.pi:
        angle -= 2 * math.pi
    while angle < 0:
        angle += 2 * math.pi
    return angle


def is_one_of(c, valid):
    """True when the single character ``c`` appears in ``valid``."""
    return len(c) == 1 and c in valid


def minimap_scale(width, height, map_w, map_h):
    """Return the minimap cell size in pixels and the player's drawn radius."""
    if map_w <= 0 or map_h <= 0:
        raise CubError("invalid map")
    scale = DIMENSION * min(width // map_w, height // map_h)
    return scale, DIMENSION_PLAYER * scale