"""Wall and sprite textures and the lookup of texels on them."""

import math
from dataclasses import dataclass, field

from PIL import Image

from .core import CubError


@dataclass
class Texture:
    """An image stored as little-endian 0xAARRGGBB pixels, row after row.

    The alpha byte follows the window system's convention: 0 is opaque.
    """

    width: int
    height: int
    pixels: bytes
    size_line: int = field(init=False)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError("texture dimensions must be positive")
        if len(self.pixels) != self.width * self.height * 4:
            raise ValueError("pixel data does not match the texture size")
        self.size_line = self.width * 4

    def texel(self, offset):
        """Return the colour stored at byte ``offset`` as an integer."""
        if offset < 0 or offset + 4 > len(self.pixels):
            raise IndexError(f"texel offset {offset} outside texture")
        return int.from_bytes(self.pixels[offset:offset + 4], "little")


def load_texture(path):
    """Read an image file (XPM, PNG, ...) into a Texture."""
    try:
        with Image.open(path) as img:
            rgba = img.convert("RGBA")
    except (OSError, ValueError) as exc:
        raise CubError("invalid texture") from exc
    raw = rgba.tobytes()
    data = bytearray()
    for r, g, b, a in zip(*[iter(raw)] * 4):
        if a == 0:
            data += bytes((0, 0, 0, 0xFF))
        else:
            data += bytes((b, g, r, 255 - a))
    return Texture(rgba.width, rgba.height, bytes(data))


def texture_column(hit_x, hit_y, horizontal, ray_angle):
    """Fraction across the wall cell where a ray hit, used as texture column."""
    if horizontal:
        if math.pi < ray_angle < 2 * math.pi:
            return hit_x - int(hit_x)
        return 1 + int(hit_x) - hit_x
    if ray_angle < math.pi / 2 or ray_angle > 3 * math.pi / 2:
        return hit_y - int(hit_y)
    return 1 + int(hit_y) - hit_y


def texel_offset(texture, proj_wall, window_height, start, y):
    """Byte offset in ``texture`` for row ``y`` of a projected wall slice."""
    gap = (window_height - proj_wall) / 2
    begin = int(-gap) if gap < 0 else 0
    x = int(start * texture.width)
    ratio = texture.height / proj_wall
    return 4 * x + texture.size_line * int((y + begin) * ratio)