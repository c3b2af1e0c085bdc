"""Drawing a frame: textured wall columns, sprites and the minimap."""

import math
from dataclasses import dataclass, field

from .core import (
    BLACK,
    BLUE,
    DIMENSION,
    FIELD_OF_VIEW,
    GREEN,
    RED,
    WHITE,
    color_to_argb,
    normalize_angle,
)
from .raycast import cast_rays
from .texture import texel_offset, texture_column
from .world import SEEN_SPRITE, SPRITE, WALL, World

_MIN_DISTANCE = 1e-9
_RED_CELLS = (WALL, "3")
_BLUE_CELLS = (SEEN_SPRITE, SPRITE)
_MINIMAP_RAY_STEP = 0.01
_CIRCLE_RADIUS_STEP = 0.7
_CIRCLE_ANGLE_STEP = math.pi / 480


def _color_bytes(color):
    """Four bytes of a colour as laid out in a frame: blue, green, red, alpha."""
    return bytes(reversed(color_to_argb(color)))


def _clamp_texel(texture, offset):
    return min(max(offset, 0), len(texture.pixels) - 4)


@dataclass
class FrameBuffer:
    """A window-sized image stored as little-endian 0xAARRGGBB pixels."""

    width: int
    height: int
    data: bytearray = field(init=False, repr=False)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError("frame dimensions must be positive")
        self.data = bytearray(self.width * self.height * 4)

    @property
    def size_line(self):
        """Number of bytes in one row of pixels."""
        return self.width * 4

    def _offset(self, x, y):
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside frame")
        return x * 4 + y * self.size_line

    def put(self, x, y, argb):
        """Set pixel (x, y) to the colour ``argb``."""
        offset = self._offset(x, y)
        self.data[offset:offset + 4] = _color_bytes(argb)

    def pixel(self, x, y):
        """Colour of pixel (x, y) as an integer."""
        offset = self._offset(x, y)
        return int.from_bytes(self.data[offset:offset + 4], "little")


def choose_texture(scene, horizontal, angle):
    """Texture of the wall face a ray with direction ``angle`` has hit."""
    if horizontal:
        return scene.south if angle < math.pi else scene.north
    if math.pi / 2 < angle < 3 * math.pi / 2:
        return scene.west
    return scene.east


class Renderer:
    """Draws the scene as seen by the player into frame buffers."""

    def __init__(self, scene, world=None):
        self.scene = scene
        if world is None:
            game_map = scene.game_map
            world = World(
                [list(row) for row in game_map.grid],
                game_map.player,
                game_map.width,
                game_map.height,
            )
        self.world = world
        self.frame = FrameBuffer(scene.width, scene.height)
        self.minimap = FrameBuffer(scene.width, scene.height)
        self._dist_proj = DIMENSION * scene.width / (2 * math.tan(FIELD_OF_VIEW / 2))

    def render(self, show_map=False):
        """Draw one frame and return the buffer that holds it."""
        hits = cast_rays(self.world, self.scene.width)
        try:
            if show_map:
                self.draw_minimap(hits)
                return self.minimap
            for x, hit in enumerate(hits):
                self.draw_column(x, hit)
            self.draw_sprites([hit.distance * math.cos(hit.offset) for hit in hits])
            return self.frame
        finally:
            self.world.restore_sprites()
            self.world.clear_sprites()

    def draw_column(self, x, hit):
        """Draw ceiling, textured wall and floor for screen column ``x``."""
        scene = self.scene
        frame = self.frame
        height = scene.height
        size_line = frame.size_line
        perp = hit.distance * math.cos(hit.angle - self.world.player.view)
        if not perp > _MIN_DISTANCE:
            perp = _MIN_DISTANCE
        proj_wall = DIMENSION / perp * self._dist_proj

        sky = _color_bytes(scene.ceiling)
        sky_end = height // 2 - int(proj_wall) // 2
        row = 0
        while row < sky_end:
            offset = x * 4 + size_line * row
            frame.data[offset:offset + 4] = sky
            row += 1

        texture = choose_texture(scene, hit.horizontal, hit.angle)
        start = texture_column(hit.x, hit.y, hit.horizontal, hit.angle)
        for j in range(height - row):
            if j >= proj_wall:
                break
            offset = x * 4 + size_line * (row + j)
            texel = _clamp_texel(
                texture, texel_offset(texture, proj_wall, height, start, j)
            )
            frame.data[offset:offset + 4] = texture.pixels[texel:texel + 4]
        else:
            j = height - row
        row += j if j < height - row else height - row

        ground = _color_bytes(scene.floor)
        while row < height:
            offset = x * 4 + size_line * row
            frame.data[offset:offset + 4] = ground
            row += 1

    def draw_sprites(self, depths):
        """Draw the sprites seen this frame, farthest first, behind walls."""
        self.world.sort_sprites()
        for hit in self.world.sprites:
            self._draw_sprite(hit, depths)

    def _draw_sprite(self, hit, depths):
        scene = self.scene
        player = self.world.player
        width, height = scene.width, scene.height
        direction = math.atan2(hit.y - player.y, hit.x - player.x)
        while direction - player.view > math.pi:
            direction -= 2 * math.pi
        while direction - player.view < -math.pi:
            direction += 2 * math.pi
        relative = direction - player.view
        hit.dist *= math.cos(relative)
        if not hit.dist > 0:
            return
        size = width / hit.dist
        left = int(math.tan(relative) * width / FIELD_OF_VIEW + (width // 2 - size / 2))
        top = int(height // 2 - size / 2)

        texture = scene.sprite
        ratio_x = texture.width / size
        ratio_y = texture.height / size
        span = math.ceil(size)
        frame = self.frame
        size_line = frame.size_line
        for x in range(max(0, -left), min(span, width - left)):
            column = x + left
            if depths[column] < hit.dist:
                continue
            text_x = int(ratio_x * x) * 4
            for y in range(max(0, -top), min(span, height - top)):
                texel = _clamp_texel(
                    texture, text_x + texture.size_line * int(y * ratio_y)
                )
                colour = texture.pixels[texel:texel + 4]
                if not any(colour[:3]):
                    continue
                offset = column * 4 + size_line * (y + top)
                frame.data[offset:offset + 4] = colour

    def draw_minimap(self, hits):
        """Draw the map from above with the rays cast and the player."""
        scene = self.scene
        world = self.world
        frame = self.minimap
        cell = scene.minimap_cell
        size_line = frame.size_line
        for row_index, row in enumerate(world.grid):
            for col_index, c in enumerate(row):
                if c in _RED_CELLS:
                    colour = RED
                elif c in _BLUE_CELLS:
                    colour = BLUE
                else:
                    colour = BLACK
                line = _color_bytes(colour) * cell
                for dy in range(cell):
                    offset = col_index * cell * 4 + size_line * (row_index * cell + dy)
                    frame.data[offset:offset + len(line)] = line

        player = world.player
        white = _color_bytes(WHITE)
        step = FIELD_OF_VIEW / scene.width
        angle = normalize_angle(player.view - FIELD_OF_VIEW / 2)
        for hit in hits:
            if math.isfinite(hit.distance):
                cos_a, sin_a = math.cos(angle), math.sin(angle)
                i = 0.0
                while i <= hit.distance:
                    self._plot(
                        int((player.x + i * cos_a) * cell),
                        int((player.y + i * sin_a) * cell),
                        white,
                    )
                    i += _MINIMAP_RAY_STEP
            angle = normalize_angle(angle + step)

        green = _color_bytes(GREEN)
        radius = int(scene.player_radius)
        angle = 0.0
        while angle < 2 * math.pi:
            i = 0.0
            while i < radius:
                self._plot(
                    int(player.x * cell + i * math.cos(angle)),
                    int(player.y * cell + i * math.sin(angle)),
                    green,
                )
                i += _CIRCLE_RADIUS_STEP
            angle += _CIRCLE_ANGLE_STEP

    def _plot(self, x, y, colour):
        frame = self.minimap
        if 0 <= x < frame.width and 0 <= y < frame.height:
            offset = x * 4 + frame.size_line * y
            frame.data[offset:offset + 4] = colour