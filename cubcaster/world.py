"""The mutable game world: grid, player and the sprites seen this frame."""

import math
from dataclasses import dataclass, field

from .core import DIMENSION, DIMENSION_PLAYER, distance, normalize_angle
from .mapgrid import Player

WALL = "1"
SPRITE = "2"
SEEN_SPRITE = "X"


@dataclass
class SpriteHit:
    """A sprite cell crossed by a ray, with its distance to the player."""

    x: float
    y: float
    dist_x: float
    dist_y: float
    c: str
    dist: float
    angle: float


@dataclass
class World:
    """Map grid, player state and the sprites found by the current frame."""

    grid: list
    player: Player
    width: int
    height: int
    sprites: list = field(default_factory=list)

    def cell(self, x, y):
        """Character of the grid cell holding the point (x, y)."""
        return self.grid[int(y)][int(x)]

    def move(self, vx, vy):
        """Move the player by (vx, vy) unless a wall is in the way.

        The movement vector is recorded either way. Returns whether the
        player actually moved.
        """
        player = self.player
        player.vx = vx
        player.vy = vy
        x = player.x + vx
        y = player.y + vy
        radius = DIMENSION_PLAYER / 2
        angle = -math.pi / 2
        while angle < math.pi / 2:
            row = int(y + radius * (vy + math.sin(angle)) / DIMENSION)
            col = int(x + radius * (vx + math.cos(angle))) // DIMENSION
            if self.grid[row][col] == WALL:
                return False
            angle += math.pi / 6
        player.x = x
        player.y = y
        return True

    def rotate(self, delta):
        """Turn the player's view by ``delta`` radians."""
        self.player.view = normalize_angle(self.player.view + delta)

    def add_sprite(self, posx, posy, angle):
        """Record the sprite in the cell at (posx, posy) and mark it as seen."""
        posx = int(posx)
        posy = int(posy)
        x = posx // DIMENSION + DIMENSION / 2
        y = int(posy / DIMENSION) + DIMENSION / 2
        dist_x = self.player.x - x
        dist_y = self.player.y - y
        row, col = int(y), int(x)
        hit = SpriteHit(
            x=x,
            y=y,
            dist_x=dist_x,
            dist_y=dist_y,
            c=self.grid[row][col],
            dist=distance(dist_x, dist_y),
            angle=angle,
        )
        self.grid[row][col] = SEEN_SPRITE
        self.sprites.append(hit)
        return hit

    def sort_sprites(self):
        """Order the recorded sprites from the farthest to the closest."""
        self.sprites.sort(key=lambda hit: hit.dist, reverse=True)

    def restore_sprites(self):
        """Put back the original characters of the cells marked as seen."""
        for hit in self.sprites:
            self.grid[int(hit.y)][int(hit.x)] = hit.c

    def clear_sprites(self):
        """Forget the sprites recorded for the current frame."""
        self.sprites.clear()