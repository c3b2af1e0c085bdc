"""Casting rays through the grid to find the walls the player sees."""

import math
from dataclasses import dataclass

from .core import DIMENSION, FIELD_OF_VIEW, distance, normalize_angle
from .world import SPRITE, WALL


@dataclass
class RayHit:
    """Where a ray met a wall, how far away, and on which kind of grid line.

    ``angle`` is the ray's absolute direction and ``offset`` its angle
    relative to the player's view.
    """

    x: float
    y: float
    distance: float
    horizontal: bool
    angle: float = 0.0
    offset: float = 0.0


def _divide(a, b):
    """Floating division that yields infinities or NaN instead of raising."""
    if b:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _blocks(world, posx, posy, angle):
    if world.cell(posx, posy) == SPRITE:
        world.add_sprite(posx, posy, angle)
    return world.cell(posx, posy) == WALL


def _inside(world, posx, posy):
    return 0 <= posx < world.width and 0 <= posy < world.height


def cast_horizontal(world, x, y, angle):
    """Follow a ray across horizontal grid lines; return the wall point."""
    down = 0 < angle < math.pi
    right = (0 <= angle < math.pi / 2) or (1.5 * math.pi < angle <= 2 * math.pi)
    tangent = math.tan(angle)
    hit_y = int(y / DIMENSION) * DIMENSION
    if down:
        hit_y += DIMENSION
    hit_x = x + _divide(hit_y - y, tangent)

    y_step = DIMENSION if down else -DIMENSION
    x_step = _divide(DIMENSION, tangent)
    if not right and x_step > 0:
        x_step = -x_step
    if right and x_step < 0:
        x_step = -x_step
    posx = hit_x
    posy = hit_y if down else hit_y - DIMENSION
    while _inside(world, posx, posy):
        if _blocks(world, posx, posy, angle):
            break
        hit_x += x_step
        hit_y += y_step
        posx += x_step
        posy += y_step
    return hit_x, hit_y


def cast_vertical(world, x, y, angle):
    """Follow a ray across vertical grid lines; return the wall point."""
    down = 0 < angle < math.pi
    right = angle < math.pi / 2 or angle > 1.5 * math.pi
    tangent = math.tan(angle)
    hit_x = int(x / DIMENSION) * DIMENSION
    if right:
        hit_x += DIMENSION
    hit_y = y + (hit_x - x) * tangent

    x_step = DIMENSION if right else -DIMENSION
    y_step = DIMENSION * tangent
    if not down and y_step > 0:
        y_step = -y_step
    if down and y_step < 0:
        y_step = -y_step
    posx = hit_x if right else hit_x - DIMENSION
    posy = hit_y
    while _inside(world, posx, posy):
        if _blocks(world, posx, posy, angle):
            break
        hit_x += x_step
        hit_y += y_step
        posx += x_step
        posy += y_step
    return hit_x, hit_y


def closest_hit(px, py, horizontal_point, vertical_point):
    """Pick the nearer of the two wall points seen from (px, py).

    On a tie the horizontal point is kept but reported as a vertical hit.
    """
    hx, hy = horizontal_point
    vx, vy = vertical_point
    h_dist = distance(px - hx, py - hy)
    v_dist = distance(px - vx, py - vy)
    if h_dist > v_dist:
        x, y, nearest = vx, vy, v_dist
    else:
        x, y, nearest = hx, hy, h_dist
    return RayHit(x=x, y=y, distance=nearest, horizontal=not nearest >= v_dist)


def cast_rays(world, width):
    """Cast ``width`` rays spread over the field of view, left to right."""
    player = world.player
    step = FIELD_OF_VIEW / width
    offset = -FIELD_OF_VIEW / 2
    hits = []
    for _ in range(width):
        angle = normalize_angle(player.view + offset)
        horizontal = cast_horizontal(world, player.x, player.y, angle)
        vertical = cast_vertical(world, player.x, player.y, angle)
        hit = closest_hit(player.x, player.y, horizontal, vertical)
        hit.angle = angle
        hit.offset = offset
        hits.append(hit)
        offset += step
    return hits