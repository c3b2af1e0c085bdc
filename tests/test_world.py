import math

import pytest

from cubcaster.mapgrid import player_start
from cubcaster.world import SpriteHit, World

ROWS = [
    "11111",
    "10201",
    "10N01",
    "10001",
    "11111",
]


def make_world():
    grid = [list(row) for row in ROWS]
    return World(grid, player_start("N", 2, 2), len(ROWS[0]), len(ROWS))


def test_cell_truncates_coordinates():
    world = make_world()
    assert world.cell(1.7, 0.2) == "1"
    assert world.cell(2.9, 1.1) == "2"
    assert world.cell(1.0, 3.99) == "0"


def test_move_into_open_floor():
    world = make_world()
    start_y = world.player.y
    assert world.move(0.0, -0.1) is True
    assert world.player.y == pytest.approx(start_y - 0.1)
    assert (world.player.vx, world.player.vy) == (0.0, -0.1)


def test_move_into_wall_is_refused():
    world = make_world()
    before = (world.player.x, world.player.y)
    assert world.move(0.0, 1.5) is False
    assert (world.player.x, world.player.y) == before
    assert (world.player.vx, world.player.vy) == (0.0, 1.5)


def test_rotate_keeps_view_in_range():
    world = make_world()
    world.player.view = 0.0
    world.rotate(-0.5)
    assert 0 <= world.player.view <= 2 * math.pi
    assert math.cos(world.player.view) == pytest.approx(math.cos(-0.5))
    assert math.sin(world.player.view) == pytest.approx(math.sin(-0.5))


def test_add_sprite_marks_cell_and_records_original():
    world = make_world()
    hit = world.add_sprite(2.3, 1.7, 1.25)
    assert isinstance(hit, SpriteHit)
    assert hit.c == "2"
    assert hit.angle == 1.25
    assert world.cell(hit.x, hit.y) == "X"
    assert hit.dist == pytest.approx(math.hypot(hit.dist_x, hit.dist_y))
    assert hit.dist_x == pytest.approx(world.player.x - hit.x)
    assert world.sprites == [hit]


def test_restore_sprites_puts_back_cells():
    world = make_world()
    world.add_sprite(2, 1, 0.0)
    world.add_sprite(1, 3, 0.0)
    world.restore_sprites()
    assert ["".join(row) for row in world.grid] == ROWS


def test_sort_sprites_farthest_first():
    world = make_world()
    world.add_sprite(2, 2, 0.0)
    world.add_sprite(1, 1, 0.0)
    world.add_sprite(3, 3, 0.0)
    world.add_sprite(2, 1, 0.0)
    world.sort_sprites()
    dists = [hit.dist for hit in world.sprites]
    assert dists == sorted(dists, reverse=True)
    assert len(world.sprites) == 4


def test_sort_sprites_is_stable_on_ties():
    world = make_world()
    first = world.add_sprite(1, 2, 0.0)
    second = world.add_sprite(3, 2, 0.0)
    world.sort_sprites()
    assert world.sprites == [first, second]


def test_clear_sprites_empties_list():
    world = make_world()
    world.add_sprite(2, 1, 0.0)
    world.clear_sprites()
    assert world.sprites == []