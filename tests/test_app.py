import math

import pytest
from PIL import Image

from cubcaster.app import Game, Mode, check_arguments, main
from cubcaster.config import parse_scene
from cubcaster.core import (
    DOWN,
    ESC,
    LEFT,
    RIGHT,
    ROTATE_RIGHT,
    ROTATE_SPEED,
    SPEED,
    TAB,
    UP,
    CubError,
)
from cubcaster.texture import Texture

MAP = ["111111", "100001", "10N001", "100001", "111111"]
SETTINGS = [
    "NO a",
    "SO b",
    "WE c",
    "EA d",
    "S e",
    "R 80 60",
    "F 10,20,30",
    "C 40,50,60",
]


def _loader(_path):
    return Texture(2, 2, bytes(range(16)))


@pytest.fixture
def scene():
    return parse_scene(SETTINGS + MAP, None, _loader)


@pytest.mark.parametrize(
    "argv, mode",
    [(["map.cub"], Mode.PLAY), (["map.cub", "--save"], Mode.SAVE)],
)
def test_check_arguments_valid(argv, mode):
    assert check_arguments(argv) is mode


@pytest.mark.parametrize(
    "argv",
    [
        [],
        [".cub"],
        ["map.txt"],
        ["map.cubx"],
        ["map.cub", "--sav"],
        ["map.cub", "--saveX"],
        ["map.cub", "--save", "extra"],
        ["map.txt", "--save"],
    ],
)
def test_check_arguments_invalid(argv):
    with pytest.raises(CubError):
        check_arguments(argv)


def test_tab_toggles_minimap(scene):
    game = Game(scene)
    game.handle_key(TAB)
    assert game.show_map is True
    game.handle_key(TAB)
    assert game.show_map is False


def test_escape_stops_game(scene):
    game = Game(scene)
    game.handle_key(ESC)
    assert game.running is False


def test_up_moves_forward(scene):
    game = Game(scene)
    game.handle_key(UP)
    player = game.world.player
    assert player.x == pytest.approx(2.5)
    assert player.y == pytest.approx(2.5 - SPEED)


def test_down_moves_backward(scene):
    game = Game(scene)
    game.handle_key(DOWN)
    assert game.world.player.y == pytest.approx(2.5 + SPEED)


def test_strafe_left_and_right(scene):
    game = Game(scene)
    game.handle_key(LEFT)
    assert game.world.player.x == pytest.approx(2.5 - SPEED)
    game.handle_key(RIGHT)
    game.handle_key(RIGHT)
    assert game.world.player.x == pytest.approx(2.5 + SPEED)


def test_rotate_right(scene):
    game = Game(scene)
    game.handle_key(ROTATE_RIGHT)
    assert game.world.player.view == pytest.approx(3 * math.pi / 2 + ROTATE_SPEED)


def test_walls_stop_player(scene):
    game = Game(scene)
    for _ in range(50):
        game.handle_key(UP)
    assert 1.0 < game.world.player.y < 2.5


def test_step_play_mode_draws_sky_and_floor(scene):
    game = Game(scene)
    frame = game.step()
    assert (frame.width, frame.height) == (80, 60)
    assert frame.pixel(0, 0) == 0x28323C
    assert frame.pixel(0, 59) == 0x0A141E
    assert game.running is True


def test_step_save_mode_writes_bmp(scene, tmp_path):
    path = tmp_path / "shot.bmp"
    game = Game(scene, Mode.SAVE, screenshot_path=str(path))
    game.step()
    data = path.read_bytes()
    assert data[:2] == b"BM"
    assert len(data) == 54 + 80 * 60 * 4 + 80 * 4
    assert game.running is False


def test_main_rejects_bad_arguments(capsys):
    assert main(["scene.txt"]) == 1
    assert "invalid argument" in capsys.readouterr().err


def test_main_reports_missing_scene(tmp_path, capsys):
    assert main([str(tmp_path / "missing.cub")]) == 1
    assert capsys.readouterr().out.startswith("ERROR")


def test_main_save_mode(tmp_path, monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.chdir(tmp_path)
    (tmp_path / "screen").mkdir()
    names = {}
    for key in ("NO", "SO", "WE", "EA", "S"):
        image_path = tmp_path / f"{key}.png"
        Image.new("RGB", (4, 4), (200, 10, 10)).save(image_path)
        names[key] = str(image_path)
    lines = [f"{key} {names[key]}" for key in ("NO", "SO", "WE", "EA", "S")]
    lines += ["R 80 60", "F 10,20,30", "C 40,50,60"] + MAP
    scene_path = tmp_path / "level.cub"
    scene_path.write_text("\n".join(lines) + "\n")
    assert main([str(scene_path), "--save"]) == 0
    shot = (tmp_path / "screen" / "Cub3D.bmp").read_bytes()
    assert shot[:2] == b"BM"