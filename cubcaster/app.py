"""Command-line entry point and the interactive game loop."""

import math
import sys
from enum import IntEnum

import pygame
from PIL import Image

from .bmp import save_bmp
from .config import load_scene
from .core import (
    DOWN,
    ESC,
    LEFT,
    RIGHT,
    ROTATE_LEFT,
    ROTATE_RIGHT,
    ROTATE_SPEED,
    SPEED,
    TAB,
    UP,
    CubError,
)
from .render import Renderer

SCENE_SUFFIX = ".cub"
SAVE_FLAG = "--save"
SCREENSHOT_PATH = "screen/Cub3D.bmp"
WINDOW_TITLE = "Cub3D"
_FRAME_RATE = 60

_KEYMAP = {
    pygame.K_w: UP,
    pygame.K_s: DOWN,
    pygame.K_a: LEFT,
    pygame.K_d: RIGHT,
    pygame.K_LEFT: ROTATE_LEFT,
    pygame.K_RIGHT: ROTATE_RIGHT,
    pygame.K_ESCAPE: ESC,
    pygame.K_TAB: TAB,
}


class Mode(IntEnum):
    """How the program runs: in a window, or saving one frame as BMP."""

    PLAY = 1
    SAVE = 2


def _is_scene_file(name):
    return len(name) > len(SCENE_SUFFIX) and name.endswith(SCENE_SUFFIX)


def check_arguments(argv):
    """Return the run mode for the command-line arguments (program name excluded)."""
    argv = list(argv)
    if len(argv) == 2 and argv[1] == SAVE_FLAG and _is_scene_file(argv[0]):
        return Mode.SAVE
    if len(argv) == 1 and _is_scene_file(argv[0]):
        return Mode.PLAY
    raise CubError("invalid argument")


class Game:
    """The player's world, the renderer and the state driven by key presses."""

    def __init__(self, scene, mode=Mode.PLAY, screenshot_path=SCREENSHOT_PATH):
        self.scene = scene
        self.mode = Mode(mode)
        self.screenshot_path = screenshot_path
        self.renderer = Renderer(scene)
        self.world = self.renderer.world
        self.show_map = False
        self.running = True

    def handle_key(self, key):
        """Apply one key press: quit, toggle the map, move or turn."""
        if key == ESC:
            self.running = False
            return
        if key == TAB:
            self.show_map = not self.show_map
        view = self.world.player.view
        if key == UP:
            self.world.move(SPEED * math.cos(view), SPEED * math.sin(view))
        if key == DOWN:
            self.world.move(-SPEED * math.cos(view), -SPEED * math.sin(view))
        side = view + math.pi / 2
        if key == LEFT:
            self.world.move(-SPEED * math.cos(side), -SPEED * math.sin(side))
        if key == RIGHT:
            self.world.move(SPEED * math.cos(side), SPEED * math.sin(side))
        if key == ROTATE_RIGHT:
            self.world.rotate(ROTATE_SPEED)
        if key == ROTATE_LEFT:
            self.world.rotate(-ROTATE_SPEED)

    def step(self):
        """Render one frame; in save mode write it out and stop."""
        frame = self.renderer.render(self.show_map)
        if self.mode is Mode.SAVE:
            save_bmp(frame, self.screenshot_path)
            self.running = False
        return frame

    def run(self):
        """Run until the window is closed, or save a single frame."""
        if self.mode is Mode.SAVE:
            self.step()
            return
        pygame.init()
        try:
            size = (self.scene.width, self.scene.height)
            screen = pygame.display.set_mode(size)
            pygame.display.set_caption(WINDOW_TITLE)
            clock = pygame.time.Clock()
            while self.running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    elif event.type == pygame.KEYDOWN:
                        code = _KEYMAP.get(event.key)
                        if code is not None:
                            self.handle_key(code)
                if not self.running:
                    break
                frame = self.step()
                rgb = Image.frombuffer(
                    "RGB", size, bytes(frame.data), "raw", "BGRX", 0, 1
                ).tobytes()
                screen.blit(pygame.image.frombuffer(rgb, size, "RGB"), (0, 0))
                pygame.display.flip()
                clock.tick(_FRAME_RATE)
        finally:
            pygame.quit()


def _screen_size():
    """Size of the display, or None when there is none to ask."""
    try:
        pygame.display.init()
        info = pygame.display.Info()
        width, height = info.current_w, info.current_h
    except pygame.error:
        return None
    finally:
        pygame.display.quit()
    if width <= 0 or height <= 0:
        return None
    return width, height


def main(argv=None):
    """Start the game from the command line; return the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        mode = check_arguments(argv)
    except CubError:
        sys.stderr.write("ERROR : invalid argument\n")
        return 1
    try:
        scene = load_scene(argv[0], _screen_size())
        Game(scene, mode).run()
    except CubError as exc:
        sys.stdout.write(f"ERROR : {exc}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())