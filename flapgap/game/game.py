# flapgap/game/game.py
"""
pygame frontend: turns raw events into the core's commands and paints
`Scene` snapshots. Holds no game state of its own besides the name being typed.
"""
import sys, argparse, logging
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Optional, Tuple

import pygame
from pygame import K_SPACE, K_UP, K_ESCAPE, K_p, K_RETURN, K_KP_ENTER, K_BACKSPACE

from .config import (
    WIDTH, HEIGHT, FPS, AVATAR_W, AVATAR_H, OBSTACLE_CAP_H, MAX_NAME_LEN,
    COLOR_SKY_TOP, COLOR_SKY_BOTTOM, COLOR_CLOUD, COLOR_PIPE_LIGHT, COLOR_PIPE_DARK,
    COLOR_PIPE_CAP, COLOR_AVATAR, COLOR_WING, COLOR_EYE, COLOR_FG, COLOR_PINK,
)
from .engine import FlapGame
from .snapshot import Scene
from .state import GameMode

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


# --------------------------- Input ---------------------------

class Command(Enum):
    PRIMARY = "primary"
    TOGGLE_PAUSE = "toggle_pause"
    QUIT = "quit"


def translate_event(event: pygame.event.Event) -> Optional[Command]:
    """Map a raw pygame event to an abstract command (gameplay screens only)."""
    if event.type == pygame.QUIT:
        return Command.QUIT
    if event.type == pygame.KEYDOWN:
        if event.key in (K_SPACE, K_UP):
            return Command.PRIMARY
        if event.key in (K_p, K_ESCAPE):
            return Command.TOGGLE_PAUSE
    if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        return Command.PRIMARY
    if event.type == pygame.FINGERDOWN:
        return Command.PRIMARY
    return None


@dataclass
class NameEntry:
    """Text typed on the name screen. `handle` returns the name once Enter is hit."""
    text: str = ""

    def handle(self, event: pygame.event.Event) -> Optional[str]:
        if event.type == pygame.TEXTINPUT:
            self.text = (self.text + event.text)[:MAX_NAME_LEN]
        elif event.type == pygame.KEYDOWN:
            if event.key in (K_RETURN, K_KP_ENTER):
                return self.text
            if event.key == K_BACKSPACE:
                self.text = self.text[:-1]
        return None


def dispatch(game: FlapGame, command: Optional[Command]) -> bool:
    """Apply a command to the game. Returns False when the app should quit."""
    if command is Command.QUIT:
        return False
    if command is Command.PRIMARY:
        game.primary_action()
    elif command is Command.TOGGLE_PAUSE:
        game.toggle_pause()
    return True


# --------------------------- Rendering ---------------------------

@dataclass
class Fonts:
    small: pygame.font.Font
    medium: pygame.font.Font
    large: pygame.font.Font
    huge: pygame.font.Font


def load_fonts() -> Fonts:
    if not pygame.font.get_init():
        pygame.font.init()
    return Fonts(
        small=pygame.font.SysFont("arial", 16, bold=True),
        medium=pygame.font.SysFont("arial", 20),
        large=pygame.font.SysFont("arial", 32, bold=True),
        huge=pygame.font.SysFont("arial", 72, bold=True),
    )


def _lerp(c1: Tuple[int, int, int], c2: Tuple[int, int, int], t: float) -> Tuple[int, int, int]:
    return tuple(int(a + (b - a) * t) for a, b in zip(c1, c2))


@lru_cache(maxsize=4)
def _sky(size: Tuple[int, int]) -> pygame.Surface:
    w, h = size
    surf = pygame.Surface((w, h))
    for y in range(h):
        pygame.draw.line(surf, _lerp(COLOR_SKY_TOP, COLOR_SKY_BOTTOM, y / max(1, h - 1)), (0, y), (w, y))
    return surf


def _blit_text(surf, font, text, color, center, alpha: int = 255):
    img = font.render(text, True, color)
    if alpha < 255:
        img.set_alpha(alpha)
    surf.blit(img, img.get_rect(center=(int(center[0]), int(center[1]))))


def _draw_clouds(surf, scene: Scene):
    for c in scene.clouds:
        r = max(1, int(c.size))
        layer = pygame.Surface((2 * r, 2 * r), pygame.SRCALPHA)
        pygame.draw.circle(layer, (*COLOR_CLOUD, int(255 * c.opacity)), (r, r), r)
        surf.blit(layer, (int(c.x) - r, int(c.y) - r))


def _draw_obstacles(surf, scene: Scene):
    accent = _lerp(COLOR_PIPE_LIGHT, (255, 255, 255), 0.5)
    for ob in scene.obstacles:
        x, w = int(ob.x), int(ob.width)
        top, bottom = int(ob.top_height), int(ob.bottom_y)
        for i in range(w):
            col = _lerp(COLOR_PIPE_LIGHT, COLOR_PIPE_DARK, i / max(1, w - 1))
            pygame.draw.line(surf, col, (x + i, 0), (x + i, top))
            pygame.draw.line(surf, col, (x + i, bottom), (x + i, HEIGHT))
        pygame.draw.rect(surf, COLOR_PIPE_CAP, (x - 5, top - OBSTACLE_CAP_H, w + 10, OBSTACLE_CAP_H))
        pygame.draw.rect(surf, COLOR_PIPE_CAP, (x - 5, bottom, w + 10, OBSTACLE_CAP_H))
        pygame.draw.line(surf, accent, (x + 7, 0), (x + 7, top), 3)
        pygame.draw.line(surf, accent, (x + w - 7, bottom), (x + w - 7, HEIGHT), 3)


def _draw_avatar(surf, scene: Scene):
    av = scene.avatar
    size = 2 * max(AVATAR_W, AVATAR_H)
    c = size // 2
    body = pygame.Surface((size, size), pygame.SRCALPHA)
    pygame.draw.ellipse(body, COLOR_AVATAR, (c - AVATAR_W // 2, c - AVATAR_H // 2, AVATAR_W, AVATAR_H))
    wing_dy = -5 if av.flap_frames > 5 else 0
    pygame.draw.ellipse(body, COLOR_WING, (c - 10 - 8, c + wing_dy - 15, 16, 30))
    pygame.draw.circle(body, COLOR_EYE, (c + 5, c - 5), 3)
    # pygame rotates counter-clockwise; positive rotation means nose down
    rotated = pygame.transform.rotate(body, -av.rotation)
    surf.blit(rotated, rotated.get_rect(center=(int(av.x), int(av.y))))


def _draw_effects(surf, scene: Scene, fonts: Fonts):
    for fx in scene.effects:
        _blit_text(surf, fonts.small, fx.text, fx.color, (fx.x, fx.y), int(255 * fx.opacity))


def _dim(surf, alpha: int):
    shade = pygame.Surface(surf.get_size(), pygame.SRCALPHA)
    shade.fill((0, 0, 0, alpha))
    surf.blit(shade, (0, 0))


def _draw_ui(surf, scene: Scene, fonts: Fonts, typed_name: str):
    w, h = surf.get_size()
    cx, cy = w // 2, h // 2
    mode = scene.mode

    if mode is GameMode.NAME_ENTRY:
        _dim(surf, 128)
        _blit_text(surf, fonts.large, "flapgap", COLOR_FG, (cx, cy - 100))
        _blit_text(surf, fonts.medium, "Type your name", COLOR_FG, (cx, cy - 40))
        _blit_text(surf, fonts.large, (typed_name or " ") + "_", COLOR_PINK, (cx, cy))
        _blit_text(surf, fonts.medium, "Enter to start", COLOR_FG, (cx, cy + 50))
        return

    _blit_text(surf, fonts.large, f"{scene.distance}m", COLOR_FG, (cx, 40))
    surf.blit(fonts.small.render(f"Best: {scene.best_distance}m", True, COLOR_FG), (10, 18))
    surf.blit(fonts.small.render(f"Speed: x{scene.speed_ratio:.1f}", True, COLOR_FG), (10, 38))

    if mode is GameMode.COUNTDOWN:
        label = str(scene.countdown) if scene.countdown > 0 else "Start!"
        _blit_text(surf, fonts.huge, label, COLOR_PINK, (cx, cy))
    elif mode is GameMode.PAUSED:
        _dim(surf, 128)
        _blit_text(surf, fonts.large, "Paused", COLOR_FG, (cx, cy))
        _blit_text(surf, fonts.medium, "P or tap to resume", COLOR_FG, (cx, cy + 50))
    elif mode is GameMode.GAME_OVER:
        _dim(surf, 178)
        _blit_text(surf, fonts.large, "Game over", COLOR_FG, (cx, cy - 100))
        _blit_text(surf, fonts.medium, f"{scene.player_name}: {scene.distance}m", COLOR_FG, (cx, cy - 60))
        _blit_text(surf, fonts.medium, f"Best: {scene.best_distance}m", COLOR_FG, (cx, cy - 30))
        _blit_text(surf, fonts.medium, "Tap to restart", COLOR_FG, (cx, cy + 50))


def draw_scene(surf: pygame.Surface, scene: Scene, fonts: Fonts, typed_name: str = ""):
    """Paint one frame. Reads the snapshot only."""
    surf.blit(_sky(surf.get_size()), (0, 0))
    _draw_clouds(surf, scene)
    _draw_obstacles(surf, scene)
    _draw_avatar(surf, scene)
    _draw_effects(surf, scene, fonts)
    _draw_ui(surf, scene, fonts, typed_name)


# --------------------------- Main loop ---------------------------

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="flapgap: fly through the gaps")
    p.add_argument("--seed", type=int, default=None,
                   help="RNG seed for obstacles and clouds. Omit for a random seed.")
    p.add_argument("--name", type=str, default=None,
                   help="Skip the name screen and play as NAME.")
    p.add_argument("--freeze-on-game-over", action="store_true",
                   help="Also freeze clouds and floating text on the game-over screen.")
    p.add_argument("--debug", action="store_true", help="Verbose logging")
    return p.parse_args(argv)


def run(argv=None):
    args = parse_args(argv)
    setup_logging(args.debug)

    pygame.init()
    pygame.display.set_caption("flapgap")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    fonts = load_fonts()

    game = FlapGame(seed=args.seed, freeze_cosmetics_on_game_over=args.freeze_on_game_over)
    game.machine.add_listener(
        lambda old, new: pygame.display.set_caption(f"flapgap - {new.value}")
    )
    logger.info(f"Starting flapgap (seed={game.seed})")

    name_entry = NameEntry()
    if args.name is not None:
        game.confirm_name(args.name)

    running = True
    while running:
        dt = clock.tick(FPS) / 1000.0

        for event in pygame.event.get():
            if game.mode is GameMode.NAME_ENTRY:
                if event.type == pygame.QUIT or (event.type == pygame.KEYDOWN and event.key == K_ESCAPE):
                    running = False
                    break
                confirmed = name_entry.handle(event)
                if confirmed is not None:
                    game.confirm_name(confirmed)
                continue
            if not dispatch(game, translate_event(event)):
                running = False
                break

        game.update(dt)
        draw_scene(screen, game.snapshot(), fonts, name_entry.text)
        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    run()
