from __future__ import annotations

from flapgap.game.clock import ManualClock
from flapgap.game.config import SIM_DT, AVATAR_W, HEIGHT
from flapgap.game.engine import FlapGame

TICK_MS = SIM_DT * 1000.0


def run_tick(game: FlapGame, clock: ManualClock) -> None:
    clock.advance(TICK_MS)
    game.tick()


def pin_into_next_gap(game: FlapGame) -> None:
    """Park the avatar, motionless, in the middle of the next gap ahead of it."""
    av = game.world.avatar
    left = av.x - AVATAR_W / 2
    av.y = HEIGHT / 2
    for ob in game.world.obstacles:
        if ob.right >= left:
            av.y = (ob.top_height + ob.bottom_y) / 2
            break
    av.vy = 0.0
