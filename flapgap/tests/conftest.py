from __future__ import annotations

import os

# headless pygame for renderer/env tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from flapgap.game.clock import ManualClock
from flapgap.game.engine import FlapGame
from flapgap.game.state import GameMode
from flapgap.tests.helpers import run_tick


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(start_ms=1_000.0)


@pytest.fixture
def game(clock: ManualClock) -> FlapGame:
    return FlapGame(clock=clock, seed=1234)


@pytest.fixture
def playing(game: FlapGame, clock: ManualClock) -> FlapGame:
    """A game past name entry and countdown, on its first playing tick."""
    game.confirm_name("tester")
    for _ in range(1000):
        if game.mode is GameMode.PLAYING:
            break
        run_tick(game, clock)
    assert game.mode is GameMode.PLAYING
    return game
