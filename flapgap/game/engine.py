# flapgap/game/engine.py
"""
FlapGame: owns the world, the mode machine, the clock and the RNG, and turns
the two input commands plus elapsed frame time into simulation ticks.

Tick order (see `tick`): clouds -> countdown or physics -> effects.
Renderers only ever see `snapshot()`.
"""
from __future__ import annotations
import logging
import random
from typing import Optional

from .config import (
    WIDTH, HEIGHT, BASE_SPEED, COUNTDOWN_FROM, COUNTDOWN_STEP_MS,
    MIN_FLAP_INTERVAL_MS, DEFAULT_PLAYER_NAME, MAX_NAME_LEN, SIM_DT,
    COLOR_GOLD, COLOR_PINK, COLOR_MINT, COLOR_SKY_TEXT,
)
from .clock import Clock, FixedStepper, SystemClock
from .entities import World
from .physics import Outcome, step_world, make_clouds, advance_clouds, advance_effects
from .snapshot import Scene, build_scene
from .state import GameMode, ModeMachine

logger = logging.getLogger(__name__)


def sanitize_name(raw: Optional[str]) -> str:
    """Trim, cap the length, fall back to the placeholder name."""
    name = (raw or "").strip()[:MAX_NAME_LEN].strip()
    return name or DEFAULT_PLAYER_NAME


class FlapGame:
    """
    One play session. `best_distance` survives restarts for the lifetime of
    this object; nothing is written anywhere else.

    freeze_cosmetics_on_game_over=False keeps clouds/effects moving behind
    the game-over screen (they always freeze while paused).
    """

    def __init__(self,
                 clock: Optional[Clock] = None,
                 seed: Optional[int] = None,
                 freeze_cosmetics_on_game_over: bool = False):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)
        self.clock: Clock = clock if clock is not None else SystemClock()
        self.stepper = FixedStepper(SIM_DT)
        self.machine = ModeMachine(GameMode.NAME_ENTRY)
        self.freeze_cosmetics_on_game_over = freeze_cosmetics_on_game_over

        self.world = World()
        self.world.clouds = make_clouds(self.rng)
        self.death_cause: Optional[str] = None   # "bounds" | "obstacle" | None
        self.ticks = 0

    @property
    def mode(self) -> GameMode:
        return self.machine.mode

    # -------------------- Commands --------------------

    def confirm_name(self, raw_name: Optional[str]) -> str:
        """Leave name entry: store the sanitized name and start the countdown."""
        if self.mode is not GameMode.NAME_ENTRY:
            return self.world.player_name
        self.world.player_name = sanitize_name(raw_name)
        logger.info(f"Player name set to {self.world.player_name!r}")
        self._reset()
        return self.world.player_name

    def primary_action(self):
        """Tap / click / space: flap, resume or restart depending on the mode."""
        mode = self.mode
        if mode is GameMode.PLAYING:
            self._try_flap()
        elif mode is GameMode.PAUSED:
            self.toggle_pause()
        elif mode is GameMode.GAME_OVER:
            self.restart()

    def toggle_pause(self):
        w = self.world
        now = self.clock.now_ms()
        if self.mode is GameMode.PLAYING:
            self.machine.transition(GameMode.PAUSED)
            w.timers.paused_at_ms = now
            w.add_effect(WIDTH / 2, HEIGHT / 2, "Paused", COLOR_PINK)
        elif self.mode is GameMode.PAUSED:
            self.machine.transition(GameMode.PLAYING)
            paused_for = now - w.timers.paused_at_ms
            w.timers.shift(paused_for)
            w.add_effect(WIDTH / 2, HEIGHT / 2, "Resume!", COLOR_MINT)
            logger.debug(f"resumed after {paused_for:.0f} ms")

    def restart(self):
        if self.mode is GameMode.GAME_OVER:
            self._reset()

    # -------------------- Frame / tick --------------------

    def update(self, frame_dt_s: float) -> int:
        """Run the fixed ticks due for this frame's elapsed time."""
        steps = self.stepper.consume(frame_dt_s)
        for _ in range(steps):
            self.tick()
        return steps

    def tick(self):
        mode = self.mode
        cosmetics = mode is not GameMode.PAUSED and not (
            mode is GameMode.GAME_OVER and self.freeze_cosmetics_on_game_over
        )

        if cosmetics:
            advance_clouds(self.world, self.rng)

        if mode is GameMode.COUNTDOWN:
            self._update_countdown()
        elif mode is GameMode.PLAYING:
            outcome = step_world(self.world, self.rng, SIM_DT)
            if outcome is not Outcome.RUNNING:
                self._game_over(outcome)

        if cosmetics:
            advance_effects(self.world)
        self.ticks += 1

    def snapshot(self) -> Scene:
        return build_scene(self.world, self.mode)

    # -------------------- Internals --------------------

    def _try_flap(self) -> bool:
        w = self.world
        now = self.clock.now_ms()
        if now - w.timers.last_flap_ms < MIN_FLAP_INTERVAL_MS:
            logger.debug("flap ignored (debounce)")
            return False
        w.avatar.flap()
        w.timers.last_flap_ms = now
        w.add_effect(w.avatar.x + 20, w.avatar.y, "flap!", COLOR_SKY_TEXT)
        return True

    def _update_countdown(self):
        t = self.world.timers
        now = self.clock.now_ms()
        if now - t.countdown_started_ms > COUNTDOWN_STEP_MS:
            t.countdown_value -= 1
            t.countdown_started_ms = now
            if t.countdown_value < 0:
                self.machine.transition(GameMode.PLAYING)
                t.play_started_ms = now

    def _game_over(self, outcome: Outcome):
        w = self.world
        self.machine.transition(GameMode.GAME_OVER)
        self.death_cause = outcome.value
        logger.info(f"Game over ({outcome.value}) at {w.distance}m, best {w.best_distance}m")
        if w.distance > w.best_distance:
            w.best_distance = w.distance
            w.add_effect(WIDTH / 2, HEIGHT / 2 + 20, "New record!", COLOR_GOLD)

    def _reset(self):
        """Fresh run; clouds, name and best distance carry over."""
        w = self.world
        w.best_distance = max(w.best_distance, w.distance)
        w.avatar.reset()
        w.obstacles = []
        w.effects = []
        w.distance = 0
        w.speed = BASE_SPEED
        w.timers.countdown_value = COUNTDOWN_FROM
        w.timers.countdown_started_ms = self.clock.now_ms()
        self.death_cause = None
        self.stepper.reset()
        self.machine.transition(GameMode.COUNTDOWN)
