# flapgap/env/flap_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import logging
import numpy as np
import gymnasium as gym
import pygame

from flapgap.game.config import WIDTH, HEIGHT, SIM_DT
from flapgap.game.clock import ManualClock
from flapgap.game.engine import FlapGame
from flapgap.game.game import draw_scene, load_fonts
from flapgap.game.state import GameMode
from flapgap.env.observations import OBS_LOW, OBS_HIGH, build_observation

logger = logging.getLogger(__name__)


class FlapEnv(gym.Env):
    """
    flapgap Gymnasium environment (vector observations).
    - Simulation at 60 Hz (internal), driven by a manual clock: no real time passes.
    - Agent acts every `frame_skip` ticks (default 4) -> 15 decisions/sec.
    - Observation: shape (6,), float32 (see observations.build_observation).
    - The pre-run countdown is simulated away inside reset().
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 30.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unknown render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)

        # Internal sim timing
        self.sim_fps = 60
        self.dt_ms = SIM_DT * 1000.0

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = FLAP
        self.action_space = gym.spaces.Discrete(2)
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        # --- Runtime state ---
        self.game: Optional[FlapGame] = None
        self.clock: Optional[ManualClock] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        # Rendering
        self.screen = None
        self.pg_clock = None
        self.fonts = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # The game's own RNG is drawn from np_random so reset(seed=...) reproduces the layout.
        game_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.clock = ManualClock()
        self.game = FlapGame(clock=self.clock, seed=game_seed)
        self.game.confirm_name("agent")
        while self.game.mode is GameMode.COUNTDOWN:
            self._sim_tick()

        self.timestep = 0
        self.current_seed = game_seed
        logger.debug(f"reset: game seed {game_seed}")

        obs = self._get_obs()
        info = {"seed": self.current_seed, "distance": 0}
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.game is not None, "Call reset() before step()"

        if int(action) == 1:
            self.game.primary_action()

        for _ in range(self.frame_skip):
            self._sim_tick()
            if self.game.mode is GameMode.GAME_OVER:
                break

        alive = self.game.mode is GameMode.PLAYING
        reward = 1.0 if alive else -1.0

        self.timestep += 1
        terminated = not alive
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = not terminated

        obs = self._get_obs()
        info = {
            "distance": self.game.world.distance,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "death_cause": self.game.death_cause,
        }

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # -------------------- Helpers --------------------

    def _sim_tick(self):
        self.clock.advance(self.dt_ms)
        self.game.tick()

    def _get_obs(self) -> np.ndarray:
        assert self.game is not None
        return build_observation(self.game.snapshot())

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.game is None:
            return None

        if self.screen is None:
            if self.render_mode == "human":
                pygame.init()
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("flapgap - Gym Env")
                self.pg_clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.fonts = load_fonts()

        draw_scene(self.screen, self.game.snapshot(), self.fonts)

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            self.pg_clock.tick(self.metadata["render_fps"])
            return None

        # (W, H, 3) -> (H, W, 3) uint8
        arr = pygame.surfarray.array3d(self.screen)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
                pygame.quit()
            self.screen = None
            self.pg_clock = None
            self.fonts = None
