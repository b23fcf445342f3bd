# flapgap/env/observations.py
from __future__ import annotations
from typing import Optional
import numpy as np

from flapgap.game.config import WIDTH, HEIGHT, AVATAR_W, MAX_FALL_SPEED, FLAP_VELOCITY
from flapgap.game.snapshot import ObstacleView, Scene

OBS_SIZE = 6
MAX_SPEED_RATIO = 3.0   # speed ratios above this saturate the speed feature

OBS_LOW = np.array([0.0, -1.0, 0.0, 0.0, 0.0, 0.0], dtype=np.float32)
OBS_HIGH = np.array([1.0, 1.0, 1.0, 1.0, 1.0, 1.0], dtype=np.float32)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def next_obstacle(scene: Scene) -> Optional[ObstacleView]:
    """First obstacle (creation order) whose trailing edge is not yet behind the avatar."""
    left = scene.avatar.x - AVATAR_W / 2
    for ob in scene.obstacles:
        if ob.x + ob.width >= left:
            return ob
    return None


def build_observation(scene: Scene) -> np.ndarray:
    """
    [y_norm, vy_norm, next_dx_norm, gap_top_norm, gap_bottom_norm, speed_norm], float32.
    With no obstacle ahead the gap reads as the whole field (0, 1) at max distance.
    """
    av = scene.avatar
    y_norm = _clamp01(av.y / HEIGHT)
    vy_scale = max(MAX_FALL_SPEED, abs(FLAP_VELOCITY))
    vy_norm = max(-1.0, min(1.0, av.vy / vy_scale))

    ob = next_obstacle(scene)
    if ob is None:
        dx, gap_top, gap_bot = 1.0, 0.0, 1.0
    else:
        dx = _clamp01((ob.x + ob.width - av.x) / WIDTH)
        gap_top = _clamp01(ob.top_height / HEIGHT)
        gap_bot = _clamp01(ob.bottom_y / HEIGHT)

    speed_norm = _clamp01((scene.speed_ratio - 1.0) / (MAX_SPEED_RATIO - 1.0))
    return np.array([y_norm, vy_norm, dx, gap_top, gap_bot, speed_norm], dtype=np.float32)
