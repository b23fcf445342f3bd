# flapgap/game/snapshot.py
"""Read-only per-frame view of the world, handed to renderers and observers."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from .entities import Color, World
from .config import BASE_SPEED
from .state import GameMode


@dataclass(frozen=True)
class AvatarPose:
    x: float
    y: float
    vy: float
    rotation: float
    flap_frames: int


@dataclass(frozen=True)
class ObstacleView:
    x: float
    width: float
    top_height: float
    bottom_y: float
    passed: bool


@dataclass(frozen=True)
class CloudView:
    x: float
    y: float
    size: float
    opacity: float


@dataclass(frozen=True)
class EffectView:
    x: float
    y: float
    text: str
    color: Color
    opacity: float


@dataclass(frozen=True)
class Scene:
    avatar: AvatarPose
    obstacles: Tuple[ObstacleView, ...]
    clouds: Tuple[CloudView, ...]
    effects: Tuple[EffectView, ...]
    distance: int
    best_distance: int
    speed_ratio: float
    mode: GameMode
    countdown: int
    player_name: str


def build_scene(world: World, mode: GameMode) -> Scene:
    av = world.avatar
    return Scene(
        avatar=AvatarPose(av.x, av.y, av.vy, av.rotation, av.flap_frames),
        obstacles=tuple(
            ObstacleView(ob.x, ob.width, ob.top_height, ob.bottom_y, ob.passed)
            for ob in world.obstacles
        ),
        clouds=tuple(CloudView(c.x, c.y, c.size, c.opacity) for c in world.clouds),
        effects=tuple(
            EffectView(fx.x, fx.y, fx.text, fx.color, fx.opacity) for fx in world.effects
        ),
        distance=world.distance,
        best_distance=world.best_distance,
        speed_ratio=world.speed / BASE_SPEED,
        mode=mode,
        countdown=world.timers.countdown_value,
        player_name=world.player_name,
    )
