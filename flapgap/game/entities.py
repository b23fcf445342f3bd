# flapgap/game/entities.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple

from .config import (
    AVATAR_X, HEIGHT, GRAVITY, FLAP_VELOCITY, MAX_FALL_SPEED,
    ROTATION_PER_VY, MAX_ROTATION_DEG, FLAP_ANIM_FRAMES, OBSTACLE_W,
    BASE_SPEED, COUNTDOWN_FROM, EFFECT_LIFE, EFFECT_VY, EFFECT_FADE,
)

Color = Tuple[int, int, int]


def _clamp(v: float, lo: float, hi: float) -> float:
    return lo if v < lo else (hi if v > hi else v)


@dataclass
class Avatar:
    """
    The flapping avatar. `x, y` is the CENTER of its bounding box.
    - vy > 0 means falling
    - rotation is cosmetic (degrees), never used for collisions
    """
    x: float = float(AVATAR_X)
    y: float = HEIGHT / 2
    vy: float = 0.0
    rotation: float = 0.0
    flap_frames: int = 0

    def update_physics(self, dt: float):
        """Integrate vertical motion under gravity, clamp fall speed."""
        self.vy += GRAVITY * dt
        if self.vy > MAX_FALL_SPEED:
            self.vy = MAX_FALL_SPEED
        self.y += self.vy * dt
        self.rotation = _clamp(self.vy * ROTATION_PER_VY, -MAX_ROTATION_DEG, MAX_ROTATION_DEG)
        if self.flap_frames > 0:
            self.flap_frames -= 1

    def flap(self):
        self.vy = FLAP_VELOCITY
        self.flap_frames = FLAP_ANIM_FRAMES

    def reset(self):
        self.x = float(AVATAR_X)
        self.y = HEIGHT / 2
        self.vy = 0.0
        self.rotation = 0.0
        self.flap_frames = 0


@dataclass
class Obstacle:
    """A pipe pair; the open gap spans [top_height, bottom_y]."""
    x: float
    top_height: float
    bottom_y: float
    gap_size: float
    width: float = OBSTACLE_W
    passed: bool = False

    @property
    def right(self) -> float:
        return self.x + self.width


@dataclass
class Cloud:
    x: float
    y: float
    size: float
    speed: float
    opacity: float


@dataclass
class Effect:
    """Floating text that drifts up and fades out."""
    x: float
    y: float
    text: str
    color: Color
    opacity: float = 1.0
    life: int = EFFECT_LIFE
    vy: float = EFFECT_VY

    def advance(self):
        self.y += self.vy
        self.opacity = max(0.0, self.opacity - EFFECT_FADE)
        self.life -= 1

    @property
    def alive(self) -> bool:
        return self.life > 0 and self.opacity > 0.0


@dataclass
class Timers:
    """Wall-clock bookkeeping (ms). Shifted as a block on resume."""
    countdown_value: int = COUNTDOWN_FROM
    countdown_started_ms: float = 0.0
    play_started_ms: float = 0.0
    paused_at_ms: float = 0.0
    last_flap_ms: float = float("-inf")

    def shift(self, ms: float):
        self.countdown_started_ms += ms
        self.play_started_ms += ms
        self.last_flap_ms += ms


@dataclass
class World:
    """Everything the simulation tick owns and mutates."""
    avatar: Avatar = field(default_factory=Avatar)
    obstacles: List[Obstacle] = field(default_factory=list)
    clouds: List[Cloud] = field(default_factory=list)
    effects: List[Effect] = field(default_factory=list)
    timers: Timers = field(default_factory=Timers)
    distance: int = 0
    best_distance: int = 0
    speed: float = BASE_SPEED
    player_name: str = ""

    def add_effect(self, x: float, y: float, text: str, color: Color) -> Effect:
        fx = Effect(x=float(x), y=float(y), text=text, color=color)
        self.effects.append(fx)
        return fx
