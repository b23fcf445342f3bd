# flapgap/game/physics.py
"""
Per-tick world advancement: avatar motion, obstacle spawning/retiring,
scoring and difficulty. Everything takes the `World` explicitly; randomness
comes from the `random.Random` the caller owns, so a seed reproduces a run.
"""
from __future__ import annotations
import enum
import logging
import random
from typing import List

from .config import (
    WIDTH, HEIGHT, SIM_DT, BASE_SPEED, MIN_GAP, MAX_GAP, OBSTACLE_MARGIN,
    SPAWN_SPACING, MILESTONE_DISTANCE, SPEED_STEP, GAP_STEP, POINTS_PER_OBSTACLE,
    CLOUD_COUNT, CLOUD_MIN_SIZE, CLOUD_MAX_SIZE, CLOUD_MIN_SPEED, CLOUD_MAX_SPEED,
    CLOUD_MIN_OPACITY, CLOUD_MAX_OPACITY, CLOUD_BAND, COLOR_MINT, COLOR_PINK,
)
from .collision import first_hit
from .entities import Cloud, Obstacle, World

logger = logging.getLogger(__name__)


class Outcome(enum.Enum):
    RUNNING = "running"
    OUT_OF_BOUNDS = "bounds"
    CRASHED = "obstacle"


# --- Difficulty (pure functions of distance) ---

def milestones(distance: int) -> int:
    """Completed 50 m milestones."""
    return max(0, int(distance)) // MILESTONE_DISTANCE


def speed_for_distance(distance: int) -> float:
    return BASE_SPEED * (1 + SPEED_STEP * milestones(distance))


def speed_ratio(distance: int) -> float:
    return speed_for_distance(distance) / BASE_SPEED


def gap_bounds(distance: int):
    bonus = GAP_STEP * milestones(distance)
    return MIN_GAP + bonus, MAX_GAP + bonus


def roll_gap_size(distance: int, rng: random.Random) -> float:
    lo, hi = gap_bounds(distance)
    return rng.random() * (hi - lo) + lo


# --- Spawner ---

def spawn_obstacle(world: World, rng: random.Random) -> Obstacle:
    gap = roll_gap_size(world.distance, rng)
    # keep OBSTACLE_MARGIN above the gap and below it while the field allows it
    span = max(0.0, HEIGHT - gap - 2 * OBSTACLE_MARGIN)
    top = rng.random() * span + OBSTACLE_MARGIN
    bottom = top + gap
    # store the gap as bottom - top so the invariant holds bit-for-bit
    ob = Obstacle(x=float(WIDTH), top_height=top, bottom_y=bottom, gap_size=bottom - top)
    world.obstacles.append(ob)
    logger.debug(f"spawn obstacle gap={gap:.1f} top={top:.1f} at distance={world.distance}")
    return ob


def needs_spawn(obstacles: List[Obstacle]) -> bool:
    return not obstacles or obstacles[-1].x < WIDTH - SPAWN_SPACING


def _score_passed(world: World):
    av = world.avatar
    for ob in world.obstacles:
        if not ob.passed and ob.right < av.x:
            ob.passed = True
            world.distance += POINTS_PER_OBSTACLE
            world.add_effect(av.x + 30, av.y - 20, f"+{POINTS_PER_OBSTACLE}m", COLOR_MINT)
            if world.distance > 0 and world.distance % MILESTONE_DISTANCE == 0:
                world.add_effect(WIDTH / 2, HEIGHT / 2,
                                 f"{world.distance}m reached! Speed up!", COLOR_PINK)
                logger.info(f"milestone {world.distance}m, speed x{speed_ratio(world.distance):.1f}")


def step_world(world: World, rng: random.Random, dt: float = SIM_DT) -> Outcome:
    """One playing tick. Stops at the first failure without touching the rest."""
    av = world.avatar
    av.update_physics(dt)
    if av.y < 0 or av.y > HEIGHT:
        return Outcome.OUT_OF_BOUNDS

    world.speed = speed_for_distance(world.distance)
    if needs_spawn(world.obstacles):
        spawn_obstacle(world, rng)

    for ob in world.obstacles:
        ob.x -= world.speed

    if first_hit(av, world.obstacles) is not None:
        return Outcome.CRASHED

    _score_passed(world)
    world.obstacles = [ob for ob in world.obstacles if ob.right >= 0]
    return Outcome.RUNNING


# --- Cosmetics ---

def make_clouds(rng: random.Random, count: int = CLOUD_COUNT) -> List[Cloud]:
    return [
        Cloud(
            x=rng.random() * WIDTH * 2,
            y=rng.random() * HEIGHT * CLOUD_BAND,
            size=rng.uniform(CLOUD_MIN_SIZE, CLOUD_MAX_SIZE),
            speed=rng.uniform(CLOUD_MIN_SPEED, CLOUD_MAX_SPEED),
            opacity=rng.uniform(CLOUD_MIN_OPACITY, CLOUD_MAX_OPACITY),
        )
        for _ in range(count)
    ]


def advance_clouds(world: World, rng: random.Random):
    """Drift clouds with the current game speed, wrap them around the left edge."""
    ratio = world.speed / BASE_SPEED
    for c in world.clouds:
        c.x -= c.speed * ratio
        if c.x + c.size < 0:
            c.x = WIDTH + c.size
            c.y = rng.random() * HEIGHT * CLOUD_BAND


def advance_effects(world: World):
    for fx in world.effects:
        fx.advance()
    world.effects = [fx for fx in world.effects if fx.alive]
