from __future__ import annotations

import random

import pytest

from flapgap.game.config import (
    WIDTH, HEIGHT, SIM_DT, MAX_FALL_SPEED, MAX_ROTATION_DEG, BASE_SPEED,
    OBSTACLE_W, SPAWN_SPACING, CLOUD_COUNT,
)
from flapgap.game.entities import Avatar, Effect, Obstacle, World
from flapgap.game.physics import (
    Outcome, advance_clouds, advance_effects, gap_bounds, make_clouds, milestones,
    needs_spawn, roll_gap_size, spawn_obstacle, speed_for_distance, speed_ratio, step_world,
)


def test_fall_speed_is_clamped() -> None:
    av = Avatar()
    for _ in range(300):
        av.update_physics(SIM_DT)
        assert av.vy <= MAX_FALL_SPEED
    assert av.vy == MAX_FALL_SPEED


def test_rotation_follows_velocity_within_limits() -> None:
    av = Avatar(vy=100.0)
    av.update_physics(SIM_DT)
    assert av.rotation == pytest.approx(av.vy * 0.08)
    av.flap()
    av.update_physics(SIM_DT)
    assert av.rotation == pytest.approx(-285.0 * 0.08)
    av.vy = -400.0
    av.update_physics(SIM_DT)
    assert av.rotation == -MAX_ROTATION_DEG
    av.vy = MAX_FALL_SPEED
    av.update_physics(SIM_DT)
    assert av.rotation == MAX_ROTATION_DEG


def test_flap_sets_impulse_and_animation() -> None:
    av = Avatar(vy=200.0)
    av.flap()
    assert av.vy == -300.0
    assert av.flap_frames == 10
    av.update_physics(SIM_DT)
    assert av.flap_frames == 9


# one 10% step per full 50m, so 149 is still on the 100m step
@pytest.mark.parametrize("distance, ratio", [
    (0, 1.0), (49, 1.0), (50, 1.1), (99, 1.1), (100, 1.2), (149, 1.2), (150, 1.3),
])
def test_speed_is_pure_function_of_distance(distance: int, ratio: float) -> None:
    assert speed_for_distance(distance) == pytest.approx(BASE_SPEED * ratio)
    assert speed_ratio(distance) == pytest.approx(ratio)
    assert speed_for_distance(distance) == speed_for_distance(distance)


@pytest.mark.parametrize("distance, lo, hi", [
    (0, 110, 170), (49, 110, 170), (50, 115, 175), (120, 120, 180), (500, 160, 220),
])
def test_gap_bounds_widen_with_milestones(distance: int, lo: int, hi: int) -> None:
    assert gap_bounds(distance) == (lo, hi)
    rng = random.Random(99)
    for _ in range(500):
        g = roll_gap_size(distance, rng)
        assert lo <= g <= hi


def test_milestones_never_negative() -> None:
    assert milestones(-10) == 0
    assert milestones(0) == 0
    assert milestones(250) == 5


def test_spawned_obstacle_keeps_gap_invariant() -> None:
    rng = random.Random(3)
    world = World()
    for d in (0, 50, 400, 5000):
        world.distance = d
        ob = spawn_obstacle(world, rng)
        assert ob.x == WIDTH
        assert ob.width == OBSTACLE_W
        assert ob.bottom_y - ob.top_height == ob.gap_size
        assert not ob.passed


def test_spawn_rule() -> None:
    assert needs_spawn([])
    ob = Obstacle(x=WIDTH - SPAWN_SPACING, top_height=100, bottom_y=250, gap_size=150)
    assert not needs_spawn([ob])
    ob.x -= 0.5
    assert needs_spawn([ob])


def test_step_spawns_and_scrolls() -> None:
    world = World()
    outcome = step_world(world, random.Random(1))
    assert outcome is Outcome.RUNNING
    assert len(world.obstacles) == 1
    assert world.obstacles[0].x == pytest.approx(WIDTH - BASE_SPEED)


def test_out_of_bounds_stops_before_obstacles_move() -> None:
    world = World(avatar=Avatar(y=-5.0, vy=-300.0))
    assert step_world(world, random.Random(1)) is Outcome.OUT_OF_BOUNDS
    assert world.obstacles == []

    world = World(avatar=Avatar(y=HEIGHT - 1.0, vy=MAX_FALL_SPEED))
    assert step_world(world, random.Random(1)) is Outcome.OUT_OF_BOUNDS


def _world_with_obstacle_about_to_pass(distance: int) -> World:
    # trailing edge ends at 97 after a 2px move, avatar (x=100) sits inside the gap
    ob = Obstacle(x=63.0, top_height=200.0, bottom_y=400.0, gap_size=200.0)
    return World(avatar=Avatar(y=300.0), obstacles=[ob], distance=distance)


def test_passing_an_obstacle_scores_once() -> None:
    world = _world_with_obstacle_about_to_pass(0)
    rng = random.Random(1)
    assert step_world(world, rng) is Outcome.RUNNING
    assert world.obstacles[0].passed
    assert world.distance == 10
    assert [fx.text for fx in world.effects] == ["+10m"]

    world.avatar.y, world.avatar.vy = 300.0, 0.0
    step_world(world, rng)
    assert world.distance == 10


def test_milestone_effect_on_multiple_of_fifty() -> None:
    world = _world_with_obstacle_about_to_pass(40)
    step_world(world, random.Random(1))
    assert world.distance == 50
    texts = [fx.text for fx in world.effects]
    assert texts[0] == "+10m"
    assert texts[1].startswith("50m")


def test_crash_stops_scan_and_scoring() -> None:
    ob = Obstacle(x=63.0, top_height=320.0, bottom_y=480.0, gap_size=160.0)
    world = World(avatar=Avatar(y=300.0), obstacles=[ob])
    assert step_world(world, random.Random(1)) is Outcome.CRASHED
    assert world.distance == 0
    assert not ob.passed


def test_obstacles_retire_past_left_edge() -> None:
    gone = Obstacle(x=-OBSTACLE_W + 1.0, top_height=100.0, bottom_y=250.0, gap_size=150.0, passed=True)
    world = World(obstacles=[gone])
    step_world(world, random.Random(1))
    assert gone not in world.obstacles
    assert len(world.obstacles) == 1   # the fresh spawn


def test_speed_recomputed_from_distance_each_tick() -> None:
    world = World(distance=100, speed=BASE_SPEED)
    step_world(world, random.Random(1))
    assert world.speed == pytest.approx(BASE_SPEED * 1.2)
    assert world.obstacles[0].x == pytest.approx(WIDTH - BASE_SPEED * 1.2)


def test_clouds_wrap_around() -> None:
    rng = random.Random(5)
    clouds = make_clouds(rng)
    assert len(clouds) == CLOUD_COUNT
    world = World(clouds=clouds)
    c = world.clouds[0]
    c.size, c.speed = 30.0, 0.5
    c.x = -29.9
    advance_clouds(world, rng)
    assert c.x == WIDTH + 30.0
    assert 0.0 <= c.y <= HEIGHT


def test_effects_fade_and_expire() -> None:
    world = World(effects=[Effect(x=0.0, y=100.0, text="hi", color=(1, 2, 3))])
    advance_effects(world)
    fx = world.effects[0]
    assert fx.y == 98.0
    assert fx.opacity == pytest.approx(1.0 - 1.0 / 60.0)
    assert fx.life == 59
    for _ in range(59):
        advance_effects(world)
    assert world.effects == []
