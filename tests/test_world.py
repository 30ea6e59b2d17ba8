import random

import pytest

from flapline.sim.bird import BirdState
from flapline.sim.collision import CollisionKind
from flapline.sim.obstacles import Obstacle
from flapline.sim.world import RunState, World, idle_world, initial_world, step, with_impulse


def test_initial_world_has_single_obstacle_at_right_edge(config, rng):
    world = initial_world(config, rng)
    assert len(world.obstacles) == 1
    assert world.obstacles[0].x == config.field_width
    assert world.run == RunState(score=0, is_active=True, is_over=False)
    assert world.bird == BirdState(y=config.field_height / 2, velocity=0.0)
    assert world.tick == 0


def test_idle_world_does_not_tick(config, rng):
    world = idle_world(config)
    assert step(world, config, rng) is world


def test_step_runs_gravity_and_scroll(config, rng):
    world = initial_world(config, rng)
    after = step(world, config, rng)

    assert after.bird.velocity == pytest.approx(1.5)
    assert after.bird.y == pytest.approx(401.5)
    assert after.obstacles[0].x == config.field_width - config.pipe_speed
    assert after.tick == 1
    # Previous snapshot untouched
    assert world.bird.y == config.field_height / 2
    assert world.obstacles[0].x == config.field_width


def test_impulse_only_while_running(config, rng):
    world = initial_world(config, rng)
    flapped = with_impulse(world, config)
    assert flapped.bird.velocity == config.jump_velocity

    over = World(bird=BirdState(y=10.0, velocity=3.0), run=RunState(score=2, is_over=True))
    assert with_impulse(over, config) is over
    assert with_impulse(idle_world(config), config).bird.velocity == 0.0


def test_scoring_observes_this_ticks_positions(config, rng):
    # Trailing edge at 202 -> 197 after this tick's scroll, past the bird center
    world = World(
        bird=BirdState(y=400.0, velocity=-1.5),
        obstacles=(Obstacle(x=152.0, gap_height=300.0),),
        run=RunState(is_active=True),
    )
    world = step(world, config, rng)
    assert world.run.score == 1
    assert world.obstacles[0].passed

    for _ in range(10):
        world = step(world, config, rng)
    assert world.run.score == 1
    assert not world.run.is_over


def test_collision_observes_this_ticks_positions(config, rng):
    # Pipe is one step right of the bird before the tick and overlaps after it
    world = World(
        bird=BirdState(y=0.0, velocity=-1.5),
        obstacles=(Obstacle(x=227.0, gap_height=300.0),),
        run=RunState(is_active=True),
    )
    world = step(world, config, rng)
    assert world.run.is_over
    assert world.collision == CollisionKind.OBSTACLE


def test_free_fall_ends_on_ground_and_freezes(config):
    rng = random.Random(7)
    world = initial_world(config, rng)
    ground_ticks = None

    for i in range(50):
        previous = world
        world = step(world, config, rng)
        if previous.is_running:
            assert world.bird.y > previous.bird.y
        if world.run.is_over and ground_ticks is None:
            ground_ticks = i + 1

    assert world.run.is_over
    assert not world.run.is_active
    assert world.collision == CollisionKind.GROUND
    assert world.bird.y + config.bird_height >= config.ground_top
    assert ground_ticks == 18

    frozen = world
    for _ in range(25):
        world = step(world, config, rng)
    assert world is frozen
    assert world.run.score == 0


def test_step_is_deterministic_for_a_seed(config):
    a = initial_world(config, random.Random(42))
    b = initial_world(config, random.Random(42))
    rng_a, rng_b = random.Random(99), random.Random(99)
    for _ in range(15):
        a = step(with_impulse(a, config) if a.tick % 6 == 0 else a, config, rng_a)
        b = step(with_impulse(b, config) if b.tick % 6 == 0 else b, config, rng_b)
    assert a == b
