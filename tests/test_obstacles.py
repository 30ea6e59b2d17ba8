import random

import pytest

from flapline.sim.obstacles import (
    Obstacle,
    advance,
    mark_passed,
    maybe_spawn,
    retire_offscreen,
    spawn_obstacle,
)


class FixedRandom(random.Random):
    def __init__(self, value: float) -> None:
        super().__init__()
        self.value = value

    def random(self) -> float:
        return self.value


def test_advance_scrolls_every_obstacle(config):
    obstacles = (Obstacle(x=100.0, gap_height=10.0), Obstacle(x=300.0, gap_height=20.0))
    moved = advance(obstacles, config)
    assert [o.x for o in moved] == [95.0, 295.0]
    assert [o.gap_height for o in moved] == [10.0, 20.0]
    # Input untouched
    assert obstacles[0].x == 100.0


def test_retire_drops_fully_offscreen_obstacles(config):
    obstacles = (
        Obstacle(x=-50.0, gap_height=0.0),
        Obstacle(x=-49.0, gap_height=0.0),
        Obstacle(x=200.0, gap_height=0.0),
    )
    kept = retire_offscreen(obstacles, config)
    assert [o.x for o in kept] == [-49.0, 200.0]


def test_spawn_into_empty_stream(config, rng):
    obstacles = maybe_spawn((), config, rng)
    assert len(obstacles) == 1
    assert obstacles[0].x == config.field_width
    assert obstacles[0].passed is False


def test_spawn_waits_for_spacing_threshold(config, rng):
    threshold = config.field_width - config.pipe_spacing

    not_yet = (Obstacle(x=threshold, gap_height=0.0),)
    assert maybe_spawn(not_yet, config, rng) == not_yet

    crossed = (Obstacle(x=threshold - 0.1, gap_height=0.0),)
    spawned = maybe_spawn(crossed, config, rng)
    assert len(spawned) == 2
    assert spawned[-1].x == config.field_width


def test_gap_height_stays_within_bounds(config, rng):
    for _ in range(1000):
        gap = spawn_obstacle(config, rng).gap_height
        assert 0.0 <= gap < config.max_gap_height


def test_gap_height_scales_uniform_draw(config):
    assert spawn_obstacle(config, FixedRandom(0.0)).gap_height == 0.0
    assert spawn_obstacle(config, FixedRandom(0.5)).gap_height == pytest.approx(200.0)


def test_obstacle_scores_once_while_crossing(config):
    obstacles = (Obstacle(x=170.0, gap_height=0.0),)
    total = 0
    for _ in range(20):
        obstacles = advance(obstacles, config)
        obstacles, gained = mark_passed(obstacles, config.bird_center_x, config)
        total += gained

    assert total == 1
    assert obstacles[0].passed is True


def test_mark_passed_trusts_flag_not_position(config):
    already = (Obstacle(x=0.0, gap_height=0.0, passed=True),)
    obstacles, gained = mark_passed(already, config.bird_center_x, config)
    assert gained == 0
    assert obstacles == already


def test_mark_passed_counts_each_crossing_obstacle(config):
    obstacles = (
        Obstacle(x=10.0, gap_height=0.0),
        Obstacle(x=140.0, gap_height=0.0),
        Obstacle(x=151.0, gap_height=0.0),
    )
    obstacles, gained = mark_passed(obstacles, config.bird_center_x, config)
    assert gained == 2
    assert [o.passed for o in obstacles] == [True, True, False]


def test_spawn_spacing_is_constant(config, rng):
    obstacles = maybe_spawn((), config, rng)
    distances = []

    for _ in range(3000):
        obstacles = advance(obstacles, config)
        obstacles = retire_offscreen(obstacles, config)
        before = len(obstacles)
        newest = obstacles[-1] if obstacles else None
        obstacles = maybe_spawn(obstacles, config, rng)
        if newest is not None and len(obstacles) > before:
            distances.append(obstacles[-1].x - newest.x)

    assert len(distances) > 40
    assert all(d == pytest.approx(distances[0]) for d in distances)
    assert config.pipe_spacing <= distances[0] < config.pipe_spacing + config.pipe_speed


def test_stream_covers_field_plus_lookahead(config, rng):
    obstacles = maybe_spawn((), config, rng)
    for _ in range(500):
        obstacles = maybe_spawn(
            retire_offscreen(advance(obstacles, config), config), config, rng
        )
        # Newest obstacle is never more than one spacing unit plus a step behind the edge
        assert obstacles[-1].x >= config.field_width - config.pipe_spacing - config.pipe_speed
        xs = [o.x for o in obstacles]
        assert xs == sorted(xs)
