import random

from floppyfrog import game
from floppyfrog.game import (
    BIRD_X,
    GAP_HEIGHT,
    HEIGHT,
    MAX_OBSTACLES,
    SPAWN_INTERVAL,
    WIDTH,
    GameState,
    Obstacle,
)


def _state_with(*obstacles, y=None):
    gs = game.new_game()
    gs.obstacles = list(obstacles)
    if y is not None:
        gs.bird.y = y
    return gs


def test_new_game_starts_from_fixed_position():
    gs = game.new_game()
    assert (gs.bird.x, gs.bird.y, gs.bird.velocity) == (WIDTH // 4, HEIGHT // 2, 0)
    assert gs.obstacles == []
    assert gs.score == 0
    assert gs.tick_count == 0
    assert gs == GameState()


def test_gravity_accelerates_fall():
    gs = game.new_game()
    game.update_bird(gs)
    game.update_bird(gs)
    assert gs.bird.velocity == 2
    assert gs.bird.y == HEIGHT // 2 + 1 + 2


def test_flap_overrides_velocity():
    gs = game.new_game()
    gs.bird.velocity = 7
    game.flap(gs)
    game.flap(gs)
    assert gs.bird.velocity == game.FLAP_VELOCITY


def test_clamp_keeps_velocity():
    gs = game.new_game()
    gs.bird.y = HEIGHT - 1
    gs.bird.velocity = 5
    game.update_bird(gs)
    assert gs.bird.y == HEIGHT - 1
    assert gs.bird.velocity == 6

    gs.bird.y = 0
    gs.bird.velocity = -10
    game.update_bird(gs)
    assert gs.bird.y == 0
    assert gs.bird.velocity == -9


def test_bird_stays_on_screen_for_any_flap_sequence():
    rng = random.Random(1234)
    gs = game.new_game()
    for _ in range(2000):
        if rng.random() < 0.4:
            game.flap(gs)
        game.update_bird(gs)
        assert 0 <= gs.bird.y <= HEIGHT - 1


def test_spawn_places_obstacle_at_right_edge_with_gap_in_range():
    rng = random.Random(99)
    for _ in range(5):
        gs = game.new_game()
        for _ in range(MAX_OBSTACLES):
            assert game.spawn_obstacle(gs, rng)
        for o in gs.obstacles:
            assert o.x == WIDTH - 1
            assert 0 <= o.gap_start < HEIGHT - GAP_HEIGHT


def test_spawn_at_capacity_is_dropped():
    gs = game.new_game()
    rng = random.Random(0)
    for _ in range(MAX_OBSTACLES + 25):
        game.spawn_obstacle(gs, rng)
    assert len(gs.obstacles) == MAX_OBSTACLES

    before = [Obstacle(o.x, o.gap_start) for o in gs.obstacles]
    assert game.spawn_obstacle(gs, rng) is False
    assert gs.obstacles == before


def test_spawn_cadence_includes_tick_zero():
    gs = game.new_game()
    rng = random.Random(5)
    counts = []
    for tick in range(SPAWN_INTERVAL * 2 + 1):
        gs.tick_count = tick
        game.step(gs, rng)
        counts.append(len(gs.obstacles))
    assert counts[0] == 1
    assert counts[SPAWN_INTERVAL - 1] == 1
    assert counts[SPAWN_INTERVAL] == 2
    assert counts[SPAWN_INTERVAL * 2] == 3


def test_advance_moves_left_and_prunes_in_order():
    gs = _state_with(Obstacle(0, 1), Obstacle(5, 2), Obstacle(0, 3), Obstacle(3, 4))
    game.advance_obstacles(gs)
    assert gs.obstacles == [Obstacle(4, 2), Obstacle(2, 4)]


def test_obstacle_survives_at_column_zero():
    gs = _state_with(Obstacle(1, 0))
    game.advance_obstacles(gs)
    assert gs.obstacles == [Obstacle(0, 0)]
    game.advance_obstacles(gs)
    assert gs.obstacles == []


def test_collision_outside_gap():
    gs = _state_with(Obstacle(BIRD_X, 10), y=5)
    assert game.check_collision(gs)


def test_no_collision_inside_gap():
    gs = _state_with(Obstacle(BIRD_X, 10), y=15)
    assert not game.check_collision(gs)


def test_gap_band_edges():
    assert not game.check_collision(_state_with(Obstacle(BIRD_X, 10), y=10))
    assert not game.check_collision(_state_with(Obstacle(BIRD_X, 10), y=10 + GAP_HEIGHT - 1))
    assert game.check_collision(_state_with(Obstacle(BIRD_X, 10), y=10 + GAP_HEIGHT))
    assert game.check_collision(_state_with(Obstacle(BIRD_X, 10), y=9))


def test_no_collision_in_other_columns():
    gs = _state_with(Obstacle(BIRD_X + 1, 10), Obstacle(BIRD_X - 1, 10), y=0)
    assert not game.check_collision(gs)


def test_obstacle_scores_once_when_it_reaches_the_bird():
    gs = _state_with(Obstacle(BIRD_X + 10, 5))
    for _ in range(9):
        game.advance_obstacles(gs)
        game.update_score(gs)
    assert gs.score == 0

    game.advance_obstacles(gs)
    assert game.update_score(gs) == 1
    assert gs.score == 1

    while gs.obstacles:
        game.advance_obstacles(gs)
        game.update_score(gs)
    assert gs.score == 1
