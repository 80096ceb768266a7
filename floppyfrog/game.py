"""
Floppy Frog game rules: bird physics, scrolling obstacles, collision, scoring.

Everything here works on an explicit GameState so each tick step can be
driven on its own.
"""

import logging
import random
from dataclasses import dataclass, field
from enum import Enum

log = logging.getLogger(__name__)

WIDTH = 120
HEIGHT = 30
GAP_HEIGHT = 10
OBSTACLE_WIDTH = 1
MAX_OBSTACLES = 100
SPAWN_INTERVAL = 20
GRAVITY = 1
FLAP_VELOCITY = -3
SCROLL_STEP = 1
TICK_MS = 100

BIRD_X = WIDTH // 4
BIRD_START_Y = HEIGHT // 2


class Key(Enum):
    FLAP = "flap"
    QUIT = "quit"
    CONFIRM = "confirm"
    RESTART = "restart"


@dataclass
class Bird:
    x: int = BIRD_X
    y: int = BIRD_START_Y
    velocity: int = 0


@dataclass
class Obstacle:
    x: int
    gap_start: int

    def covers(self, col: int) -> bool:
        return self.x <= col < self.x + OBSTACLE_WIDTH

    def blocks(self, row: int) -> bool:
        return row < self.gap_start or row >= self.gap_start + GAP_HEIGHT


@dataclass
class GameState:
    bird: Bird = field(default_factory=Bird)
    obstacles: list = field(default_factory=list)
    score: int = 0
    tick_count: int = 0


def new_game() -> GameState:
    return GameState()


def clamp(v, lo, hi):
    return max(lo, min(hi, v))


def flap(gs: GameState):
    # Replaces the current velocity, impulses never stack.
    gs.bird.velocity = FLAP_VELOCITY


def update_bird(gs: GameState):
    b = gs.bird
    b.velocity += GRAVITY
    b.y = clamp(b.y + b.velocity, 0, HEIGHT - 1)


def spawn_obstacle(gs: GameState, rng=random) -> bool:
    """Add an obstacle at the right edge; return False if the store is full."""
    if len(gs.obstacles) >= MAX_OBSTACLES:
        log.debug("obstacle store full (%d), spawn dropped", MAX_OBSTACLES)
        return False
    gap_start = rng.randrange(HEIGHT - GAP_HEIGHT)
    gs.obstacles.append(Obstacle(x=WIDTH - 1, gap_start=gap_start))
    return True


def spawn_due(gs: GameState) -> bool:
    return gs.tick_count % SPAWN_INTERVAL == 0


def advance_obstacles(gs: GameState):
    for o in gs.obstacles:
        o.x -= SCROLL_STEP
    gs.obstacles = [o for o in gs.obstacles if o.x >= 0]


def update_score(gs: GameState) -> int:
    """
    Score every obstacle that crossed the bird's column during this tick.

    An obstacle moving left by SCROLL_STEP crossed the column when its new x
    is at or left of it while its previous x was to the right. With a unit
    step that is the tick where x == bird.x.
    """
    bx = gs.bird.x
    passed = sum(1 for o in gs.obstacles if o.x <= bx < o.x + SCROLL_STEP)
    gs.score += passed
    return passed


def check_collision(gs: GameState) -> bool:
    b = gs.bird
    return any(o.covers(b.x) and o.blocks(b.y) for o in gs.obstacles)


def step(gs: GameState, rng=random):
    """Spawn, scroll, fall and score: the simulation half of one tick."""
    if spawn_due(gs):
        spawn_obstacle(gs, rng)
    advance_obstacles(gs)
    update_bird(gs)
    update_score(gs)
