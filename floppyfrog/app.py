"""
Floppy Frog (curses)

Controls:
  Return : start
  space  : flap
  r      : restart (on game over)
  q      : quit

Options:
  --log-file PATH   write a log of the session to PATH
  --log-level LVL   debug, info, warning or error (default: info)
  --seed N          seed the obstacle generator
"""

import argparse
import curses
import logging
import random
import sys
from datetime import datetime
from enum import Enum

from . import game, terminal
from .game import HEIGHT, TICK_MS, WIDTH, GameState, Key

log = logging.getLogger(__name__)

BIRD_GLYPH = ">"
WALL_GLYPH = "|"

FROG_ART = [
    "  @..@",
    " (----)",
    "( >__< )",
    "^^ ~~ ^^",
]


class Phase(Enum):
    TITLE = "title"
    PLAYING = "playing"
    GAME_OVER = "game_over"
    TERMINATED = "terminated"


def draw_frame(screen, gs: GameState):
    screen.clear_frame()
    screen.draw_cell(gs.bird.y, gs.bird.x, BIRD_GLYPH)
    for o in gs.obstacles:
        for y in range(HEIGHT):
            if o.blocks(y):
                screen.draw_cell(y, o.x, WALL_GLYPH)
    screen.draw_text(0, 0, f"Score: {gs.score}")
    screen.present_frame()


def draw_title(screen):
    screen.clear_frame()
    mid = HEIGHT // 2
    screen.draw_text(mid - 5, (WIDTH - 11) // 2, "Floppy Frog")
    screen.draw_text(mid - 3, (WIDTH - 20) // 2, "Press Return to start")
    for i, line in enumerate(FROG_ART):
        screen.draw_text(mid + 2 + i, (WIDTH - 14) // 2, line)
    screen.present_frame()


def draw_game_over(screen, score):
    # Drawn over the last frame so the crash stays visible.
    mid, cx = HEIGHT // 2, WIDTH // 2
    screen.draw_text(mid, cx - 5, "Game Over")
    screen.draw_text(mid + 1, cx - 5, f"Score: {score}")
    screen.draw_text(mid + 2, cx - 10, "Press 'r' to restart")
    screen.draw_text(mid + 3, cx - 9, "or 'q' to quit")
    screen.present_frame()


class FloppyFrog:
    """
    The title / playing / game-over state machine.

    `screen` needs clear_frame, draw_text, draw_cell and present_frame;
    `keys` needs poll_key(timeout_ms) and wait_key().
    """

    def __init__(self, screen, keys, rng=None):
        self.screen = screen
        self.keys = keys
        self.rng = rng or random.Random()
        self.phase = Phase.TITLE
        self.state = game.new_game()

    def run(self):
        handlers = {
            Phase.TITLE: self.title,
            Phase.PLAYING: self.play,
            Phase.GAME_OVER: self.game_over,
        }
        while self.phase is not Phase.TERMINATED:
            self.phase = handlers[self.phase]()
        return self.phase

    def title(self):
        draw_title(self.screen)
        while self.keys.wait_key() is not Key.CONFIRM:
            pass
        return Phase.PLAYING

    def play(self):
        self.state = gs = game.new_game()
        log.info("game started")
        while True:
            key = self.keys.poll_key(TICK_MS)
            if key is Key.QUIT:
                log.info("quit during play, score %d", gs.score)
                return Phase.TERMINATED
            if key is Key.FLAP:
                game.flap(gs)

            game.step(gs, self.rng)
            draw_frame(self.screen, gs)

            if game.check_collision(gs):
                log.info("collision at tick %d, score %d", gs.tick_count, gs.score)
                return Phase.GAME_OVER
            gs.tick_count += 1

    def game_over(self):
        draw_game_over(self.screen, self.state.score)
        while True:
            key = self.keys.wait_key()
            if key is Key.RESTART:
                log.info("restart")
                return Phase.PLAYING
            if key is Key.QUIT:
                log.info("quit after game over, score %d", self.state.score)
                return Phase.TERMINATED


class LogFormatter(logging.Formatter):
    """Compact one-line format: time, level initial, logger, message."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.now().strftime("%H:%M:%S")
        return f"{ts} [{record.levelname[0]}] {record.name}: {record.getMessage()}"


def setup_logging(level: str = "info", log_file=None):
    root = logging.getLogger("floppyfrog")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.propagate = False

    # curses owns the terminal, so without a file nothing is written anywhere.
    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(LogFormatter())
        root.addHandler(fh)
    else:
        root.addHandler(logging.NullHandler())


def run(stdscr, seed=None):
    terminal.setup(stdscr)
    app = FloppyFrog(terminal.CursesScreen(stdscr), terminal.CursesKeys(stdscr), rng=random.Random(seed))
    app.run()


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Floppy Frog, a terminal flappy game")
    p.add_argument("--log-file", default=None, help="write log records to this file")
    p.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="log level (default: info)",
    )
    p.add_argument("--seed", type=int, default=None, help="seed for obstacle gaps")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)
    try:
        curses.wrapper(lambda stdscr: run(stdscr, seed=args.seed))
    except curses.error as e:
        log.error("terminal unavailable: %s", e)
        sys.exit(f"floppyfrog: terminal unavailable: {e}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
