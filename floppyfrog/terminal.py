"""
curses side of Floppy Frog: a renderer and an input source over one window.
"""

import curses
import logging

from .game import HEIGHT, WIDTH, Key

log = logging.getLogger(__name__)

KEYMAP = {
    ord(" "): Key.FLAP,
    ord("q"): Key.QUIT,
    ord("r"): Key.RESTART,
    10: Key.CONFIRM,
    13: Key.CONFIRM,
    curses.KEY_ENTER: Key.CONFIRM,
}


def decode_key(ch):
    """Map a curses key code to a Key, or None for anything the game ignores."""
    return KEYMAP.get(ch)


def setup(stdscr):
    stdscr.keypad(True)
    try:
        curses.curs_set(0)
    except curses.error:
        log.warning("terminal cannot hide the cursor")
    try:
        curses.resizeterm(HEIGHT, WIDTH)
    except curses.error:
        log.warning("terminal refused resize to %dx%d", WIDTH, HEIGHT)


class CursesScreen:
    def __init__(self, stdscr):
        self.stdscr = stdscr

    def clear_frame(self):
        self.stdscr.erase()

    def draw_text(self, row, col, text):
        try:
            self.stdscr.addstr(row, col, text)
        except curses.error:
            # Off-window writes and the bottom-right cell raise; drop them.
            pass

    def draw_cell(self, row, col, glyph):
        self.draw_text(row, col, glyph)

    def present_frame(self):
        self.stdscr.refresh()


class CursesKeys:
    def __init__(self, stdscr):
        self.stdscr = stdscr

    def poll_key(self, timeout_ms):
        self.stdscr.timeout(timeout_ms)
        return decode_key(self.stdscr.getch())

    def wait_key(self):
        self.stdscr.timeout(-1)
        while True:
            key = decode_key(self.stdscr.getch())
            if key is not None:
                return key
