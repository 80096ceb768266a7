"""Floppy Frog: a terminal flappy game."""

__version__ = "0.1.0"
