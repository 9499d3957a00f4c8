"""Parser, search and curses viewer for processor pipeline trace dumps."""

__version__ = "0.1.0"