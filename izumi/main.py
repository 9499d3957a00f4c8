"""Start the trace viewer on the files given on the command line."""

from __future__ import annotations

import curses
import os
import sys
from typing import Iterable, Sequence

from .files import check_file, read_file
from .parser import ParseError
from .state import ApplicationData
from .window import init_application


def open_files(app_data: ApplicationData, paths: Iterable[str]) -> None:
    """Open one panel per path, loading those that are regular files."""
    for path in paths:
        panel = app_data.new_panel()
        if check_file(os.path.realpath(path)).is_file:
            panel.filename, panel.tables = read_file(path)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the viewer; returns the exit status."""
    paths = sys.argv[1:] if argv is None else list(argv)
    try:
        renderer = init_application()
        try:
            open_files(renderer.app_data, paths)
            renderer.main_loop()
        finally:
            curses.endwin()
    except ParseError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())