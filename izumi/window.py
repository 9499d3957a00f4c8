"""Drawing the panels and status bar with curses, and the input loop."""

from __future__ import annotations

import curses
from contextlib import contextmanager
from typing import Any, Iterator

from .configure import execute_config_commands, get_config_path, read_config_file
from .data_structs import Instruction
from .interact import parse_input
from .state import (
    COLOR_BOX,
    COLOR_COMMANDS,
    COLOR_STAGES,
    COLOR_STATUS,
    COLOR_TEXT,
    STAGE_COLORS,
    ApplicationData,
    Mode,
    Panel,
)

VERSION = "0.1.0"
_MODE_NAMES = {Mode.NORMAL: "NORMAL", Mode.COMMAND: "COMMAND"}
_COMMAND_COLUMN = 11


def _put(win: Any, y: int, x: int, text: str) -> None:
    """Write ``text`` at ``(y, x)``, clipped to the window; overflow is dropped."""
    height, width = win.getmaxyx()
    if not (0 <= y < height and 0 <= x < width) or not text:
        return
    try:
        win.addstr(y, x, text[: width - x])
    except curses.error:
        pass


class Renderer:
    """Draws an application's panels on a curses screen and reads its keys."""

    def __init__(self, screen: Any, app_data: ApplicationData) -> None:
        self.screen = screen
        self.app_data = app_data
        self._windows: dict[int, tuple[Panel, Any]] = {}
        self._applied: list[tuple[int, int, bool]] | None = None

    def _color_snapshot(self) -> list[tuple[int, int, bool]]:
        return [(int(c.fg), int(c.bg), c.bold) for c in self.app_data.config.colors]

    def apply_colors(self) -> None:
        """Register one colour pair for every screen element."""
        for number, color in enumerate(self.app_data.config.colors):
            curses.init_pair(number + 1, color.fg, color.bg)
        self._applied = self._color_snapshot()

    @contextmanager
    def _colors(self, target: Any, index: int) -> Iterator[None]:
        bold = self.app_data.config.colors[index].bold
        pair = curses.color_pair(index + 1)
        target.attron(pair)
        if bold:
            target.attron(curses.A_BOLD)
        try:
            yield
        finally:
            target.attroff(pair)
            if bold:
                target.attroff(curses.A_BOLD)

    def _geometry(self, panel: Panel) -> tuple[int, int, int, int]:
        max_y, max_x = self.screen.getmaxyx()
        count = max(len(self.app_data.panels), 1)
        height = (max_y - 1) // count  # the last line holds the status bar
        return height, max_x, height * panel.index, 0

    def _window(self, panel: Panel) -> Any:
        entry = self._windows.get(id(panel))
        if entry is not None:
            return entry[1]
        height, width, y, x = self._geometry(panel)
        win = curses.newwin(max(height, 1), width, y, x)
        self._windows[id(panel)] = (panel, win)
        return win

    def render(self) -> None:
        """Redraw every panel and the status bar."""
        if self._color_snapshot() != self._applied:
            self.apply_colors()
        live = {id(panel) for panel in self.app_data.panels}
        self._windows = {key: entry for key, entry in self._windows.items() if key in live}
        for panel in self.app_data.panels:
            self.render_window(panel)
        self.render_status_bar()
        self.screen.refresh()

    def render_window(self, panel: Panel) -> None:
        """Redraw one panel: its instructions, its border and its file name."""
        win = self._window(panel)
        win.erase()
        height, width, y, x = self._geometry(panel)
        try:
            win.resize(max(height, 1), width)
            win.mvwin(y, x)
        except curses.error:
            pass

        first_cycle: int | None = None
        for row in range(max((height - 1) // 2, 0)):
            index = panel.first_instruction + row
            first_cycle = self.print_instruction(
                panel, panel.tables.get(index), row * 2 + 1, first_cycle, index
            )

        with self._colors(win, COLOR_BOX):
            win.box()
            if panel.filename is not None:
                focused = panel.index == self.app_data.focused
                if focused:
                    win.attron(curses.A_BOLD)
                _put(win, 0, 1, panel.filename)
                if focused:
                    win.attroff(curses.A_BOLD)
        win.refresh()

    def render_status_bar(self) -> None:
        """Draw the mode, the command being typed and the version on the last line."""
        max_y, max_x = self.screen.getmaxyx()
        row = max_y - 1
        with self._colors(self.screen, COLOR_TEXT):
            _put(self.screen, row, 0, " " * max_x)
        with self._colors(self.screen, COLOR_BOX):
            _put(self.screen, row, max_x - 7 - len(VERSION), f"Izumi v{VERSION}")
        with self._colors(self.screen, COLOR_STATUS):
            _put(self.screen, row, 0, f" {_MODE_NAMES[self.app_data.mode]} ")
        if self.app_data.mode is Mode.COMMAND:
            with self._colors(self.screen, COLOR_COMMANDS):
                _put(self.screen, row, _COMMAND_COLUMN, f":{self.app_data.command}")

    def print_instruction(
        self,
        panel: Panel,
        instruction: Instruction | None,
        y: int,
        first_cycle: int | None,
        index: int,
    ) -> int | None:
        """Draw one instruction on rows ``y`` and ``y + 1`` of a panel.

        Returns the earliest cycle seen so far, which places later stages.
        """
        win = self._window(panel)
        config = self.app_data.config
        width = win.getmaxyx()[1]
        bar = config.bar_offset
        stage_width = config.stage_width

        with self._colors(win, COLOR_TEXT):
            for row in (y, y + 1):
                _put(win, row, 0, " " * width)
                for column in range(bar + 1, width, stage_width + 1):
                    _put(win, row, column, "|")
            if instruction is not None:
                if instruction.mem_addr is not None:
                    _put(win, y, 1, f"{index}\t{instruction.mem_addr}")
                if instruction.instruction is not None:
                    _put(win, y + 1, 1, f"\t{instruction.instruction}")
            for row in (y, y + 1):
                _put(win, row, bar, "|")

        if instruction is None:
            return first_cycle

        last = len(instruction.stages) - 1
        for number, stage in enumerate(instruction.stages):
            if first_cycle is None or stage.cycle < first_cycle:
                first_cycle = stage.cycle
            offset = bar + 2 + (stage_width + 1) * (stage.cycle - first_cycle)
            with self._colors(win, COLOR_STAGES + number % STAGE_COLORS):
                _put(win, y + 1, offset, stage.name[:stage_width].ljust(stage_width))
                if stage.duration > 1:
                    span = (stage_width + 1) * (stage.duration - 1)
                    _put(win, y + 1, offset + stage_width, " " * span)
                if number == last and instruction.flushed:
                    flush_column = offset + (stage_width + 1) * stage.duration - 2
                    _put(win, y + 1, flush_column, "X")
        return first_cycle

    def main_loop(self) -> None:
        """Draw, then read and apply keys until a quit is requested."""
        self.render()
        while not self.app_data.quit_requested:
            parse_input(self.app_data, self.screen.getch())
            self.render()


def init_application() -> Renderer:
    """Set up the terminal and a fresh application, then run the user's config."""
    screen = curses.initscr()
    try:
        curses.cbreak()
        curses.noecho()
        screen.refresh()
        screen.keypad(True)
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        curses.start_color()
        app_data = ApplicationData()
        renderer = Renderer(screen, app_data)
        renderer.apply_colors()
        execute_config_commands(app_data, read_config_file(get_config_path()))
    except BaseException:
        curses.endwin()
        raise
    return renderer