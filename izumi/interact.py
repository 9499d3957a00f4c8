"""Turning key presses into changes of the application state."""

from __future__ import annotations

import curses

from .commands import run
from .state import ApplicationData, Mode

ESCAPE = 27
ENTER = ord("\n")
_DIGITS = range(ord("0"), ord("9") + 1)


def _scroll_down(app_data: ApplicationData) -> None:
    if not app_data.panels:
        return
    step = app_data.number or 1
    targets = app_data.panels if app_data.synced else [app_data.focused_panel()]
    for panel in targets:
        panel.first_instruction += step


def _scroll_up(app_data: ApplicationData) -> None:
    if not app_data.panels:
        return
    step = app_data.number or 1
    if app_data.synced:
        for panel in app_data.panels:
            if panel.first_instruction > 0:
                panel.first_instruction = max(panel.first_instruction - step, 0)
        return
    panel = app_data.focused_panel()
    if panel.first_instruction > 0:
        # A lone panel steps one line before moving by the count.
        panel.first_instruction -= 1
        panel.first_instruction = max(panel.first_instruction - step, 0)


def _normal_mode(app_data: ApplicationData, ch: int) -> None:
    if ch in (ord("j"), curses.KEY_DOWN):
        _scroll_down(app_data)
    elif ch in (ord("k"), curses.KEY_UP):
        _scroll_up(app_data)
    elif ch == ord(":"):
        app_data.mode = Mode.COMMAND
        app_data.command = ""
    elif ch == ord("n"):
        app_data.command = "next"
        run(app_data)
    elif ch == ord("N"):
        app_data.command = "prev"
        run(app_data)

    if ch in _DIGITS:
        app_data.number = app_data.number * 10 + ch - ord("0")
    else:
        app_data.number = 0


def _command_mode(app_data: ApplicationData, ch: int) -> None:
    if ch == ESCAPE:
        app_data.mode = Mode.NORMAL
    elif ch == ENTER:
        run(app_data)
        app_data.mode = Mode.NORMAL
    elif ch == curses.KEY_BACKSPACE:
        app_data.command = app_data.command[:-1]
    else:
        # The command line keeps one byte per key press.
        app_data.command += chr(ch & 0xFF)


def parse_input(app_data: ApplicationData, ch: int | str) -> bool:
    """Apply one key press, given as a curses key code or a character."""
    if isinstance(ch, str):
        ch = ord(ch)
    if app_data.mode is Mode.NORMAL:
        _normal_mode(app_data, ch)
    elif app_data.mode is Mode.COMMAND:
        _command_mode(app_data, ch)
    return True