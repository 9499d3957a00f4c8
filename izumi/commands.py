"""The commands that can be typed after ``:`` and the table that names them."""

from __future__ import annotations

import os
import re
from typing import Sequence

from .command_tree import (
    AliasCommand,
    ArglistCommand,
    Command,
    FixedArglistCommand,
    NoArgsCommand,
    SubCommand,
    run_command,
)
from .files import check_file, read_file
from .finder import FindDataKind, SearchDirection, find
from .state import COLOR_BOX, COLOR_COMMANDS, COLOR_STAGES, COLOR_STATUS, COLOR_TEXT
from .state import ApplicationData, Color, SearchData

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

_ELEMENTS = {
    "commands": COLOR_COMMANDS,
    "box": COLOR_BOX,
    "text": COLOR_TEXT,
    "status": COLOR_STATUS,
    **{f"stage{n}": COLOR_STAGES + n - 1 for n in range(1, 7)},
}

_COLORS = {color.name.lower(): color for color in Color}


def _atoi(text: str) -> int:
    """Read the leading integer of ``text``; 0 when there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def newpanel_cb(app_data: ApplicationData) -> bool:
    """Open a new, empty panel and focus it."""
    app_data.new_panel()
    return True


def closepanel_cb(app_data: ApplicationData, args: Sequence[str]) -> bool:
    """Close the panel given as the only argument, or the focused one."""
    panel_id = _atoi(args[0]) if len(args) == 1 else app_data.focused
    app_data.close_panel(panel_id)
    return True


def closeallpanels_cb(app_data: ApplicationData) -> bool:
    """Close every panel."""
    app_data.close_all_panels()
    return True


def open_cb(app_data: ApplicationData, args: Sequence[str]) -> bool:
    """Load a trace file into the focused panel, creating one if there is none."""
    file_name = args[0]
    if not app_data.panels:
        app_data.new_panel()
    file_data = check_file(os.path.realpath(file_name))
    if not (file_data.exists and file_data.is_file):
        return False
    panel = app_data.focused_panel()
    panel.filename, panel.tables = read_file(file_name)
    return True


def panelcmd_j_cb(app_data: ApplicationData) -> bool:
    """Move the focus to the next panel, if there is one."""
    if app_data.focused < len(app_data.panels) - 1:
        app_data.focused += 1
    return True


def panelcmd_k_cb(app_data: ApplicationData) -> bool:
    """Move the focus to the previous panel, if there is one."""
    if app_data.focused > 0:
        app_data.focused -= 1
    return True


def _set_color(app_data: ApplicationData, args: Sequence[str]) -> bool:
    if len(args) not in (4, 5):
        return False
    element, fg_name, bg_name = args[1:4]
    bold = False
    if len(args) == 5:
        if args[4] != "bold":
            return False
        bold = True
    index = _ELEMENTS.get(element)
    fg = _COLORS.get(fg_name)
    bg = _COLORS.get(bg_name)
    if index is None or fg is None or bg is None:
        return False
    app_data.set_color(index, fg, bg, bold)
    return True


def set_cb(app_data: ApplicationData, args: Sequence[str]) -> bool:
    """Change a setting: ``bar_offset N``, ``stage_width N`` or ``color ...``.

    ``color ELEMENT FG BG [bold]`` sets the colours of ``commands``, ``box``,
    ``text``, ``status`` or ``stage1`` to ``stage6``. Unknown settings are
    accepted and ignored.
    """
    if not args:
        return False
    setting = args[0]
    if setting in ("bar_offset", "stage_width"):
        if len(args) != 2:
            return False
        setattr(app_data.config, setting, _atoi(args[1]))
        return True
    if setting == "color":
        return _set_color(app_data, args)
    return True


def panelsync_cb(app_data: ApplicationData) -> bool:
    """Make scrolling move every panel together."""
    app_data.synced = True
    return True


def paneldesync_cb(app_data: ApplicationData) -> bool:
    """Make scrolling move only the focused panel."""
    app_data.synced = False
    return True


def _find_first(app_data: ApplicationData, pattern: str, kind: FindDataKind) -> bool:
    panel = app_data.focused_panel()
    if panel is None:
        return False
    position = find(panel.tables, pattern, kind, SearchDirection.DOWN, panel.first_instruction)
    if position is None:
        return False
    panel.first_instruction = position
    panel.last_search = SearchData(pattern=pattern, data_kind=kind)
    return True


def findpc_cb(app_data: ApplicationData, args: Sequence[str]) -> bool:
    """Scroll the focused panel down to an instruction by its address."""
    return _find_first(app_data, args[0], FindDataKind.PC)


def findinst_cb(app_data: ApplicationData, args: Sequence[str]) -> bool:
    """Scroll the focused panel down to an instruction by its mnemonic."""
    return _find_first(app_data, args[0], FindDataKind.INST)


def _repeat_search(app_data: ApplicationData, direction: SearchDirection) -> bool:
    panel = app_data.focused_panel()
    if panel is None or panel.last_search.pattern is None:
        return False
    if direction is SearchDirection.DOWN:
        start = panel.first_instruction + 1
    else:
        if panel.first_instruction <= 0:
            return False
        start = panel.first_instruction - 1
    position = find(
        panel.tables,
        panel.last_search.pattern,
        panel.last_search.data_kind,
        direction,
        start,
    )
    if position is None:
        return False
    panel.first_instruction = position
    return True


def next_cb(app_data: ApplicationData) -> bool:
    """Repeat the last search of the focused panel downwards."""
    return _repeat_search(app_data, SearchDirection.DOWN)


def prev_cb(app_data: ApplicationData) -> bool:
    """Repeat the last search of the focused panel upwards."""
    return _repeat_search(app_data, SearchDirection.UP)


def quit_cb(app_data: ApplicationData) -> bool:
    """Ask the application to stop."""
    app_data.quit_requested = True
    return True


PANEL_COMMANDS: tuple[Command, ...] = (
    NoArgsCommand("j", panelcmd_j_cb),
    NoArgsCommand("k", panelcmd_k_cb),
)

COMMANDS: tuple[Command, ...] = (
    AliasCommand("n", "newpanel"),
    NoArgsCommand("newpanel", newpanel_cb),
    AliasCommand("c", "closepanel"),
    ArglistCommand("closepanel", closepanel_cb),
    AliasCommand("ca", "closeallpanels"),
    NoArgsCommand("closeallpanels", closeallpanels_cb),
    AliasCommand("o", "open"),
    FixedArglistCommand("open", 1, open_cb),
    SubCommand("panelcmd", PANEL_COMMANDS),
    ArglistCommand("set", set_cb),
    NoArgsCommand("panelsync", panelsync_cb),
    NoArgsCommand("paneldesync", paneldesync_cb),
    FixedArglistCommand("findpc", 1, findpc_cb),
    FixedArglistCommand("findinst", 1, findinst_cb),
    NoArgsCommand("next", next_cb),
    NoArgsCommand("prev", prev_cb),
    AliasCommand("q", "quit"),
    NoArgsCommand("quit", quit_cb),
)


def run(app_data: ApplicationData) -> bool:
    """Run the command line held in ``app_data.command``."""
    return run_command(app_data, COMMANDS)