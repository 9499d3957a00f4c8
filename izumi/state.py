"""Application state: panels, focus, input mode and display settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto

from .data_structs import InstructionTableArray
from .finder import FindDataKind

COLOR_COMMANDS = 0
COLOR_BOX = 1
COLOR_TEXT = 2
COLOR_STATUS = 3
COLOR_STAGES = 4
STAGE_COLORS = 6
COLORS_AMOUNT = COLOR_STAGES + STAGE_COLORS


class Color(IntEnum):
    """The eight basic terminal colours, numbered as curses numbers them."""

    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7


@dataclass
class ColorData:
    """Foreground, background and weight of one screen element."""

    fg: Color
    bg: Color
    bold: bool = False


def _default_colors() -> list[ColorData]:
    plain = [ColorData(Color.WHITE, Color.BLACK) for _ in range(COLOR_STATUS)]
    status = [ColorData(Color.BLACK, Color.BLUE, True)]
    stage_backgrounds = (
        Color.BLUE,
        Color.RED,
        Color.GREEN,
        Color.YELLOW,
        Color.MAGENTA,
        Color.CYAN,
    )
    stages = [ColorData(Color.BLACK, bg, True) for bg in stage_backgrounds]
    return plain + status + stages


@dataclass
class Configuration:
    """Layout and colour settings.

    Colours are indexed by element: commands, box, text, status, then six
    stage colours.
    """

    bar_offset: int = 32
    stage_width: int = 3
    colors: list[ColorData] = field(default_factory=_default_colors)


class Mode(Enum):
    """The input mode of the application."""

    NORMAL = auto()
    COMMAND = auto()


@dataclass
class SearchData:
    """The last search made in a panel, for repeating it."""

    pattern: str | None = None
    data_kind: FindDataKind = FindDataKind.PC


def _empty_tables() -> InstructionTableArray:
    tables = InstructionTableArray()
    tables.clear()
    return tables


@dataclass
class Panel:
    """One view onto a trace file."""

    index: int
    tables: InstructionTableArray = field(default_factory=_empty_tables)
    first_instruction: int = 0
    filename: str | None = None
    last_search: SearchData = field(default_factory=SearchData)


@dataclass
class ApplicationData:
    """Everything the application knows between two key presses."""

    panels: list[Panel] = field(default_factory=list)
    focused: int = 0
    config: Configuration = field(default_factory=Configuration)
    mode: Mode = Mode.NORMAL
    command: str = ""
    number: int = 0
    synced: bool = False
    quit_requested: bool = False

    def new_panel(self) -> Panel:
        """Add an empty panel at the end and focus it."""
        panel = Panel(index=len(self.panels))
        self.panels.append(panel)
        self.focused = panel.index
        return panel

    def close_panel(self, panel_id: int) -> None:
        """Close the panel at ``panel_id``; unknown ids are ignored."""
        if not 0 <= panel_id < len(self.panels):
            return
        del self.panels[panel_id]
        for panel in self.panels[panel_id:]:
            panel.index -= 1
        if self.focused >= panel_id:
            self.focused = max(self.focused - 1, 0)

    def close_all_panels(self) -> None:
        """Close every panel."""
        self.panels.clear()
        self.focused = 0

    def set_color(self, index: int, fg: Color, bg: Color, bold: bool) -> None:
        """Set the colours of the screen element at ``index``."""
        self.config.colors[index] = ColorData(Color(fg), Color(bg), bold)

    def focused_panel(self) -> Panel | None:
        """Return the focused panel, or None when there are no panels."""
        if not self.panels:
            return None
        return self.panels[self.focused]