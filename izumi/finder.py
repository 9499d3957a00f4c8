"""Searching the instructions of a trace by address or mnemonic."""

from __future__ import annotations

from enum import Enum, auto
from itertools import takewhile

from .data_structs import Instruction, InstructionTableArray

WHITESPACE = " \t\n\r"


class FindDataKind(Enum):
    """What part of an instruction a search looks at."""

    PC = auto()
    INST = auto()


class SearchDirection(Enum):
    """Which way a search walks from its starting position."""

    UP = auto()
    DOWN = auto()


def _subject(instruction: Instruction, kind: FindDataKind) -> str | None:
    if kind is FindDataKind.PC:
        return instruction.mem_addr
    if instruction.instruction is None:
        return None
    text = instruction.instruction.lstrip(WHITESPACE)
    return "".join(takewhile(lambda ch: ch not in WHITESPACE, text))


def matches(instruction: Instruction | None, pattern: str, kind: FindDataKind) -> bool:
    """Tell whether ``pattern`` begins with the instruction's address or mnemonic."""
    if instruction is None:
        return False
    subject = _subject(instruction, kind)
    return subject is not None and pattern.startswith(subject)


def find(
    tables: InstructionTableArray,
    pattern: str,
    kind: FindDataKind,
    direction: SearchDirection,
    start: int,
) -> int | None:
    """Return the first matching position from ``start`` on, or None."""
    if start < 0:
        return None
    if direction is SearchDirection.DOWN:
        positions = range(start, tables.slot_count)
    else:
        positions = range(min(start, tables.slot_count - 1), -1, -1)
    return next(
        (pos for pos in positions if matches(tables.get(pos), pattern, kind)),
        None,
    )