"""Containers for the instructions read from a pipeline trace."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

TABLE_SIZE = 256
INITIAL_TABLES = 4

_Table = list  # a list of TABLE_SIZE slots, each an Instruction or None


@dataclass
class Stage:
    """A pipeline stage an instruction went through."""

    name: str
    cycle: int
    duration: int = 0


@dataclass
class Instruction:
    """One instruction of the trace with its address, text and stages."""

    mem_addr: str | None = None
    instruction: str | None = None
    stages: list[Stage] = field(default_factory=list)
    finished: bool = False
    flushed: bool = False


def _new_table() -> _Table:
    return [None] * TABLE_SIZE


class InstructionTableArray:
    """Instructions stored by position in tables of 256 slots.

    A new array holds one empty table and room for four; ``clear`` leaves it
    with no tables at all.
    """

    def __init__(self) -> None:
        self._tables: list[_Table | None] = [_new_table()] + [None] * (INITIAL_TABLES - 1)
        self._used = 1

    @property
    def table_count(self) -> int:
        """Number of tables in use."""
        return self._used

    @property
    def slot_count(self) -> int:
        """Number of instruction slots covered by the tables in use."""
        return self._used * TABLE_SIZE

    def capacity(self) -> int:
        """Number of tables the array has room for."""
        return len(self._tables)

    @staticmethod
    def _locate(index: int) -> tuple[int, int]:
        if index < 0:
            raise ValueError(f"instruction position must not be negative: {index}")
        return divmod(index, TABLE_SIZE)

    def _grow(self, needed: int) -> None:
        while len(self._tables) < needed:
            extra = len(self._tables) or INITIAL_TABLES
            self._tables.extend([None] * extra)

    def get(self, index: int) -> Instruction | None:
        """Return the instruction at ``index``, or None for an empty slot."""
        table_index, slot = self._locate(index)
        if table_index >= self._used:
            return None
        table = self._tables[table_index]
        return None if table is None else table[slot]

    def put(self, index: int, instruction: Instruction) -> None:
        """Store ``instruction`` at ``index``, adding tables as needed."""
        table_index, slot = self._locate(index)
        if table_index >= self._used:
            self._grow(table_index + 1)
            self._used = table_index + 1
        table = self._tables[table_index]
        if table is None:
            table = self._tables[table_index] = _new_table()
        table[slot] = instruction

    def clear(self) -> None:
        """Drop every table."""
        self._tables = []
        self._used = 0

    def __iter__(self) -> Iterator[tuple[int, Instruction]]:
        """Yield ``(position, instruction)`` for every filled slot, in order."""
        for table_index, table in enumerate(self._tables[: self._used]):
            if table is None:
                continue
            for slot, instruction in enumerate(table):
                if instruction is not None:
                    yield table_index * TABLE_SIZE + slot, instruction