"""Reading pipeline trace files into an instruction table array."""

from __future__ import annotations

import os
import re
from typing import Iterable

from .data_structs import Instruction, InstructionTableArray, Stage

_NUM = r"\s*\+?(\d+)(?!\d)"
_CYCLE = re.compile("C" + _NUM)
_INSTRUCTION = re.compile("I" + _NUM * 3)
_DATA = re.compile("L" + _NUM * 2 + r"\s*(\S{1,18})")
_STAGE = re.compile("S" + _NUM * 2 + r"\s*(\S+)")
_END = re.compile("E" + _NUM * 2 + r"\s*(\S+)")
_RETIRE = re.compile("R" + _NUM * 3)

_DATA_PREFIX = 24


class ParseError(ValueError):
    """Raised when a trace line cannot be read."""


def _integer_length(number: int) -> int:
    return len(str(number)) if number > 0 else 0


def _scan(pattern: re.Pattern[str], line: str, what: str) -> tuple[str, ...]:
    match = pattern.match(line)
    if match is None:
        raise ParseError(f"Could not read {what}: {line.rstrip()!r}")
    return match.groups()


class TraceParser:
    """Builds an InstructionTableArray from trace lines fed one at a time."""

    def __init__(self) -> None:
        self.tables = InstructionTableArray()
        self.cycle = 0
        self._handlers = {
            "C": self.cycle_increment,
            "I": self.new_instruction,
            "L": self.line_of_data,
            "S": self.new_stage,
            "E": self.end_stage,
            "R": self.retire_instruction,
        }

    def feed(self, line: str) -> None:
        """Apply one trace line; lines with an unknown command are ignored."""
        if not line:
            raise ParseError("Could not read command")
        handler = self._handlers.get(line[0])
        if handler is not None:
            handler(line)

    def cycle_increment(self, line: str) -> None:
        """Advance the current cycle by the amount on a ``C`` line."""
        (cycles,) = _scan(_CYCLE, line, "cycles")
        self.cycle += int(cycles)

    def new_instruction(self, line: str) -> None:
        """Create the instruction named on an ``I`` line."""
        id_file, _id_sim, _id_thread = _scan(_INSTRUCTION, line, "instruction")
        self.tables.put(int(id_file), Instruction())

    def line_of_data(self, line: str) -> None:
        """Set the address and text of an instruction from an ``L`` line."""
        raw_id, raw_type, mem_addr = _scan(_DATA, line, "data")
        instruction = self.tables.get(int(raw_id))
        if instruction is None:
            return
        instruction.mem_addr = mem_addr
        start = _DATA_PREFIX + _integer_length(int(raw_id)) + _integer_length(int(raw_type))
        instruction.instruction = line[start:][:-1]

    def new_stage(self, line: str) -> None:
        """Start a stage of an instruction at the current cycle."""
        raw_id, _stage_id, name = _scan(_STAGE, line, "stage")
        instruction = self.tables.get(int(raw_id))
        if instruction is not None:
            instruction.stages.append(Stage(name=name, cycle=self.cycle))

    def end_stage(self, line: str) -> None:
        """Close the first stage of the instruction with the given name."""
        raw_id, _stage_id, name = _scan(_END, line, "end stage")
        instruction = self.tables.get(int(raw_id))
        if instruction is None:
            return
        stage = next((s for s in instruction.stages if s.name == name), None)
        if stage is not None:
            stage.duration = self.cycle - stage.cycle

    def retire_instruction(self, line: str) -> None:
        """Finish an instruction, closing its last stage and noting a flush."""
        raw_id, _retire_id, retire_type = _scan(_RETIRE, line, "retire")
        instruction = self.tables.get(int(raw_id))
        if instruction is None or instruction.finished:
            return
        if instruction.stages:
            last = instruction.stages[-1]
            last.duration = self.cycle - last.cycle
        instruction.finished = True
        instruction.flushed = int(retire_type) == 1


def parse_lines(lines: Iterable[str]) -> InstructionTableArray:
    """Parse trace lines, each with its line ending, into a table array."""
    parser = TraceParser()
    for line in lines:
        parser.feed(line)
    return parser.tables


def parse_file(path: str | os.PathLike[str]) -> InstructionTableArray:
    """Parse the trace file at ``path``."""
    with open(path, "rb") as handle:
        return parse_lines(raw.decode("utf-8", "surrogateescape") for raw in handle)