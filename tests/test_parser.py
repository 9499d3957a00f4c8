import pytest

from izumi.parser import ParseError, TraceParser, parse_file, parse_lines

ADDR = "0x0000000080000000"

SAMPLE = [
    "I\t1\t1\t0\n",
    f"L\t1\t1\t{ADDR}: addi a0,a0,1\n",
    "S\t1\t0\tF\n",
    "C\t7\n",
    "E\t1\t0\tF\n",
    "S\t1\t0\tD\n",
    "C\t3\n",
    "R\t1\t1\t0\n",
]


def test_cycle_increment_accumulates():
    parser = TraceParser()
    parser.feed("C\t7\n")
    parser.feed("C\t3\n")
    assert parser.cycle == 7 + 3


def test_sample_trace():
    tables = parse_lines(SAMPLE)
    inst = tables.get(1)
    assert inst.mem_addr == ADDR
    assert inst.instruction == "addi a0,a0,1"
    assert [s.name for s in inst.stages] == ["F", "D"]
    assert (inst.stages[0].cycle, inst.stages[0].duration) == (0, 7)
    assert (inst.stages[1].cycle, inst.stages[1].duration) == (7, 3)
    assert inst.finished is True
    assert inst.flushed is False


def test_retire_with_type_one_flushes():
    tables = parse_lines(["I\t4\t4\t0\n", "S\t4\t0\tF\n", "C\t2\n", "R\t4\t4\t1\n"])
    inst = tables.get(4)
    assert inst.flushed is True
    assert inst.stages[-1].duration == 2


def test_second_retire_is_ignored():
    tables = parse_lines(
        ["I\t2\t2\t0\n", "S\t2\t0\tF\n", "C\t2\n", "R\t2\t2\t0\n", "C\t5\n", "R\t2\t2\t1\n"]
    )
    inst = tables.get(2)
    assert inst.flushed is False
    assert inst.stages[-1].duration == 2


def test_end_stage_closes_first_stage_with_that_name():
    tables = parse_lines(
        ["I\t3\t3\t0\n", "S\t3\t0\tX\n", "C\t1\n", "S\t3\t0\tX\n", "C\t4\n", "E\t3\t0\tX\n"]
    )
    first, second = tables.get(3).stages
    assert first.duration == 1 + 4
    assert second.duration == 0


def test_instruction_id_zero_keeps_separator():
    tables = parse_lines(["I\t0\t0\t0\n", f"L\t0\t0\t{ADDR}: nop\n"])
    text = tables.get(0).instruction
    assert text.endswith("nop")
    assert text.lstrip(": ") == "nop"


def test_memory_address_is_cut_to_eighteen_characters():
    long_addr = ADDR + "1234"
    tables = parse_lines(["I\t9\t9\t0\n", f"L\t9\t9\t{long_addr}\n"])
    assert tables.get(9).mem_addr == ADDR


def test_instruction_in_later_table():
    tables = parse_lines(["I\t600\t600\t0\n", "S\t600\t0\tF\n"])
    assert tables.table_count == 600 // 256 + 1
    assert tables.get(600).stages[0].name == "F"


def test_lines_for_unknown_instruction_are_ignored():
    tables = parse_lines([f"L\t5\t5\t{ADDR}: nop\n", "S\t5\t0\tF\n", "R\t5\t5\t0\n"])
    assert tables.get(5) is None
    assert list(tables) == []


def test_unknown_commands_are_ignored():
    tables = parse_lines(["Kanata\t0004\n", "# comment\n", "I\t1\t1\t0\n"])
    assert [pos for pos, _ in tables] == [1]


@pytest.mark.parametrize(
    "line",
    ["C\tx\n", "I\t1\t2\n", "I\t123\n", "L\t1\t1\n", "S\t1\t0\n", "E\t1\n", "R\t1\t1\n", ""],
)
def test_malformed_lines_raise(line):
    with pytest.raises(ParseError):
        parse_lines([line])


def test_parse_file_reads_trace(tmp_path):
    path = tmp_path / "trace.log"
    path.write_text("".join(SAMPLE), encoding="utf-8")
    tables = parse_file(path)
    inst = tables.get(1)
    assert inst.instruction == "addi a0,a0,1"
    assert inst.finished is True


def test_parse_file_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        parse_file(tmp_path / "absent.log")