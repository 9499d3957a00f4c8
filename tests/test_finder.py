import pytest

from izumi.data_structs import Instruction, InstructionTableArray
from izumi.finder import FindDataKind, SearchDirection, find, matches

ADDR_A = "0x0000000080000000"
ADDR_B = "0x0000000080000004"


@pytest.fixture
def tables():
    array = InstructionTableArray()
    array.put(0, Instruction(mem_addr=ADDR_A, instruction="addi a0,a0,1"))
    array.put(1, Instruction(mem_addr=ADDR_B, instruction="  lw a1,0(a0)"))
    array.put(2, Instruction(mem_addr=ADDR_A, instruction="addi a0,a0,1"))
    array.put(300, Instruction(mem_addr=ADDR_B, instruction="lw a2,4(a0)"))
    return array


def test_pc_match_exact():
    assert matches(Instruction(mem_addr=ADDR_A), ADDR_A, FindDataKind.PC) is True
    assert matches(Instruction(mem_addr=ADDR_A), ADDR_B, FindDataKind.PC) is False


def test_pc_match_compares_only_address_length():
    inst = Instruction(mem_addr="0x40")
    assert matches(inst, "0x4000", FindDataKind.PC) is True
    assert matches(inst, "0x4", FindDataKind.PC) is False


def test_inst_match_trims_leading_whitespace_and_uses_first_word():
    inst = Instruction(instruction=" \t addi a0,a0,1")
    assert matches(inst, "addi", FindDataKind.INST) is True
    assert matches(inst, "add", FindDataKind.INST) is False


def test_missing_fields_never_match():
    assert matches(None, "x", FindDataKind.PC) is False
    assert matches(Instruction(), "x", FindDataKind.PC) is False
    assert matches(Instruction(), "x", FindDataKind.INST) is False


def test_blank_instruction_text_matches_any_pattern():
    assert matches(Instruction(instruction="   "), "anything", FindDataKind.INST) is True


def test_find_down_from_start(tables):
    assert find(tables, "lw", FindDataKind.INST, SearchDirection.DOWN, 0) == 1
    assert find(tables, ADDR_A, FindDataKind.PC, SearchDirection.DOWN, 1) == 2


def test_find_down_includes_start(tables):
    assert find(tables, ADDR_A, FindDataKind.PC, SearchDirection.DOWN, 2) == 2


def test_find_down_crosses_tables(tables):
    assert find(tables, "lw", FindDataKind.INST, SearchDirection.DOWN, 2) == 300


def test_find_down_not_found(tables):
    assert find(tables, ADDR_A, FindDataKind.PC, SearchDirection.DOWN, 3) is None
    assert find(tables, "sw", FindDataKind.INST, SearchDirection.DOWN, 0) is None


def test_find_up(tables):
    assert find(tables, ADDR_A, FindDataKind.PC, SearchDirection.UP, 1) == 0
    assert find(tables, "lw", FindDataKind.INST, SearchDirection.UP, 299) == 1
    assert find(tables, "lw", FindDataKind.INST, SearchDirection.UP, 300) == 300


def test_find_up_beyond_tables(tables):
    assert find(tables, "lw", FindDataKind.INST, SearchDirection.UP, 100_000) == 300


def test_find_up_not_found(tables):
    assert find(tables, ADDR_B, FindDataKind.PC, SearchDirection.UP, 0) is None


def test_negative_start_finds_nothing(tables):
    for direction in SearchDirection:
        assert find(tables, ADDR_A, FindDataKind.PC, direction, -1) is None


def test_find_in_cleared_array():
    array = InstructionTableArray()
    array.clear()
    for direction in SearchDirection:
        assert find(array, "x", FindDataKind.INST, direction, 0) is None