import pytest

from izumi.data_structs import (
    INITIAL_TABLES,
    TABLE_SIZE,
    Instruction,
    InstructionTableArray,
    Stage,
)


def test_new_array_has_one_table_and_room_for_four():
    array = InstructionTableArray()
    assert array.table_count == 1
    assert array.capacity() == INITIAL_TABLES == 4
    assert array.slot_count == TABLE_SIZE == 256


def test_empty_slot_reads_as_none():
    array = InstructionTableArray()
    assert array.get(0) is None
    assert array.get(10_000) is None


def test_put_then_get_round_trip():
    array = InstructionTableArray()
    inst = Instruction(mem_addr="0x0000000080000000", instruction="nop")
    array.put(17, inst)
    assert array.get(17) is inst
    assert array.get(16) is None


def test_put_replaces_existing_instruction():
    array = InstructionTableArray()
    array.put(3, Instruction(instruction="first"))
    second = Instruction(instruction="second")
    array.put(3, second)
    assert array.get(3) is second


def test_put_far_away_grows_tables():
    array = InstructionTableArray()
    position = TABLE_SIZE * 9 + 4
    inst = Instruction(instruction="far")
    array.put(position, inst)
    assert array.table_count == 10
    assert array.capacity() >= array.table_count
    assert array.get(position) is inst
    assert array.get(TABLE_SIZE * 3) is None


def test_slot_count_follows_table_count():
    array = InstructionTableArray()
    array.put(TABLE_SIZE * 2, Instruction())
    assert array.slot_count == array.table_count * TABLE_SIZE


def test_clear_drops_everything():
    array = InstructionTableArray()
    array.put(5, Instruction())
    array.clear()
    assert array.table_count == 0
    assert array.capacity() == 0
    assert array.get(5) is None
    assert list(array) == []


def test_put_after_clear_works():
    array = InstructionTableArray()
    array.clear()
    inst = Instruction(instruction="again")
    array.put(TABLE_SIZE + 1, inst)
    assert array.get(TABLE_SIZE + 1) is inst
    assert array.capacity() >= array.table_count


def test_iteration_is_in_position_order():
    array = InstructionTableArray()
    for position in (300, 5, 1):
        array.put(position, Instruction(instruction=str(position)))
    assert [pos for pos, _ in array] == [1, 5, 300]
    assert [inst.instruction for _, inst in array] == ["1", "5", "300"]


def test_get_negative_position_raises():
    array = InstructionTableArray()
    with pytest.raises(ValueError):
        array.get(-1)
    assert array.table_count == 1


def test_put_negative_position_raises_and_stores_nothing():
    array = InstructionTableArray()
    with pytest.raises(ValueError):
        array.put(-1, Instruction())
    assert list(array) == []
    assert array.table_count == 1


def test_instruction_defaults_and_stage_duration():
    inst = Instruction()
    assert inst.stages == []
    assert inst.finished is False
    assert inst.flushed is False
    assert Stage(name="F", cycle=4).duration == 0