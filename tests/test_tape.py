import pytest

from simulator.tape import UNSET, Tape


def test_unwritten_cells_read_blank():
    tape = Tape()
    assert tape[0] == 0
    assert tape[-500] == 0
    assert tape[500] == 0
    assert len(tape) == 0


def test_write_extends_storage_with_unvisited_cells():
    tape = Tape()
    tape[3] = 1
    assert len(tape) == 7
    assert tape[3] == 1
    assert tape[-3] == 0
    assert tape.cells[0] == UNSET
    assert not tape.is_visited(0)
    assert tape.is_visited(3)


def test_touch_marks_visited_without_changing_symbol():
    tape = Tape()
    tape[-1] = 1
    assert tape.touch(-1) == 1
    assert tape.touch(2) == 0
    assert tape.is_visited(2)
    assert tape.to_dict() == {-1: 1, 2: 0}


def test_rejects_non_binary_symbols():
    with pytest.raises(ValueError):
        Tape()[0] = 2


def test_from_bitstring_follows_storage_order():
    tape = Tape.from_bitstring("0110")
    assert tape[0] == 0
    assert tape[-1] == 1
    assert tape[1] == 1
    assert tape[-2] == 0
    assert tape.span() == (-2, 1)


def test_copy_is_independent():
    tape = Tape.from_bitstring("1")
    other = tape.copy()
    other[0] = 0
    other[5] = 1
    assert tape[0] == 1
    assert tape[5] == 0
    assert tape != other


def test_span_and_count():
    tape = Tape()
    assert tape.span() is None
    tape[-4] = 1
    tape[2] = 1
    tape[0] = 0
    assert tape.span() == (-4, 2)
    assert tape.count_ones() == 2
