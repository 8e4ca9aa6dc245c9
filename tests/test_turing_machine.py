import pytest

from simulator.errors import InvalidMachineError, InvalidStateError
from simulator.tape import Tape
from simulator.turing_machine import HALT, LEFT, RIGHT, TuringMachine, step


def test_transition_lookup(bb2):
    assert bb2.num_states == 2
    assert bb2.transition(0, 0) == (1, RIGHT, 1)
    assert bb2.transition(0, 1) == (1, LEFT, 1)
    assert bb2.transition(1, 0) == (1, LEFT, 0)
    assert bb2.transition(1, 1)[2] is HALT


def test_rules_round_trip(bb2):
    rules = bb2.serialize()
    assert rules == [(1, 0, 1), (1, 1, 1), (1, 1, 0), None]
    assert TuringMachine.from_rules(rules) == bb2


@pytest.mark.parametrize("code, error", [
    (bytes(5), InvalidMachineError),
    (bytes([2, 0, 1, 0, 0, 0]), InvalidMachineError),
    (bytes([1, 3, 1, 0, 0, 0]), InvalidMachineError),
    (bytes([1, 0, 2, 0, 0, 0]), InvalidStateError),
])
def test_construction_validates(code, error):
    with pytest.raises(error):
        TuringMachine(code)


def test_step_writes_and_moves_right(scenario_machine):
    tape = Tape.from_bitstring("0")
    assert step(scenario_machine, 0, 0, tape) == (1, 1)
    assert tape[0] == 1


def test_step_moves_left(left_runner):
    tape = Tape()
    assert step(left_runner, 0, 0, tape) == (0, -1)
    assert step(left_runner, 0, -1, tape) == (0, -2)
    assert tape.to_dict() == {0: 1, -1: 1}


def test_step_reads_written_symbol(scenario_machine):
    tape = Tape()
    tape[4] = 1
    assert step(scenario_machine.code, 0, 4, tape) == (1, 3)


def test_step_halts_without_writing(immediate_halt):
    tape = Tape()
    assert step(immediate_halt, 0, 0, tape) == (HALT, None)
    assert tape[0] == 0


def test_step_is_deterministic(bb2):
    first, second = Tape.from_bitstring("0110"), Tape.from_bitstring("0110")
    assert step(bb2, 1, 0, first) == step(bb2, 1, 0, second) == (0, -1)
    assert first == second
    assert first.cells == second.cells


@pytest.mark.parametrize("state", [-1, 2, 7])
def test_step_rejects_unknown_state(bb2, state):
    tape = Tape()
    with pytest.raises(InvalidStateError):
        step(bb2, state, 0, tape)
    assert len(tape) == 0
