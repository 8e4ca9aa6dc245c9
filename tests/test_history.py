import numpy as np
import pytest

from simulator.history import NO_STATE, run
from simulator.tape import UNSET
from simulator.turing_machine import HALT


def test_immediate_halt(immediate_halt):
    history = run(immediate_halt, "0", max_steps=10)
    assert len(history) == 2
    assert history.halted
    assert history.steps == 0
    assert history.final.state is HALT
    assert history.final.head_position is None


@pytest.mark.parametrize("max_steps", [0, 1, 7, 100])
def test_step_bound(runner, max_steps):
    history = run(runner, "0", max_steps=max_steps)
    assert len(history) == max_steps + 1
    assert history.steps == max_steps
    assert not history.halted
    assert history.final.head_position == max_steps


def test_default_bound(runner):
    assert len(run(runner)) == 1001


def test_two_state_scenario(scenario_machine):
    history = run(scenario_machine, "0")
    assert history.halted
    assert history.steps == 1
    assert len(history) == 3
    assert (history[1].state, history[1].head_position) == (1, 1)
    assert history[1].tape[0] == 1
    assert history.final.tape[0] == 1


def test_bb2_champion(bb2):
    history = bb2.run()
    assert history.halted
    assert history.steps == 5
    assert history.final.tape.count_ones() == 4
    assert history[0].state == 0 and history[0].head_position == 0


def test_snapshots_keep_their_own_tape(runner):
    history = run(runner, "0", max_steps=5)
    assert history[0].tape.to_dict() == {0: 0}
    assert history[3].tape.to_dict() == {0: 1, 1: 1, 2: 1}
    assert history[5].tape.count_ones() == 5


def test_initial_tape_layout(runner):
    history = run(runner, "011", max_steps=0)
    tape = history[0].tape
    assert (tape[0], tape[-1], tape[1]) == (0, 1, 1)


def test_initial_tape_is_read(scenario_machine):
    history = run(scenario_machine, "1")
    assert history[1].head_position == -1


def test_negative_bound_rejected(runner):
    with pytest.raises(ValueError):
        run(runner, "0", max_steps=-1)


def test_as_arrays(scenario_machine):
    cells, states, heads = run(scenario_machine).as_arrays()
    assert cells.shape == (3, 3)
    assert cells.dtype == np.uint8
    assert list(cells[0]) == [0, UNSET, UNSET]
    assert list(cells[2]) == [1, UNSET, 0]
    assert list(states) == [0, 1, NO_STATE]
    assert list(heads) == [0, 1, 0]
