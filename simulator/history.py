from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from simulator.tape import UNSET, Tape
from simulator.turing_machine import HALT, TuringMachine, as_machine, step

DEFAULT_MAX_STEPS = 1000

# Packed state value for snapshots without a live state (halted).
NO_STATE = -1


@dataclass(frozen=True)
class Snapshot:
    tape: Tape
    state: Optional[int]
    head_position: Optional[int]

    @property
    def halted(self):
        return self.state is HALT


@dataclass
class History:
    """Execution trace: one snapshot per configuration, starting from the initial one."""

    machine: TuringMachine
    snapshots: List[Snapshot]

    def __len__(self):
        return len(self.snapshots)

    def __getitem__(self, row):
        return self.snapshots[row]

    def __iter__(self):
        return iter(self.snapshots)

    @property
    def final(self):
        return self.snapshots[-1]

    @property
    def halted(self):
        final = self.final
        return final.halted or not 0 <= final.state < self.machine.num_states

    @property
    def steps(self):
        """Number of transitions applied (the halting lookup is not counted)."""
        if self.final.halted:
            return len(self.snapshots) - 2
        return len(self.snapshots) - 1

    def as_arrays(self):
        """Pack the trace into (cells, states, heads) numpy arrays.

        cells is (rows, max storage length) uint8 padded with UNSET; states
        uses NO_STATE for halted rows, whose head is stored as 0.
        """
        rows = len(self.snapshots)
        width = max(1, max(len(s.tape) for s in self.snapshots))
        cells = np.full((rows, width), UNSET, dtype=np.uint8)
        states = np.full(rows, NO_STATE, dtype=np.int64)
        heads = np.zeros(rows, dtype=np.int64)

        for row, snapshot in enumerate(self.snapshots):
            stored = snapshot.tape.cells
            cells[row, :len(stored)] = np.frombuffer(bytes(stored), dtype=np.uint8)
            if not snapshot.halted:
                states[row] = snapshot.state
                heads[row] = snapshot.head_position
        return cells, states, heads


def run(machine, initial_tape="0", max_steps=DEFAULT_MAX_STEPS):
    """Unroll machine from state 0 at position 0 for at most max_steps steps.

    Halting appends a final (tape, HALT, None) snapshot and stops. Every
    snapshot holds its own copy of the tape.
    """
    if max_steps < 0:
        raise ValueError(f"max_steps must be non-negative, got {max_steps}.")

    machine = as_machine(machine)
    tape = Tape.from_bitstring(initial_tape)
    state, position = 0, 0
    snapshots = [Snapshot(tape, state, position)]

    for _ in range(max_steps):
        tape = tape.copy()
        state, position = step(machine, state, position, tape)
        snapshots.append(Snapshot(tape, state, position))
        if state is HALT or state >= machine.num_states:
            break

    return History(machine, snapshots)
