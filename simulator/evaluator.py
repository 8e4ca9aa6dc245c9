from dataclasses import dataclass

import numpy as np
from numba import njit

from simulator.turing_machine import as_machine


@dataclass(frozen=True)
class Evaluation:
    steps: int
    halted: bool
    ones: int


@njit
def simulate_machine(code, max_steps, tape):
    """
    Run one machine on a blank tape for at most max_steps transitions.
    tape must hold at least 2 * max_steps + 2 cells; it is cleared first.
    Returns (steps, halted).
    """
    num_states = code.shape[0] // 6
    tape[:] = 0
    state = 0
    position = 0

    for steps in range(max_steps):
        index = -2 * position - 1 if position < 0 else 2 * position
        offset = 6 * state + 3 * tape[index]
        goto = code[offset + 2]

        if goto == 0:
            return steps, True

        tape[index] = code[offset]
        position += -1 if code[offset + 1] == 1 else 1
        state = goto - 1

        if state >= num_states:
            return steps + 1, True

    return max_steps, False


def evaluate_batch(machines, max_steps=1000):
    """
    Host-side loop over the compiled kernel.
    machines: iterable of TuringMachine or raw table bytes.
    Returns steps, halted and ones arrays, one entry per machine.
    """
    if max_steps < 0:
        raise ValueError(f"max_steps must be non-negative, got {max_steps}.")

    codes = [np.frombuffer(as_machine(m).code, dtype=np.uint8) for m in machines]
    tape = np.zeros(2 * max_steps + 2, dtype=np.uint8)

    steps = np.zeros(len(codes), dtype=np.int64)
    halted = np.zeros(len(codes), dtype=np.bool_)
    ones = np.zeros(len(codes), dtype=np.int64)

    for idx, code in enumerate(codes):
        steps[idx], halted[idx] = simulate_machine(code, max_steps, tape)
        ones[idx] = int(tape.sum())

    return steps, halted, ones


def evaluate(machine, max_steps=1000):
    steps, halted, ones = evaluate_batch([machine], max_steps)
    return Evaluation(int(steps[0]), bool(halted[0]), int(ones[0]))
