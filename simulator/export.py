# simulator/export.py

from simulator.errors import FormatError
from simulator.turing_machine import HALT, TuringMachine, as_machine, state_letter

MOVE_LETTERS = "RL"
HALT_TARGETS = "-Z"


def to_table_text(machine):
    """Render a machine in the turingmachine.io table format.

    Halting transitions are left out; a reader infers halting from their absence.
    """
    machine = as_machine(machine)
    lines = ["blank: '0'", "start state: A", "table:"]
    for state in range(machine.num_states):
        lines.append(f"  {state_letter(state)}:")
        for symbol in (0, 1):
            write_symbol, move, next_state = machine.transition(state, symbol)
            if next_state is HALT:
                continue
            lines.append(
                f"    {symbol}: {{write: {write_symbol}, {MOVE_LETTERS[move]}: {state_letter(next_state)}}}")
    return "\n".join(lines) + "\n"


def to_standard_text(machine):
    """Render a machine as e.g. '1RB1LB_1LA---'."""
    machine = as_machine(machine)
    parts = []
    for state, symbol, write_symbol, move, next_state in machine.transitions():
        if state > 0 and symbol == 0:
            parts.append("_")
        if next_state is HALT:
            parts.append("---")
        else:
            parts.append(f"{write_symbol}{MOVE_LETTERS[move]}{state_letter(next_state)}")
    return "".join(parts)


def from_standard_text(text):
    """Parse the '1RB1LB_1LA---' format. 'Z' or '-' as target means halt.

    A halting transition is stored as 0,0,0, so the write symbol and move of
    e.g. '1RZ' are discarded: '1RZ' and '---' parse to the same machine.
    """
    rows = text.strip().split("_")
    if not all(len(row) == 6 for row in rows):
        raise FormatError(f"Not in standard TM text format: {text!r}")

    code = bytearray()
    for row in rows:
        for write_symbol, move, target in zip(row[::3], row[1::3], row[2::3]):
            if target in HALT_TARGETS:
                code.extend((0, 0, 0))
                continue
            if write_symbol not in "01" or move not in MOVE_LETTERS or not "A" <= target <= "Y":
                raise FormatError(f"Bad transition {write_symbol}{move}{target} in {text!r}")
            code.extend((int(write_symbol), MOVE_LETTERS.index(move), ord(target) - ord("A") + 1))
    return TuringMachine(code)


def trace_to_text(history):
    """List a trace one row per snapshot.

    Each row spans the visited cells of the whole trace; the state letter is
    printed just before the scanned cell. Halted rows show the tape only.
    """
    spans = [s.tape.span() for s in history if s.tape.span() is not None]
    heads = [s.head_position for s in history if s.head_position is not None]
    left = min([span[0] for span in spans] + heads, default=0)
    right = max([span[1] for span in spans] + heads, default=0)

    lines = []
    for snapshot in history:
        tape = snapshot.tape
        row = ""
        for position in range(left, right + 1):
            if position == snapshot.head_position and not snapshot.halted:
                row += state_letter(snapshot.state)
            row += str(tape[position])
        lines.append(row)
    return "\n".join(lines)
