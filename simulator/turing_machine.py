from simulator import codec
from simulator.errors import InvalidMachineError, InvalidStateError

HALT = None
RIGHT, LEFT = 0, 1


def state_letter(state):
    """Letter used for a 0-based state index in tables (A, B, C, ...)."""
    return chr(ord('A') + state)


class TuringMachine:
    """Immutable 2-symbol transition table.

    Each state takes 6 bytes: two (write, move, next_state + 1) triples for
    read symbols 0 and 1. move is 0 for right, 1 for left; a next-state byte
    of 0 halts.
    """

    __slots__ = ("code",)

    def __init__(self, code):
        code = bytes(code)
        validate_code(code)
        self.code = code

    @classmethod
    def from_b64(cls, text):
        return cls(codec.decode(text))

    @classmethod
    def from_rules(cls, rules):
        """Build a machine from (write, move, next_state) triples, None for halt.

        Rules are ordered state by state, symbol 0 before symbol 1.
        """
        if len(rules) % 2 != 0:
            raise InvalidMachineError(f"Expected two rules per state, got {len(rules)} rules.")
        code = bytearray()
        for rule in rules:
            if rule is None:
                code.extend((0, 0, 0))
            else:
                write_symbol, move, next_state = rule
                code.extend((write_symbol, move, next_state + 1))
        return cls(code)

    @property
    def num_states(self):
        return len(self.code) // codec.STATE_SIZE

    def transition(self, state, symbol):
        """Return (write, move, next_state) with next_state HALT on a halting entry."""
        if not 0 <= state < self.num_states:
            raise InvalidStateError(f"State {state} outside table of {self.num_states} states.")
        offset = codec.STATE_SIZE * state + codec.TRANSITION_SIZE * symbol
        write_symbol, move, goto = self.code[offset:offset + codec.TRANSITION_SIZE]
        return write_symbol, move, (HALT if goto == 0 else goto - 1)

    def transitions(self):
        """Yield (state, symbol, write, move, next_state) for every table entry."""
        for state in range(self.num_states):
            for symbol in (0, 1):
                yield (state, symbol) + self.transition(state, symbol)

    def serialize(self):
        arr = []
        for _, _, write_symbol, move, next_state in self.transitions():
            arr.append(None if next_state is HALT else (write_symbol, move, next_state))
        return arr

    def to_b64(self):
        return codec.encode(self.code)

    def run(self, initial_tape="0", max_steps=1000):
        from simulator.history import run
        return run(self, initial_tape, max_steps)

    def __len__(self):
        return len(self.code)

    def __eq__(self, other):
        if isinstance(other, TuringMachine):
            return self.code == other.code
        return NotImplemented

    def __hash__(self):
        return hash(self.code)

    def __repr__(self):
        return f"TuringMachine({self.to_b64()!r})"


def validate_code(code):
    if len(code) % codec.STATE_SIZE != 0:
        raise InvalidMachineError(
            f"Machine length {len(code)} is not a multiple of {codec.STATE_SIZE}.")

    num_states = len(code) // codec.STATE_SIZE
    for offset in range(0, len(code), codec.TRANSITION_SIZE):
        write_symbol, move, goto = code[offset:offset + codec.TRANSITION_SIZE]
        if write_symbol not in (0, 1) or move not in (RIGHT, LEFT):
            raise InvalidMachineError(
                f"Transition at byte {offset} has write={write_symbol}, move={move}; both must be 0 or 1.")
        if goto > num_states:
            raise InvalidStateError(
                f"Transition at byte {offset} targets state {goto - 1} of a {num_states}-state machine.")


def as_machine(machine):
    if isinstance(machine, TuringMachine):
        return machine
    return TuringMachine(machine)


def step(machine, state, head_position, tape):
    """Apply one transition.

    Returns (next_state, next_head_position), or (HALT, None) when the
    transition for the scanned symbol halts. The scanned cell is written in
    place; nothing else is mutated.
    """
    machine = as_machine(machine)
    if not 0 <= state < machine.num_states:
        raise InvalidStateError(f"State {state} outside table of {machine.num_states} states.")

    symbol = tape.touch(head_position)
    write_symbol, move, next_state = machine.transition(state, symbol)

    if next_state is HALT:
        return HALT, None

    tape[head_position] = write_symbol
    next_position = head_position + (-1 if move == LEFT else 1)
    return next_state, next_position
