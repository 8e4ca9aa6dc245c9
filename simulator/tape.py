# simulator/tape.py

from simulator.position import to_index, to_position

# Storage marker for cells the head has never visited. Reads treat it as blank.
UNSET = 2


class Tape:
    """Unbounded two-way binary tape stored in a growable bytearray.

    Cells are addressed by signed position and stored at ``to_index(position)``.
    Reading beyond the stored range yields 0; writing beyond it extends the
    storage, filling the gap with unvisited cells.
    """

    __slots__ = ("cells",)

    def __init__(self, cells=b""):
        self.cells = bytearray(cells)

    @classmethod
    def from_bitstring(cls, bits):
        """Build a tape from a string of '0'/'1' characters.

        Character ``i`` lands in storage index ``i``, i.e. at position
        ``to_position(i)``: the string is laid out in the order 0, -1, 1, -2, ...
        Any character other than '0' is taken as a 1.
        """
        return cls(0 if ch == "0" else 1 for ch in bits)

    def __getitem__(self, position):
        index = to_index(position)
        if index >= len(self.cells):
            return 0
        symbol = self.cells[index]
        return 0 if symbol == UNSET else symbol

    def __setitem__(self, position, symbol):
        if symbol not in (0, 1):
            raise ValueError(f"Tape symbol must be 0 or 1, got {symbol!r}.")
        index = to_index(position)
        self._extend(index)
        self.cells[index] = symbol

    def _extend(self, index):
        missing = index + 1 - len(self.cells)
        if missing > 0:
            self.cells.extend(bytes([UNSET]) * missing)

    def touch(self, position):
        """Mark a cell as visited, leaving its symbol (blank if new) in place."""
        index = to_index(position)
        self._extend(index)
        if self.cells[index] == UNSET:
            self.cells[index] = 0
        return self.cells[index]

    def is_visited(self, position):
        index = to_index(position)
        return index < len(self.cells) and self.cells[index] != UNSET

    def copy(self):
        return Tape(self.cells)

    def items(self):
        """Yield (position, symbol) for visited cells in storage order."""
        for index, symbol in enumerate(self.cells):
            if symbol != UNSET:
                yield to_position(index), symbol

    def span(self):
        """Return (leftmost, rightmost) visited position, or None if empty."""
        positions = [position for position, _ in self.items()]
        if not positions:
            return None
        return min(positions), max(positions)

    def count_ones(self):
        return self.cells.count(1)

    def to_dict(self):
        return dict(self.items())

    def __len__(self):
        return len(self.cells)

    def __eq__(self, other):
        if not isinstance(other, Tape):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"Tape({self.to_dict()!r})"
