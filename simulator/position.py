# simulator/position.py
#
# Tape positions are signed and unbounded in both directions. Storage is a
# zero-based sequence, so positions are interleaved: 0, -1, 1, -2, 2, ...


def to_index(position):
    """Map a signed tape position to its storage index."""
    return -2 * position - 1 if position < 0 else 2 * position


def to_position(index):
    """Inverse of to_index."""
    return index // 2 if index % 2 == 0 else -(index + 1) // 2
