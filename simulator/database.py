# simulator/database.py
#
# Reader for the bbchallenge seed database: a 30-byte header followed by
# fixed-size 5-state machines in the same byte encoding as TuringMachine.

import struct
from dataclasses import dataclass
from pathlib import Path

from simulator.turing_machine import TuringMachine

DB_SIZE = 88_664_064
DB_STATES = 5
MACHINE_SIZE = 6 * DB_STATES
HEADER_SIZE = 30


@dataclass(frozen=True)
class DatabaseHeader:
    undecided_time: int
    undecided_space: int
    total: int
    sorted: bool


def read_header(path):
    with open(path, "rb") as f:
        raw = f.read(HEADER_SIZE)
    if len(raw) < HEADER_SIZE:
        raise ValueError(f"{path} is too short to hold a seed database header.")
    undecided_time, undecided_space, total = struct.unpack(">III", raw[:12])
    return DatabaseHeader(undecided_time, undecided_space, total, bool(raw[12]))


def machine_count(path):
    """Number of machines actually stored in the file."""
    return (Path(path).stat().st_size - HEADER_SIZE) // MACHINE_SIZE


def read_machine(path, index):
    count = machine_count(path)
    if not 0 <= index < count:
        raise IndexError(f"Machine index {index} outside database of {count:,} machines.")
    with open(path, "rb") as f:
        f.seek(HEADER_SIZE + MACHINE_SIZE * index)
        return TuringMachine(f.read(MACHINE_SIZE))


def iter_machines(path, start=0, count=None):
    """Yield (index, machine) pairs starting at `start`."""
    total = machine_count(path)
    stop = total if count is None else min(total, start + count)
    with open(path, "rb") as f:
        f.seek(HEADER_SIZE + MACHINE_SIZE * start)
        for index in range(start, stop):
            yield index, TuringMachine(f.read(MACHINE_SIZE))
