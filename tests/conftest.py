import pytest

from simulator.turing_machine import TuringMachine

# A writes 1, moves right, goes to B on both symbols; B halts on both.
SCENARIO_CODE = bytes([1, 0, 2, 1, 1, 2, 0, 0, 0, 0, 0, 0])

# 1RB1LB_1LA1RZ: halts after 5 transitions leaving 4 ones.
BB2_CODE = bytes([1, 0, 2, 1, 1, 2, 1, 1, 1, 0, 0, 0])

# 1RA1RA: walks right forever.
RUNNER_CODE = bytes([1, 0, 1, 1, 0, 1])

# 1LA1LA: walks left forever.
LEFT_RUNNER_CODE = bytes([1, 1, 1, 1, 1, 1])


@pytest.fixture
def scenario_machine():
    return TuringMachine(SCENARIO_CODE)


@pytest.fixture
def bb2():
    return TuringMachine(BB2_CODE)


@pytest.fixture
def runner():
    return TuringMachine(RUNNER_CODE)


@pytest.fixture
def left_runner():
    return TuringMachine(LEFT_RUNNER_CODE)


@pytest.fixture
def immediate_halt():
    return TuringMachine(bytes(6))
