from simulator.position import to_index, to_position


def test_interleaved_order():
    assert [to_index(p) for p in (0, -1, 1, -2, 2, -3)] == [0, 1, 2, 3, 4, 5]
    assert [to_position(i) for i in range(6)] == [0, -1, 1, -2, 2, -3]


def test_bijection_over_range():
    positions = range(-10000, 10001)
    indices = [to_index(p) for p in positions]

    assert all(to_position(to_index(p)) == p for p in positions)
    assert len(set(indices)) == len(indices)
    assert min(indices) == 0
    assert sorted(indices) == list(range(len(indices)))


def test_negative_positions_map_to_odd_indices():
    assert all(to_index(p) % 2 == 1 for p in range(-50, 0))
    assert all(to_index(p) % 2 == 0 for p in range(0, 50))
