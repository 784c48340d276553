# tests/test_grid.py
from Engine.grid import (
    GridPosition,
    key_to_position,
    keys_from_positions,
    position_to_key,
    positions_from_keys,
)


def test_key_round_trip():
    pos = GridPosition(3, 1)
    assert position_to_key(pos) == '3,1'
    assert key_to_position('3,1') == pos
    assert GridPosition.from_key(pos.key()) == pos


def test_packed_index():
    assert GridPosition(2, 3).index(5) == 13
    assert GridPosition(0, 0).index(5) == 0


def test_positions_are_hashable_and_row_major_ordered():
    keys = ['2,0', '0,3', '0,1']
    positions = positions_from_keys(keys)
    assert len(positions) == 3
    assert sorted(positions) == [GridPosition(0, 1), GridPosition(0, 3), GridPosition(2, 0)]
    assert keys_from_positions(positions) == ['0,1', '0,3', '2,0']
