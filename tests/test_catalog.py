# tests/test_catalog.py
import pytest

from Engine.grid import GridPosition
from Engine.catalog import (
    SYMMETRY_CLASS_MAP,
    get_default_puzzle,
    get_puzzle_by_id,
    get_puzzle_by_index,
    get_puzzle_count,
    get_puzzle_index,
    iter_puzzles,
    parse_compressed_puzzle,
)


def test_parse_compressed_entry():
    config = parse_compressed_puzzle('4x2;;01;')
    assert config.id == 'puzzle-004'
    assert config.puzzle_number == 4
    assert config.size == 4
    assert config.symmetry_class == 'dia2'
    assert config.pre_placed == [GridPosition(2, 0), GridPosition(0, 2), GridPosition(1, 2)]


def test_empty_columns_still_count_toward_size():
    config = parse_compressed_puzzle('1*;')
    assert config.size == 2
    assert config.pre_placed == []
    assert config.symmetry_class == 'full'


def test_letter_rows():
    config = parse_compressed_puzzle('7.A;;;;;;;;;;;')
    assert config.size == 12
    assert config.pre_placed == [GridPosition(10, 0)]


@pytest.mark.parametrize('bad', ['', '12', 'x;;', '3-;a;1;', '3-;9;1;'])
def test_malformed_entries_raise(bad):
    with pytest.raises(ValueError):
        parse_compressed_puzzle(bad)


def test_catalog_lookup():
    assert get_puzzle_count() == 100
    assert get_default_puzzle().id == 'puzzle-001'
    assert get_puzzle_index('puzzle-004') == 3
    assert get_puzzle_by_id('puzzle-004') == get_puzzle_by_index(3)
    assert get_puzzle_by_id('puzzle-404') is None
    assert get_puzzle_by_index(100) is None
    assert get_puzzle_by_index(-1) is None


def test_catalog_entries_are_in_range():
    seen = set()
    for config in iter_puzzles():
        assert config.id not in seen
        seen.add(config.id)
        for pos in config.pre_placed:
            assert 0 <= pos.row < config.size
            assert 0 <= pos.col < config.size


def test_near_symmetry_class_is_reserved():
    assert SYMMETRY_CLASS_MAP['c'] == 'near'
    assert all(config.symmetry_class != 'near' for config in iter_puzzles())
