# tests/test_puzzle.py
import pytest

from Engine.grid import GridPosition
from Engine.catalog import PuzzleConfig, get_puzzle_by_id
from Engine.puzzle import NeighborsPuzzle, SessionConfig


def P(row, col):
    return GridPosition(row, col)


def empty_config(size):
    return PuzzleConfig(id='test', puzzle_number=0, size=size, symmetry_class='iden')


def test_session_starts_with_analysis_of_pre_placed():
    puzzle = NeighborsPuzzle(get_puzzle_by_id('puzzle-004'))
    assert puzzle.occupied == {P(2, 0), P(0, 2), P(1, 2)}
    assert puzzle.forbidden_squares == {P(1, 1), P(2, 2), P(3, 2)}
    assert puzzle.forced_moves == []
    assert puzzle.constraint_warning is None
    assert not puzzle.is_complete()


def test_place_and_remove_recompute():
    puzzle = NeighborsPuzzle(empty_config(4))
    puzzle.place(P(0, 0))
    puzzle.place(P(3, 3))
    assert puzzle.forbidden_squares == {P(1, 1), P(2, 2)}

    puzzle.remove(P(3, 3))
    assert puzzle.forbidden_squares == set()
    assert puzzle.move_history == [P(0, 0)]


def test_pre_placed_markers_cannot_be_removed():
    puzzle = NeighborsPuzzle(get_puzzle_by_id('puzzle-004'))
    with pytest.raises(RuntimeError):
        puzzle.remove(P(2, 0))
    with pytest.raises(RuntimeError):
        puzzle.place(P(0, 2))


def test_toggle_and_undo():
    puzzle = NeighborsPuzzle(empty_config(4))
    assert puzzle.toggle(P(1, 2)) is True
    assert puzzle.toggle(P(1, 2)) is False
    assert puzzle.player_placed == set()

    puzzle.place(P(0, 1))
    puzzle.place(P(2, 3))
    assert puzzle.undo() == P(2, 3)
    assert puzzle.player_placed == {P(0, 1)}
    assert puzzle.undo() == P(0, 1)
    assert puzzle.undo() is None


def test_clear_keeps_pre_placed():
    puzzle = NeighborsPuzzle(get_puzzle_by_id('puzzle-004'))
    puzzle.place(P(3, 3))
    puzzle.clear()
    assert puzzle.player_placed == set()
    assert puzzle.occupied == puzzle.pre_placed


def test_unsolvable_placement_records_dead_end():
    puzzle = NeighborsPuzzle(empty_config(3))
    puzzle.place(P(0, 0))
    puzzle.place(P(1, 1))
    assert puzzle.dead_end_data == []

    puzzle.place(P(2, 0))
    assert puzzle.analysis.has_unsolvable_state
    assert puzzle.constraint_warning.over_constrained_columns == [2]
    assert len(puzzle.dead_end_data) == 1
    marker = puzzle.dead_end_data[0]
    assert marker.position == P(2, 0)
    assert marker.dependency_chain == frozenset({'0,0', '1,1', '2,0'})

    # Still placed: not shown as an active dead end
    assert puzzle.dead_ends == []

    puzzle.undo()
    assert puzzle.constraint_warning is None
    assert puzzle.dead_ends == [marker]

    puzzle.remove(P(1, 1))
    assert puzzle.dead_ends == []
    # History is kept
    assert puzzle.dead_end_data == [marker]


def test_dead_end_tracking_can_be_disabled():
    puzzle = NeighborsPuzzle(empty_config(3), SessionConfig(track_dead_ends=False))
    for pos in (P(0, 0), P(1, 1), P(2, 0)):
        puzzle.place(pos)
    assert puzzle.analysis.has_unsolvable_state
    assert puzzle.dead_end_data == []


def test_completing_a_puzzle():
    config = PuzzleConfig(id='test', puzzle_number=0, size=3, symmetry_class='iden',
                          pre_placed=[P(0, 0), P(0, 1), P(1, 0)])
    puzzle = NeighborsPuzzle(config)
    for pos in (P(1, 2), P(2, 1), P(2, 2)):
        puzzle.place(pos)
    assert puzzle.is_complete()
    assert puzzle.find_violations() == []
    assert puzzle.get_completion_percentage() == 1.0


def test_inspection_pass_through():
    puzzle = NeighborsPuzzle(get_puzzle_by_id('puzzle-004'))
    data = puzzle.inspect(P(0, 2))
    assert len(data.relationships) == 2
    info = puzzle.explain_forbidden(P(1, 1))
    assert [rel.position_pair for rel in info.caused_by] == [(P(0, 2), P(2, 0))]


def test_verbose_session_prints(capsys):
    puzzle = NeighborsPuzzle(empty_config(3), SessionConfig(verbose=True))
    puzzle.place(P(0, 0))
    out = capsys.readouterr().out
    assert "Placed marker at (0,0)" in out
