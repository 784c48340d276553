# tests/test_output_and_cli.py
import json

from Engine.grid import GridPosition
from Engine.catalog import PuzzleConfig, get_puzzle_by_id, get_puzzle_by_index
from Engine.puzzle import NeighborsPuzzle
from Engine.output import AnalysisFormatter
from Engine.diagnostics import analyze_catalog, analyze_puzzle
from Engine import main as cli


def test_analysis_json():
    puzzle = NeighborsPuzzle(get_puzzle_by_id('puzzle-004'))
    data = AnalysisFormatter.format_analysis_json(puzzle)

    assert data['puzzle_info']['id'] == 'puzzle-004'
    assert data['puzzle_info']['complete'] is False
    assert data['forbidden_squares'] == [{'row': 1, 'col': 1}, {'row': 2, 'col': 2}, {'row': 3, 'col': 2}]
    assert data['constraint_analysis']['has_unsolvable_state'] is False
    assert len(data['constraint_analysis']['constraints']) == 8
    json.dumps(data)


def test_grid_visualization_marks_cells():
    puzzle = NeighborsPuzzle(get_puzzle_by_id('puzzle-004'))
    text = AnalysisFormatter.format_grid_visualization(puzzle)
    assert text.count(AnalysisFormatter.MARKER) == 3
    assert text.count(AnalysisFormatter.FORBIDDEN) == 3


def test_human_readable_lists_forced_moves():
    puzzle = NeighborsPuzzle(get_puzzle_by_id('puzzle-004'))
    puzzle.place(GridPosition(0, 0))
    text = AnalysisFormatter.format_human_readable(puzzle)
    assert 'puzzle-004' in text
    assert 'ROW / COLUMN CAPACITY' in text
    for pos in puzzle.forced_moves:
        assert f"({pos.row},{pos.col})" in text


def test_save_outputs(tmp_path):
    puzzle = NeighborsPuzzle(get_puzzle_by_id('puzzle-004'))
    AnalysisFormatter.save_analysis(puzzle, str(tmp_path / 'a.json'))
    AnalysisFormatter.save_human_readable(puzzle, str(tmp_path / 'a.txt'))
    assert json.loads((tmp_path / 'a.json').read_text())['puzzle_info']['size'] == 4
    assert 'GRID VISUALIZATION' in (tmp_path / 'a.txt').read_text(encoding='utf-8')


def test_analyze_puzzle_counts():
    result = analyze_puzzle(get_puzzle_by_id('puzzle-004'))
    assert result['pre_placed'] == 3
    assert result['forbidden'] == 3
    assert result['forced'] == 0
    assert result['unsolvable'] is False


def test_catalog_starting_positions_are_consistent():
    results = analyze_catalog(verbose=False)
    assert len(results) == 100
    for r in results:
        assert r['violations'] == 0, r['id']
        assert r['unsolvable'] is False, r['id']


def test_catalog_summary_printed(capsys):
    analyze_catalog([get_puzzle_by_index(i) for i in range(5)], verbose=True)
    out = capsys.readouterr().out
    assert 'CATALOG DIAGNOSTICS (5 puzzles)' in out


def test_cli_writes_output(tmp_path, capsys):
    puzzle = cli.analyze_puzzle_by_id('puzzle-004', output_dir=str(tmp_path), verbose=True)
    assert puzzle is not None
    assert (tmp_path / 'puzzle-004' / 'analysis.json').exists()
    assert (tmp_path / 'puzzle-004' / 'analysis.txt').exists()
    assert 'GRID VISUALIZATION' in capsys.readouterr().out


def test_cli_unknown_puzzle(monkeypatch, tmp_path):
    monkeypatch.setattr(cli, 'OUTPUT_DIR', str(tmp_path))
    assert cli.main(['puzzle-999']) == 1


def test_cli_known_puzzle(monkeypatch, tmp_path):
    monkeypatch.setattr(cli, 'OUTPUT_DIR', str(tmp_path))
    assert cli.main(['puzzle-002']) == 0
    assert (tmp_path / 'puzzle-002' / 'analysis.json').exists()


def test_unsolvable_report_names_over_constrained_lines():
    config = PuzzleConfig(id='test', puzzle_number=0, size=3, symmetry_class='iden')
    puzzle = NeighborsPuzzle(config)
    for pos in (GridPosition(0, 0), GridPosition(1, 1), GridPosition(2, 0)):
        puzzle.place(pos)
    text = AnalysisFormatter.format_human_readable(puzzle)
    assert '✗ UNSOLVABLE from this state' in text
    assert 'column 2: 0 placed + 1 available < 2' in text


def test_cli_batch_mode_saves_every_puzzle(monkeypatch, tmp_path):
    monkeypatch.setattr(cli, 'OUTPUT_DIR', str(tmp_path))
    monkeypatch.setattr(cli, 'SOLVE_ALL', True)
    monkeypatch.setattr(cli, 'VERBOSE', False)
    assert cli.main([]) == 0
    assert len(list(tmp_path.glob('puzzle-*/analysis.json'))) == 100
    assert (tmp_path / 'puzzle-001' / 'analysis.json').exists()
    assert (tmp_path / 'puzzle-100' / 'analysis.txt').exists()
