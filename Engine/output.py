import json
from typing import Dict, List
from datetime import datetime

from .grid import GridPosition, REQUIRED_PER_LINE
from .puzzle import NeighborsPuzzle


class AnalysisFormatter:
    """Formats session analysis for output"""

    MARKER = '●'
    FORBIDDEN = '×'
    FORCED = '!'
    EMPTY = '·'

    @staticmethod
    def format_analysis_json(puzzle: NeighborsPuzzle) -> Dict:
        """
        Format the current analysis as JSON
        """
        analysis = puzzle.analysis
        return {
            'puzzle_info': {
                'id': puzzle.config.id,
                'puzzle_number': puzzle.config.puzzle_number,
                'size': puzzle.size,
                'symmetry_class': puzzle.config.symmetry_class,
                'complete': puzzle.is_complete(),
                'timestamp': datetime.now().isoformat()
            },
            'pre_placed': [{'row': p.row, 'col': p.col} for p in sorted(puzzle.pre_placed)],
            'player_placed': [{'row': p.row, 'col': p.col} for p in sorted(puzzle.player_placed)],
            'forbidden_squares': [{'row': p.row, 'col': p.col} for p in sorted(puzzle.forbidden_squares)],
            'forced_moves': [{'row': p.row, 'col': p.col} for p in puzzle.forced_moves],
            'constraint_analysis': {
                'over_constrained_rows': list(analysis.over_constrained_rows),
                'over_constrained_columns': list(analysis.over_constrained_columns),
                'has_unsolvable_state': analysis.has_unsolvable_state,
                'constraints': [c.as_dict() for c in analysis.constraints],
            },
            'violations': [
                {
                    'line': v.line.as_dict(),
                    'markers': [{'row': p.row, 'col': p.col} for p in v.markers],
                }
                for v in puzzle.find_violations()
            ],
        }

    @staticmethod
    def format_human_readable(puzzle: NeighborsPuzzle) -> str:
        """
        Format the analysis as human-readable text
        """
        analysis = puzzle.analysis
        lines: List[str] = []
        lines.append("=" * 60)
        lines.append(f"NO-THREE-IN-LINE ANALYSIS: {puzzle.config.id}")
        lines.append("=" * 60)
        lines.append(f"\nGrid {puzzle.size}x{puzzle.size}, symmetry class '{puzzle.config.symmetry_class}'")
        lines.append(f"Markers: {len(puzzle.pre_placed)} pre-placed, {len(puzzle.player_placed)} placed")
        lines.append(f"Forbidden squares: {len(puzzle.forbidden_squares)}")
        lines.append(f"Forced moves: {len(puzzle.forced_moves)}\n")

        if puzzle.forced_moves:
            lines.append("FORCED MOVES:")
            lines.append("-" * 60)
            for i, pos in enumerate(puzzle.forced_moves, 1):
                lines.append(f"{i:2d}. ({pos.row},{pos.col})")
            lines.append("")

        lines.append("ROW / COLUMN CAPACITY:")
        lines.append("-" * 60)
        for c in analysis.constraints:
            status = "✗" if c.is_over_constrained else "✓"
            lines.append(
                f"{c.kind.capitalize():6s} {c.index:2d}: placed {c.placed_count} "
                f"available {c.available_count:2d} {status}"
            )

        lines.append("=" * 60)
        if analysis.has_unsolvable_state:
            lines.append("✗ UNSOLVABLE from this state")
            for kind, indices in (('row', analysis.over_constrained_rows),
                                  ('column', analysis.over_constrained_columns)):
                for index in indices:
                    c = analysis.get(kind, index)
                    lines.append(f"  {kind} {index}: {c.placed_count} placed + "
                                 f"{c.available_count} available < {REQUIRED_PER_LINE}")
        elif puzzle.is_complete():
            lines.append("✓ SOLVED")
        else:
            lines.append(f"In progress: {puzzle.get_completion_percentage():.0%}")
        lines.append("=" * 60)

        return "\n".join(lines)

    @staticmethod
    def format_grid_visualization(puzzle: NeighborsPuzzle) -> str:
        """
        Text grid: markers, forbidden, forced and empty cells
        """
        occupied = puzzle.occupied
        forced = set(puzzle.forced_moves)

        lines = ["\nGRID VISUALIZATION:"]
        lines.append("-" * (puzzle.size * 2 + 3))
        for row in range(puzzle.size):
            cells = []
            for col in range(puzzle.size):
                pos = GridPosition(row, col)
                if pos in occupied:
                    cells.append(AnalysisFormatter.MARKER)
                elif pos in forced:
                    cells.append(AnalysisFormatter.FORCED)
                elif pos in puzzle.forbidden_squares:
                    cells.append(AnalysisFormatter.FORBIDDEN)
                else:
                    cells.append(AnalysisFormatter.EMPTY)
            lines.append("  " + " ".join(cells))
        lines.append("-" * (puzzle.size * 2 + 3))
        return "\n".join(lines)

    @staticmethod
    def save_analysis(puzzle: NeighborsPuzzle, output_path: str):
        """
        Save analysis to JSON file
        """
        data = AnalysisFormatter.format_analysis_json(puzzle)

        with open(output_path, 'w') as f:
            json.dump(data, f, indent=2)

        print(f"\n✓ Analysis saved to: {output_path}")

    @staticmethod
    def save_human_readable(puzzle: NeighborsPuzzle, output_path: str):
        """
        Save human-readable analysis to text file
        """
        text = AnalysisFormatter.format_human_readable(puzzle)
        text += "\n\n" + AnalysisFormatter.format_grid_visualization(puzzle)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(text)

        print(f"✓ Human-readable analysis saved to: {output_path}")
