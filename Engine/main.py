#!/usr/bin/env python3
"""
No-Three-In-Line Engine - Main Entry Point

Usage:
    python -m Engine.main puzzle-004
    python -m Engine.main puzzle-004 puzzle-017
    python -m Engine.main  # Default puzzle (or the whole catalog when SOLVE_ALL)
"""

import sys
from pathlib import Path
from typing import List, Optional

from .catalog import get_default_puzzle, get_puzzle_by_id, iter_puzzles
from .diagnostics import analyze_catalog
from .output import AnalysisFormatter
from .puzzle import NeighborsPuzzle, SessionConfig

# ============================================================================
# CONFIGURATION
# ============================================================================
DEFAULT_PUZZLE_ID = None          # None -> first catalog puzzle
OUTPUT_DIR = "data/analysis"      # Base output directory
SOLVE_ALL = False                 # Set True to analyze and save the whole catalog
SAVE_OUTPUT = True                # Write analysis.json / analysis.txt per puzzle
VERBOSE = True
# ============================================================================


def analyze_puzzle_by_id(puzzle_id: Optional[str], output_dir: Optional[str] = OUTPUT_DIR,
                         verbose: bool = VERBOSE) -> Optional[NeighborsPuzzle]:
    """
    Load one catalog puzzle, print its analysis and optionally save it.

    Args:
        puzzle_id: Catalog id such as 'puzzle-004' (None -> default puzzle)
        output_dir: Directory for output files (None -> don't save)
        verbose: Print the text report and grid
    """
    config = get_default_puzzle() if puzzle_id is None else get_puzzle_by_id(puzzle_id)
    if config is None:
        print(f"Error: Unknown puzzle id: {puzzle_id}")
        return None

    puzzle = NeighborsPuzzle(config, SessionConfig(verbose=False))

    if verbose:
        print("\n" + AnalysisFormatter.format_human_readable(puzzle))
        print(AnalysisFormatter.format_grid_visualization(puzzle))

    if output_dir is not None:
        out = Path(output_dir) / config.id
        out.mkdir(parents=True, exist_ok=True)
        AnalysisFormatter.save_analysis(puzzle, str(out / "analysis.json"))
        AnalysisFormatter.save_human_readable(puzzle, str(out / "analysis.txt"))

    return puzzle


def analyze_all_puzzles(output_dir: Optional[str] = OUTPUT_DIR, verbose: bool = VERBOSE) -> List[dict]:
    """
    Run diagnostics over the whole catalog and save every puzzle's analysis.

    Returns the diagnostics records; a record is broken when its starting
    position is unsolvable or has a line violation.
    """
    results = analyze_catalog(verbose=verbose)

    if output_dir is not None:
        for config in iter_puzzles():
            analyze_puzzle_by_id(config.id, output_dir=output_dir, verbose=False)
        print(f"\n✓ Saved {len(results)} analyses under {output_dir}")

    return results


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    output_dir = OUTPUT_DIR if SAVE_OUTPUT else None

    if not args and SOLVE_ALL:
        results = analyze_all_puzzles(output_dir=output_dir, verbose=VERBOSE)
        broken = [r for r in results if r['unsolvable'] or r['violations']]
        return 1 if broken else 0

    puzzle_ids = args or [DEFAULT_PUZZLE_ID]
    failed = []
    for puzzle_id in puzzle_ids:
        print(f"\n{'='*60}")
        print(f"Analyzing: {puzzle_id or 'default puzzle'}")
        print(f"{'='*60}")
        try:
            if analyze_puzzle_by_id(puzzle_id, output_dir=output_dir, verbose=VERBOSE) is None:
                failed.append(puzzle_id)
        except (OSError, ValueError) as e:
            print(f"\n❌ ERROR: {e}")
            failed.append(puzzle_id)

    if failed:
        print(f"\n❌ Failed: {len(failed)}/{len(puzzle_ids)}")
        for puzzle_id in failed:
            print(f"   - {puzzle_id}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
