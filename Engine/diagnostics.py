"""
Diagnostic sweep: how constrained is each catalog puzzle at its starting position?

Useful to spot catalog entries whose pre-placed markers already force moves
or (which would be a catalog bug) already make the puzzle unsolvable.
"""

import time
from typing import Dict, List, Optional

from .catalog import PuzzleConfig, iter_puzzles
from .puzzle import NeighborsPuzzle, SessionConfig


def analyze_puzzle(config: PuzzleConfig, verbose: bool = False) -> Dict:
    """Analyze one puzzle's starting position."""
    start = time.time()
    puzzle = NeighborsPuzzle(config, SessionConfig(verbose=False, track_dead_ends=False))
    elapsed = time.time() - start
    analysis = puzzle.analysis

    result = {
        'id': config.id,
        'size': config.size,
        'symmetry_class': config.symmetry_class,
        'pre_placed': len(puzzle.pre_placed),
        'forbidden': len(puzzle.forbidden_squares),
        'forced': len(puzzle.forced_moves),
        'over_constrained_rows': list(analysis.over_constrained_rows),
        'over_constrained_columns': list(analysis.over_constrained_columns),
        'unsolvable': analysis.has_unsolvable_state,
        'violations': len(puzzle.find_violations()),
        'elapsed': elapsed,
    }

    if verbose:
        status = "✗" if result['unsolvable'] or result['violations'] else "✓"
        print(f"  {status} {config.id}: {config.size}x{config.size} [{config.symmetry_class}] "
              f"pre-placed={result['pre_placed']} forbidden={result['forbidden']} "
              f"forced={result['forced']}")

    return result


def analyze_catalog(puzzles: Optional[List[PuzzleConfig]] = None, verbose: bool = True) -> List[Dict]:
    """Analyze every puzzle (default: the full catalog) and print a summary."""
    if puzzles is None:
        puzzles = list(iter_puzzles())

    if verbose:
        print(f"\n{'='*70}")
        print(f"CATALOG DIAGNOSTICS ({len(puzzles)} puzzles)")
        print(f"{'='*70}")

    results = [analyze_puzzle(config, verbose=verbose) for config in puzzles]

    if verbose and results:
        broken = [r for r in results if r['unsolvable'] or r['violations']]
        with_forced = [r for r in results if r['forced'] > 0]
        avg_forbidden = sum(r['forbidden'] for r in results) / len(results)

        print(f"\n{'-'*70}")
        print(f"Puzzles with forced opening moves: {len(with_forced)}/{len(results)}")
        print(f"Average forbidden squares at start: {avg_forbidden:.1f}")

        by_size: Dict[int, int] = {}
        for r in results:
            by_size[r['size']] = by_size.get(r['size'], 0) + 1
        for size in sorted(by_size):
            print(f"  {size}x{size}: {by_size[size]} puzzles")

        if broken:
            print(f"\n⚠️  {len(broken)} puzzle(s) start unsolvable or with a violation:")
            for r in broken:
                print(f"   - {r['id']}: rows={r['over_constrained_rows']} "
                      f"columns={r['over_constrained_columns']} violations={r['violations']}")
        else:
            print("\n✓ Every puzzle starts in a solvable-looking state")

    return results
