"""
Row/column constraint analysis and forced-move detection

Key points:
 - Exactly REQUIRED_PER_LINE (2) markers per row and per column
 - A row/column is over-constrained when placed + available < 2
 - Forced moves come from rows/columns sitting exactly at the feasibility boundary

This is a necessary (not sufficient) check: it flags some dead states early
without doing any search.
"""

from typing import List, Set, Tuple
from dataclasses import dataclass, field

import numpy as np

from .grid import GridPosition, REQUIRED_PER_LINE


@dataclass
class RowColumnConstraint:
    """Capacity counts for a single row or column"""
    kind: str  # 'row' or 'column'
    index: int
    placed_count: int
    available_count: int
    is_over_constrained: bool

    def as_dict(self) -> dict:
        return {
            'kind': self.kind,
            'index': self.index,
            'placed_count': self.placed_count,
            'available_count': self.available_count,
            'is_over_constrained': self.is_over_constrained,
        }


@dataclass
class ConstraintAnalysis:
    """Aggregate result of one analysis pass"""
    over_constrained_rows: List[int] = field(default_factory=list)
    over_constrained_columns: List[int] = field(default_factory=list)
    constraints: List[RowColumnConstraint] = field(default_factory=list)
    has_unsolvable_state: bool = False

    def get(self, kind: str, index: int) -> RowColumnConstraint:
        """Look up the record for one row or column"""
        for c in self.constraints:
            if c.kind == kind and c.index == index:
                return c
        raise KeyError(f"No {kind} constraint with index {index}")

    def __repr__(self):
        return (f"ConstraintAnalysis(rows={self.over_constrained_rows}, "
                f"columns={self.over_constrained_columns}, "
                f"unsolvable={self.has_unsolvable_state})")


# -----------------------------------------------------------------------------
# Constraint Checking
# -----------------------------------------------------------------------------
class ConstraintChecker:
    """Computes per-row / per-column capacity counts."""

    # ---------- small helpers ----------

    @staticmethod
    def masks(size: int, occupied: Set[GridPosition], forbidden: Set[GridPosition]) -> Tuple[np.ndarray, np.ndarray]:
        """
        Boolean (size, size) masks:
          placed    -> occupied cells
          available -> cells neither occupied nor forbidden
        """
        placed = np.zeros(size * size, dtype=bool)
        blocked = np.zeros(size * size, dtype=bool)
        placed[np.array([p.index(size) for p in occupied], dtype=np.intp)] = True
        blocked[np.array([p.index(size) for p in forbidden], dtype=np.intp)] = True
        placed = placed.reshape(size, size)
        available = ~(placed | blocked.reshape(size, size))
        return placed, available

    @staticmethod
    def line_counts(size: int, occupied: Set[GridPosition], forbidden: Set[GridPosition]) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """(row_placed, row_available, col_placed, col_available) count vectors"""
        placed, available = ConstraintChecker.masks(size, occupied, forbidden)
        return (
            placed.sum(axis=1),
            available.sum(axis=1),
            placed.sum(axis=0),
            available.sum(axis=0),
        )

    @staticmethod
    def _is_over_constrained(placed_count: int, available_count: int) -> bool:
        return placed_count + available_count < REQUIRED_PER_LINE

    # ---------- main API ----------

    @staticmethod
    def analyze(size: int, occupied: Set[GridPosition], forbidden: Set[GridPosition]) -> ConstraintAnalysis:
        """
        Build a RowColumnConstraint for every row (ascending) and then every
        column (ascending), and collect the over-constrained indices.
        """
        row_placed, row_avail, col_placed, col_avail = ConstraintChecker.line_counts(
            size, occupied, forbidden
        )

        analysis = ConstraintAnalysis()

        for kind, placed_counts, avail_counts, bucket in (
            ('row', row_placed, row_avail, analysis.over_constrained_rows),
            ('column', col_placed, col_avail, analysis.over_constrained_columns),
        ):
            for index in range(size):
                placed_count = int(placed_counts[index])
                available_count = int(avail_counts[index])
                over = ConstraintChecker._is_over_constrained(placed_count, available_count)
                analysis.constraints.append(RowColumnConstraint(
                    kind=kind,
                    index=index,
                    placed_count=placed_count,
                    available_count=available_count,
                    is_over_constrained=over,
                ))
                if over:
                    bucket.append(index)

        analysis.has_unsolvable_state = bool(
            analysis.over_constrained_rows or analysis.over_constrained_columns
        )
        return analysis


# -----------------------------------------------------------------------------
# Heuristic Detection
# -----------------------------------------------------------------------------
class HeuristicDetector:
    """Detects forced moves from row/column capacity counts."""

    @staticmethod
    def _forced_in_line(placed_count: int, available: List[GridPosition]) -> List[GridPosition]:
        """
        Cells forced within one row/column:
          placed 1, available 1 -> the sole available cell
          placed 0, available 2 -> both available cells
        """
        if placed_count == REQUIRED_PER_LINE - 1 and len(available) == 1:
            return available
        if placed_count == 0 and len(available) == REQUIRED_PER_LINE:
            return available
        return []

    @staticmethod
    def detect_forced_moves(size: int, occupied: Set[GridPosition], forbidden: Set[GridPosition]) -> List[GridPosition]:
        """
        Find cells that must be filled. Rows are swept before columns, both in
        ascending index order; a cell forced by both its row and its column is
        reported once, at its first discovery.
        """
        placed, available = ConstraintChecker.masks(size, occupied, forbidden)

        forced: List[GridPosition] = []
        seen: Set[GridPosition] = set()

        def collect(candidates: List[GridPosition]):
            for pos in candidates:
                if pos not in seen:
                    seen.add(pos)
                    forced.append(pos)

        for row in range(size):
            avail = [GridPosition(row, int(c)) for c in np.flatnonzero(available[row, :])]
            collect(HeuristicDetector._forced_in_line(int(placed[row, :].sum()), avail))

        for col in range(size):
            avail = [GridPosition(int(r), col) for r in np.flatnonzero(available[:, col])]
            collect(HeuristicDetector._forced_in_line(int(placed[:, col].sum()), avail))

        return forced
