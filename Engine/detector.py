"""
LineDetector: the engine handle bound to one grid size

Every call recomputes from the occupied set it is given. The only state is
`size`, so one instance can be shared freely.

Positions are assumed to lie inside [0, size)^2; this is not checked.
"""

from typing import Dict, List, Set
from dataclasses import dataclass, field

from .grid import GridPosition, REQUIRED_PER_LINE
from .lines import Line, line_through, positions_on_line
from .constraints import ConstraintAnalysis, ConstraintChecker, HeuristicDetector
from .inspection import ForbiddenSquareInfo, InspectionData, InspectionResolver


@dataclass
class LineViolation:
    """A line carrying three or more markers"""
    line: Line
    markers: List[GridPosition] = field(default_factory=list)


class LineDetector:
    def __init__(self, size: int):
        if size <= 0:
            raise ValueError(f"Grid size must be positive, got {size}")
        self.size = size
        self._resolver = InspectionResolver(size)

    # -------------------------------------------------------------------------
    # Forbidden squares
    # -------------------------------------------------------------------------
    def calculate_forbidden_squares(self, occupied: Set[GridPosition]) -> Set[GridPosition]:
        """
        Empty cells lying on a line through any two occupied cells.
        Fewer than two markers define no line, so the result is empty.
        """
        if len(occupied) < 2:
            return set()

        ordered = sorted(occupied)
        forbidden: Set[GridPosition] = set()
        seen_lines: Set[Line] = set()

        for i, p1 in enumerate(ordered):
            for p2 in ordered[i + 1:]:
                line = line_through(p1, p2)
                # Same line from another pair adds nothing new
                if line in seen_lines:
                    continue
                seen_lines.add(line)
                for pos in positions_on_line(line, self.size):
                    if pos not in occupied:
                        forbidden.add(pos)

        return forbidden

    # -------------------------------------------------------------------------
    # Row / column capacity
    # -------------------------------------------------------------------------
    def detect_forced_moves(self, occupied: Set[GridPosition], forbidden: Set[GridPosition]) -> List[GridPosition]:
        return HeuristicDetector.detect_forced_moves(self.size, occupied, forbidden)

    def analyze_row_column_constraints(self, occupied: Set[GridPosition], forbidden: Set[GridPosition]) -> ConstraintAnalysis:
        return ConstraintChecker.analyze(self.size, occupied, forbidden)

    # -------------------------------------------------------------------------
    # Inspection
    # -------------------------------------------------------------------------
    def get_inspection_data(self, target: GridPosition, occupied: Set[GridPosition]) -> InspectionData:
        return self._resolver.inspect_occupied(target, occupied)

    def get_forbidden_square_info(self, target: GridPosition, occupied: Set[GridPosition]) -> ForbiddenSquareInfo:
        return self._resolver.inspect_forbidden(target, occupied)

    # -------------------------------------------------------------------------
    # Violations / completion
    # -------------------------------------------------------------------------
    def find_violations(self, occupied: Set[GridPosition]) -> List[LineViolation]:
        """Lines that already hold three or more markers (one entry per line)"""
        ordered = sorted(occupied)
        by_line: Dict[Line, Set[GridPosition]] = {}

        for i, p1 in enumerate(ordered):
            for p2 in ordered[i + 1:]:
                line = line_through(p1, p2)
                by_line.setdefault(line, set()).update((p1, p2))

        return [
            LineViolation(line=line, markers=sorted(markers))
            for line, markers in by_line.items()
            if len(markers) > 2
        ]

    def is_complete(self, occupied: Set[GridPosition]) -> bool:
        """Exactly two markers in every row and column, and no three collinear"""
        if len(occupied) != REQUIRED_PER_LINE * self.size:
            return False
        row_placed, _, col_placed, _ = ConstraintChecker.line_counts(self.size, occupied, set())
        if any(int(n) != REQUIRED_PER_LINE for n in row_placed):
            return False
        if any(int(n) != REQUIRED_PER_LINE for n in col_placed):
            return False
        return not self.find_violations(occupied)

    def __repr__(self):
        return f"LineDetector(size={self.size})"
