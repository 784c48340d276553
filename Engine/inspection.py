"""
Inspection: which marker pairs (and along which lines) explain a cell's status
"""
from typing import List, Set, Tuple
from dataclasses import dataclass, field

from .grid import GridPosition
from .lines import Line, line_through, point_on_line, positions_on_line


@dataclass
class ConstraintRelationship:
    """Two occupied cells, the line through them, and the empty cells it forbids"""
    position_pair: Tuple[GridPosition, GridPosition]
    line: Line
    dependent_empty_cells: List[GridPosition] = field(default_factory=list)


@dataclass
class InspectionData:
    """Relationships between one occupied cell and every other occupied cell"""
    target: GridPosition
    relationships: List[ConstraintRelationship] = field(default_factory=list)


@dataclass
class ForbiddenSquareInfo:
    """Every occupied pair whose line passes through the inspected cell"""
    position: GridPosition
    caused_by: List[ConstraintRelationship] = field(default_factory=list)


class InspectionResolver:
    """Rebuilds constraint relationships on demand for one grid size."""

    def __init__(self, size: int):
        self.size = size

    def _empty_cells_on(self, line: Line, occupied: Set[GridPosition]) -> List[GridPosition]:
        return [p for p in positions_on_line(line, self.size) if p not in occupied]

    def inspect_occupied(self, target: GridPosition, occupied: Set[GridPosition]) -> InspectionData:
        """
        One relationship per other occupied cell, including pairs whose line
        has no empty cell left on the grid.
        """
        data = InspectionData(target=target)
        for other in sorted(occupied):
            if other == target:
                continue
            line = line_through(target, other)
            data.relationships.append(ConstraintRelationship(
                position_pair=(target, other),
                line=line,
                dependent_empty_cells=self._empty_cells_on(line, occupied),
            ))
        return data

    def inspect_forbidden(self, target: GridPosition, occupied: Set[GridPosition]) -> ForbiddenSquareInfo:
        """Relationships for every unordered occupied pair whose line hits target"""
        info = ForbiddenSquareInfo(position=target)
        ordered = sorted(occupied)
        for i, p1 in enumerate(ordered):
            for p2 in ordered[i + 1:]:
                line = line_through(p1, p2)
                if not point_on_line(target, line):
                    continue
                info.caused_by.append(ConstraintRelationship(
                    position_pair=(p1, p2),
                    line=line,
                    dependent_empty_cells=self._empty_cells_on(line, occupied),
                ))
        return info
