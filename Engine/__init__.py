"""
No-Three-In-Line Constraint Engine

Exact-arithmetic line detection, forced-move and row/column analysis for the
"two markers per row and column, never three in a line" puzzle.
"""

from .grid import GridPosition, REQUIRED_PER_LINE, position_to_key, key_to_position
from .lines import Line, line_through, point_on_line, positions_on_line
from .constraints import ConstraintChecker, HeuristicDetector, ConstraintAnalysis, RowColumnConstraint
from .inspection import ConstraintRelationship, InspectionData, ForbiddenSquareInfo, InspectionResolver
from .detector import LineDetector, LineViolation
from .catalog import PuzzleConfig, parse_compressed_puzzle, get_puzzle_by_id
from .puzzle import NeighborsPuzzle, SessionConfig, DeadEndMarker
from .output import AnalysisFormatter

__version__ = "1.0.0"
__all__ = [
    'GridPosition',
    'REQUIRED_PER_LINE',
    'position_to_key',
    'key_to_position',
    'Line',
    'line_through',
    'point_on_line',
    'positions_on_line',
    'ConstraintChecker',
    'HeuristicDetector',
    'ConstraintAnalysis',
    'RowColumnConstraint',
    'ConstraintRelationship',
    'InspectionData',
    'ForbiddenSquareInfo',
    'InspectionResolver',
    'LineDetector',
    'LineViolation',
    'PuzzleConfig',
    'parse_compressed_puzzle',
    'get_puzzle_by_id',
    'NeighborsPuzzle',
    'SessionConfig',
    'DeadEndMarker',
    'AnalysisFormatter'
]
