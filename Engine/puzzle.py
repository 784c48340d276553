"""
Game session for a no-three-in-line puzzle

Holds pre-placed + player-placed markers and recomputes the full analysis
(forbidden -> forced -> row/column constraints) after every mutation.
"""
from typing import List, Set, FrozenSet, Optional
from dataclasses import dataclass, field

from .grid import GridPosition, REQUIRED_PER_LINE
from .catalog import PuzzleConfig
from .detector import LineDetector, LineViolation
from .constraints import ConstraintAnalysis
from .inspection import InspectionData, ForbiddenSquareInfo


@dataclass
class SessionConfig:
    verbose: bool = False
    # Record a dead-end marker whenever a placement leaves the grid unsolvable
    track_dead_ends: bool = True
    # Keep the move history used by undo()
    record_history: bool = True


@dataclass
class DeadEndMarker:
    """A placement that led to an unsolvable state, with the markers it depended on"""
    position: GridPosition
    dependency_chain: FrozenSet[str] = field(default_factory=frozenset)  # position keys, order-free

    def is_active(self, placed_keys: Set[str]) -> bool:
        """Active while the position is empty and all its other dependencies are placed"""
        key = self.position.key()
        if key in placed_keys:
            return False
        return (self.dependency_chain - {key}) <= placed_keys


@dataclass
class ConstraintWarning:
    over_constrained_rows: List[int] = field(default_factory=list)
    over_constrained_columns: List[int] = field(default_factory=list)


class NeighborsPuzzle:
    """Main session class: one puzzle, one grid, one engine"""

    def __init__(self, config: PuzzleConfig, session_config: Optional[SessionConfig] = None):
        self.config = config
        self.session_config = session_config or SessionConfig()
        self.size = config.size
        self.detector = LineDetector(config.size)

        self.pre_placed: Set[GridPosition] = set(config.pre_placed)
        self.player_placed: Set[GridPosition] = set()
        self.move_history: List[GridPosition] = []
        self.dead_end_data: List[DeadEndMarker] = []

        # Derived state (recomputed)
        self.forbidden_squares: Set[GridPosition] = set()
        self.forced_moves: List[GridPosition] = []
        self.analysis: ConstraintAnalysis = ConstraintAnalysis()
        self.constraint_warning: Optional[ConstraintWarning] = None

        if self.session_config.verbose:
            print(f"Loaded {self.config}")

        self._recompute()

    # -------------------------------------------------------------------------
    # State queries
    # -------------------------------------------------------------------------
    @property
    def occupied(self) -> Set[GridPosition]:
        """Pre-placed and player-placed markers merged"""
        return self.pre_placed | self.player_placed

    def is_complete(self) -> bool:
        return self.detector.is_complete(self.occupied)

    def find_violations(self) -> List[LineViolation]:
        return self.detector.find_violations(self.occupied)

    def get_completion_percentage(self) -> float:
        """Share of the 2*size required markers currently on the grid"""
        required = REQUIRED_PER_LINE * self.size
        return min(len(self.occupied), required) / required

    @property
    def dead_ends(self) -> List[DeadEndMarker]:
        """Dead-end markers that apply to the current placement"""
        keys = {p.key() for p in self.player_placed}
        return [m for m in self.dead_end_data if m.is_active(keys)]

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------
    def _in_grid(self, pos: GridPosition) -> bool:
        return 0 <= pos.row < self.size and 0 <= pos.col < self.size

    def place(self, pos: GridPosition) -> None:
        if not self._in_grid(pos):
            raise ValueError(f"Position {pos} outside {self.size}x{self.size} grid")
        if pos in self.occupied:
            raise RuntimeError(f"[puzzle] Cell {pos} already holds a marker")

        self.player_placed.add(pos)
        if self.session_config.record_history:
            self.move_history.append(pos)

        if self.session_config.verbose:
            print(f"Placed marker at {pos}")

        self._recompute()

        if self.analysis.has_unsolvable_state and self.session_config.track_dead_ends:
            self._record_dead_end(pos)

    def remove(self, pos: GridPosition) -> None:
        if pos in self.pre_placed:
            raise RuntimeError(f"[puzzle] Cannot remove pre-placed marker at {pos}")
        if pos not in self.player_placed:
            raise RuntimeError(f"[puzzle] No player marker at {pos}")

        self.player_placed.discard(pos)
        if pos in self.move_history:
            # Drop the latest placement of this cell only
            last = len(self.move_history) - 1 - self.move_history[::-1].index(pos)
            del self.move_history[last]

        if self.session_config.verbose:
            print(f"Removed marker at {pos}")

        self._recompute()

    def toggle(self, pos: GridPosition) -> bool:
        """Place on an empty cell, remove a player marker. Returns True if placed."""
        if pos in self.player_placed:
            self.remove(pos)
            return False
        self.place(pos)
        return True

    def undo(self) -> Optional[GridPosition]:
        """Remove the most recent player placement"""
        if not self.move_history:
            return None
        pos = self.move_history[-1]
        self.remove(pos)
        return pos

    def clear(self) -> None:
        """Remove every player marker (pre-placed markers stay)"""
        self.player_placed.clear()
        self.move_history.clear()
        self._recompute()

    def restore(self, player_placed: Set[GridPosition], move_history: List[GridPosition],
                dead_end_data: List[DeadEndMarker]) -> None:
        """Replace the player part of the state (used when loading a saved game)"""
        positions = list(player_placed) + list(move_history) + [m.position for m in dead_end_data]
        outside = sorted({p for p in positions if not self._in_grid(p)})
        if outside:
            raise ValueError(f"Saved positions outside {self.size}x{self.size} grid: {outside}")

        overlap = player_placed & self.pre_placed
        if overlap:
            raise ValueError(f"Saved markers overlap pre-placed markers: {sorted(overlap)}")

        # undo() removes the marker for each history entry
        unplaced = sorted({p for p in move_history if p not in player_placed})
        if unplaced:
            raise ValueError(f"Saved move history has unplaced cells: {unplaced}")

        self.player_placed = set(player_placed)
        self.move_history = list(move_history)
        self.dead_end_data = list(dead_end_data)
        self._recompute()

    # -------------------------------------------------------------------------
    # Inspection
    # -------------------------------------------------------------------------
    def inspect(self, pos: GridPosition) -> InspectionData:
        return self.detector.get_inspection_data(pos, self.occupied)

    def explain_forbidden(self, pos: GridPosition) -> ForbiddenSquareInfo:
        return self.detector.get_forbidden_square_info(pos, self.occupied)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------
    def _recompute(self) -> None:
        """Full recomputation: forbidden squares -> forced moves -> row/column analysis"""
        occupied = self.occupied
        self.forbidden_squares = self.detector.calculate_forbidden_squares(occupied)
        self.forced_moves = self.detector.detect_forced_moves(occupied, self.forbidden_squares)
        self.analysis = self.detector.analyze_row_column_constraints(occupied, self.forbidden_squares)

        if self.analysis.has_unsolvable_state:
            self.constraint_warning = ConstraintWarning(
                over_constrained_rows=list(self.analysis.over_constrained_rows),
                over_constrained_columns=list(self.analysis.over_constrained_columns),
            )
            if self.session_config.verbose:
                print(f"  ✗ Unsolvable: rows={self.analysis.over_constrained_rows} "
                      f"columns={self.analysis.over_constrained_columns}")
        else:
            self.constraint_warning = None

        if self.session_config.verbose:
            print(f"  forbidden={len(self.forbidden_squares)} forced={len(self.forced_moves)}")

    def _record_dead_end(self, pos: GridPosition) -> None:
        chain = frozenset(p.key() for p in self.player_placed)
        for marker in self.dead_end_data:
            if marker.position == pos and marker.dependency_chain == chain:
                return
        self.dead_end_data.append(DeadEndMarker(position=pos, dependency_chain=chain))
        if self.session_config.verbose:
            print(f"  Recorded dead end at {pos} ({len(chain)} dependencies)")

    def __repr__(self):
        return (f"NeighborsPuzzle(id={self.config.id}, size={self.size}, "
                f"pre_placed={len(self.pre_placed)}, player_placed={len(self.player_placed)})")
