"""
Core grid types for the no-three-in-line engine
"""
from typing import Iterable, List, Set
from dataclasses import dataclass


# Markers required in every row and every column of a solved grid
REQUIRED_PER_LINE = 2


@dataclass(frozen=True, order=True)
class GridPosition:
    """A single cell on the n x n grid (row-major ordering)"""
    row: int
    col: int

    def key(self) -> str:
        """Canonical set key, e.g. '3,1'"""
        return f"{self.row},{self.col}"

    def index(self, size: int) -> int:
        """Packed integer key row*size+col"""
        return self.row * size + self.col

    @classmethod
    def from_key(cls, key: str) -> "GridPosition":
        row, col = key.split(',')
        return cls(int(row), int(col))

    def __repr__(self):
        return f"({self.row},{self.col})"


def position_to_key(pos: GridPosition) -> str:
    return pos.key()


def key_to_position(key: str) -> GridPosition:
    return GridPosition.from_key(key)


def positions_from_keys(keys: Iterable[str]) -> Set[GridPosition]:
    """Convert an iterable of 'row,col' keys into a set of positions"""
    return {GridPosition.from_key(k) for k in keys}


def keys_from_positions(positions: Iterable[GridPosition]) -> List[str]:
    """Sorted list of keys (row-major), used for JSON output"""
    return [p.key() for p in sorted(positions)]
