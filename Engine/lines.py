"""
Exact line algebra for grid points

Lines are stored as a reduced rise/run pair plus a rational y-intercept
split into whole + numerator/denominator. Everything is integer arithmetic,
so two point pairs give equal Line values exactly when they are collinear.

Sentinels:
  vertical   -> rise=1, run=0, intercept_whole = shared column
  horizontal -> rise=0, run=1, intercept_whole = shared row
"""
from math import gcd
from typing import List
from dataclasses import dataclass

from .grid import GridPosition


@dataclass(frozen=True)
class Line:
    """Infinite line through two grid points"""
    rise: int
    run: int
    intercept_whole: int
    intercept_num: int = 0
    intercept_denom: int = 1

    def is_vertical(self) -> bool:
        return self.rise == 1 and self.run == 0

    def is_horizontal(self) -> bool:
        return self.rise == 0 and self.run == 1

    def as_dict(self) -> dict:
        return {
            'rise': self.rise,
            'run': self.run,
            'intercept_whole': self.intercept_whole,
            'intercept_num': self.intercept_num,
            'intercept_denom': self.intercept_denom,
        }

    def __repr__(self):
        if self.is_vertical():
            return f"Line(col={self.intercept_whole})"
        if self.is_horizontal():
            return f"Line(row={self.intercept_whole})"
        return (f"Line(slope={self.rise}/{self.run}, "
                f"b={self.intercept_whole}+{self.intercept_num}/{self.intercept_denom})")


def line_through(p1: GridPosition, p2: GridPosition) -> Line:
    """
    Line through two distinct grid points.

    Callers must only pass distinct points; equal points are never
    produced by the pair loops in this package.
    """
    delta_row = p2.row - p1.row
    delta_col = p2.col - p1.col

    if delta_col == 0:
        return Line(rise=1, run=0, intercept_whole=p1.col)

    if delta_row == 0:
        return Line(rise=0, run=1, intercept_whole=p1.row)

    g = gcd(abs(delta_row), abs(delta_col))
    rise = delta_row // g
    run = delta_col // g

    # Direction normalization: run > 0 (or run == 0 and rise > 0)
    if run < 0 or (run == 0 and rise < 0):
        rise, run = -rise, -run

    # b = (row*run - rise*col) / run
    numerator = p1.row * run - rise * p1.col
    whole = numerator // run   # floor
    frac = numerator % run     # 0 <= frac < run

    return Line(
        rise=rise,
        run=run,
        intercept_whole=whole,
        intercept_num=frac,
        intercept_denom=run,
    )


def point_on_line(pos: GridPosition, line: Line) -> bool:
    """Exact point-on-line test (no division)"""
    if line.is_vertical():
        return pos.col == line.intercept_whole
    if line.is_horizontal():
        return pos.row == line.intercept_whole

    rise, run = line.rise, line.run
    denom = line.intercept_denom
    left = pos.row * run * denom
    right = (rise * pos.col * denom
             + line.intercept_whole * run * denom
             + line.intercept_num * run)
    return left == right


def positions_on_line(line: Line, size: int) -> List[GridPosition]:
    """All in-grid positions on the line, row-major"""
    if line.is_vertical():
        col = line.intercept_whole
        if 0 <= col < size:
            return [GridPosition(row, col) for row in range(size)]
        return []

    if line.is_horizontal():
        row = line.intercept_whole
        if 0 <= row < size:
            return [GridPosition(row, col) for col in range(size)]
        return []

    # General case: scan the whole grid
    positions = []
    for row in range(size):
        for col in range(size):
            pos = GridPosition(row, col)
            if point_on_line(pos, line):
                positions.append(pos)
    return positions
