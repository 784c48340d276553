"""
Puzzle catalog: compressed puzzle strings and their parser

Format of one entry:  {puzzle_number}{symmetry_symbol}{col0};{col1};...
  - the number of ';'-separated column fields is the grid size
  - each column field lists the rows of its pre-placed markers,
    one character per marker: '0'-'9', then 'A'=10, 'B'=11, ...
  - the symmetry class is opaque metadata for the engine
"""
from typing import Dict, Iterator, List, Optional
from dataclasses import dataclass, field

from .grid import GridPosition


COMPRESSED_PUZZLES = [
    '1*;',
    '2x;;2',
    '3-;1;1;',
    '4x2;;01;',
    '5:01;;;',
    '6*;03;;2',
    '7.0;;;0;',
    '8/0;;;3;',
    '9/0;0;;;4',
    '10.01;;;;3',
    '11.1;;3;;3',
    '12x0;;;;;5',
    '13.;4;;;45;',
    '14.0;;;1;3;',
    '15.0;;1;2;;',
    '16.;;24;;;',
    '17o;;;5;03;',
    '18o;5;;;2;',
    '19x;;;3;5;4',
    '20o;;;;03;3',
    '21:;24;;0;;',
    '22:;;2;5;0;',
    '23.03;;;;;6;',
    '24:0;;6;;;;6',
    '25.;2;;;3;6;',
    '26.0;;;;;4;5',
    '27.0;;;1;;1;',
    '28/0;;2;;;;',
    '29:2;;1;;;2;',
    '30:;2;2;;4;;',
    '31.4;;4;;;2;',
    '32:;;;;36;5;5',
    '33:;;;;0;5;5',
    '34.1;;6;;5;;',
    '35:;;01;0;;;5',
    '36:4;5;;;;1;5',
    '37:1;;;5;;6;',
    '38.1;1;;4;;;',
    '39:;;;5;;4;5',
    '40:;;2;;;2;',
    '41.1;;;14;;;',
    '42.12;;6;;;;',
    '43.;;4;1;3;;',
    '44.;15;36;;;;',
    '45/0;;;;;2;0;',
    '46.0;;;1;;6;;',
    '47.0;;1;;;;2;1',
    '48.0;;;;35;;;',
    '49.0;;;;6;;;6',
    '50.0;6;6;;;;;2',
    '51.;6;5;;;;5;',
    '52.;;35;5;;;;',
    '53.0;;;4;;;;6',
    '54.;2;;;5;;;0',
    '55.;3;;;;1;;1',
    '56:0;3;3;;;6;;',
    '57.;;1;;;4;;0',
    '58.0;;1;;;;;14',
    '59/0;;;4;3;;;',
    '60.0;7;;;;;2;',
    '61.0;;1;;;;0;',
    '62/;;2;7;4;;;3',
    '63/5;;;3;;03;;',
    '64.1;;;4;;;;5',
    '65.1;;6;;2;6;;',
    '66.;0;6;;;0;;',
    '67.1;2;;;3;;;',
    '68.1;;1;;5;;;',
    '69.;6;7;;;;27;',
    '70:14;;1;;;;;6',
    '71.1;;;03;;;;',
    '72.4;;37;;;;;',
    '73.1;;;;5;;;2',
    '74.1;0;;;;;5;',
    '75.;;4;;;;;45',
    '76/1;05;;;;1;;',
    '77.;6;;;4;;2;',
    '78.1;16;;;;;;5',
    '79.1;14;;7;;;;',
    '80.1;;;;1;;;4',
    '81:;2;;;2;;5;6',
    '82.1;2;;;;;1;',
    '83.1;;6;;;1;;2',
    '84.1;;;;2;;1;2',
    '85.1;;3;;2;1;;',
    '86:1;6;;;;;1;6',
    '87.1;;1;;;5;;2',
    '88.;4;13;;;;;6',
    '89.1;;;1;2;;;2',
    '90-;;24;;;4;;',
    '91.1;;1;;;7;4;',
    '92:;;;;;3;;56',
    '93.;;;;3;4;;',
    '94.12;;;;;;;3',
    '95.;;;3;;4;;6',
    '96:;1;;;;3;6;',
    '97:2;1;;;5;6;;5',
    '98o;23;;;;1;;3',
    '99o;;17;;17;;;5',
    '100o;;1;1;;;;5',
]

# Symbol -> symmetry class of the puzzle's solutions
SYMMETRY_CLASS_MAP: Dict[str, str] = {
    '.': 'iden',   # asymmetric
    '/': 'dia1',   # exactly one diagonal reflection
    '-': 'ort1',   # exactly one orthogonal reflection
    ':': 'rot2',   # half rotation only
    'x': 'dia2',   # both diagonal reflections
    'c': 'near',   # quarter rotation except long diagonals (reserved, unused by the catalog)
    'o': 'rot4',   # quarter rotation
    '+': 'ort2',   # both orthogonal reflections
    '*': 'full',   # all 8 symmetries
}

SYMMETRY_SYMBOLS = './-:xco+*'


@dataclass
class PuzzleConfig:
    """A catalog puzzle: size plus its pre-placed markers"""
    id: str
    puzzle_number: int
    size: int
    symmetry_class: str
    pre_placed: List[GridPosition] = field(default_factory=list)

    def __repr__(self):
        return (f"PuzzleConfig(id={self.id}, size={self.size}, "
                f"symmetry={self.symmetry_class}, pre_placed={len(self.pre_placed)})")


def _row_from_char(char: str) -> int:
    if '0' <= char <= '9':
        return int(char)
    if 'A' <= char <= 'Z':
        return ord(char) - ord('A') + 10
    raise ValueError(f"Invalid character in compressed puzzle: {char!r}")


def parse_compressed_puzzle(compressed: str) -> PuzzleConfig:
    """Parse one compressed catalog entry"""
    symmetry_index = -1
    for i, char in enumerate(compressed):
        if char in SYMMETRY_SYMBOLS:
            symmetry_index = i
            break

    if symmetry_index <= 0:
        raise ValueError(f"Invalid compressed puzzle format: {compressed!r}")

    number_text = compressed[:symmetry_index]
    if not number_text.isdigit():
        raise ValueError(f"Invalid puzzle number in compressed puzzle: {compressed!r}")

    puzzle_number = int(number_text)
    symbol = compressed[symmetry_index]
    columns = compressed[symmetry_index + 1:].split(';')
    size = len(columns)

    pre_placed: List[GridPosition] = []
    for col, column_text in enumerate(columns):
        for char in column_text:
            row = _row_from_char(char)
            if row >= size:
                raise ValueError(f"Row {row} outside {size}x{size} grid in {compressed!r}")
            pre_placed.append(GridPosition(row, col))

    return PuzzleConfig(
        id=f"puzzle-{puzzle_number:03d}",
        puzzle_number=puzzle_number,
        size=size,
        symmetry_class=SYMMETRY_CLASS_MAP[symbol],
        pre_placed=pre_placed,
    )


def get_puzzle_count() -> int:
    return len(COMPRESSED_PUZZLES)


def get_puzzle_by_index(index: int) -> Optional[PuzzleConfig]:
    if index < 0 or index >= len(COMPRESSED_PUZZLES):
        return None
    return parse_compressed_puzzle(COMPRESSED_PUZZLES[index])


def get_default_puzzle() -> PuzzleConfig:
    return parse_compressed_puzzle(COMPRESSED_PUZZLES[0])


def get_puzzle_index(puzzle_id: str) -> int:
    """Catalog index of a puzzle id, or -1"""
    for index, compressed in enumerate(COMPRESSED_PUZZLES):
        if parse_compressed_puzzle(compressed).id == puzzle_id:
            return index
    return -1


def get_puzzle_by_id(puzzle_id: str) -> Optional[PuzzleConfig]:
    index = get_puzzle_index(puzzle_id)
    if index == -1:
        return None
    return get_puzzle_by_index(index)


def iter_puzzles() -> Iterator[PuzzleConfig]:
    for compressed in COMPRESSED_PUZZLES:
        yield parse_compressed_puzzle(compressed)
