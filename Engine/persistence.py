"""
JSON persistence for game sessions and player progress

Sets are written as sorted key lists so saved files are stable.
"""
import json
import os
import time
from typing import Dict, List, Optional

from .grid import GridPosition, keys_from_positions
from .puzzle import DeadEndMarker, NeighborsPuzzle


PROGRESS_VERSION = "1.0.0"


def _position_dict(pos: GridPosition) -> Dict:
    return {'row': pos.row, 'col': pos.col}


def _position_from_dict(data: Dict) -> GridPosition:
    try:
        return GridPosition(int(data['row']), int(data['col']))
    except (KeyError, TypeError) as e:
        raise ValueError(f"[persistence] Malformed position: {data!r}") from e


def serialize_game_state(puzzle: NeighborsPuzzle) -> Dict:
    """Player-side state of a session as plain JSON data"""
    return {
        'size': puzzle.size,
        'neighbors': keys_from_positions(puzzle.player_placed),
        'dead_end_data': [
            {
                'position': _position_dict(m.position),
                'dependency_chain': sorted(m.dependency_chain),
            }
            for m in puzzle.dead_end_data
        ],
        'move_history': [_position_dict(p) for p in puzzle.move_history],
    }


def deserialize_game_state(data: Dict) -> Dict:
    """Inverse of serialize_game_state (returns sets / lists of positions)"""
    try:
        return {
            'size': int(data['size']),
            'neighbors': {GridPosition.from_key(k) for k in data['neighbors']},
            'dead_end_data': [
                DeadEndMarker(
                    position=_position_from_dict(m['position']),
                    dependency_chain=frozenset(m['dependency_chain']),
                )
                for m in data.get('dead_end_data', [])
            ],
            'move_history': [_position_from_dict(p) for p in data.get('move_history', [])],
        }
    except (KeyError, TypeError) as e:
        raise ValueError(f"[persistence] Malformed game state: {e}") from e


def apply_game_state(puzzle: NeighborsPuzzle, data: Dict) -> None:
    """Load a serialized game state into an existing session"""
    state = deserialize_game_state(data)
    if state['size'] != puzzle.size:
        raise ValueError(f"[persistence] Saved size {state['size']} does not match puzzle size {puzzle.size}")
    puzzle.restore(state['neighbors'], state['move_history'], state['dead_end_data'])


class ProgressStore:
    """Player progress kept in a single JSON file"""

    def __init__(self, path: str):
        self.path = path
        self.data = self._empty_progress()

    @staticmethod
    def _empty_progress() -> Dict:
        now = int(time.time() * 1000)
        return {
            'version': PROGRESS_VERSION,
            'levels': {},
            'metadata': {
                'total_puzzles_solved': 0,
                'last_played_puzzle_id': None,
                'created_timestamp': now,
                'last_modified': now,
            },
        }

    # ---------- file I/O ----------

    def load(self) -> Dict:
        """Load progress from disk; a missing file gives fresh progress"""
        if not os.path.exists(self.path):
            self.data = self._empty_progress()
            return self.data

        with open(self.path, 'r') as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError("[persistence] Progress file must hold a JSON object")
        if data.get('version') != PROGRESS_VERSION:
            raise ValueError(f"[persistence] Unsupported progress version: {data.get('version')!r}")

        if not isinstance(data.get('levels'), dict) or not isinstance(data.get('metadata'), dict):
            raise ValueError("[persistence] Progress file needs 'levels' and 'metadata' objects")

        self.data = data
        return self.data

    def save(self) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self.data['metadata']['last_modified'] = int(time.time() * 1000)
        with open(self.path, 'w') as f:
            json.dump(self.data, f, indent=2)

    # ---------- levels ----------

    def _level(self, puzzle_id: str, puzzle_number: int) -> Dict:
        levels = self.data['levels']
        if puzzle_id not in levels:
            levels[puzzle_id] = {
                'puzzle_id': puzzle_id,
                'puzzle_number': puzzle_number,
                'win_status': {'has_won': False},
                'stats': {},
                'last_modified': int(time.time() * 1000),
            }
        return levels[puzzle_id]

    def get_level(self, puzzle_id: str) -> Optional[Dict]:
        return self.data['levels'].get(puzzle_id)

    def save_game_state(self, puzzle: NeighborsPuzzle) -> None:
        level = self._level(puzzle.config.id, puzzle.config.puzzle_number)
        level['game_state'] = serialize_game_state(puzzle)
        level['last_modified'] = int(time.time() * 1000)
        self.data['metadata']['last_played_puzzle_id'] = puzzle.config.id
        self.save()

    def load_game_state(self, puzzle: NeighborsPuzzle) -> bool:
        """Restore the saved game for this puzzle; False if none is stored"""
        level = self.get_level(puzzle.config.id)
        if not level or not level.get('game_state'):
            return False
        apply_game_state(puzzle, level['game_state'])
        return True

    def clear_game_state(self, puzzle_id: str) -> None:
        level = self.get_level(puzzle_id)
        if level and 'game_state' in level:
            del level['game_state']
            self.save()

    def record_win(self, puzzle: NeighborsPuzzle) -> None:
        """Store the winning placement; the first win is kept"""
        if not puzzle.is_complete():
            raise RuntimeError(f"[persistence] Puzzle {puzzle.config.id} is not complete")

        level = self._level(puzzle.config.id, puzzle.config.puzzle_number)
        if not level['win_status'].get('has_won'):
            level['win_status'] = {
                'has_won': True,
                'winning_solution': [_position_dict(p) for p in sorted(puzzle.occupied)],
                'completion_timestamp': int(time.time() * 1000),
            }
            self.data['metadata']['total_puzzles_solved'] += 1

        level['stats']['num_dead_ends'] = len(puzzle.dead_end_data)
        placements = len(puzzle.player_placed)
        best = level['stats'].get('best_num_placements')
        if best is None or placements < best:
            level['stats']['best_num_placements'] = placements
        self.save()

    def solved_puzzle_ids(self) -> List[str]:
        return sorted(pid for pid, lvl in self.data['levels'].items()
                      if lvl['win_status'].get('has_won'))
