"""Static board geometry and the tile bag."""
from __future__ import annotations
import random
import uuid
from typing import Dict, Iterable, List, Optional, Tuple

from .schemas import PlacedTile, PremiumType, PublicCell, PublicTile, Tile

BOARD_SIZE = 15
CENTER = (7, 7)
RACK_SIZE = 7
BINGO_BONUS = 50
BLANK = '?'

# letter: (count, value); '?' is the blank
TILE_DISTRIBUTION: Dict[str, Tuple[int, int]] = {
    'A': (9, 1), 'B': (2, 3), 'C': (2, 3), 'D': (4, 2), 'E': (12, 1),
    'F': (2, 4), 'G': (3, 2), 'H': (2, 4), 'I': (9, 1), 'J': (1, 8),
    'K': (1, 5), 'L': (4, 1), 'M': (2, 3), 'N': (6, 1), 'O': (8, 1),
    'P': (2, 3), 'Q': (1, 10), 'R': (6, 1), 'S': (4, 1), 'T': (6, 1),
    'U': (4, 1), 'V': (2, 4), 'W': (2, 4), 'X': (1, 8), 'Y': (2, 4),
    'Z': (1, 10), BLANK: (2, 0),
}

TRIPLE_WORD = [(0, 0), (0, 7), (0, 14), (7, 0), (7, 14), (14, 0), (14, 7), (14, 14)]
DOUBLE_WORD = [
    (1, 1), (2, 2), (3, 3), (4, 4), (10, 10), (11, 11), (12, 12), (13, 13),
    (1, 13), (2, 12), (3, 11), (4, 10), (10, 4), (11, 3), (12, 2), (13, 1),
]
TRIPLE_LETTER = [
    (1, 5), (1, 9), (5, 1), (5, 5), (5, 9), (5, 13),
    (9, 1), (9, 5), (9, 9), (9, 13), (13, 5), (13, 9),
]
DOUBLE_LETTER = [
    (0, 3), (0, 11), (2, 6), (2, 8), (3, 0), (3, 7), (3, 14),
    (6, 2), (6, 6), (6, 8), (6, 12), (7, 3), (7, 11),
    (8, 2), (8, 6), (8, 8), (8, 12),
    (11, 0), (11, 7), (11, 14), (12, 6), (12, 8), (14, 3), (14, 11),
]

def _build_premium_map() -> Dict[Tuple[int, int], PremiumType]:
    premiums: Dict[Tuple[int, int], PremiumType] = {}
    for kind, cells in (('TW', TRIPLE_WORD), ('DW', DOUBLE_WORD), ('TL', TRIPLE_LETTER), ('DL', DOUBLE_LETTER)):
        for cell in cells:
            premiums[cell] = kind  # type: ignore[assignment]
    premiums[CENTER] = 'CENTER'
    return premiums

PREMIUM_MAP = _build_premium_map()

def premium_at(row: int, col: int) -> PremiumType:
    return PREMIUM_MAP.get((row, col), 'none')

def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

def letter_value(letter: str) -> int:
    entry = TILE_DISTRIBUTION.get(letter.upper())
    return entry[1] if entry else 0

class Board:
    """15x15 grid of committed tiles. Premium kinds come from PREMIUM_MAP."""

    def __init__(self):
        self.cells: List[List[Optional[Tile]]] = [[None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]

    def get(self, row: int, col: int) -> Optional[Tile]:
        if not in_bounds(row, col):
            return None
        return self.cells[row][col]

    def is_occupied(self, row: int, col: int) -> bool:
        return self.get(row, col) is not None

    def is_empty(self) -> bool:
        return all(cell is None for row in self.cells for cell in row)

    def place(self, tile: PlacedTile):
        self.cells[tile.row][tile.col] = tile.bare()

    def occupied(self) -> Iterable[Tuple[int, int]]:
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                if self.cells[r][c] is not None:
                    yield r, c

    def tile_count(self) -> int:
        return sum(1 for _ in self.occupied())

    def copy(self) -> 'Board':
        clone = Board()
        clone.cells = [list(row) for row in self.cells]
        return clone

    def to_public(self) -> List[List[PublicCell]]:
        rows = []
        for r in range(BOARD_SIZE):
            row = []
            for c in range(BOARD_SIZE):
                tile = self.cells[r][c]
                public = PublicTile(letter=tile.letter, value=tile.value) if tile else None
                row.append(PublicCell(tile=public, premium=premium_at(r, c)))
            rows.append(row)
        return rows

def _tile_id() -> str:
    return f"tile_{uuid.uuid4().hex[:12]}"

def create_tile_bag(rng: Optional[random.Random] = None) -> List[Tile]:
    """Full 100 tile set, shuffled. Blanks carry an empty letter."""
    rng = rng or random.Random()
    tiles: List[Tile] = []
    for letter, (count, value) in TILE_DISTRIBUTION.items():
        is_blank = letter == BLANK
        for _ in range(count):
            tiles.append(Tile(id=_tile_id(), letter='' if is_blank else letter, value=value, isBlank=is_blank))
    rng.shuffle(tiles)
    return tiles

class TileBag:
    def __init__(self, tiles: Optional[List[Tile]] = None, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.tiles: List[Tile] = list(tiles) if tiles is not None else create_tile_bag(self.rng)

    def __len__(self) -> int:
        return len(self.tiles)

    def draw(self, count: int) -> List[Tile]:
        count = max(0, min(count, len(self.tiles)))
        drawn, self.tiles = self.tiles[:count], self.tiles[count:]
        return drawn

    def put_back(self, tiles: Iterable[Tile]):
        self.tiles.extend(tiles)
        self.rng.shuffle(self.tiles)
