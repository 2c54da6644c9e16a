"""Best-effort AI opponent.

First moves are built straight from the rack. Later moves grow a word off
each occupied cell: a window of empty cells right before or right after the
anchor, filled with rack letters that turn the whole line into a lexicon
word. Candidates are ranked by score and the difficulty decides which one is
played.
"""
from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple

from . import config
from .board import CENTER, RACK_SIZE, Board, in_bounds
from .dictionary import DictionaryService
from .rules import calculate_score, formed_words, validate_placement
from .schemas import Difficulty, PlacedTile, Tile

logger = logging.getLogger(__name__)

FIRST_MOVE_LENGTHS = (2, RACK_SIZE)

@dataclass
class Candidate:
    tiles: List[PlacedTile]
    score: int

def fit_rack(letters: str, rack: Sequence[Tile]) -> Optional[List[Tuple[Tile, str]]]:
    """Pick rack tiles spelling ``letters``, using blanks as wildcards. None if impossible."""
    used: Set[str] = set()
    picked: List[Tuple[Tile, str]] = []
    for ch in letters:
        tile = next((t for t in rack if t.id not in used and not t.isBlank and t.letter.upper() == ch), None)
        if tile is None:
            tile = next((t for t in rack if t.id not in used and t.isBlank), None)
        if tile is None:
            return None
        used.add(tile.id)
        picked.append((tile, ch))
    return picked

def _place(picked: List[Tuple[Tile, str]], cells: Sequence[Tuple[int, int]]) -> List[PlacedTile]:
    return [
        PlacedTile(id=t.id, letter=ch, value=t.value, isBlank=t.isBlank, row=r, col=c)
        for (t, ch), (r, c) in zip(picked, cells)
    ]

def _first_move_candidates(board: Board, rack: Sequence[Tile], dictionary: DictionaryService) -> List[Candidate]:
    found = []
    low, high = FIRST_MOVE_LENGTHS
    for length in range(low, min(high, len(rack)) + 1):
        start = CENTER[1] - length // 2
        cells = [(CENTER[0], start + i) for i in range(length)]
        for word in dictionary.words_of_length(length):
            picked = fit_rack(word, rack)
            if picked is None:
                continue
            tiles = _place(picked, cells)
            if validate_placement(board, tiles, True):
                found.append(Candidate(tiles, calculate_score(board, tiles)))
    return found

def _line_pattern(board: Board, window: List[Tuple[int, int]], horizontal: bool):
    """Cells and fixed letters of the full line a window would join."""
    dr, dc = (0, 1) if horizontal else (1, 0)
    r, c = window[0]
    before = []
    while board.is_occupied(r - dr, c - dc):
        r, c = r - dr, c - dc
        before.insert(0, (r, c))
    r, c = window[-1]
    after = []
    while board.is_occupied(r + dr, c + dc):
        r, c = r + dr, c + dc
        after.append((r, c))
    cells = before + window + after
    fixed = [board.get(r, c).letter if board.is_occupied(r, c) else None for r, c in cells]
    return cells, fixed

def _windows(anchor: Tuple[int, int], length: int, horizontal: bool, board: Board):
    row, col = anchor
    # right before or right after the anchor
    for offset in (-length, 1):
        cells = [(row, col + offset + i) if horizontal else (row + offset + i, col) for i in range(length)]
        if all(in_bounds(r, c) and not board.is_occupied(r, c) for r, c in cells):
            yield cells

def _anchor_candidates(board: Board, rack: Sequence[Tile], dictionary: DictionaryService, max_length: int) -> List[Candidate]:
    found: List[Candidate] = []
    seen: Set[frozenset] = set()
    for anchor in list(board.occupied()):
        for length in range(1, min(len(rack), max_length) + 1):
            for horizontal in (True, False):
                for window in _windows(anchor, length, horizontal, board):
                    # the window touches the anchor, so the line is always 2+ cells
                    cells, fixed = _line_pattern(board, window, horizontal)
                    options = [
                        ''.join(ch for ch, f in zip(word, fixed) if f is None)
                        for word in dictionary.words_of_length(len(cells))
                        if all(f is None or f == ch for ch, f in zip(word, fixed))
                    ]
                    for letters in options:
                        picked = fit_rack(letters, rack)
                        if picked is None:
                            continue
                        tiles = _place(picked, window)
                        key = frozenset((t.row, t.col, t.letter) for t in tiles)
                        if key in seen:
                            continue
                        seen.add(key)
                        if not validate_placement(board, tiles, False):
                            continue
                        words = formed_words(board, tiles)
                        if words and all(dictionary.is_valid(w.word) for w in words):
                            found.append(Candidate(tiles, calculate_score(board, tiles, words)))
    return found

def pick_index(count: int, difficulty: Difficulty, rng: random.Random) -> int:
    if difficulty == 'easy':
        return min(count - 1, rng.randrange(min(count, 5)) + count // 2)
    if difficulty == 'medium':
        return rng.randrange(min(count, 3))
    return 0

def generate_move(board: Board, rack: Sequence[Tile], difficulty: Difficulty, is_first_move: bool,
                  dictionary: DictionaryService, rng: Optional[random.Random] = None,
                  max_length: int = config.AI_MAX_WORD_TILES) -> Optional[List[PlacedTile]]:
    """Return the tiles to play, or None when nothing legal was found (the caller passes)."""
    if not rack:
        return None
    rng = rng or random.Random()
    if is_first_move:
        candidates = _first_move_candidates(board, rack, dictionary)
    else:
        candidates = _anchor_candidates(board, rack, dictionary, max_length)
    if not candidates:
        logger.debug("AI found no move for rack %s", ''.join(t.letter or '?' for t in rack))
        return None

    candidates.sort(key=lambda c: c.score, reverse=True)
    chosen = candidates[pick_index(len(candidates), difficulty, rng)]
    logger.debug("AI (%s) picked %d of %d candidates, score %d", difficulty, candidates.index(chosen) + 1, len(candidates), chosen.score)
    return chosen.tiles
