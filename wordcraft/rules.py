"""Placement legality, word formation and move scoring.

Everything here is a pure function of a board and a candidate placement;
nothing mutates the board that is passed in.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .board import BINGO_BONUS, BLANK, CENTER, RACK_SIZE, Board, in_bounds, premium_at
from .dictionary import DictionaryService
from .schemas import PlacedTile, Tile

@dataclass
class PlacementResult:
    valid: bool
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.valid

@dataclass(frozen=True)
class WordLetter:
    row: int
    col: int
    letter: str
    value: int
    is_new: bool

@dataclass
class FormedWord:
    word: str
    letters: List[WordLetter] = field(default_factory=list)

    @property
    def span(self) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        first, last = self.letters[0], self.letters[-1]
        return (first.row, first.col), (last.row, last.col)

def _is_horizontal(placed: Sequence[PlacedTile]) -> bool:
    return all(t.row == placed[0].row for t in placed)

def validate_placement(board: Board, placed: Sequence[PlacedTile], is_first_move: bool) -> PlacementResult:
    if not placed:
        return PlacementResult(False, 'No tiles placed')

    same_row = _is_horizontal(placed)
    same_col = all(t.col == placed[0].col for t in placed)
    if not same_row and not same_col:
        return PlacementResult(False, 'Tiles must be in a single row or column')

    seen = set()
    for t in placed:
        if not in_bounds(t.row, t.col):
            return PlacementResult(False, 'Tile out of bounds')
        if board.is_occupied(t.row, t.col) or (t.row, t.col) in seen:
            return PlacementResult(False, 'Cell already occupied')
        seen.add((t.row, t.col))

    if is_first_move:
        if CENTER not in seen:
            return PlacementResult(False, 'First word must cover the center square')
        if len(placed) < 2:
            return PlacementResult(False, 'First word must be at least 2 letters')
    else:
        touches = any(
            board.is_occupied(r, c)
            for t in placed
            for r, c in ((t.row - 1, t.col), (t.row + 1, t.col), (t.row, t.col - 1), (t.row, t.col + 1))
        )
        if not touches:
            return PlacementResult(False, 'Word must connect to existing tiles')

    if same_row:
        row = placed[0].row
        cols = sorted(t.col for t in placed)
        span = [(row, c) for c in range(cols[0], cols[-1] + 1)]
    else:
        col = placed[0].col
        rows = sorted(t.row for t in placed)
        span = [(r, col) for r in range(rows[0], rows[-1] + 1)]
    for cell in span:
        if cell not in seen and not board.is_occupied(*cell):
            return PlacementResult(False, 'Gaps in word placement')

    return PlacementResult(True)

def _word_at(scratch: Board, new_cells: Dict[Tuple[int, int], PlacedTile], row: int, col: int, horizontal: bool) -> Optional[FormedWord]:
    dr, dc = (0, 1) if horizontal else (1, 0)
    while scratch.is_occupied(row - dr, col - dc):
        row, col = row - dr, col - dc

    letters: List[WordLetter] = []
    while in_bounds(row, col) and scratch.is_occupied(row, col):
        tile = scratch.get(row, col)
        letter = tile.letter or BLANK
        letters.append(WordLetter(row, col, letter, tile.value, (row, col) in new_cells))
        row, col = row + dr, col + dc

    if len(letters) < 2:
        return None
    return FormedWord(''.join(l.letter for l in letters), letters)

def formed_words(board: Board, placed: Sequence[PlacedTile]) -> List[FormedWord]:
    """Main word plus every crossword created by the placement, each counted once."""
    if not placed:
        return []
    scratch = board.copy()
    new_cells = {(t.row, t.col): t for t in placed}
    for t in placed:
        scratch.place(t)

    horizontal = _is_horizontal(placed)
    single = len(placed) == 1
    found: List[Optional[FormedWord]] = []
    first = placed[0]
    if horizontal or single:
        found.append(_word_at(scratch, new_cells, first.row, first.col, True))
    if not horizontal or single:
        found.append(_word_at(scratch, new_cells, first.row, first.col, False))
    for t in placed:
        if horizontal or single:
            found.append(_word_at(scratch, new_cells, t.row, t.col, False))
        if not horizontal or single:
            found.append(_word_at(scratch, new_cells, t.row, t.col, True))

    unique: Dict[tuple, FormedWord] = {}
    for word in found:
        if word is not None and word.span not in unique:
            unique[word.span] = word
    return list(unique.values())

def score_word(word: FormedWord) -> int:
    total = 0
    multiplier = 1
    for letter in word.letters:
        points = letter.value
        if letter.is_new:
            premium = premium_at(letter.row, letter.col)
            if premium == 'DL':
                points *= 2
            elif premium == 'TL':
                points *= 3
            elif premium in ('DW', 'CENTER'):
                multiplier *= 2
            elif premium == 'TW':
                multiplier *= 3
        total += points
    return total * multiplier

def calculate_score(board: Board, placed: Sequence[PlacedTile], words: Optional[List[FormedWord]] = None) -> int:
    if words is None:
        words = formed_words(board, placed)
    total = sum(score_word(w) for w in words)
    if len(placed) == RACK_SIZE:
        total += BINGO_BONUS
    return total

def invalid_words(words: Iterable[FormedWord], dictionary: DictionaryService) -> List[str]:
    return [w.word for w in words if not dictionary.is_valid(w.word)]

def endgame_deduction(rack: Iterable[Tile]) -> int:
    return sum(t.value for t in rack)
