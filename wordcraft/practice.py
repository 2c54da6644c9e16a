from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .schemas import AnagramPuzzleView, Difficulty

@dataclass(frozen=True)
class AnagramPuzzle:
    letters: str
    answers: Tuple[str, ...]
    difficulty: Difficulty

PUZZLES: List[AnagramPuzzle] = [
    AnagramPuzzle('ACERT', ('CRATE', 'TRACE', 'CATER', 'REACT', 'CARTE'), 'easy'),
    AnagramPuzzle('AELST', ('STEAL', 'TALES', 'STALE', 'LEAST', 'SLATE', 'TESLA'), 'easy'),
    AnagramPuzzle('EINRS', ('REINS', 'RINSE', 'SIREN', 'RISEN'), 'easy'),
    AnagramPuzzle('ADERT', ('TRADE', 'TREAD', 'DATER', 'RATED'), 'easy'),
    AnagramPuzzle('AELPS', ('LEAPS', 'PEALS', 'SEPAL', 'PLEAS', 'LAPSE'), 'easy'),
    AnagramPuzzle('AEGLR', ('LARGE', 'LAGER', 'REGAL', 'GLARE'), 'easy'),
    AnagramPuzzle('EINST', ('INSET', 'STEIN', 'TINES'), 'easy'),
    AnagramPuzzle('DORWS', ('WORDS', 'SWORD'), 'easy'),
    AnagramPuzzle('AELRT', ('LATER', 'ALTER', 'ALERT'), 'easy'),
    AnagramPuzzle('AEMNS', ('MEANS', 'NAMES', 'MANES', 'AMENS', 'MENSA'), 'medium'),
    AnagramPuzzle('DEIRS', ('RIDES', 'DRIES', 'SIRED', 'RESID'), 'medium'),
    AnagramPuzzle('AEGRT', ('GREAT', 'GRATE', 'TARGE'), 'medium'),
    AnagramPuzzle('EINPR', ('RIPEN', 'REPIN'), 'medium'),
    AnagramPuzzle('AELNS', ('LANES', 'LEANS', 'ELANS'), 'medium'),
    AnagramPuzzle('CEIST', ('CITES', 'CESTI'), 'medium'),
    AnagramPuzzle('AEGINS', ('EASING',), 'hard'),
    AnagramPuzzle('AEINRT', ('RETAIN', 'RETINA', 'RATINE'), 'hard'),
    AnagramPuzzle('DEINRS', ('DINERS', 'SNIDER', 'RINSED'), 'hard'),
    AnagramPuzzle('AELRST', ('ALERTS', 'ALTERS', 'STELAR', 'SLATER'), 'hard'),
    AnagramPuzzle('CEIRST', ('CITERS', 'STERIC', 'RECITS'), 'hard'),
]

POINTS_PER_LETTER = 10

def _key(letters: str) -> str:
    return ''.join(sorted(letters.strip().upper()))

def random_puzzle(difficulty: Optional[Difficulty] = None, rng: Optional[random.Random] = None) -> AnagramPuzzle:
    rng = rng or random.Random()
    pool = [p for p in PUZZLES if difficulty is None or p.difficulty == difficulty]
    return rng.choice(pool)

def shuffled(letters: str, rng: Optional[random.Random] = None) -> str:
    chars = list(letters)
    (rng or random.Random()).shuffle(chars)
    return ''.join(chars)

def find_puzzle(letters: str) -> Optional[AnagramPuzzle]:
    key = _key(letters)
    return next((p for p in PUZZLES if _key(p.letters) == key), None)

def present(puzzle: AnagramPuzzle, rng: Optional[random.Random] = None) -> AnagramPuzzleView:
    return AnagramPuzzleView(letters=shuffled(puzzle.letters, rng), answerCount=len(puzzle.answers),
                             difficulty=puzzle.difficulty)

def check_guess(letters: str, guess: str) -> int:
    """Points for a correct guess (10 per letter), 0 otherwise."""
    puzzle = find_puzzle(letters)
    word = guess.strip().upper()
    if puzzle is None or word not in puzzle.answers:
        return 0
    return len(word) * POINTS_PER_LETTER
