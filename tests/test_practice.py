import random
from collections import Counter

from wordcraft import practice


def test_every_answer_uses_all_the_letters():
    for puzzle in practice.PUZZLES:
        for answer in puzzle.answers:
            assert Counter(answer) == Counter(puzzle.letters), (puzzle.letters, answer)


def test_puzzle_keys_are_unique():
    keys = [''.join(sorted(p.letters)) for p in practice.PUZZLES]
    assert len(keys) == len(set(keys))


def test_every_difficulty_has_puzzles():
    rng = random.Random(1)
    for difficulty in ('easy', 'medium', 'hard'):
        assert practice.random_puzzle(difficulty, rng).difficulty == difficulty


def test_check_guess():
    assert practice.check_guess('nemas', ' means ') == 50
    assert practice.check_guess('AEMNS', 'MEAN') == 0
    assert practice.check_guess('QQQQQ', 'MEANS') == 0


def test_present_shuffles_the_letters():
    puzzle = practice.find_puzzle('SNAME')
    view = practice.present(puzzle, random.Random(2))
    assert sorted(view.letters) == sorted(puzzle.letters)
    assert view.answerCount == 5
    assert view.difficulty == 'medium'
