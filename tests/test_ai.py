import random

import pytest

from wordcraft.ai import fit_rack, generate_move, pick_index
from wordcraft.board import Board
from wordcraft.dictionary import DictionaryService
from wordcraft.game_logic import GameState
from wordcraft.rules import validate_placement

from helpers import make_tiles, place


@pytest.fixture
def small_words():
    return DictionaryService(['AT', 'CAT', 'CATS'])


def cat_board():
    board = Board()
    for t in place(make_tiles('CAT'), 7, 6):
        board.place(t)
    return board


def test_fit_rack_prefers_real_letters():
    rack = make_tiles('?AT')
    picked = fit_rack('TA', rack)
    assert [(t.letter, ch) for t, ch in picked] == [('T', 'T'), ('A', 'A')]
    picked = fit_rack('CAT', rack)
    assert picked[0][0].isBlank and picked[0][1] == 'C'
    assert fit_rack('CATS', rack) is None


def test_first_move_takes_best_word(small_words):
    tiles = generate_move(Board(), make_tiles('CATQQQQ'), 'hard', True, small_words, random.Random(0))
    assert ''.join(t.letter for t in sorted(tiles, key=lambda t: t.col)) == 'CAT'
    assert validate_placement(Board(), tiles, True)


def test_extends_existing_word(small_words):
    tiles = generate_move(cat_board(), make_tiles('SQQJVVX'), 'hard', False, small_words, random.Random(0))
    assert [(t.letter, t.row, t.col) for t in tiles] == [('S', 7, 9)]


def test_blank_fills_any_letter(small_words):
    tiles = generate_move(cat_board(), make_tiles('?QQJVVX'), 'hard', False, small_words, random.Random(0))
    assert len(tiles) == 1
    assert tiles[0].isBlank and tiles[0].letter == 'S'


def test_no_move_found(small_words):
    assert generate_move(cat_board(), make_tiles('QQQJJVV'), 'hard', False, small_words) is None
    assert generate_move(Board(), [], 'easy', True, small_words) is None


def test_pick_index_by_difficulty():
    rng = random.Random(7)
    assert pick_index(10, 'hard', rng) == 0
    for _ in range(50):
        assert 0 <= pick_index(10, 'medium', rng) < 3
        assert 5 <= pick_index(10, 'easy', rng) <= 9
    assert pick_index(1, 'easy', rng) == 0


@pytest.mark.parametrize('seed', [1, 2, 3])
def test_generated_moves_are_accepted(seed):
    rng = random.Random(seed)
    game = GameState(['a', 'b'], rng=rng)
    for _ in range(10):
        if game.game_over:
            break
        player = game.current_player
        tiles = generate_move(game.board, game.racks[player], 'hard', game.is_first_move, game.dictionary, rng)
        if tiles:
            game.play(player, tiles)
        else:
            game.pass_turn(player)
        assert game.tile_total() == 100
