from wordcraft.board import Board
from wordcraft.rules import calculate_score, endgame_deduction, formed_words, invalid_words, validate_placement
from wordcraft.schemas import PlacedTile

from helpers import make_tiles, place


def board_with(word, row, col, horizontal=True):
    board = Board()
    for t in place(make_tiles(word), row, col, horizontal):
        board.place(t)
    return board


def test_first_move_must_cover_center():
    tiles = place(make_tiles('CAT'), 0, 0)
    result = validate_placement(Board(), tiles, True)
    assert not result
    assert result.error == 'First word must cover the center square'


def test_first_move_needs_two_tiles():
    tiles = place(make_tiles('A'), 7, 7)
    assert validate_placement(Board(), tiles, True).error == 'First word must be at least 2 letters'


def test_tiles_must_share_a_line():
    c, a = make_tiles('CA')
    tiles = [
        PlacedTile(**c.model_dump(), row=7, col=7),
        PlacedTile(**a.model_dump(), row=8, col=8),
    ]
    assert validate_placement(Board(), tiles, True).error == 'Tiles must be in a single row or column'


def test_gap_is_rejected():
    c, t = make_tiles('CT')
    tiles = [PlacedTile(**c.model_dump(), row=7, col=7), PlacedTile(**t.model_dump(), row=7, col=9)]
    assert validate_placement(Board(), tiles, True).error == 'Gaps in word placement'


def test_gap_filled_by_board_tile_is_fine():
    board = board_with('A', 7, 7)
    c, t = make_tiles('CT')
    tiles = [PlacedTile(**c.model_dump(), row=7, col=6), PlacedTile(**t.model_dump(), row=7, col=8)]
    assert validate_placement(board, tiles, False)
    # center is already taken, so no word multiplier this time
    assert calculate_score(board, tiles) == 5


def test_must_connect_after_first_move():
    board = board_with('CAT', 7, 6)
    tiles = place(make_tiles('DOG'), 0, 0)
    assert validate_placement(board, tiles, False).error == 'Word must connect to existing tiles'


def test_occupied_and_out_of_bounds():
    board = board_with('CAT', 7, 6)
    tiles = place(make_tiles('S'), 7, 7)
    assert validate_placement(board, tiles, False).error == 'Cell already occupied'
    tiles = place(make_tiles('AT'), 14, 14)
    assert validate_placement(board, tiles, False).error == 'Tile out of bounds'


def test_duplicate_cells_are_rejected():
    a, t = make_tiles('AT')
    tiles = [PlacedTile(**a.model_dump(), row=7, col=7), PlacedTile(**t.model_dump(), row=7, col=7)]
    assert validate_placement(Board(), tiles, True).error == 'Cell already occupied'


def test_center_doubles_first_word():
    tiles = place(make_tiles('CAT'), 7, 6)
    assert calculate_score(Board(), tiles) == 10


def test_score_is_order_independent():
    tiles = place(make_tiles('CAT'), 7, 6)
    assert calculate_score(Board(), tiles) == calculate_score(Board(), list(reversed(tiles)))


def test_premium_counts_only_when_covered():
    board = board_with('CAT', 7, 6)
    s = place(make_tiles('S'), 7, 9)
    words = formed_words(board, s)
    assert [w.word for w in words] == ['CATS']
    assert calculate_score(board, s) == 6


def test_bingo_bonus():
    tiles = place(make_tiles('ABCDEFG'), 7, 4)
    # (1+3+3+2+1+4+2) doubled by the center, plus 50
    assert calculate_score(Board(), tiles) == 82


def test_bingo_bonus_without_word_premium():
    board = board_with('A', 7, 7)
    tiles = place(make_tiles('BCDEFG'), 1, 7, horizontal=False) + place(make_tiles('H'), 8, 7)
    assert validate_placement(board, tiles, False)
    # B C D(DL) E F G over the A, then H: 3+3+4+1+4+2 + 1 + 4, plus 50
    assert calculate_score(board, tiles) == 72


def test_crosswords_are_found_once():
    board = board_with('CAT', 7, 6)
    tiles = place(make_tiles('OX'), 8, 6)
    words = formed_words(board, tiles)
    assert sorted(w.word for w in words) == ['AX', 'CO', 'OX']


def test_unassigned_blank_shows_placeholder():
    tiles = place(make_tiles('?A'), 7, 7)
    assert formed_words(Board(), tiles)[0].word == '?A'


def test_invalid_words(words):
    board = board_with('CAT', 7, 6)
    tiles = place(make_tiles('OQ'), 8, 6)
    bad = invalid_words(formed_words(board, tiles), words)
    assert 'OQ' in bad and 'AQ' in bad and 'CO' not in bad


def test_endgame_deduction():
    assert endgame_deduction(make_tiles('QZ?')) == 20
    assert endgame_deduction([]) == 0
