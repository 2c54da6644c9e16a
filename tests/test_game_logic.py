import pytest

from wordcraft.board import TileBag
from wordcraft.dictionary import DictionaryService
from wordcraft.game_logic import GameState, InvalidAction, InvalidMove
from wordcraft.schemas import PlacedTile

from helpers import make_tiles, place


def new_game(words, a='CATSXYZ', b='DOGEEEE', rest='AEIOUAEIOUAEIOU'):
    bag = TileBag(tiles=make_tiles(a) + make_tiles(b) + make_tiles(rest))
    return GameState(['a', 'b'], dictionary=words, bag=bag)


def snapshot(game):
    return (
        game.board.tile_count(),
        {p: [t.id for t in r] for p, r in game.racks.items()},
        dict(game.scores),
        game.current_player,
        len(game.tile_bag),
        len(game.move_history),
    )


def test_full_game_accounts_for_every_tile():
    game = GameState(['a', 'b'])
    assert game.tile_total() == 100
    assert all(len(r) == 7 for r in game.racks.values())
    assert len(game.tile_bag) == 86


def test_play_scores_and_refills(words):
    game = new_game(words)
    rack = game.racks['a']
    outcome = game.play('a', place(rack[:3], 7, 6))
    assert outcome.word == 'CAT'
    assert outcome.score == 10
    assert game.scores['a'] == 10
    assert len(game.racks['a']) == 7
    assert game.current_player == 'b'
    assert not game.is_first_move
    assert game.move_history[-1].type == 'play'


def test_client_values_are_ignored(words):
    game = new_game(words)
    tiles = place(game.racks['a'][:3], 7, 6)
    tiles = [t.model_copy(update={'value': 99}) for t in tiles]
    assert game.play('a', tiles).score == 10


def test_out_of_turn_leaves_state(words):
    game = new_game(words)
    before = snapshot(game)
    with pytest.raises(InvalidAction, match='Not your turn'):
        game.play('b', place(game.racks['b'][:3], 7, 6))
    assert snapshot(game) == before


def test_bad_word_leaves_state(words):
    game = new_game(words)
    c, a, t = game.racks['a'][:3]
    before = snapshot(game)
    with pytest.raises(InvalidMove, match='"TAC" is not a valid word'):
        game.play('a', place([t, a, c], 7, 6))
    assert snapshot(game) == before


def test_unowned_tile(words):
    game = new_game(words)
    with pytest.raises(InvalidAction, match='Invalid tile'):
        game.play('a', place(game.racks['b'][:3], 7, 6))
    with pytest.raises(InvalidAction, match='Invalid tile'):
        tile = game.racks['a'][0]
        game.play('a', [PlacedTile(**tile.model_dump(), row=7, col=7)] * 2)


def test_blank_needs_a_letter(words):
    game = new_game(words, a='?ATQQQQ')
    blank, a, t = game.racks['a'][:3]
    with pytest.raises(InvalidMove, match='Blank tiles need a letter'):
        game.play('a', place([blank, a, t], 7, 6))
    outcome = game.play('a', place([blank, a, t], 7, 6, letters='CAT'))
    # the blank scores nothing: (0+1+1) doubled
    assert outcome.score == 4
    assert game.board.get(7, 6).letter == 'C'


def test_waiting_for_opponent(words):
    game = GameState(['a'], dictionary=words)
    with pytest.raises(InvalidAction, match='Waiting for an opponent'):
        game.pass_turn('a')


def test_room_is_full():
    game = GameState(['a', 'b'])
    with pytest.raises(InvalidAction, match='Room is full'):
        game.add_player('c')
    with pytest.raises(InvalidAction, match='already seated'):
        game.add_player('a')


def test_four_passes_end_the_game(words):
    game = new_game(words)
    for player in ('a', 'b', 'a'):
        game.pass_turn(player)
    assert not game.game_over
    game.pass_turn('b')
    assert game.game_over
    # CATSXYZ is worth 28, DOGEEEE 9
    assert game.scores == {'a': -28, 'b': -9}
    assert game.winner == 'b'
    with pytest.raises(InvalidAction, match='Game is over'):
        game.pass_turn('a')


def test_injected_empty_bag_and_dictionary_are_kept():
    bag = TileBag(tiles=[])
    lexicon = DictionaryService([])
    game = GameState(['a', 'b'], dictionary=lexicon, bag=bag)
    assert game.tile_bag is bag and game.dictionary is lexicon
    assert len(game.tile_bag) == 0
    assert game.racks == {'a': [], 'b': []}


def test_going_out_transfers_rack_value(words):
    game = GameState(['a', 'b'], dictionary=words, bag=TileBag(tiles=[]))
    game.racks['a'] = make_tiles('AT')
    game.racks['b'] = make_tiles('QZ')
    game.play('a', place(game.racks['a'], 7, 7))
    assert game.game_over
    # AT doubled by the center, plus QZ taken from b
    assert game.scores == {'a': 4 + 20, 'b': -20}
    assert game.winner == 'a'


def test_exchange(words):
    game = new_game(words)
    rack = game.racks['a']
    returned = [t.id for t in rack[:3]]
    bag_size = len(game.tile_bag)
    game.pass_turn('a')
    game.exchange('b', [t.id for t in game.racks['b'][:1]])
    game.exchange('a', returned)
    assert len(game.racks['a']) == 7
    assert not set(returned) & {t.id for t in game.racks['a']}
    assert len(game.tile_bag) == bag_size
    assert game.consecutive_passes == 0
    assert game.current_player == 'b'
    assert game.tile_total() == 29


def test_exchange_refusals(words):
    game = new_game(words)
    with pytest.raises(InvalidAction, match='No tiles selected'):
        game.exchange('a', [])
    with pytest.raises(InvalidAction, match='Invalid tile'):
        game.exchange('a', [game.racks['b'][0].id])

    small = GameState(['a', 'b'], dictionary=words, bag=TileBag(tiles=make_tiles('A' * 20)))
    assert len(small.tile_bag) == 6
    with pytest.raises(InvalidAction, match='Not enough tiles'):
        small.exchange('a', [small.racks['a'][0].id])
