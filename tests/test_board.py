import random
from collections import Counter

import pytest

from wordcraft.board import (
    BOARD_SIZE, CENTER, DOUBLE_LETTER, DOUBLE_WORD, TILE_DISTRIBUTION, TRIPLE_LETTER, TRIPLE_WORD,
    Board, TileBag, create_tile_bag, premium_at,
)
from wordcraft.schemas import PlacedTile


@pytest.mark.parametrize('seed', [0, 1, 42])
def test_bag_matches_distribution(seed):
    tiles = create_tile_bag(random.Random(seed))
    assert len(tiles) == 100
    assert len({t.id for t in tiles}) == 100
    counts = Counter('?' if t.isBlank else t.letter for t in tiles)
    assert counts == Counter({letter: count for letter, (count, _) in TILE_DISTRIBUTION.items()})
    for t in tiles:
        expected = TILE_DISTRIBUTION['?' if t.isBlank else t.letter][1]
        assert t.value == expected


def test_blanks_have_no_letter():
    blanks = [t for t in create_tile_bag(random.Random(3)) if t.isBlank]
    assert len(blanks) == 2
    assert all(t.letter == '' and t.value == 0 for t in blanks)


def test_premium_layout():
    assert len(TRIPLE_WORD) == 8
    assert len(DOUBLE_WORD) == 16
    assert len(TRIPLE_LETTER) == 12
    assert len(DOUBLE_LETTER) == 24
    assert premium_at(*CENTER) == 'CENTER'
    assert premium_at(0, 0) == 'TW'
    assert premium_at(1, 5) == 'TL'
    assert premium_at(0, 1) == 'none'


def test_board_public_view():
    board = Board()
    board.place(PlacedTile(id='x', letter='Q', value=10, row=7, col=7))
    view = board.to_public()
    assert len(view) == BOARD_SIZE and all(len(row) == BOARD_SIZE for row in view)
    assert view[7][7].tile.letter == 'Q'
    assert view[7][7].premium == 'CENTER'
    assert view[0][0].tile is None
    assert board.tile_count() == 1
    assert board.get(-1, 0) is None


def test_board_copy_is_independent():
    board = Board()
    clone = board.copy()
    clone.place(PlacedTile(id='x', letter='A', value=1, row=0, col=0))
    assert board.is_empty()
    assert not clone.is_empty()


def test_draw_never_overdraws():
    bag = TileBag(rng=random.Random(0))
    assert len(bag.draw(95)) == 95
    assert len(bag.draw(7)) == 5
    assert bag.draw(7) == []
    assert len(bag) == 0


def test_put_back_returns_tiles():
    bag = TileBag(rng=random.Random(0))
    drawn = bag.draw(7)
    bag.put_back(drawn[:3])
    assert len(bag) == 96
    assert {t.id for t in drawn[:3]} <= {t.id for t in bag.tiles}
