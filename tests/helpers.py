import itertools

from wordcraft.board import letter_value
from wordcraft.schemas import PlacedTile, Tile

_ids = itertools.count()

def make_tiles(letters, prefix='t'):
    """Rack tiles for ``letters``; '?' is a blank."""
    tiles = []
    for ch in letters:
        n = next(_ids)
        if ch == '?':
            tiles.append(Tile(id=f'{prefix}{n}', letter='', value=0, isBlank=True))
        else:
            tiles.append(Tile(id=f'{prefix}{n}', letter=ch, value=letter_value(ch)))
    return tiles

def place(tiles, row, col, horizontal=True, letters=None):
    """Lay ``tiles`` out in a line starting at (row, col)."""
    placed = []
    for i, t in enumerate(tiles):
        r, c = (row, col + i) if horizontal else (row + i, col)
        letter = letters[i] if letters else t.letter
        placed.append(PlacedTile(id=t.id, letter=letter, value=t.value, isBlank=t.isBlank, row=r, col=c))
    return placed
