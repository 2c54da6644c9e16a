from __future__ import annotations
import logging
import random
import string
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from .board import RACK_SIZE, Board, TileBag
from .dictionary import DictionaryService, service as default_dictionary
from .rules import calculate_score, endgame_deduction, formed_words, invalid_words, validate_placement
from .schemas import MoveRecord, PlacedTile, Tile

logger = logging.getLogger(__name__)

MAX_PLAYERS = 2
PASS_LIMIT = 4
TIE = 'tie'

class InvalidAction(ValueError):
    """A request the rules refuse. The game is left exactly as it was."""

class InvalidMove(InvalidAction):
    """Placement geometry or word check failed."""

@dataclass
class MoveOutcome:
    player: str
    word: str
    score: int
    tiles: List[PlacedTile]
    words: List[str] = field(default_factory=list)
    game_over: bool = False

class GameState:
    """Authoritative state of one two-seat game.

    Seats are opaque ids: ``'player'``/``'ai'`` for single player games,
    connection player ids for rooms. Every public mutator either raises
    ``InvalidAction`` before touching anything or applies the whole turn.
    """

    def __init__(self, players: Iterable[str] = (), dictionary: Optional[DictionaryService] = None,
                 rng: Optional[random.Random] = None, bag: Optional[TileBag] = None):
        self.rng = rng or random.Random()
        self.dictionary = dictionary if dictionary is not None else default_dictionary
        self.board = Board()
        self.tile_bag = bag if bag is not None else TileBag(rng=self.rng)
        self.players: List[str] = []
        self.racks: Dict[str, List[Tile]] = {}
        self.scores: Dict[str, int] = {}
        self.current_idx = 0
        self.is_first_move = True
        self.consecutive_passes = 0
        self.move_history: List[MoveRecord] = []
        self.game_over = False
        self.winner: Optional[str] = None
        for player in players:
            self.add_player(player)

    @property
    def current_player(self) -> Optional[str]:
        if not self.players:
            return None
        return self.players[self.current_idx % len(self.players)]

    def opponent_of(self, player: str) -> Optional[str]:
        return next((p for p in self.players if p != player), None)

    def add_player(self, player: str):
        if player in self.racks:
            raise InvalidAction('Player already seated')
        if len(self.players) >= MAX_PLAYERS:
            raise InvalidAction('Room is full')
        self.players.append(player)
        self.racks[player] = self.tile_bag.draw(RACK_SIZE)
        self.scores[player] = 0

    def tile_total(self) -> int:
        return len(self.tile_bag) + sum(len(r) for r in self.racks.values()) + self.board.tile_count()

    # ---- turn actions ----

    def play(self, player: str, submitted: Sequence[PlacedTile]) -> MoveOutcome:
        self._check_turn(player)
        tiles = self._resolve_tiles(player, submitted)

        placement = validate_placement(self.board, tiles, self.is_first_move)
        if not placement:
            raise InvalidMove(placement.error)
        words = formed_words(self.board, tiles)
        bad = invalid_words(words, self.dictionary)
        if bad:
            raise InvalidMove(f'"{bad[0]}" is not a valid word')
        score = calculate_score(self.board, tiles, words)

        # commit
        for t in tiles:
            self.board.place(t)
        used = {t.id for t in tiles}
        rack = [t for t in self.racks[player] if t.id not in used]
        rack.extend(self.tile_bag.draw(RACK_SIZE - len(rack)))
        self.racks[player] = rack
        self.scores[player] += score
        self.is_first_move = False
        self.consecutive_passes = 0
        main_word = words[0].word if words else ''
        self.move_history.append(MoveRecord(player=player, word=main_word, score=score, tiles=tiles, type='play'))
        logger.debug("%s played %s for %d", player, main_word, score)

        if len(self.tile_bag) == 0 and not rack:
            self._finish_out(player)
        self._advance()
        return MoveOutcome(player=player, word=main_word, score=score, tiles=tiles,
                           words=[w.word for w in words], game_over=self.game_over)

    def pass_turn(self, player: str):
        self._check_turn(player)
        self.consecutive_passes += 1
        self.move_history.append(MoveRecord(player=player, type='pass'))
        if self.consecutive_passes >= PASS_LIMIT:
            for p in self.players:
                self.scores[p] -= endgame_deduction(self.racks[p])
            self._settle()
        self._advance()

    def exchange(self, player: str, tile_ids: Sequence[str]):
        self._check_turn(player)
        if len(self.tile_bag) < RACK_SIZE:
            raise InvalidAction('Not enough tiles to exchange')
        wanted = set(tile_ids)
        if not wanted:
            raise InvalidAction('No tiles selected')
        rack = self.racks[player]
        if len(wanted) != len(tile_ids) or not wanted <= {t.id for t in rack}:
            raise InvalidAction('Invalid tile')

        returned = [t for t in rack if t.id in wanted]
        kept = [t for t in rack if t.id not in wanted]
        kept.extend(self.tile_bag.draw(len(returned)))
        self.tile_bag.put_back(returned)
        self.racks[player] = kept
        self.consecutive_passes = 0
        self.move_history.append(MoveRecord(player=player, type='exchange'))
        self._advance()

    # ---- helpers ----

    def _check_turn(self, player: str):
        if self.game_over:
            raise InvalidAction('Game is over')
        if player not in self.racks:
            raise InvalidAction('Unknown player')
        if len(self.players) < MAX_PLAYERS:
            raise InvalidAction('Waiting for an opponent')
        if self.current_player != player:
            raise InvalidAction('Not your turn')

    def _resolve_tiles(self, player: str, submitted: Sequence[PlacedTile]) -> List[PlacedTile]:
        """Rebuild the move from the server's own rack; only a blank's letter comes from the client."""
        owned = {t.id: t for t in self.racks[player]}
        seen = set()
        tiles: List[PlacedTile] = []
        for s in submitted:
            tile = owned.get(s.id)
            if tile is None or s.id in seen:
                raise InvalidAction('Invalid tile')
            seen.add(s.id)
            letter = tile.letter
            if tile.isBlank:
                letter = (s.letter or '').strip().upper()
                if len(letter) != 1 or letter not in string.ascii_uppercase:
                    raise InvalidMove('Blank tiles need a letter')
            tiles.append(PlacedTile(id=tile.id, letter=letter, value=tile.value, isBlank=tile.isBlank, row=s.row, col=s.col))
        return tiles

    def _advance(self):
        self.current_idx = (self.current_idx + 1) % len(self.players)

    def _finish_out(self, player: str):
        opponent = self.opponent_of(player)
        if opponent is not None:
            remaining = endgame_deduction(self.racks[opponent])
            self.scores[opponent] -= remaining
            self.scores[player] += remaining
        self._settle()

    def _settle(self):
        self.game_over = True
        ranked = sorted(self.players, key=lambda p: self.scores[p], reverse=True)
        if len(ranked) > 1 and self.scores[ranked[0]] == self.scores[ranked[1]]:
            self.winner = TIE
        else:
            self.winner = ranked[0]
        logger.info("Game over, winner=%s scores=%s", self.winner, self.scores)
