from __future__ import annotations
import asyncio
import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .. import config
from ..connections import Connection
from ..game_logic import TIE, GameState
from ..schemas import RoomState

logger = logging.getLogger(__name__)

@dataclass
class Seat:
    id: str
    name: str
    connection: Optional[Connection] = field(default=None, repr=False)
    connected: bool = True

@dataclass
class Room:
    """A multiplayer game and the two seats playing it."""

    code: str
    game: GameState
    created_at: float
    seats: List[Seat] = field(default_factory=list)
    started: bool = False
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    def seat(self, player_id: Optional[str]) -> Optional[Seat]:
        return next((s for s in self.seats if s.id == player_id), None)

    def opponent(self, player_id: Optional[str]) -> Optional[Seat]:
        return next((s for s in self.seats if s.id != player_id), None)

    @property
    def is_full(self) -> bool:
        return len(self.seats) >= 2

    @property
    def all_disconnected(self) -> bool:
        return all(not s.connected for s in self.seats)

    def name_of(self, player_id: Optional[str]) -> str:
        seat = self.seat(player_id)
        return seat.name if seat else ''

    def winner_label(self) -> Optional[str]:
        winner = self.game.winner
        if winner is None:
            return None
        if winner == TIE:
            return 'Tie'
        return self.name_of(winner)

    def snapshot(self, player_id: str) -> RoomState:
        """State as seen from one seat: the opponent's rack is only a count."""
        game = self.game
        opponent = self.opponent(player_id)
        history = [r.model_copy(update={'player': self.name_of(r.player)}) for r in game.move_history]
        return RoomState(
            code=self.code,
            board=game.board.to_public(),
            yourRack=list(game.racks.get(player_id, [])),
            yourScore=game.scores.get(player_id, 0),
            opponentScore=game.scores.get(opponent.id, 0) if opponent else 0,
            opponentName=opponent.name if opponent else 'Waiting...',
            opponentRackCount=len(game.racks.get(opponent.id, [])) if opponent else 0,
            isYourTurn=self.started and not game.game_over and game.current_player == player_id,
            isFirstMove=game.is_first_move,
            tilesLeft=len(game.tile_bag),
            gameOver=game.game_over,
            winner=self.winner_label(),
            moveHistory=history,
            started=self.started,
            playerCount=len(self.seats),
            yourName=self.name_of(player_id),
        )

class RoomRegistry:
    """Owns the live rooms, keyed by code.

    Every method is synchronous, so on a single event loop each call is
    atomic with respect to message handlers.
    """

    def __init__(self, rng: Optional[random.Random] = None, clock: Callable[[], float] = time.time):
        self.rooms: Dict[str, Room] = {}
        self.rng = rng or random.SystemRandom()
        self.clock = clock

    def __len__(self) -> int:
        return len(self.rooms)

    def __contains__(self, code: str) -> bool:
        return self.normalize(code) in self.rooms

    @staticmethod
    def normalize(code: Optional[str]) -> str:
        return (code or '').strip().upper()

    def generate_code(self) -> str:
        while True:
            code = ''.join(self.rng.choice(config.ROOM_CODE_ALPHABET) for _ in range(config.ROOM_CODE_LENGTH))
            if code not in self.rooms:
                return code

    def create(self, game: GameState) -> Room:
        room = Room(code=self.generate_code(), game=game, created_at=self.clock())
        self.rooms[room.code] = room
        logger.info("Room %s created (%d live)", room.code, len(self.rooms))
        return room

    def get(self, code: Optional[str]) -> Optional[Room]:
        return self.rooms.get(self.normalize(code))

    def remove(self, code: str) -> Optional[Room]:
        room = self.rooms.pop(self.normalize(code), None)
        if room:
            logger.info("Room %s deleted", room.code)
        return room

    def expired(self, ttl: float, now: Optional[float] = None) -> List[str]:
        now = self.clock() if now is None else now
        return [code for code, room in self.rooms.items() if now - room.created_at > ttl]
