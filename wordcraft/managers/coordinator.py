from __future__ import annotations
import logging
import uuid
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple, Type

from pydantic import BaseModel, TypeAdapter, ValidationError

from .. import config
from ..connections import Connection
from ..dictionary import DictionaryService, service as default_dictionary
from ..game_logic import GameState, InvalidAction, InvalidMove
from ..schemas import (
    ClientMessage, CreateRoom, ErrorMessage, ExchangeTiles, GameStarted, JoinRoom, MoveMade,
    MoveRejected, OpponentDisconnected, PassTurn, PlaceTiles, Reconnected, RoomCreated, RoomJoined,
)
from .rooms import Room, RoomRegistry, Seat
from .timer import RoomJanitor

logger = logging.getLogger(__name__)

_client_messages = TypeAdapter(ClientMessage)

class RoomCoordinator:
    """Server side of the multiplayer protocol.

    Each inbound message runs to completion under its room's lock:
    validate, mutate the GameState (synchronously), then broadcast.
    Rule violations become a reply to the sender; nothing escapes a handler.
    """

    def __init__(self, registry: Optional[RoomRegistry] = None, janitor: Optional[RoomJanitor] = None,
                 dictionary: Optional[DictionaryService] = None):
        self.registry = registry if registry is not None else RoomRegistry()
        self.janitor = janitor if janitor is not None else RoomJanitor(self.registry)
        self.dictionary = dictionary if dictionary is not None else default_dictionary
        self._handlers: Dict[Type[BaseModel], Callable[[Connection, Any], Awaitable[None]]] = {
            CreateRoom: self._create_room,
            JoinRoom: self._join_room,
            PlaceTiles: self._place_tiles,
            PassTurn: self._pass_turn,
            ExchangeTiles: self._exchange_tiles,
        }

    @staticmethod
    def parse(raw: Any) -> Optional[BaseModel]:
        try:
            if isinstance(raw, (str, bytes, bytearray)):
                return _client_messages.validate_json(raw)
            return _client_messages.validate_python(raw)
        except ValidationError as exc:
            logger.debug("Ignoring malformed message: %s", exc.errors(include_url=False)[:1])
            return None

    async def handle(self, conn: Connection, raw: Any):
        message = self.parse(raw)
        if message is None:
            return
        handler = self._handlers[type(message)]
        try:
            await handler(conn, message)
        except Exception:
            logger.exception("Handler for %s failed (room=%s)", type(message).__name__, conn.room_code)
            await conn.send(ErrorMessage(message='Internal error'))

    async def disconnect(self, conn: Connection):
        conn.closed = True
        room, seat = self._seat_for(conn)
        if room is None or seat is None or seat.connection is not conn:
            return
        async with room.lock:
            seat.connected = False
            seat.connection = None
            logger.info("Player %s left room %s", seat.name, room.code)
            other = room.opponent(seat.id)
            if other and other.connected and other.connection:
                await other.connection.send(OpponentDisconnected())
            if room.all_disconnected:
                self.janitor.schedule_expiry(room.code)

    # ---- message handlers ----

    async def _create_room(self, conn: Connection, msg: CreateRoom):
        await self.disconnect_previous(conn)
        player_id = uuid.uuid4().hex
        name = self._clean_name(msg.name, 'Player 1')
        room = self.registry.create(GameState([player_id], dictionary=self.dictionary))
        room.seats.append(Seat(id=player_id, name=name, connection=conn))
        self._bind(conn, room, player_id)
        await conn.send(RoomCreated(code=room.code, playerId=player_id))
        await conn.send(room.snapshot(player_id))

    async def _join_room(self, conn: Connection, msg: JoinRoom):
        room = self.registry.get(msg.code)
        if room is None:
            await conn.send(ErrorMessage(message='Room not found'))
            return
        if conn.room_code == room.code and not conn.closed:
            await conn.send(ErrorMessage(message='Already in this room'))
            return
        await self.disconnect_previous(conn)

        async with room.lock:
            if room.is_full:
                seat = next((s for s in room.seats if not s.connected), None)
                if seat is None:
                    await conn.send(ErrorMessage(message='Room is full'))
                    return
                seat.connection = conn
                seat.connected = True
                self._bind(conn, room, seat.id)
                self.janitor.cancel_expiry(room.code)
                logger.info("Player %s reconnected to room %s", seat.name, room.code)
                await conn.send(Reconnected(playerId=seat.id))
                await conn.send(room.snapshot(seat.id))
                other = room.opponent(seat.id)
                if other and other.connected and other.connection:
                    await other.connection.send(room.snapshot(other.id))
                return

            player_id = uuid.uuid4().hex
            room.game.add_player(player_id)
            room.seats.append(Seat(id=player_id, name=self._clean_name(msg.name, 'Player 2'), connection=conn))
            room.started = True
            self._bind(conn, room, player_id)
            self.janitor.cancel_expiry(room.code)
            logger.info("Room %s started", room.code)
            await conn.send(RoomJoined(code=room.code, playerId=player_id))
            await self._broadcast_state(room)
            await self._broadcast(room, GameStarted())

    async def _place_tiles(self, conn: Connection, msg: PlaceTiles):
        async def play(room: Room, seat: Seat):
            outcome = room.game.play(seat.id, msg.tiles)
            logger.info("Room %s: %s played %s for %d", room.code, seat.name, outcome.word, outcome.score)
            await self._broadcast(room, MoveMade(player=seat.name, word=outcome.word, score=outcome.score))
        await self._turn_action(conn, play)

    async def _pass_turn(self, conn: Connection, msg: PassTurn):
        async def pass_(room: Room, seat: Seat):
            room.game.pass_turn(seat.id)
        await self._turn_action(conn, pass_)

    async def _exchange_tiles(self, conn: Connection, msg: ExchangeTiles):
        async def exchange(room: Room, seat: Seat):
            room.game.exchange(seat.id, msg.tileIds)
        await self._turn_action(conn, exchange)

    # ---- helpers ----

    async def _turn_action(self, conn: Connection, action: Callable[[Room, Seat], Awaitable[None]]):
        room, seat = self._seat_for(conn)
        if room is None or seat is None:
            await conn.send(ErrorMessage(message='Not in a room'))
            return
        async with room.lock:
            if not room.started:
                await conn.send(ErrorMessage(message='Game has not started'))
                return
            try:
                await action(room, seat)
            except InvalidMove as exc:
                logger.debug("Room %s: move by %s rejected: %s", room.code, seat.name, exc)
                await conn.send(MoveRejected(error=str(exc)))
                return
            except InvalidAction as exc:
                logger.debug("Room %s: action by %s refused: %s", room.code, seat.name, exc)
                await conn.send(ErrorMessage(message=str(exc)))
                return
            await self._broadcast_state(room)

    async def disconnect_previous(self, conn: Connection):
        """A connection that opens a new room gives up the seat it held."""
        if conn.room_code is not None:
            await self.disconnect(conn)
            conn.closed = False
            conn.room_code = None
            conn.player_id = None

    def _seat_for(self, conn: Connection) -> Tuple[Optional[Room], Optional[Seat]]:
        room = self.registry.get(conn.room_code) if conn.room_code else None
        if room is None:
            return None, None
        return room, room.seat(conn.player_id)

    @staticmethod
    def _bind(conn: Connection, room: Room, player_id: str):
        conn.room_code = room.code
        conn.player_id = player_id

    @staticmethod
    def _clean_name(name: Optional[str], default: str) -> str:
        name = (name or '').strip()
        return (name or default)[:config.MAX_NAME_LENGTH]

    async def _broadcast(self, room: Room, message: BaseModel):
        for seat in room.seats:
            if seat.connected and seat.connection:
                await seat.connection.send(message)

    async def _broadcast_state(self, room: Room):
        for seat in room.seats:
            if seat.connected and seat.connection:
                await seat.connection.send(room.snapshot(seat.id))
