from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, List, Literal, Optional, Union

PremiumType = Literal['none', 'DL', 'TL', 'DW', 'TW', 'CENTER']
Difficulty = Literal['easy', 'medium', 'hard']
MoveType = Literal['play', 'pass', 'exchange']

class Tile(BaseModel):
    id: str
    letter: str = ''
    value: int = 0
    isBlank: bool = False

class PlacedTile(Tile):
    row: int
    col: int

    def bare(self) -> Tile:
        return Tile(id=self.id, letter=self.letter, value=self.value, isBlank=self.isBlank)

class PublicTile(BaseModel):
    letter: str
    value: int

class PublicCell(BaseModel):
    tile: Optional[PublicTile] = None
    premium: PremiumType = 'none'

class MoveRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    player: str
    word: str = ''
    score: int = 0
    tiles: List[PlacedTile] = []
    type: MoveType

# Client -> server messages

class CreateRoom(BaseModel):
    type: Literal['create_room']
    name: Optional[str] = None

class JoinRoom(BaseModel):
    type: Literal['join_room']
    code: str = ''
    name: Optional[str] = None

class PlaceTiles(BaseModel):
    type: Literal['place_tiles']
    tiles: List[PlacedTile] = []

class PassTurn(BaseModel):
    type: Literal['pass_turn']

class ExchangeTiles(BaseModel):
    type: Literal['exchange_tiles']
    tileIds: List[str] = []

ClientMessage = Annotated[
    Union[CreateRoom, JoinRoom, PlaceTiles, PassTurn, ExchangeTiles],
    Field(discriminator='type'),
]

# Server -> client messages

class RoomCreated(BaseModel):
    type: Literal['room_created'] = 'room_created'
    code: str
    playerId: str

class RoomJoined(BaseModel):
    type: Literal['room_joined'] = 'room_joined'
    code: str
    playerId: str

class Reconnected(BaseModel):
    type: Literal['reconnected'] = 'reconnected'
    playerId: str

class GameStarted(BaseModel):
    type: Literal['game_started'] = 'game_started'

class RoomState(BaseModel):
    type: Literal['game_state'] = 'game_state'
    code: str
    board: List[List[PublicCell]]
    yourRack: List[Tile]
    yourScore: int
    opponentScore: int
    opponentName: str
    opponentRackCount: int
    isYourTurn: bool
    isFirstMove: bool
    tilesLeft: int
    gameOver: bool
    winner: Optional[str] = None
    moveHistory: List[MoveRecord]
    started: bool
    playerCount: int
    yourName: str

class MoveMade(BaseModel):
    type: Literal['move_made'] = 'move_made'
    player: str
    word: str
    score: int

class MoveRejected(BaseModel):
    type: Literal['move_rejected'] = 'move_rejected'
    error: str

class OpponentDisconnected(BaseModel):
    type: Literal['opponent_disconnected'] = 'opponent_disconnected'

class ErrorMessage(BaseModel):
    type: Literal['error'] = 'error'
    message: str

ServerMessage = Union[
    RoomCreated, RoomJoined, Reconnected, GameStarted, RoomState,
    MoveMade, MoveRejected, OpponentDisconnected, ErrorMessage,
]

# Single player REST

GamePhase = Literal['awaiting-player-input', 'player-move-submitted', 'ai-thinking', 'ai-move-applied', 'game-over']

class NewGameRequest(BaseModel):
    difficulty: Difficulty = 'medium'
    botId: Optional[str] = None

class PendingTileRequest(BaseModel):
    tileId: str
    row: int = Field(ge=0, le=14)
    col: int = Field(ge=0, le=14)
    letter: Optional[str] = None

class SubmitMoveRequest(BaseModel):
    tiles: Optional[List[PlacedTile]] = None

class ExchangeRequest(BaseModel):
    tileIds: List[str]

class SessionState(BaseModel):
    id: str
    difficulty: Difficulty
    phase: GamePhase
    board: List[List[PublicCell]]
    playerRack: List[Tile]
    pendingTiles: List[PlacedTile]
    aiRackCount: int
    playerScore: int
    aiScore: int
    currentTurn: Literal['player', 'ai']
    isFirstMove: bool
    consecutivePasses: int
    tilesLeft: int
    gameOver: bool
    winner: Optional[Literal['player', 'ai', 'tie']] = None
    moveHistory: List[MoveRecord]
    aiPending: bool = False

class Bot(BaseModel):
    id: str
    name: str
    difficulty: Difficulty
    avatar: str
    description: str

# Practice

class AnagramPuzzleView(BaseModel):
    letters: str
    answerCount: int
    difficulty: Difficulty

class AnagramGuess(BaseModel):
    letters: str
    guess: str
