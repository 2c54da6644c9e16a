from __future__ import annotations
import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException, Request

from ..game_logic import InvalidAction
from ..managers.game import Game, GameManager
from ..schemas import Bot, ExchangeRequest, NewGameRequest, PendingTileRequest, SessionState, SubmitMoveRequest

logger = logging.getLogger(__name__)

router = APIRouter()

AVAILABLE_BOTS: List[Bot] = [
    Bot(id='bot-easy', name='Robo Rookie', difficulty='easy', avatar='🤖',
        description='Takes it slow and steady.'),
    Bot(id='bot-medium', name='LexiBot', difficulty='medium', avatar='📚',
        description='Makes simple but solid moves.'),
    Bot(id='bot-hard', name='Clevertron', difficulty='hard', avatar='🛠️',
        description='Always goes for the highest score.'),
]

def _games(request: Request) -> GameManager:
    return request.app.state.games

def _game(request: Request, game_id: str) -> Game:
    game = _games(request).get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail='Game not found')
    return game

def _refused(exc: InvalidAction) -> HTTPException:
    logger.debug("Request refused: %s", exc)
    return HTTPException(status_code=400, detail=str(exc))

@router.get('/bots')
async def list_bots() -> Dict[str, List[Bot]]:
    return {'bots': AVAILABLE_BOTS}

@router.post('/api/games', response_model=SessionState)
async def new_game(body: NewGameRequest, request: Request):
    difficulty = body.difficulty
    if body.botId:
        bot = next((b for b in AVAILABLE_BOTS if b.id == body.botId), None)
        if bot is None:
            raise HTTPException(status_code=404, detail='Bot not found')
        difficulty = bot.difficulty
    return _games(request).create(difficulty).to_state()

@router.get('/api/games/{game_id}', response_model=SessionState)
async def get_game(game_id: str, request: Request):
    return _game(request, game_id).to_state()

@router.post('/api/games/{game_id}/pending', response_model=SessionState)
async def place_pending(game_id: str, body: PendingTileRequest, request: Request):
    game = _game(request, game_id)
    try:
        await game.place_tile(body.tileId, body.row, body.col, body.letter)
    except InvalidAction as exc:
        raise _refused(exc)
    return game.to_state()

@router.delete('/api/games/{game_id}/pending', response_model=SessionState)
async def recall_pending(game_id: str, request: Request):
    game = _game(request, game_id)
    await game.recall_tiles()
    return game.to_state()

@router.post('/api/games/{game_id}/shuffle', response_model=SessionState)
async def shuffle_rack(game_id: str, request: Request):
    game = _game(request, game_id)
    await game.shuffle_rack()
    return game.to_state()

@router.get('/api/games/{game_id}/preview')
async def preview(game_id: str, request: Request):
    return {'score': await _game(request, game_id).preview_score()}

@router.post('/api/games/{game_id}/move', response_model=SessionState)
async def submit_move(game_id: str, request: Request, body: Optional[SubmitMoveRequest] = None):
    game = _game(request, game_id)
    try:
        await game.submit_move(body.tiles if body else None)
    except InvalidAction as exc:
        raise _refused(exc)
    return game.to_state()

@router.post('/api/games/{game_id}/pass', response_model=SessionState)
async def pass_turn(game_id: str, request: Request):
    game = _game(request, game_id)
    try:
        await game.pass_turn()
    except InvalidAction as exc:
        raise _refused(exc)
    return game.to_state()

@router.post('/api/games/{game_id}/exchange', response_model=SessionState)
async def exchange(game_id: str, body: ExchangeRequest, request: Request):
    game = _game(request, game_id)
    try:
        await game.exchange(body.tileIds)
    except InvalidAction as exc:
        raise _refused(exc)
    return game.to_state()
