from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import Dict, Optional

import socketio
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from . import config, practice
from .connections import SocketIOConnection
from .dictionary import service as dict_service
from .managers.coordinator import RoomCoordinator
from .managers.game import GameManager
from .managers.rooms import RoomRegistry
from .managers.timer import RoomJanitor
from .routers import games as games_router
from .routers import ws as ws_router
from .schemas import AnagramGuess, AnagramPuzzleView, Difficulty

logger = logging.getLogger(__name__)

games = GameManager(dict_service)
registry = RoomRegistry()
janitor = RoomJanitor(registry, sessions=games)
coordinator = RoomCoordinator(registry, janitor, dict_service)

@asynccontextmanager
async def lifespan(app: FastAPI):
    janitor.start()
    logger.info("Wordcraft server ready")
    yield
    await janitor.stop()
    games.close()

# Socket.IO server (ASGI)
sio = socketio.AsyncServer(
    async_mode='asgi',
    cors_allowed_origins='*' if config.CORS_ORIGINS == ['*'] else config.CORS_ORIGINS,
)
app = FastAPI(title="Wordcraft Server", version="0.1.0", lifespan=lifespan)
app.state.games = games
app.state.registry = registry
app.state.janitor = janitor
app.state.coordinator = coordinator

# Mount Socket.IO ASGI application
asgi_app = socketio.ASGIApp(sio, other_asgi_app=app)

# CORS for REST
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

app.include_router(games_router.router)
app.include_router(ws_router.router)

@app.get('/api/health')
async def health() -> Dict[str, str]:
    return {'status': 'ok'}

# Dictionary validation REST endpoint
@app.get('/dict/validate')
async def validate_word(word: str):
    return {'word': word.strip().upper(), 'valid': dict_service.is_valid(word)}

@app.get('/api/practice/anagram', response_model=AnagramPuzzleView)
async def anagram_puzzle(difficulty: Optional[Difficulty] = None):
    return practice.present(practice.random_puzzle(difficulty))

@app.post('/api/practice/anagram/check')
async def anagram_check(body: AnagramGuess):
    if practice.find_puzzle(body.letters) is None:
        raise HTTPException(status_code=404, detail='Puzzle not found')
    score = practice.check_guess(body.letters, body.guess)
    return {'guess': body.guess.strip().upper(), 'correct': score > 0, 'score': score}

# Socket.IO Events
# sid -> connection; the coordinator binds rooms onto the connection itself
sio_connections: Dict[str, SocketIOConnection] = {}

@sio.event
async def connect(sid, environ, auth=None):
    sio_connections[sid] = SocketIOConnection(sio, sid)

@sio.event
async def disconnect(sid, *args):
    conn = sio_connections.pop(sid, None)
    if conn is not None:
        await coordinator.disconnect(conn)

@sio.on('message')
async def on_message(sid, payload):
    conn = sio_connections.get(sid)
    if conn is None:
        return
    await coordinator.handle(conn, payload)

def _typed_alias(message_type: str):
    async def handler(sid, payload=None):
        data = dict(payload) if isinstance(payload, dict) else {}
        data['type'] = message_type
        await on_message(sid, data)
    return handler

# Aliases: one event per client message type
for _type in ('create_room', 'join_room', 'place_tiles', 'pass_turn', 'exchange_tiles'):
    sio.on(_type, handler=_typed_alias(_type))

# Export ASGI app for uvicorn
application = asgi_app

# For local running: python -m wordcraft
