from __future__ import annotations
import logging
from typing import Any, Dict, Optional, Union

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import BaseModel

logger = logging.getLogger(__name__)

Payload = Union[BaseModel, Dict[str, Any]]

class Connection:
    """One client link plus the seat the coordinator bound it to."""

    def __init__(self):
        self.player_id: Optional[str] = None
        self.room_code: Optional[str] = None
        self.closed = False

    async def send(self, message: Payload) -> bool:
        # Best effort: a dead socket is skipped, never raised to the caller
        if self.closed:
            return False
        data = message.model_dump(mode='json') if isinstance(message, BaseModel) else message
        try:
            await self._send(data)
        except (RuntimeError, WebSocketDisconnect, ConnectionError) as exc:
            logger.debug("Dropping %s for closed connection: %s", data.get('type'), exc)
            self.closed = True
            return False
        return True

    async def _send(self, data: Dict[str, Any]):
        raise NotImplementedError

class WebSocketConnection(Connection):
    def __init__(self, websocket: WebSocket):
        super().__init__()
        self.websocket = websocket

    async def _send(self, data: Dict[str, Any]):
        await self.websocket.send_json(data)

class SocketIOConnection(Connection):
    def __init__(self, sio, sid: str):
        super().__init__()
        self.sio = sio
        self.sid = sid

    async def _send(self, data: Dict[str, Any]):
        await self.sio.emit('message', data, to=self.sid)
