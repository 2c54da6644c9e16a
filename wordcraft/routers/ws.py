from __future__ import annotations
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ..connections import WebSocketConnection

logger = logging.getLogger(__name__)

router = APIRouter()

@router.websocket('/ws')
async def websocket_endpoint(websocket: WebSocket):
    await websocket.accept()
    coordinator = websocket.app.state.coordinator
    conn = WebSocketConnection(websocket)
    logger.debug("WebSocket connected")
    try:
        while True:
            message = await websocket.receive()
            if message['type'] == 'websocket.disconnect':
                raise WebSocketDisconnect(message.get('code', 1000))
            # text and binary frames both carry JSON
            data = message.get('text')
            if data is None:
                data = message.get('bytes')
            if data is not None:
                await coordinator.handle(conn, data)
    except WebSocketDisconnect:
        logger.debug("WebSocket disconnected (room=%s)", conn.room_code)
    finally:
        await coordinator.disconnect(conn)
