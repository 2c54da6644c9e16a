from __future__ import annotations
import os
from typing import List, Tuple

# Server
HOST = os.environ.get('WORDCRAFT_HOST', '0.0.0.0')
PORT = int(os.environ.get('WORDCRAFT_PORT', '8000'))
LOG_LEVEL = os.environ.get('WORDCRAFT_LOG_LEVEL', 'INFO').upper()
CORS_ORIGINS: List[str] = [o.strip() for o in os.environ.get('WORDCRAFT_CORS_ORIGINS', '*').split(',') if o.strip()]

# Single player AI
AI_THINK_DELAY: Tuple[float, float] = (
    float(os.environ.get('WORDCRAFT_AI_DELAY_MIN', '0.8')),
    float(os.environ.get('WORDCRAFT_AI_DELAY_MAX', '2.0')),
)
AI_MAX_WORD_TILES = int(os.environ.get('WORDCRAFT_AI_MAX_WORD_TILES', '4'))

# Rooms (seconds)
ROOM_TTL_SECONDS = float(os.environ.get('WORDCRAFT_ROOM_TTL', str(60 * 60)))
ROOM_GRACE_SECONDS = float(os.environ.get('WORDCRAFT_ROOM_GRACE', str(5 * 60)))
ROOM_SWEEP_INTERVAL = float(os.environ.get('WORDCRAFT_SWEEP_INTERVAL', '60'))
ROOM_CODE_LENGTH = 6
ROOM_CODE_ALPHABET = 'ABCDEFGHJKLMNPQRSTUVWXYZ23456789'
MAX_NAME_LENGTH = 20
