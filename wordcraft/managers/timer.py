from __future__ import annotations
import asyncio
import logging
from typing import Dict, List, Optional

from .. import config
from .rooms import RoomRegistry

logger = logging.getLogger(__name__)

class RoomJanitor:
    """Deletes stale rooms.

    Two jobs: a periodic sweep dropping rooms (and idle single player
    sessions) older than the TTL, and a per-room grace timer started when
    both seats have disconnected.
    """

    def __init__(self, registry: RoomRegistry, sessions=None,
                 ttl: Optional[float] = None, grace: Optional[float] = None, interval: Optional[float] = None):
        self.registry = registry
        self.sessions = sessions
        self.ttl = config.ROOM_TTL_SECONDS if ttl is None else ttl
        self.grace = config.ROOM_GRACE_SECONDS if grace is None else grace
        self.interval = config.ROOM_SWEEP_INTERVAL if interval is None else interval
        self._tasks: Dict[str, asyncio.Task] = {}
        self._sweeper: Optional[asyncio.Task] = None

    def start(self):
        if self._sweeper is None or self._sweeper.done():
            self._sweeper = asyncio.create_task(self._run())

    async def stop(self):
        tasks = list(self._tasks.values())
        if self._sweeper:
            tasks.append(self._sweeper)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()
        self._sweeper = None

    def schedule_expiry(self, code: str):
        if code in self._tasks and not self._tasks[code].done():
            return
        logger.info("Room %s abandoned, deleting in %.0fs", code, self.grace)
        self._tasks[code] = asyncio.create_task(self._expire_after(code, self.grace))

    def cancel_expiry(self, code: str):
        task = self._tasks.pop(code, None)
        if task and not task.done():
            task.cancel()
            logger.info("Room %s expiry cancelled", code)

    def pending(self, code: str) -> bool:
        task = self._tasks.get(code)
        return bool(task and not task.done())

    async def _expire_after(self, code: str, delay: float):
        try:
            await asyncio.sleep(delay)
        except asyncio.CancelledError:
            return
        room = self.registry.get(code)
        # a reconnect in the meantime keeps the room alive
        if room and room.all_disconnected:
            self.registry.remove(code)
        self._tasks.pop(code, None)

    def sweep(self, now: Optional[float] = None) -> List[str]:
        removed = self.registry.expired(self.ttl, now)
        for code in removed:
            self.registry.remove(code)
            self.cancel_expiry(code)
        if self.sessions is not None:
            self.sessions.sweep(self.ttl, now)
        return removed

    async def _run(self):
        try:
            while True:
                await asyncio.sleep(self.interval)
                removed = self.sweep()
                if removed:
                    logger.info("Swept %d stale rooms", len(removed))
        except asyncio.CancelledError:
            return
