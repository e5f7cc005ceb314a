# Area: Session
"""
party_host._session.registry — Room Registry
============================================

Process-wide table of live rooms keyed by room code. Every room has its
own re-entrant lock; callers hold it for the whole read-reduce-commit
cycle so actions for one room are applied strictly one at a time, while
different rooms proceed independently.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from .._core.models import LobbyState, Player, Room
from ..random_source import RandomSource

logger = logging.getLogger("party_host.registry")

ROOM_CODE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
MAX_CODE_ATTEMPTS = 1000


def normalize_code(code: Optional[str]) -> str:
    """Client-entered codes are case-insensitive."""
    return (code or "").strip().upper()


class RoomRegistry:
    """
    Rooms by code, plus one lock per room.

    Usage:
        registry = RoomRegistry(rng)
        room = registry.create(host, now)
        with registry.locked(room.code):
            room = registry.get(room.code)
            ...
            registry.commit(new_room)
    """

    def __init__(
        self,
        rng: RandomSource,
        code_length: int = 4,
        alphabet: str = ROOM_CODE_ALPHABET,
    ):
        self._rng = rng
        self._code_length = code_length
        self._alphabet = alphabet
        self._rooms: Dict[str, Room] = {}
        self._locks: Dict[str, threading.RLock] = {}
        self._table_lock = threading.Lock()

    def get(self, code: Optional[str]) -> Optional[Room]:
        return self._rooms.get(normalize_code(code))

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and normalize_code(code) in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)

    def codes(self) -> List[str]:
        return list(self._rooms)

    @contextmanager
    def locked(self, code: str) -> Iterator[None]:
        """Hold the room's lock for the duration of the block."""
        code = normalize_code(code)
        with self._table_lock:
            lock = self._locks.setdefault(code, threading.RLock())
        with lock:
            yield

    def create(self, host: Player, created_at: float) -> Room:
        """Open a new room under a fresh code with ``host`` seated."""
        with self._table_lock:
            code = self._allocate_code()
            room = Room(
                code=code,
                host_id=host.id,
                players={host.id: host},
                player_order=(host.id,),
                state=LobbyState(),
                created_at=created_at,
            )
            self._rooms[code] = room
            self._locks.setdefault(code, threading.RLock())
        logger.info(f"Room {code} created by {host.id}")
        return room

    def commit(self, room: Room) -> Room:
        """Store ``room`` as the current value for its code, or drop it when empty."""
        if room.is_empty:
            self.discard(room.code)
            return room
        self._rooms[room.code] = room
        return room

    def discard(self, code: str) -> None:
        code = normalize_code(code)
        with self._table_lock:
            if self._rooms.pop(code, None) is not None:
                logger.info(f"Room {code} closed")
            self._locks.pop(code, None)

    def _allocate_code(self) -> str:
        for _ in range(MAX_CODE_ATTEMPTS):
            code = normalize_code(self._rng.room_code(self._alphabet, self._code_length))
            if code not in self._rooms:
                return code
        raise RuntimeError("Could not allocate a free room code")
