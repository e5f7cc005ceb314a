# Area: Session
"""
party_host._session.session_manager — Tokens and connections
============================================================

Maps reconnect tokens and live transport connections to player identity.
Connections are opaque ids chosen by the transport; a player has at most
one bound connection at a time, and a newer connection for the same
player evicts the older one.

The tables span every room, so each method holds one manager-wide lock
while it reads or changes them.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .grace_tracker import GraceEntry, GraceTracker
from ..random_source import RandomSource

logger = logging.getLogger("party_host.session")


@dataclass(frozen=True)
class Session:
    """Identity behind a reconnect token."""
    token: str
    player_id: str
    room_code: str


class SessionManager:
    """
    Owns the token table, the connection table and the grace tracker.

    Usage:
        sessions = SessionManager(rng)
        session = sessions.issue("p1", "ABCD")
        sessions.bind("conn-1", session)
        ...
        sessions.unbind("conn-1")                 # transport dropped
        sessions.start_grace("p1", "ABCD", 300)
    """

    def __init__(self, rng: RandomSource):
        self._rng = rng
        self._lock = threading.Lock()
        self._by_token: Dict[str, Session] = {}
        self._by_connection: Dict[str, Session] = {}
        self._connection_of: Dict[str, str] = {}
        self.grace = GraceTracker()

    # ── Tokens ───────────────────────────────────────────────

    def new_player_id(self) -> str:
        with self._lock:
            return self._rng.token(9)

    def issue(self, player_id: str, room_code: str) -> Session:
        """Create a fresh reconnect token for a player."""
        with self._lock:
            session = Session(token=self._rng.token(), player_id=player_id, room_code=room_code)
            self._by_token[session.token] = session
            return session

    def resolve(self, token: Optional[str]) -> Optional[Session]:
        if not token:
            return None
        with self._lock:
            return self._by_token.get(token)

    # ── Connections ──────────────────────────────────────────

    def bind(self, connection_id: str, session: Session) -> Optional[str]:
        """
        Attach a connection to a session.

        Returns the id of a previous connection for the same player, which
        is no longer bound.
        """
        with self._lock:
            stale = self._connection_of.get(session.player_id)
            if stale is not None and stale != connection_id:
                self._by_connection.pop(stale, None)
                logger.info("Evicted stale connection %s for %s", stale, session.player_id)
            else:
                stale = None
            self._by_connection[connection_id] = session
            self._connection_of[session.player_id] = connection_id
            return stale

    def unbind(self, connection_id: str) -> Optional[Session]:
        """Detach a connection. Returns its session, if it had one."""
        with self._lock:
            session = self._by_connection.pop(connection_id, None)
            if session is not None and self._connection_of.get(session.player_id) == connection_id:
                del self._connection_of[session.player_id]
            return session

    def session_for(self, connection_id: str) -> Optional[Session]:
        with self._lock:
            return self._by_connection.get(connection_id)

    def connection_for(self, player_id: str) -> Optional[str]:
        with self._lock:
            return self._connection_of.get(player_id)

    def viewers(self, room_code: str) -> List[Tuple[str, str]]:
        """(connection id, player id) for every bound connection in a room."""
        with self._lock:
            return [
                (conn, session.player_id)
                for conn, session in self._by_connection.items()
                if session.room_code == room_code
            ]

    # ── Grace periods ────────────────────────────────────────

    def start_grace(self, player_id: str, room_code: str, grace_seconds: float) -> GraceEntry:
        with self._lock:
            return self.grace.start(player_id, room_code, grace_seconds)

    def cancel_grace(self, player_id: str) -> Optional[GraceEntry]:
        with self._lock:
            return self.grace.cancel(player_id)

    def expired(self) -> List[GraceEntry]:
        with self._lock:
            return self.grace.pop_expired()

    # ── Cleanup ──────────────────────────────────────────────

    def forget_player(self, player_id: str) -> Optional[str]:
        """
        Drop every trace of a player: tokens, connection and grace period.

        Returns the player's connection id if one was still bound.
        """
        with self._lock:
            return self._forget(player_id)

    def forget_room(self, room_code: str) -> None:
        with self._lock:
            for player_id in {s.player_id for s in self._by_token.values() if s.room_code == room_code}:
                self._forget(player_id)

    def _forget(self, player_id: str) -> Optional[str]:
        for token in [t for t, s in self._by_token.items() if s.player_id == player_id]:
            del self._by_token[token]
        connection = self._connection_of.pop(player_id, None)
        if connection is not None:
            self._by_connection.pop(connection, None)
        self.grace.cancel(player_id)
        return connection
