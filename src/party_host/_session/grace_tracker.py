# Area: Session
"""
party_host._session.grace_tracker — Disconnect grace periods
============================================================

A player whose connection drops keeps their seat for a grace period.
``start`` opens that window, a reconnect ``cancel``s it, and
``pop_expired`` hands back every window that closed since the last poll,
oldest first, so the host can remove those players as if they had left.

Windows are measured on ``time.monotonic`` and are never reported twice.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Dict, List, Optional

logger = logging.getLogger("party_host.session.grace")


@dataclass(frozen=True)
class GraceEntry:
    """One open grace window."""
    player_id: str
    room_code: str
    expires_at: float

    def remaining(self, now: float) -> float:
        return max(0.0, self.expires_at - now)


class GraceTracker:
    """At most one open window per player; reopening restarts it."""

    def __init__(self) -> None:
        self._open: Dict[str, GraceEntry] = {}

    def start(self, player_id: str, room_code: str, grace_seconds: float) -> GraceEntry:
        entry = GraceEntry(player_id, room_code, time.monotonic() + grace_seconds)
        restarted = player_id in self._open
        self._open[player_id] = entry
        logger.debug(
            "%s grace for %s in %s: %.1fs",
            "Restarted" if restarted else "Opened", player_id, room_code, grace_seconds,
        )
        return entry

    def cancel(self, player_id: str) -> Optional[GraceEntry]:
        """Close a player's window early. Returns the window, if one was open."""
        entry = self._open.pop(player_id, None)
        if entry is not None:
            logger.debug("Grace for %s closed with %.1fs left",
                         player_id, entry.remaining(time.monotonic()))
        return entry

    def pending(self, player_id: str) -> Optional[GraceEntry]:
        return self._open.get(player_id)

    def pop_expired(self) -> List[GraceEntry]:
        """Remove and return the windows that have run out, oldest first."""
        now = time.monotonic()
        expired = sorted(
            (entry for entry in self._open.values() if entry.expires_at <= now),
            key=lambda entry: entry.expires_at,
        )
        for entry in expired:
            del self._open[entry.player_id]
            logger.info("Grace ran out for %s in %s", entry.player_id, entry.room_code)
        return expired

    def __len__(self) -> int:
        return len(self._open)
