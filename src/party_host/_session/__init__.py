# Area: Session
"""
Session - connection identity and room lifetime.

This package handles:
- Reconnect tokens and connection binding
- Disconnect grace periods
- The room registry and per-room serialisation
"""

from .grace_tracker import GraceEntry, GraceTracker
from .session_manager import Session, SessionManager
from .registry import ROOM_CODE_ALPHABET, RoomRegistry, normalize_code

__all__ = [
    "GraceEntry",
    "GraceTracker",
    "Session",
    "SessionManager",
    "ROOM_CODE_ALPHABET",
    "RoomRegistry",
    "normalize_code",
]
