"""
party_host.errors — Custom exception classes
============================================

Defines the exception hierarchy for the host. Rejected moves are not
errors (they leave the room untouched); these exceptions cover bad
configuration, payloads that cannot be parsed, and faults raised while
reducing an action. Each exception keeps enough context for a structured
log block.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional

from .error_formatter import format_error_block


class PartyHostError(Exception):
    """Base exception for all party host errors."""

    code = "INTERNAL_ERROR"

    def to_payload(self) -> Dict[str, str]:
        """Body of the ``error`` event sent to the originating connection."""
        return {"code": self.code, "message": str(self)}


class ConfigError(PartyHostError, ValueError):
    """Raised when host configuration is missing or out of range."""

    code = "CONFIG_ERROR"


class InvalidEventError(PartyHostError):
    """Raised when an inbound event payload fails validation."""

    code = "INVALID_EVENT"

    def __init__(
        self,
        event: str,
        payload: Optional[Dict[str, Any]],
        validation_errors: List[str],
    ):
        self.event = event
        self.payload = payload
        self.validation_errors = validation_errors
        super().__init__(
            f"Event '{event}' failed validation: {validation_errors}"
        )

    def format_error_log(self) -> str:
        return format_error_block(
            error_type="INVALID_EVENT",
            title="INVALID EVENT — IGNORED",
            fields={"Event": self.event},
            payload=self.payload,
            details=self.validation_errors,
        )


class ActionFaultError(PartyHostError):
    """
    Raised when reducing an action blows up.

    The room stays at its last committed value; the fault is reported to
    the connection that sent the action and nobody else.
    """

    code = "ACTION_FAILED"

    def __init__(
        self,
        room_code: str,
        player_id: str,
        action_type: str,
        original: BaseException,
    ):
        self.room_code = room_code
        self.player_id = player_id
        self.action_type = action_type
        self.original = original
        super().__init__(
            f"Action '{action_type}' failed in room {room_code}: "
            f"{original.__class__.__name__}: {original}"
        )

    def format_error_log(self) -> str:
        return format_error_block(
            error_type="ACTION_FAULT",
            title="ACTION FAULT — ROOM LEFT AT LAST COMMIT",
            fields={
                "Room": self.room_code,
                "Player": self.player_id,
                "Action": self.action_type,
                "Exception": f"{self.original.__class__.__name__}: {self.original}",
            },
        )


class EventRejectedError(PartyHostError):
    """Raised when an event is well-formed but cannot be honoured.

    ``code`` is one of ``NAME_REQUIRED``, ``NOT_HOST``, ``NOT_IN_ROOM``,
    ``EMPTY_ROOM`` or ``UNKNOWN_EVENT``.
    """

    def __init__(self, code: str, message: str):
        self.code = code
        super().__init__(message)
