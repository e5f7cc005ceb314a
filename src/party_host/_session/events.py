# Area: Session
"""
party_host._session.events — Room-level event payloads
======================================================

Pydantic models for the payloads of ``join_room`` and ``start_game``.
In-game actions have their own grammar in ``_core.actions``.
"""

from __future__ import annotations
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .._core.models import GameType
from ..errors import InvalidEventError

M = TypeVar("M", bound=BaseModel)


class _Payload(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class JoinRoomPayload(_Payload):
    room_id: Optional[str] = Field(default=None, alias="roomId")
    player_name: Optional[str] = Field(default=None, alias="playerName")
    token: Optional[str] = None

    @field_validator("player_name")
    @classmethod
    def _strip_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class StartGamePayload(_Payload):
    game_type: GameType = Field(alias="gameType")
    is_single_player: Optional[bool] = Field(default=None, alias="isSinglePlayer")


def parse_event(model: Type[M], event: str, payload: Optional[Dict[str, Any]]) -> M:
    """
    Validate an event payload.

    Raises:
        InvalidEventError: the payload does not fit ``model``
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise InvalidEventError(event, None, [f"payload must be an object, got {type(payload).__name__}"])
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        errors = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        ]
        raise InvalidEventError(event, payload, errors) from exc
