# Area: Core
"""
party_host._core.actions — Inbound action grammar
=================================================

Every in-game action arrives as ``{"type": ..., "payload": {...}}``. The
type and payload are merged and validated as one pydantic discriminated
union, so handlers only ever see well-typed action objects. Wire names are
camelCase (``faceValue``, ``targetId``); Python code may use either the
alias or the snake_case field name.
"""

from __future__ import annotations
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from ..errors import InvalidEventError


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


# ── Higher-or-Lower ──────────────────────────────────────────


class GuessAction(_Action):
    type: Literal["HL_GUESS"] = "HL_GUESS"
    guess: Literal["HIGHER", "LOWER", "EXACT"] = "EXACT"
    number: Optional[int] = None


# ── Cachito ──────────────────────────────────────────────────


class BidAction(_Action):
    type: Literal["CACHITO_BID"] = "CACHITO_BID"
    quantity: int
    face_value: int = Field(alias="faceValue")
    is_aces: bool = Field(default=False, alias="isAces")


class DoubtAction(_Action):
    type: Literal["CACHITO_DOUBT"] = "CACHITO_DOUBT"


class MatchAction(_Action):
    type: Literal["CACHITO_MATCH"] = "CACHITO_MATCH"


class NextRoundAction(_Action):
    type: Literal["CACHITO_NEXT_ROUND"] = "CACHITO_NEXT_ROUND"


# ── General ──────────────────────────────────────────────────


class RollDiceAction(_Action):
    type: Literal["GENERAL_ROLL_DICE"] = "GENERAL_ROLL_DICE"


class UseThumbAction(_Action):
    type: Literal["GENERAL_USE_THUMB"] = "GENERAL_USE_THUMB"


class ThumbRaceClickAction(_Action):
    type: Literal["GENERAL_THUMB_RACE_CLICK"] = "GENERAL_THUMB_RACE_CLICK"


class ChoosePlayerAction(_Action):
    type: Literal["GENERAL_CHOOSE_PLAYER"] = "GENERAL_CHOOSE_PLAYER"
    target_id: str = Field(alias="targetId")


class MakeRuleAction(_Action):
    type: Literal["GENERAL_MAKE_RULE"] = "GENERAL_MAKE_RULE"
    rule: str = Field(min_length=1)


class SuggestRuleAction(_Action):
    type: Literal["GENERAL_SUGGEST_RULE"] = "GENERAL_SUGGEST_RULE"
    rule: str = Field(min_length=1)


class VoteRuleAction(_Action):
    type: Literal["GENERAL_VOTE_RULE"] = "GENERAL_VOTE_RULE"
    target_id: str = Field(alias="targetId")


class GameEndAction(_Action):
    type: Literal["GENERAL_GAME_END"] = "GENERAL_GAME_END"


# ── Host-only ────────────────────────────────────────────────


class ReorderPlayersAction(_Action):
    type: Literal["REORDER_PLAYERS"] = "REORDER_PLAYERS"
    player_order: List[str] = Field(alias="playerOrder")


class KickPlayerAction(_Action):
    type: Literal["KICK_PLAYER"] = "KICK_PLAYER"
    target_id: str = Field(alias="targetId")


Action = Annotated[
    Union[
        GuessAction,
        BidAction,
        DoubtAction,
        MatchAction,
        NextRoundAction,
        RollDiceAction,
        UseThumbAction,
        ThumbRaceClickAction,
        ChoosePlayerAction,
        MakeRuleAction,
        SuggestRuleAction,
        VoteRuleAction,
        GameEndAction,
        ReorderPlayersAction,
        KickPlayerAction,
    ],
    Field(discriminator="type"),
]

_ACTION_ADAPTER: TypeAdapter = TypeAdapter(Action)


def parse_action(action_type: Any, payload: Optional[Dict[str, Any]] = None):
    """
    Build an action from an ``action_intent`` envelope.

    Raises:
        InvalidEventError: unknown type or a payload that does not fit it
    """
    body: Dict[str, Any] = dict(payload) if isinstance(payload, dict) else {}
    body["type"] = action_type
    try:
        return _ACTION_ADAPTER.validate_python(body)
    except ValidationError as exc:
        errors = [
            f"{'.'.join(str(p) for p in err['loc']) or 'type'}: {err['msg']}"
            for err in exc.errors()
        ]
        raise InvalidEventError("action_intent", body, errors) from exc
