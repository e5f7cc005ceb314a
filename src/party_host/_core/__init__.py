# Area: Core
"""
Core - the deterministic room state machine.

This package handles:
- Room, player and mode-state values
- Turn rotation and Cachito bid validation
- The three game handlers and the action reducer
- Game setup and per-viewer masking
"""

from .models import (
    SYSTEM_HOLDER,
    Bid,
    CachitoPhase,
    CachitoState,
    ConnectionState,
    GameType,
    GeneralState,
    HigherLowerState,
    LobbyState,
    LobbyStatus,
    ModeState,
    Player,
    Reveal,
    Room,
    ThumbRace,
    TieBreak,
    game_type_of,
)
from .turn_sequencer import next_turn
from .bid_validator import is_legal_raise
from .actions import parse_action
from .reducer import apply_action
from .membership import remove_player, seat_player, set_connection
from .game_setup import start_game
from .masking import mask_room

__all__ = [
    "SYSTEM_HOLDER",
    "Bid",
    "CachitoPhase",
    "CachitoState",
    "ConnectionState",
    "GameType",
    "GeneralState",
    "HigherLowerState",
    "LobbyState",
    "LobbyStatus",
    "ModeState",
    "Player",
    "Reveal",
    "Room",
    "ThumbRace",
    "TieBreak",
    "game_type_of",
    "next_turn",
    "is_legal_raise",
    "parse_action",
    "apply_action",
    "remove_player",
    "seat_player",
    "set_connection",
    "start_game",
    "mask_room",
]
