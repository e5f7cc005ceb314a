"""
party_host — Authoritative host for party games
===============================================

Runs the rooms for three drinking games (Higher-or-Lower, Cachito and
General): the turn order, the bid checks, every game rule, reconnect
sessions and the per-player view each client is allowed to see.

Quick Start:
    from party_host import PartyHost

    host = PartyHost()
    host.handle("conn-1", "join_room", {"playerName": "Ana"})
    host.handle("conn-1", "start_game", {"gameType": "CACHITO"})

Pure game logic, without sessions:
    from party_host import apply_action, parse_action
    room = apply_action(room, parse_action("CACHITO_DOUBT"), player_id)

Type Definitions
----------------
All wire payloads are available for import:

    from party_host import (
        JoinRoomRequest, StartGameRequest, ActionIntent,
        SessionTokenPayload, ErrorPayload, RoomView,
    )
"""

from .host import PartyHost
from .config import HostConfig, load_config
from .random_source import RandomSource, ScriptedRandomSource, SystemRandomSource
from ._core import (
    GameType,
    Room,
    apply_action,
    is_legal_raise,
    mask_room,
    next_turn,
    parse_action,
    start_game,
)
from ._shared import setup_logging
from .errors import (
    PartyHostError,
    ConfigError,
    InvalidEventError,
    ActionFaultError,
    EventRejectedError,
)
from .types import (
    # Inbound
    JoinRoomRequest,
    StartGameRequest,
    ActionIntent,
    # Outbound
    SessionTokenPayload,
    ErrorPayload,
    KickedPayload,
    # Views
    PlayerView,
    LobbyView,
    HigherLowerView,
    BidView,
    RevealView,
    CachitoView,
    TieBreakView,
    GeneralView,
    RoomView,
)

__all__ = [
    # Main classes
    "PartyHost",
    "HostConfig",
    "load_config",
    "RandomSource",
    "ScriptedRandomSource",
    "SystemRandomSource",
    "setup_logging",
    # Game logic
    "GameType",
    "Room",
    "apply_action",
    "is_legal_raise",
    "mask_room",
    "next_turn",
    "parse_action",
    "start_game",
    # Errors
    "PartyHostError",
    "ConfigError",
    "InvalidEventError",
    "ActionFaultError",
    "EventRejectedError",
    # Inbound
    "JoinRoomRequest",
    "StartGameRequest",
    "ActionIntent",
    # Outbound
    "SessionTokenPayload",
    "ErrorPayload",
    "KickedPayload",
    # Views
    "PlayerView",
    "LobbyView",
    "HigherLowerView",
    "BidView",
    "RevealView",
    "CachitoView",
    "TieBreakView",
    "GeneralView",
    "RoomView",
]
__version__ = "1.0.0"
