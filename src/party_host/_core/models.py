# Area: Core
"""
party_host._core.models — Room, player and mode-state values
============================================================

Every value in this module is a frozen dataclass. Reducers never mutate a
room in place: they build a new room with ``dataclasses.replace`` and hand
the original back untouched when an action is rejected, so callers can use
an identity check to tell "nothing happened" from "something changed".

The per-mode payload is a closed union (``ModeState``). Code that consumes
it goes through :func:`game_type_of`, which raises on anything it does not
recognise instead of guessing.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional, Tuple, Union


# Holder id used by single-player Higher-or-Lower (the "dealer" is nobody).
SYSTEM_HOLDER = "SYSTEM"


class GameType(Enum):
    """Active game mode of a room."""
    LOBBY        = "LOBBY"
    HIGHER_LOWER = "HIGHER_LOWER"
    CACHITO      = "CACHITO"
    GENERAL      = "GENERAL"


class ConnectionState(Enum):
    CONNECTED    = "CONNECTED"
    DISCONNECTED = "DISCONNECTED"


class LobbyStatus(Enum):
    WAITING  = "WAITING"
    STARTING = "STARTING"


class CachitoPhase(Enum):
    BIDDING   = "BIDDING"
    RESOLVING = "RESOLVING"


@dataclass(frozen=True)
class Player:
    """One seat in a room.

    ``dice`` is private to the player; ``dice_count`` is public. Outside a
    Cachito round transition the two agree (or ``dice`` is empty).
    """
    id: str
    name: str
    connection: ConnectionState = ConnectionState.CONNECTED
    general_level: int = 0
    is_thumb_master: bool = False
    dice: Tuple[int, ...] = ()
    dice_count: int = 5

    @property
    def is_connected(self) -> bool:
        return self.connection is ConnectionState.CONNECTED


# ── Mode states ──────────────────────────────────────────────


@dataclass(frozen=True)
class LobbyState:
    status: LobbyStatus = LobbyStatus.WAITING


@dataclass(frozen=True)
class HigherLowerState:
    """Card game state. ``deck`` is server-only; draws come off its end."""
    deck: Tuple[str, ...]
    current_card: Optional[str]
    holder_id: str
    guesser_id: str
    attempt_number: int = 1
    discard_pile: Tuple[str, ...] = ()            # most recent first
    last_hint: Optional[str] = None               # "HIGHER" | "LOWER"
    last_consequence: Optional[str] = None
    consequence_seq: int = 0                      # bumps on every consequence
    last_guess: Optional[int] = None
    last_answer: Optional[int] = None

    @property
    def cards_remaining(self) -> int:
        return len(self.deck)

    @property
    def is_single_player(self) -> bool:
        return self.holder_id == SYSTEM_HOLDER


@dataclass(frozen=True)
class Bid:
    player_id: str
    quantity: int
    face_value: int
    is_aces: bool = False


@dataclass(frozen=True)
class Reveal:
    total_found: int
    reason: str


@dataclass(frozen=True)
class CachitoState:
    current_turn_id: str
    phase: CachitoPhase = CachitoPhase.BIDDING
    current_bid: Optional[Bid] = None
    previous_bid: Optional[Bid] = None
    obligado: bool = False
    loser_id: Optional[str] = None
    reveal: Optional[Reveal] = None


@dataclass(frozen=True)
class ThumbRace:
    """A running (or just finished) thumb race."""
    trigger_id: str
    participants: Tuple[str, ...] = ()
    active: bool = True
    loser_id: Optional[str] = None


@dataclass(frozen=True)
class TieBreak:
    """Suggestion-then-vote protocol between players tied at the top level."""
    tied_ids: Tuple[str, ...]
    suggestions: Dict[str, str] = field(default_factory=dict)
    votes: Dict[str, str] = field(default_factory=dict)

    @property
    def suggestions_complete(self) -> bool:
        return len(self.suggestions) >= len(self.tied_ids)


@dataclass(frozen=True)
class GeneralState:
    current_turn_id: str
    last_roll: Optional[int] = None
    last_roller_id: Optional[str] = None
    roll_pending: bool = False
    drink_target_id: Optional[str] = None
    active_rule: Optional[str] = None
    thumb_race: Optional[ThumbRace] = None
    tie_break: Optional[TieBreak] = None


ModeState = Union[LobbyState, HigherLowerState, CachitoState, GeneralState]


def game_type_of(state: ModeState) -> GameType:
    """Return the tag of a mode state. Raises TypeError for anything else."""
    if isinstance(state, LobbyState):
        return GameType.LOBBY
    if isinstance(state, HigherLowerState):
        return GameType.HIGHER_LOWER
    if isinstance(state, CachitoState):
        return GameType.CACHITO
    if isinstance(state, GeneralState):
        return GameType.GENERAL
    raise TypeError(f"Unknown mode state: {type(state).__name__}")


# ── Room ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Room:
    """
    Full state of one room.

    ``player_order`` is a permutation of ``players``' keys and drives both
    turn rotation and display order. ``host_id`` always names a member while
    the room has any.
    """
    code: str
    host_id: str
    players: Dict[str, Player]
    player_order: Tuple[str, ...]
    state: ModeState = field(default_factory=LobbyState)
    created_at: float = 0.0

    @property
    def game(self) -> GameType:
        return game_type_of(self.state)

    @property
    def is_empty(self) -> bool:
        return not self.player_order

    def player(self, player_id: str) -> Optional[Player]:
        return self.players.get(player_id)

    def connected_ids(self) -> Tuple[str, ...]:
        """Connected member ids in turn order."""
        return tuple(
            pid for pid in self.player_order
            if pid in self.players and self.players[pid].is_connected
        )

    def with_state(self, state: ModeState) -> "Room":
        return replace(self, state=state)

    def with_player(self, player: Player) -> "Room":
        players = dict(self.players)
        players[player.id] = player
        return replace(self, players=players)

    def with_players(self, updated: Dict[str, Player]) -> "Room":
        """Replace several players at once (ids already present)."""
        players = dict(self.players)
        players.update(updated)
        return replace(self, players=players)
