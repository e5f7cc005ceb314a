"""
party_host.types — TypedDict schemas for event payloads
=======================================================

This module documents the exact structure of the payloads that travel
between a client and ``PartyHost``. Keys are camelCase on the wire.

All types are exported from the main package:

    from party_host import RoomView, JoinRoomRequest, ...

Use __annotations__ to inspect fields:

    >>> BidView.__annotations__
    {'playerId': 'str', 'quantity': 'int', 'faceValue': 'int', 'isAces': 'bool'}
"""

from typing import Any, Dict, List, Literal, Optional, TypedDict, Union


# ============================================
# Inbound events
# ============================================

class JoinRoomRequest(TypedDict, total=False):
    """Payload of ``join_room``.

    Fields
    ------
    roomId : str
        Code of the room to join. Omit to open a new room.
    playerName : str
        Display name. Required unless ``token`` reattaches a seat.
    token : str
        Reconnect token from an earlier ``session_token``.
    """
    roomId: str
    playerName: str
    token: str


class StartGameRequest(TypedDict, total=False):
    """Payload of ``start_game`` (host only)."""
    gameType: Literal["LOBBY", "HIGHER_LOWER", "CACHITO", "GENERAL"]
    isSinglePlayer: bool    # Higher-or-Lower only


class ActionIntent(TypedDict, total=False):
    """Payload of ``action_intent``.

    Fields
    ------
    type : str
        HL_GUESS, CACHITO_BID, CACHITO_DOUBT, CACHITO_MATCH,
        CACHITO_NEXT_ROUND, GENERAL_ROLL_DICE, GENERAL_CHOOSE_PLAYER,
        GENERAL_MAKE_RULE, GENERAL_SUGGEST_RULE, GENERAL_VOTE_RULE,
        GENERAL_USE_THUMB, GENERAL_THUMB_RACE_CLICK, GENERAL_GAME_END,
        KICK_PLAYER or REORDER_PLAYERS.
    payload : dict
        Action-specific fields, e.g. ``{"quantity": 3, "faceValue": 4}``.
    """
    type: str
    payload: Dict[str, Any]


# ============================================
# Outbound events
# ============================================

class SessionTokenPayload(TypedDict):
    """Sent to the joining connection after ``join_room`` succeeds."""
    token: str
    playerId: str
    roomId: str


class ErrorPayload(TypedDict):
    """Body of an ``error`` event."""
    code: str       # e.g., "NAME_REQUIRED", "NOT_HOST", "ACTION_FAILED"
    message: str


class KickedPayload(TypedDict):
    """Sent to a connection whose player was removed by the host."""
    roomId: str


# ============================================
# room_update views
# ============================================

class PlayerView(TypedDict):
    """One seat as a viewer sees it. ``dice`` is empty for hidden hands."""
    id: str
    name: str
    connectionState: Literal["CONNECTED", "DISCONNECTED"]
    generalLevel: int
    isThumbMaster: bool
    dice: List[int]
    diceCount: int


class LobbyView(TypedDict):
    status: str


class HigherLowerView(TypedDict):
    """Higher-or-Lower state. The deck itself is never sent.

    Fields
    ------
    currentCard : str or None
        The face-up card, visible to the holder only.
    lastConsequenceId : str or None
        Changes every time a new consequence is produced, so clients can
        replay an identical consequence string.
    """
    currentCard: Optional[str]
    holderId: str
    guesserId: str
    attemptNumber: int
    cardsRemaining: int
    discardPile: List[str]
    lastGuessHint: Optional[str]
    lastConsequence: Optional[str]
    lastConsequenceId: Optional[str]
    lastGuess: Optional[int]
    lastAnswer: Optional[int]


class BidView(TypedDict):
    playerId: str
    quantity: int
    faceValue: int
    isAces: bool


class RevealView(TypedDict):
    totalFound: int
    reason: str


class CachitoView(TypedDict):
    """Cachito state. Other hands are revealed only while ``status`` is RESOLVING."""
    status: Literal["BIDDING", "RESOLVING"]
    currentTurnId: str
    currentBid: Optional[BidView]
    previousBid: Optional[BidView]
    isObligado: bool
    loserId: Optional[str]
    revealData: Optional[RevealView]


class TieBreakView(TypedDict):
    tiedGenerals: List[str]
    suggestions: Dict[str, str]
    votes: Dict[str, str]


class GeneralView(TypedDict):
    """General state."""
    currentTurnId: str
    lastRoll: Optional[int]
    lastRollerId: Optional[str]
    rollPending: bool
    drinkTargetId: Optional[str]
    activeRule: Optional[str]
    activeThumbRace: bool
    thumbRaceParticipants: List[str]
    thumbRaceTriggerId: Optional[str]
    thumbRaceLoserId: Optional[str]
    ruleTieBreaker: Optional[TieBreakView]


class RoomView(TypedDict):
    """Body of ``room_update``, masked for one viewer."""
    id: str
    hostId: str
    players: Dict[str, PlayerView]
    playerOrder: List[str]
    currentGame: Literal["LOBBY", "HIGHER_LOWER", "CACHITO", "GENERAL"]
    gameState: Union[LobbyView, HigherLowerView, CachitoView, GeneralView]
    createdAt: float
