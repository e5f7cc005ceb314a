# Area: Core
"""
party_host._core.masking — Per-viewer room projection
=====================================================

Builds the JSON-ready room payload one viewer is allowed to see:

- the Higher-or-Lower deck never leaves the server, only its size does;
  the face-up card is shown to the holder alone
- other players' dice are blanked, except during a Cachito reveal
- the viewer always sees their own dice
"""

from __future__ import annotations
from typing import Any, Dict, Optional

from .models import (
    Bid,
    CachitoPhase,
    CachitoState,
    GeneralState,
    HigherLowerState,
    LobbyState,
    ModeState,
    Player,
    Room,
)


def mask_room(room: Room, viewer_id: str) -> Dict[str, Any]:
    """Build the payload for ``viewer_id`` (a ``RoomView``)."""
    reveal_dice = (
        isinstance(room.state, CachitoState)
        and room.state.phase is CachitoPhase.RESOLVING
    )
    return {
        "id": room.code,
        "hostId": room.host_id,
        "players": {
            pid: _player_view(player, show_dice=reveal_dice or pid == viewer_id)
            for pid, player in room.players.items()
        },
        "playerOrder": list(room.player_order),
        "currentGame": room.game.value,
        "gameState": _state_view(room.state, viewer_id),
        "createdAt": room.created_at,
    }


def _player_view(player: Player, show_dice: bool) -> Dict[str, Any]:
    return {
        "id": player.id,
        "name": player.name,
        "connectionState": player.connection.value,
        "generalLevel": player.general_level,
        "isThumbMaster": player.is_thumb_master,
        "dice": list(player.dice) if show_dice else [],
        "diceCount": player.dice_count,
    }


def _state_view(state: ModeState, viewer_id: str) -> Dict[str, Any]:
    if isinstance(state, LobbyState):
        return {"status": state.status.value}

    if isinstance(state, HigherLowerState):
        return {
            "currentCard": state.current_card if viewer_id == state.holder_id else None,
            "holderId": state.holder_id,
            "guesserId": state.guesser_id,
            "attemptNumber": state.attempt_number,
            "cardsRemaining": state.cards_remaining,
            "discardPile": list(state.discard_pile),
            "lastGuessHint": state.last_hint,
            "lastConsequence": state.last_consequence,
            "lastConsequenceId": str(state.consequence_seq) if state.last_consequence else None,
            "lastGuess": state.last_guess,
            "lastAnswer": state.last_answer,
        }

    if isinstance(state, CachitoState):
        return {
            "status": state.phase.value,
            "currentTurnId": state.current_turn_id,
            "currentBid": _bid_view(state.current_bid),
            "previousBid": _bid_view(state.previous_bid),
            "isObligado": state.obligado,
            "loserId": state.loser_id,
            "revealData": (
                {"totalFound": state.reveal.total_found, "reason": state.reveal.reason}
                if state.reveal else None
            ),
        }

    if isinstance(state, GeneralState):
        race, tie = state.thumb_race, state.tie_break
        return {
            "currentTurnId": state.current_turn_id,
            "lastRoll": state.last_roll,
            "lastRollerId": state.last_roller_id,
            "rollPending": state.roll_pending,
            "drinkTargetId": state.drink_target_id,
            "activeRule": state.active_rule,
            "activeThumbRace": bool(race and race.active),
            "thumbRaceParticipants": list(race.participants) if race else [],
            "thumbRaceTriggerId": race.trigger_id if race else None,
            "thumbRaceLoserId": race.loser_id if race else None,
            "ruleTieBreaker": (
                {
                    "tiedGenerals": list(tie.tied_ids),
                    "suggestions": dict(tie.suggestions),
                    "votes": dict(tie.votes),
                }
                if tie else None
            ),
        }

    raise TypeError(f"Unknown mode state: {type(state).__name__}")


def _bid_view(bid: Optional[Bid]) -> Optional[Dict[str, Any]]:
    if bid is None:
        return None
    return {
        "playerId": bid.player_id,
        "quantity": bid.quantity,
        "faceValue": bid.face_value,
        "isAces": bid.is_aces,
    }
