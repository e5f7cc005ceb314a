# Area: Core
"""
Higher-or-Lower Handler
=======================

The guesser names the exact rank of the holder's face-up card.

Attempt 1 wrong → hint (HIGHER/LOWER) and a second attempt; the rank stays hidden.
Attempt 1 right → holder drinks a full cup; card resolved.
Attempt 2 right → holder drinks half; card resolved.
Attempt 2 wrong → guesser sips |guess - rank|; card resolved.

A resolved card goes to the front of the discard pile, the next card is
drawn, and the guesser role rotates. When rotation would hand the guess
back to the holder, the holder role moves on instead.
"""

import logging
from dataclasses import replace

from ..actions import GuessAction
from ..cards import card_rank
from ..models import HigherLowerState, Room
from ..turn_sequencer import next_turn

logger = logging.getLogger("party_host.handlers.higher_lower")

HOLDER_DRINK_FULL = "HOLDER_DRINK_FULL"
HOLDER_DRINK_HALF = "HOLDER_DRINK_HALF"
TRY_AGAIN = "TRY_AGAIN"


def guesser_sip(penalty: int) -> str:
    return f"GUESSER_SIP_{penalty}"


def handle_higher_lower(room: Room, state: HigherLowerState, player_id: str, action) -> Room:
    """Apply one action to a Higher-or-Lower room; anything but the guesser's exact guess is ignored."""
    if not isinstance(action, GuessAction):
        return room
    if state.guesser_id != player_id:
        logger.debug(f"[{room.code}] Guess from {player_id} but guesser is {state.guesser_id}")
        return room
    if state.current_card is None:
        return room
    if action.guess != "EXACT" or action.number is None:
        return room

    answer = card_rank(state.current_card)
    guess = action.number
    seq = state.consequence_seq + 1

    if guess == answer:
        consequence = HOLDER_DRINK_FULL if state.attempt_number == 1 else HOLDER_DRINK_HALF
        resolved = replace(
            state, last_guess=guess, last_answer=answer,
            last_consequence=consequence, consequence_seq=seq,
            last_hint=None, attempt_number=1,
        )
        return room.with_state(_rotate(room, _discard_and_draw(resolved)))

    if state.attempt_number == 1:
        hinted = replace(
            state, last_guess=guess, last_answer=None,
            last_consequence=TRY_AGAIN, consequence_seq=seq,
            last_hint="HIGHER" if answer > guess else "LOWER",
            attempt_number=2,
        )
        return room.with_state(hinted)

    resolved = replace(
        state, last_guess=guess, last_answer=answer,
        last_consequence=guesser_sip(abs(guess - answer)), consequence_seq=seq,
        last_hint=None, attempt_number=1,
    )
    return room.with_state(_rotate(room, _discard_and_draw(resolved)))


def _discard_and_draw(state: HigherLowerState) -> HigherLowerState:
    discard = state.discard_pile
    if state.current_card is not None:
        discard = (state.current_card,) + discard
    if state.deck:
        return replace(state, discard_pile=discard, current_card=state.deck[-1], deck=state.deck[:-1])
    return replace(state, discard_pile=discard, current_card=None)


def _rotate(room: Room, state: HigherLowerState) -> HigherLowerState:
    if state.is_single_player:
        return state
    order, players = room.player_order, room.players
    next_guesser = next_turn(state.guesser_id, order, players)
    if next_guesser != state.holder_id:
        return replace(state, guesser_id=next_guesser)
    holder = next_turn(state.holder_id, order, players)
    return replace(state, holder_id=holder, guesser_id=next_turn(holder, order, players))
