# Area: Core
"""
Cachito Handler
===============

Bidding dice game. Only the turn holder may bid, doubt or call an exact
match; anyone may ask for the next round once a challenge is resolving.
"""

import logging
from dataclasses import replace
from typing import Dict

from ..actions import BidAction, DoubtAction, MatchAction, NextRoundAction
from ..bid_validator import ACE_FACE, is_legal_raise
from ..models import Bid, CachitoPhase, CachitoState, Player, Reveal, Room
from ..turn_sequencer import next_turn
from ...random_source import RandomSource

logger = logging.getLogger("party_host.handlers.cachito")


def handle_cachito(
    room: Room, state: CachitoState, player_id: str, action, rng: RandomSource,
) -> Room:
    """Apply one action to a Cachito room."""
    if isinstance(action, NextRoundAction):
        return _next_round(room, state, rng)

    if not isinstance(action, (BidAction, DoubtAction, MatchAction)):
        return room
    if state.current_turn_id != player_id:
        logger.debug(f"[{room.code}] {action.type} from {player_id} out of turn")
        return room
    if state.phase is not CachitoPhase.BIDDING:
        return room

    if isinstance(action, BidAction):
        return _bid(room, state, player_id, action)
    return _challenge(room, state, player_id, exact=isinstance(action, MatchAction))


def count_matching(room: Room, bid: Bid, obligado: bool) -> int:
    """Count hidden dice showing the bid's face, plus aces when they are wild."""
    aces_wild = not obligado and not bid.is_aces
    total = 0
    for player in room.players.values():
        if player.dice_count <= 0:
            continue
        for face in player.dice:
            if face == bid.face_value or (aces_wild and face == ACE_FACE):
                total += 1
    return total


def _bid(room: Room, state: CachitoState, player_id: str, action: BidAction) -> Room:
    bid = Bid(
        player_id=player_id,
        quantity=action.quantity,
        face_value=action.face_value,
        is_aces=action.is_aces,
    )
    if not is_legal_raise(state.current_bid, bid, state.obligado):
        logger.debug(f"[{room.code}] Illegal raise {bid} over {state.current_bid}")
        return room
    return room.with_state(replace(
        state,
        previous_bid=state.current_bid,
        current_bid=bid,
        current_turn_id=next_turn(player_id, room.player_order, room.players, require_dice=True),
        phase=CachitoPhase.BIDDING,
    ))


def _challenge(room: Room, state: CachitoState, player_id: str, exact: bool) -> Room:
    bid = state.current_bid
    if bid is None:
        return room

    found = count_matching(room, bid, state.obligado)
    bidder_name = _name(room, bid.player_id)
    caller_name = _name(room, player_id)

    if exact:
        if found == bid.quantity:
            loser_id = bid.player_id
            reason = f"Exact match! Everyone else was right. {bidder_name} loses a die."
        else:
            loser_id = player_id
            reason = f"Not exact! Found {found}x {bid.face_value}s. {caller_name} loses a die."
    elif found < bid.quantity:
        loser_id = bid.player_id
        reason = f"Bid failed! Only found {found}x {bid.face_value}s. {bidder_name} loses a die."
    else:
        loser_id = player_id
        reason = f"Bid succeeded! Found {found}x {bid.face_value}s. {caller_name} loses a die."

    logger.info(f"[{room.code}] {'Match' if exact else 'Doubt'} resolved: {reason}")

    resolving = replace(
        state,
        phase=CachitoPhase.RESOLVING,
        loser_id=loser_id,
        reveal=Reveal(total_found=found, reason=reason),
    )
    loser = room.players.get(loser_id)
    if loser is None:
        return room.with_state(resolving)
    loser = replace(loser, dice_count=max(0, loser.dice_count - 1))
    return room.with_player(loser).with_state(resolving)


def _next_round(room: Room, state: CachitoState, rng: RandomSource) -> Room:
    if state.phase is not CachitoPhase.RESOLVING:
        return room

    rerolled: Dict[str, Player] = {}
    for pid, player in room.players.items():
        dice = tuple(rng.roll_die() for _ in range(player.dice_count)) if player.dice_count > 0 else ()
        rerolled[pid] = replace(player, dice=dice)
    room = room.with_players(rerolled)

    turn_id = state.loser_id or state.current_turn_id
    starter = room.players.get(turn_id)
    if starter is None or starter.dice_count == 0:
        turn_id = next_turn(turn_id, room.player_order, room.players, require_dice=True)

    starter = room.players.get(turn_id)
    obligado = starter is not None and starter.dice_count == 1
    if obligado:
        logger.info(f"[{room.code}] Obligado round: {turn_id} starts on one die")

    return room.with_state(CachitoState(
        current_turn_id=turn_id,
        phase=CachitoPhase.BIDDING,
        obligado=obligado,
    ))


def _name(room: Room, player_id: str) -> str:
    player = room.players.get(player_id)
    return player.name if player else "Someone"
