# Area: Core
"""
party_host._core.membership — Seating changes
=============================================

Adding, removing and reconnecting players. Removal is shared by the host's
kick action, explicit leave and grace-period expiry, and repairs any turn
holder inside the mode state that pointed at the removed player.
"""

from __future__ import annotations
import logging
from dataclasses import replace
from typing import Optional

from .models import (
    CachitoState,
    ConnectionState,
    GeneralState,
    HigherLowerState,
    LobbyState,
    ModeState,
    Player,
    Room,
    TieBreak,
    ThumbRace,
)
from .handlers.general import settle_thumb_race, settle_tie_break
from .turn_sequencer import next_turn
from ..random_source import RandomSource, SystemRandomSource

logger = logging.getLogger("party_host.membership")

# Pending rolls only the roller can resolve (drink target, rule decree)
ROLLER_DECISIONS = (2, 6)


def seat_player(room: Room, player: Player) -> Room:
    """Add ``player`` at the end of the turn order."""
    players = dict(room.players)
    players[player.id] = player
    return replace(room, players=players, player_order=room.player_order + (player.id,))


def set_connection(room: Room, player_id: str, connection: ConnectionState) -> Room:
    """Flip a player's connection flag. Unknown ids leave the room as is."""
    player = room.players.get(player_id)
    if player is None or player.connection is connection:
        return room
    return room.with_player(replace(player, connection=connection))


def remove_player(room: Room, player_id: str, rng: Optional[RandomSource] = None) -> Room:
    """
    Remove a player, hand the host role on if needed, and repair turns.

    ``rng`` settles a General tie-break vote that the departure completes.
    The returned room may be empty; the caller decides whether to discard it.
    """
    if player_id not in room.players:
        return room

    players = {pid: p for pid, p in room.players.items() if pid != player_id}
    order = tuple(pid for pid in room.player_order if pid != player_id)
    host_id = room.host_id
    if host_id == player_id and order:
        host_id = order[0]
        logger.info(f"[{room.code}] Host passed from {player_id} to {host_id}")

    shrunk = replace(room, players=players, player_order=order, host_id=host_id)
    if not order:
        return shrunk
    return shrunk.with_state(repair_turn_holders(shrunk, room.state, player_id, rng))


def repair_turn_holders(
    room: Room, state: ModeState, removed_id: str, rng: Optional[RandomSource] = None,
) -> ModeState:
    """
    Point every turn-holder field that named ``removed_id`` at a seated player.

    ``room`` is the room after removal; ``state`` is its mode state.
    """
    order, players = room.player_order, room.players

    if isinstance(state, LobbyState):
        return state

    if isinstance(state, CachitoState):
        if state.current_turn_id != removed_id:
            return state
        return replace(
            state,
            current_turn_id=next_turn(removed_id, order, players, require_dice=True),
        )

    if isinstance(state, GeneralState):
        updated = state
        if state.current_turn_id == removed_id:
            updated = replace(updated, current_turn_id=next_turn(removed_id, order, players))
            if state.roll_pending and state.last_roll in ROLLER_DECISIONS and state.tie_break is None:
                updated = replace(updated, roll_pending=False)
        if state.thumb_race is not None:
            race = _scrub_race(state.thumb_race, removed_id)
            updated = replace(updated, thumb_race=settle_thumb_race(race, room.connected_ids()))
        if state.tie_break is not None:
            updated = replace(updated, tie_break=_scrub_tie_break(state.tie_break, removed_id))
            updated = settle_tie_break(room, updated, rng or SystemRandomSource())
        return updated

    if isinstance(state, HigherLowerState):
        if state.is_single_player:
            if state.guesser_id != removed_id:
                return state
            return replace(state, guesser_id=next_turn(removed_id, order, players))
        holder, guesser = state.holder_id, state.guesser_id
        if holder == removed_id:
            holder = next_turn(removed_id, order, players)
        if guesser == removed_id or guesser == holder:
            guesser = next_turn(holder, order, players)
        return replace(state, holder_id=holder, guesser_id=guesser)

    raise TypeError(f"Unknown mode state: {type(state).__name__}")


def _scrub_tie_break(tie_break: TieBreak, removed_id: str) -> TieBreak:
    return TieBreak(
        tied_ids=tuple(pid for pid in tie_break.tied_ids if pid != removed_id),
        suggestions={k: v for k, v in tie_break.suggestions.items() if k != removed_id},
        votes={
            voter: choice for voter, choice in tie_break.votes.items()
            if voter != removed_id and choice != removed_id
        },
    )


def _scrub_race(race: ThumbRace, removed_id: str) -> ThumbRace:
    return replace(
        race, participants=tuple(pid for pid in race.participants if pid != removed_id),
    )
