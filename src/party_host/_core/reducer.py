# Area: Core
"""
party_host._core.reducer — Action Reducer
=========================================

Top-level dispatcher. Host-only actions (reorder, kick) are applied
straight away when the host sends them; everything else is routed to the
handler of the room's active game. Anything the reducer cannot or will not
apply comes back as the input room object itself.
"""

from __future__ import annotations
import logging
from dataclasses import replace
from typing import Optional

from .actions import KickPlayerAction, ReorderPlayersAction
from .handlers import handle_cachito, handle_general, handle_higher_lower
from .membership import remove_player
from .models import CachitoState, GeneralState, HigherLowerState, LobbyState, Room
from ..random_source import RandomSource, SystemRandomSource

logger = logging.getLogger("party_host.reducer")

_DEFAULT_RNG = SystemRandomSource()


def apply_action(
    room: Room,
    action,
    acting_player_id: str,
    rng: Optional[RandomSource] = None,
) -> Room:
    """
    Apply ``action`` on behalf of ``acting_player_id``.

    Returns the next room value, or ``room`` itself when the actor is not a
    member, lacks permission, or the move is illegal.
    """
    if acting_player_id not in room.players:
        logger.debug(f"[{room.code}] Action from non-member {acting_player_id}")
        return room
    rng = rng or _DEFAULT_RNG

    if room.host_id == acting_player_id:
        if isinstance(action, ReorderPlayersAction):
            return _reorder(room, action)
        if isinstance(action, KickPlayerAction):
            return _kick(room, action, rng)

    state = room.state
    if isinstance(state, HigherLowerState):
        return handle_higher_lower(room, state, acting_player_id, action)
    if isinstance(state, CachitoState):
        return handle_cachito(room, state, acting_player_id, action, rng)
    if isinstance(state, GeneralState):
        return handle_general(room, state, acting_player_id, action, rng)
    if isinstance(state, LobbyState):
        return room
    raise TypeError(f"Unknown mode state: {type(state).__name__}")


def _reorder(room: Room, action: ReorderPlayersAction) -> Room:
    new_order = tuple(action.player_order)
    if sorted(new_order) != sorted(room.player_order):
        logger.debug(f"[{room.code}] Reorder rejected: not a permutation of the room")
        return room
    logger.info(f"[{room.code}] Turn order set to {list(new_order)}")
    return replace(room, player_order=new_order)


def _kick(room: Room, action: KickPlayerAction, rng: RandomSource) -> Room:
    target = action.target_id
    if target == room.host_id or target not in room.players:
        return room
    logger.info(f"[{room.code}] Host kicked {target}")
    return remove_player(room, target, rng)
