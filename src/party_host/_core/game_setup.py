# Area: Core
"""
party_host._core.game_setup — (Re)initialise a room for a game
==============================================================

Builds the opening mode state for the chosen game, dealing fresh hidden
resources where the game needs them.
"""

from __future__ import annotations
import logging
from dataclasses import replace
from typing import Dict, Optional

from .cards import shuffled_deck
from .models import (
    SYSTEM_HOLDER,
    CachitoState,
    GameType,
    GeneralState,
    HigherLowerState,
    LobbyState,
    Player,
    Room,
)
from ..errors import EventRejectedError
from ..random_source import RandomSource

logger = logging.getLogger("party_host.setup")

DEFAULT_STARTING_DICE = 5


def start_game(
    room: Room,
    game: GameType,
    rng: RandomSource,
    single_player: Optional[bool] = None,
    starting_dice: int = DEFAULT_STARTING_DICE,
) -> Room:
    """
    Return ``room`` switched to ``game`` with a fresh opening state.

    Args:
        room: the room to (re)start
        game: game to start
        rng: source for the shuffle and dice
        single_player: Higher-or-Lower only; defaults to "one player seated"
        starting_dice: Cachito hand size

    Raises:
        EventRejectedError: the room has no players
    """
    if room.is_empty:
        raise EventRejectedError("EMPTY_ROOM", "Cannot start a game in an empty room")

    order = room.player_order
    logger.info(f"[{room.code}] Starting {game.value} with {len(order)} player(s)")

    if game is GameType.LOBBY:
        return room.with_state(LobbyState())

    if game is GameType.HIGHER_LOWER:
        solo = len(order) == 1 if single_player is None else single_player
        # Holder and guesser must differ, so one seated player always plays solo.
        solo = solo or len(order) == 1
        deck = tuple(shuffled_deck(rng))
        return room.with_state(HigherLowerState(
            deck=deck[:-1],
            current_card=deck[-1],
            holder_id=SYSTEM_HOLDER if solo else order[0],
            guesser_id=order[0] if solo else order[1 % len(order)],
        ))

    if game is GameType.CACHITO:
        dealt: Dict[str, Player] = {
            pid: replace(
                player,
                dice_count=starting_dice,
                dice=tuple(rng.roll_die() for _ in range(starting_dice)),
            )
            for pid, player in room.players.items()
        }
        return room.with_players(dealt).with_state(CachitoState(current_turn_id=order[0]))

    if game is GameType.GENERAL:
        reset = {
            pid: replace(player, general_level=0, is_thumb_master=False)
            for pid, player in room.players.items()
        }
        return room.with_players(reset).with_state(GeneralState(current_turn_id=order[0]))

    raise TypeError(f"Unknown game type: {game!r}")
