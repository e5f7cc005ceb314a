# Area: Core
"""
party_host._core.turn_sequencer — Circular turn rotation
========================================================

Computes who plays next, skipping disconnected players and, where a game
needs it, players with no dice left.
"""

from __future__ import annotations
from typing import Mapping, Sequence

from .models import Player


def is_eligible(player: Player, require_dice: bool) -> bool:
    """True if ``player`` can take a turn."""
    if not player.is_connected:
        return False
    return not require_dice or player.dice_count > 0


def next_turn(
    current_id: str,
    order: Sequence[str],
    players: Mapping[str, Player],
    require_dice: bool = False,
) -> str:
    """
    Return the first eligible id after ``current_id`` in ``order``.

    Wraps around and may come back to ``current_id`` itself. If
    ``current_id`` is not in ``order`` (it was just removed), the scan
    starts at the beginning instead.

    When nobody is eligible the result is a fallback rather than a real
    "next" player: ``current_id`` if it is still seated, otherwise
    ``order[0]`` (or ``current_id`` when ``order`` is empty).
    """
    def eligible(pid: str) -> bool:
        player = players.get(pid)
        return player is not None and is_eligible(player, require_dice)

    if current_id not in order:
        for pid in order:
            if eligible(pid):
                return pid
        return order[0] if order else current_id

    start = list(order).index(current_id)
    size = len(order)
    for step in range(1, size + 1):
        pid = order[(start + step) % size]
        if eligible(pid):
            return pid
    return current_id
