# Area: Core
"""Standard 52-card deck helpers for Higher-or-Lower."""

from __future__ import annotations
from typing import List

from ..random_source import RandomSource

SUITS = ("H", "D", "C", "S")
RANKS = ("2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A")

_FACE_RANKS = {"A": 1, "J": 11, "Q": 12, "K": 13}


def build_deck() -> List[str]:
    """Return the 52 cards in suit-major order, e.g. ``2H`` ... ``AS``."""
    return [f"{rank}{suit}" for suit in SUITS for rank in RANKS]


def shuffled_deck(rng: RandomSource) -> List[str]:
    return rng.shuffle(build_deck())


def card_rank(card: str) -> int:
    """
    Numeric rank of a card: ace 1, number cards their face, J/Q/K 11/12/13.

    Raises ValueError for strings that are not cards.
    """
    rank, suit = card[:-1], card[-1:]
    if suit not in SUITS:
        raise ValueError(f"Not a card: {card!r}")
    if rank in _FACE_RANKS:
        return _FACE_RANKS[rank]
    if rank not in RANKS:
        raise ValueError(f"Not a card: {card!r}")
    return int(rank)
