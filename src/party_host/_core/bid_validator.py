# Area: Core
"""
party_host._core.bid_validator — Cachito raise rules
====================================================

Pure predicate deciding whether a candidate bid is a legal raise over the
standing bid. Face 1 is the ace (wildcard) face.

Normal rules, with a standing bid of quantity ``q``:
- to aces from a normal bid: face 1, quantity >= ceil(q / 2)
- from aces to a normal bid: face != 1, quantity >= 2q + 1
- aces to aces: quantity > q
- normal to normal: quantity > q with face >= current face, or the same
  quantity with a strictly higher face

Obligado (end-game) rules: aces are never legal; the opening bid may be any
quantity on a non-ace face; raises keep the face and increase the quantity.
"""

from __future__ import annotations
from typing import Optional

from .models import Bid

ACE_FACE = 1
MIN_FACE = 1
MAX_FACE = 6


def _face_in_range(face: int) -> bool:
    return MIN_FACE <= face <= MAX_FACE


def _ceil_half(quantity: int) -> int:
    return -(-quantity // 2)


def is_legal_raise(current: Optional[Bid], candidate: Bid, obligado: bool) -> bool:
    """
    Check a candidate bid against the standing one.

    Args:
        current: standing bid, or None at the start of a round
        candidate: the bid being proposed (its ``player_id`` is ignored)
        obligado: whether the end-game ruleset is active

    Returns:
        True if the candidate may replace ``current``
    """
    if not _face_in_range(candidate.face_value) or candidate.quantity < 1:
        return False

    if obligado:
        if candidate.is_aces or candidate.face_value == ACE_FACE:
            return False
        if current is None:
            return True
        return (
            candidate.face_value == current.face_value
            and candidate.quantity > current.quantity
        )

    if candidate.is_aces and candidate.face_value != ACE_FACE:
        return False

    if current is None:
        return True

    if candidate.is_aces and not current.is_aces:
        return candidate.quantity >= _ceil_half(current.quantity)

    if not candidate.is_aces and current.is_aces:
        if candidate.face_value == ACE_FACE:
            return False
        return candidate.quantity >= current.quantity * 2 + 1

    if candidate.is_aces and current.is_aces:
        return candidate.quantity > current.quantity

    # normal to normal
    if candidate.quantity > current.quantity:
        return candidate.face_value >= current.face_value
    if candidate.quantity == current.quantity:
        return candidate.face_value > current.face_value
    return False
