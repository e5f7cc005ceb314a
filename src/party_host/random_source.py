# Area: Shared
"""
party_host.random_source — Injectable randomness
================================================

Dice rolls, deck shuffles, tie-break fallbacks, room codes and reconnect
tokens all go through a ``RandomSource`` so game logic can be replayed
deterministically in tests and demos.
"""

from __future__ import annotations
import random
import secrets
from typing import List, Optional, Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Protocol for every source of randomness the host uses."""

    def roll_die(self) -> int:
        """Return a face in 1..6."""
        ...

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """Return a shuffled copy of ``items``."""
        ...

    def choice(self, items: Sequence[T]) -> T:
        ...

    def token(self, nbytes: int = 16) -> str:
        """Return an opaque URL-safe string."""
        ...

    def room_code(self, alphabet: str, length: int) -> str:
        ...


class SystemRandomSource:
    """
    Default source.

    Game randomness uses ``random.Random`` (seedable for demos); tokens
    always come from ``secrets`` since they act as credentials.
    """

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def roll_die(self) -> int:
        return self._rng.randint(1, 6)

    def shuffle(self, items: Sequence[T]) -> List[T]:
        shuffled = list(items)
        self._rng.shuffle(shuffled)
        return shuffled

    def choice(self, items: Sequence[T]) -> T:
        return self._rng.choice(list(items))

    def token(self, nbytes: int = 16) -> str:
        return secrets.token_urlsafe(nbytes)

    def room_code(self, alphabet: str, length: int) -> str:
        return "".join(self._rng.choice(alphabet) for _ in range(length))


class ScriptedRandomSource:
    """
    Replays pre-recorded outcomes.

    Args:
        rolls: die faces returned by successive ``roll_die`` calls
        choices: indices used by successive ``choice`` calls
        codes: room codes returned by successive ``room_code`` calls
        deck: if given, ``shuffle`` returns this sequence instead of
            reordering its input

    Running out of scripted rolls or choices raises ``IndexError`` so a test
    notices it consumed more randomness than it expected. Tokens are
    sequential (``tok-1``, ``tok-2``, ...); unscripted room codes count up
    through the alphabet.
    """

    def __init__(
        self,
        rolls: Optional[Sequence[int]] = None,
        choices: Optional[Sequence[int]] = None,
        codes: Optional[Sequence[str]] = None,
        deck: Optional[Sequence[str]] = None,
    ):
        self._rolls = list(rolls or [])
        self._choices = list(choices or [])
        self._codes = list(codes or [])
        self._deck = list(deck) if deck is not None else None
        self._token_counter = 0
        self._code_counter = 0

    def roll_die(self) -> int:
        if not self._rolls:
            raise IndexError("No scripted die rolls left")
        return self._rolls.pop(0)

    def shuffle(self, items: Sequence[T]) -> List[T]:
        if self._deck is not None:
            return list(self._deck)
        return list(items)

    def choice(self, items: Sequence[T]) -> T:
        if not self._choices:
            raise IndexError("No scripted choices left")
        return list(items)[self._choices.pop(0)]

    def token(self, nbytes: int = 16) -> str:
        self._token_counter += 1
        return f"tok-{self._token_counter}"

    def room_code(self, alphabet: str, length: int) -> str:
        if self._codes:
            return self._codes.pop(0)
        # Deterministic fallback: successive codes count up in ``alphabet``.
        n, self._code_counter = self._code_counter, self._code_counter + 1
        chars = []
        for _ in range(length):
            n, digit = divmod(n, len(alphabet))
            chars.append(alphabet[digit])
        return "".join(reversed(chars))
