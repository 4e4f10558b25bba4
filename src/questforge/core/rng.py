"""Deterministic RNG helpers: a random.Random wrapper and a xorshift64 stream."""
from __future__ import annotations

import secrets
from datetime import date
from random import Random
from typing import MutableSequence, Protocol, Sequence, Tuple, TypeVar

T_co = TypeVar("T_co")

_MASK_64 = (1 << 64) - 1
# xorshift has a fixed point at zero, so a zero seed is replaced with this.
_ZERO_SEED_REPLACEMENT = 0x9E3779B97F4A7C15


class RandomSource(Protocol):
    """The draws the resolution engine consumes."""

    def randint(self, a: int, b: int) -> int: ...

    def random(self) -> float: ...

    def choice(self, seq: Sequence[T_co]) -> T_co: ...


class RNG:
    """Wrapper around random.Random that provides deterministic helpers.

    Passing ``seed=None`` draws the seed from the OS entropy pool, which is what
    gameplay rolls use; the chosen seed stays readable on ``rng.seed`` so a run
    can be replayed.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = secrets.randbits(63) if seed is None else seed
        self._random = Random(self.seed)

    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that a <= N <= b."""
        return self._random.randint(a, b)

    def random(self) -> float:
        """Return the next random floating point number in the range [0.0, 1.0)."""
        return self._random.random()

    def choice(self, seq: Sequence[T_co]) -> T_co:
        """Return a random element from the non-empty sequence."""
        if not seq:
            raise ValueError("Cannot choose from an empty sequence.")
        return self._random.choice(seq)

    def shuffle(self, seq: MutableSequence[T_co]) -> None:
        """Shuffle the sequence in-place."""
        self._random.shuffle(seq)


def xorshift64_next(state: int) -> Tuple[int, int]:
    """Advance a xorshift64 state, returning ``(value, new_state)``."""
    x = state & _MASK_64
    if x == 0:
        x = _ZERO_SEED_REPLACEMENT
    x ^= (x << 13) & _MASK_64
    x ^= x >> 7
    x ^= (x << 17) & _MASK_64
    return x, x


def date_seed(day: date) -> int:
    """Seed used for daily-rotating content (``year*10000 + month*100 + day``)."""
    return day.year * 10000 + day.month * 100 + day.day


class XorShiftRNG:
    """Reproducible xorshift64 stream with the same helpers as :class:`RNG`."""

    def __init__(self, seed: int) -> None:
        self.seed = seed
        self._state = seed & _MASK_64

    @classmethod
    def for_date(cls, day: date) -> "XorShiftRNG":
        return cls(date_seed(day))

    def next_u64(self) -> int:
        value, self._state = xorshift64_next(self._state)
        return value

    def random(self) -> float:
        """Return a float in [0.0, 1.0) built from the top 53 bits."""
        return (self.next_u64() >> 11) / float(1 << 53)

    def randint(self, a: int, b: int) -> int:
        if b < a:
            raise ValueError(f"Empty range for randint({a}, {b}).")
        return a + self.next_u64() % (b - a + 1)

    def choice(self, seq: Sequence[T_co]) -> T_co:
        if not seq:
            raise ValueError("Cannot choose from an empty sequence.")
        return seq[self.randint(0, len(seq) - 1)]

    def shuffle(self, seq: MutableSequence[T_co]) -> None:
        # Fisher-Yates, so the permutation depends only on the stream.
        for i in range(len(seq) - 1, 0, -1):
            j = self.randint(0, i)
            seq[i], seq[j] = seq[j], seq[i]
