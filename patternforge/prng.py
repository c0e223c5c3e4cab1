"""Seeded linear-congruential random stream.

Every renderer draws its randomness from a ``Prng`` so that a seed fully
determines the output. The recurrence uses integer arithmetic only, so the
sequence is identical on every platform.
"""

from .errors import InvalidParameter

_A = 1103515245
_C = 12345
_M = 2 ** 31
_MASK = _M - 1


class Prng:
    """Deterministic number stream: ``state = (state * A + C) mod 2^31``."""

    __slots__ = ("state",)

    def __init__(self, seed):
        self.state = int(seed) & _MASK

    def next(self):
        """Advance the stream and return a float in [0, 1)."""
        self.state = (self.state * _A + _C) & _MASK
        return self.state / _M

    def uniform(self, lo, hi):
        return lo + self.next() * (hi - lo)

    def randint(self, n):
        """Integer in [0, n)."""
        return int(self.next() * n)

    def pick(self, seq):
        if len(seq) == 0:
            raise InvalidParameter("cannot pick from an empty sequence")
        return seq[int(self.next() * len(seq))]

    def shuffle(self, seq):
        """Return a shuffled copy of ``seq`` (Fisher-Yates, one draw per swap)."""
        result = list(seq)
        for i in range(len(result) - 1, 0, -1):
            j = int(self.next() * (i + 1))
            result[i], result[j] = result[j], result[i]
        return result

    def fork(self, salt=0):
        """Independent stream seeded from this one.

        Consumes exactly one draw, so the parent's sequence stays
        reproducible regardless of how much the child is used.
        """
        self.next()
        mixed = (self.state ^ ((salt * 0x9E3779B1) & 0xFFFFFFFF)) * 0x85EBCA6B
        mixed ^= mixed >> 13
        return Prng(mixed & _MASK)
