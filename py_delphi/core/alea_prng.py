"""
Seedable Alea PRNG used for every random decision during board generation.

Alea (Johannes Baagøe) takes any string seed, which lets a board be
reproduced from a short human-readable seed such as ``"delphi-42"``.
"""

from typing import List, MutableSequence, Sequence, TypeVar

T = TypeVar("T")

_TWO_POW_32 = 0x100000000
_TWO_POW_NEG_32 = 2.3283064365386963e-10


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


class _Mash:
    """Hash that folds seed characters into floats in [0, 1)."""

    def __init__(self):
        self.n = 0xEFC8249D

    def __call__(self, data) -> float:
        for char in str(data):
            self.n += ord(char)
            h = 0.02519603282416938 * self.n
            self.n = _uint32(h)
            h -= self.n
            h *= self.n
            self.n = _uint32(h)
            h -= self.n
            self.n += h * _TWO_POW_32
        return _uint32(self.n) * _TWO_POW_NEG_32


class AleaPRNG:
    """
    Alea pseudo-random generator.

    Besides ``random()`` it offers the handful of helpers the generators
    need: ``randrange``, an in-place Fisher-Yates ``shuffle`` and ``choice``.
    """

    def __init__(self, seed):
        """Initialize with a seed string, number or iterable of either."""
        self.seed = seed
        self.call_count = 0

        if hasattr(seed, "__iter__") and not isinstance(seed, str):
            parts = list(seed)
        else:
            parts = [seed]

        mash = _Mash()
        state = [mash(" "), mash(" "), mash(" ")]
        for part in parts:
            for i in range(3):
                state[i] -= mash(part)
                if state[i] < 0:
                    state[i] += 1

        self.s0, self.s1, self.s2 = state
        self.c = 1

    def random(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * _TWO_POW_NEG_32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def randrange(self, stop: int) -> int:
        """Return a uniform integer in [0, stop)."""
        if stop <= 0:
            raise ValueError(f"randrange stop must be positive, got {stop}")
        return int(self.random() * stop)

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Shuffle a sequence in place (Fisher-Yates)."""
        for i in range(len(items) - 1, 0, -1):
            j = int(self.random() * (i + 1))
            items[i], items[j] = items[j], items[i]

    def shuffled(self, items: Sequence[T]) -> List[T]:
        """Return a shuffled copy of a sequence."""
        result = list(items)
        self.shuffle(result)
        return result

    def choice(self, seq: Sequence[T]) -> T:
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[self.randrange(len(seq))]
