"""
Random number generation utilities.

Every random decision in board generation goes through an AleaPRNG so that
a board can be reproduced from its seed. Python's random and NumPy's random
are not used by the generators.
"""

import uuid
from typing import Optional

from ..core.alea_prng import AleaPRNG

# Process-wide PRNG instance
_prng: Optional[AleaPRNG] = None


def new_seed() -> str:
    """Return a fresh short random seed string."""
    return uuid.uuid4().hex[:8]


def set_random_seed(seed: str) -> None:
    """
    Reseed the process-wide PRNG.

    Args:
        seed: Seed string to use
    """
    global _prng
    _prng = AleaPRNG(seed)


def get_prng() -> AleaPRNG:
    """
    Get the process-wide PRNG instance.

    An unseeded process gets a random seed on first use, so boards differ
    between runs unless ``set_random_seed`` was called.

    Returns:
        AleaPRNG instance
    """
    global _prng
    if _prng is None:
        _prng = AleaPRNG(new_seed())
    return _prng


def resolve_prng(
    seed: Optional[str] = None, prng: Optional[AleaPRNG] = None
) -> AleaPRNG:
    """
    Pick the PRNG a generator should draw from.

    An explicit ``prng`` wins, then a private PRNG built from ``seed``,
    then the process-wide instance.
    """
    if prng is not None:
        return prng
    if seed is not None:
        return AleaPRNG(seed)
    return get_prng()
