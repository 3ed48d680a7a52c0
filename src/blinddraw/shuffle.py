"""
Reproducible shuffling.

A seeded linear-congruential generator drives a Fisher-Yates shuffle so a given
seed and input order always give the same result.
"""
import random
from typing import Callable, List, Optional, Sequence, TypeVar

T = TypeVar('T')

LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2 ** 32
RANDOM_SEED_LIMIT = 10 ** 9

_system_random = random.SystemRandom()


def lcg(seed: int) -> Callable[[], float]:
    """Return a generator of floats in [0, 1) seeded with `seed`."""
    state = seed

    def next_value() -> float:
        nonlocal state
        state = (state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return state / LCG_MODULUS

    return next_value


def random_seed() -> int:
    return _system_random.randrange(RANDOM_SEED_LIMIT)


def shuffle(items: Sequence[T], seed: Optional[int] = None) -> List[T]:
    """Return a shuffled copy of `items`. Without a seed an OS-random one is used."""
    result = list(items)
    rand = lcg(random_seed() if seed is None else seed)
    for i in range(len(result) - 1, 0, -1):
        j = int(rand() * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result
