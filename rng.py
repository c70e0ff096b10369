import random
from typing import Callable

MASK32 = 0xFFFFFFFF
GOLDEN_GAMMA = 0x6D2B79F5
TWO_POW_32 = 4294967296

# Anything that returns floats in [0, 1) on each call.
RandomSource = Callable[[], float]


def _imul(a: int, b: int) -> int:
    return (a * b) & MASK32


class Mulberry32:
    """Seeded mulberry32 generator.

    Bit-compatible with the common JavaScript implementation, so a seed packet
    produced elsewhere reproduces the same maze here.
    """

    def __init__(self, seed: int):
        self.state = seed & MASK32

    def next_uint32(self) -> int:
        self.state = (self.state + GOLDEN_GAMMA) & MASK32
        t = self.state
        t = _imul(t ^ (t >> 15), t | 1)
        t = ((t + _imul(t ^ (t >> 7), t | 61)) & MASK32) ^ t
        return (t ^ (t >> 14)) & MASK32

    def next(self) -> float:
        return self.next_uint32() / TWO_POW_32

    __call__ = next


def system_random() -> RandomSource:
    return random.random


def random_index(source: RandomSource, n: int) -> int:
    return int(source() * n)


def random_seed(source: RandomSource, ceiling: int) -> int:
    return int(source() * ceiling)
