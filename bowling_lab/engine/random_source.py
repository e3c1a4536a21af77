"""
Deterministic randomness for plan generation.
FNV-1a seed derivation, a Mulberry32 stream, and the weighted pick / shuffle
primitives built on it. The same seed always yields the same plan.
"""
from typing import List, MutableSequence, Sequence, Tuple, TypeVar

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_FNV_OFFSET_BASIS = 0x811C9DC5
_FNV_PRIME = 0x01000193
_MULBERRY_INCREMENT = 0x6D2B79F5


def _imul(a: int, b: int) -> int:
    """32-bit wrapped multiply."""
    return (a * b) & _MASK32


def seed_from_string(text: str) -> int:
    """FNV-1a hash of the UTF-8 bytes of ``text`` as an unsigned 32-bit int."""
    h = _FNV_OFFSET_BASIS
    for byte in text.encode("utf-8"):
        h ^= byte
        h = _imul(h, _FNV_PRIME)
    return h


class Mulberry32:
    """Small fast PRNG producing floats in [0, 1)."""

    def __init__(self, seed: int):
        self.state = seed & _MASK32

    def next_float(self) -> float:
        self.state = (self.state + _MULBERRY_INCREMENT) & _MASK32
        t = self.state
        t = _imul(t ^ (t >> 15), t | 1)
        t = ((t + _imul(t ^ (t >> 7), t | 61)) & _MASK32) ^ t
        return ((t ^ (t >> 14)) & _MASK32) / 4294967296

    def __iter__(self):
        return self

    def __next__(self) -> float:
        return self.next_float()


def pick_weighted(stream: Mulberry32, items: Sequence[Tuple[T, float]]) -> T:
    """
    Select one item from [(item, weight), ...] with a single stream draw.

    Weights are subtracted in list order; the first item that takes the
    remainder to <= 0 wins. Float residue falls through to the last item.
    """
    if not items:
        raise ValueError("pick_weighted needs at least one item")
    total = sum(weight for _, weight in items)
    remainder = stream.next_float() * total
    for item, weight in items:
        remainder -= weight
        if remainder <= 0:
            return item
    return items[-1][0]


def shuffle_in_place(stream: Mulberry32, items: MutableSequence[T]) -> None:
    """Fisher-Yates shuffle consuming one draw per swap."""
    for i in range(len(items) - 1, 0, -1):
        j = int(stream.next_float() * (i + 1))
        items[i], items[j] = items[j], items[i]


def shuffled(stream: Mulberry32, items: Sequence[T]) -> List[T]:
    out = list(items)
    shuffle_in_place(stream, out)
    return out
