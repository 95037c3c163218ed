"""Seeded pseudorandom numbers that reproduce across runtimes.

Maze layouts must be identical every time a depth is regenerated, so this
module avoids `random` (whose algorithm is an implementation detail) and uses
fixed-width 32-bit integer mixing instead:

- `hash_string_to_seed()` is 32-bit FNV-1a over UTF-16 code units.
- `next_random()` is one step of mulberry32.

Usage:

    from core.rng import Mulberry32

    rand = Mulberry32.from_key("depth:3")
    value = rand()  # float in [0, 1)
"""

from __future__ import annotations

from typing import Tuple, Union

MASK32 = 0xFFFFFFFF
FNV_OFFSET = 2166136261
FNV_PRIME = 16777619
MULBERRY_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


def hash_string_to_seed(text: str) -> int:
    """Hash `text` to an unsigned 32-bit integer (FNV-1a)."""
    data = text.encode("utf-16-le")
    h = FNV_OFFSET
    for i in range(0, len(data), 2):
        h ^= data[i] | (data[i + 1] << 8)
        h = (h * FNV_PRIME) & MASK32
    return h


def seed(value: Union[str, int]) -> int:
    """Return the initial generator state for a string key or an integer."""
    if isinstance(value, str):
        return hash_string_to_seed(value)
    return int(value) & MASK32


def next_random(state: int) -> Tuple[float, int]:
    """Advance the generator: returns (value in [0, 1), new state)."""
    state = (state + MULBERRY_INCREMENT) & MASK32
    t = state
    t = ((t ^ (t >> 15)) * (t | 1)) & MASK32
    t ^= (t + (((t ^ (t >> 7)) * (t | 61)) & MASK32)) & MASK32
    t = (t ^ (t >> 14)) & MASK32
    return t / _TWO_POW_32, state


class Mulberry32:
    """Stateful wrapper; calling the instance returns the next float."""

    def __init__(self, value: Union[str, int] = 0) -> None:
        self.state = seed(value)

    @classmethod
    def from_key(cls, key: str) -> "Mulberry32":
        return cls(key)

    def __call__(self) -> float:
        value, self.state = next_random(self.state)
        return value
