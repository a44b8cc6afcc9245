"""
Injectable sources of uniform randomness.

A random source is any zero-argument callable returning a float in [0, 1).
Experiments only ever consume randomness through such a callable, so tests
can substitute a seeded generator or a fixed sequence of draws.

Sub-streams derived from a base seed use a stable hash of their tag
(crc32, never the per-process randomised built-in hash()).
"""

import zlib
from typing import Callable, Iterable, List, Optional

import numpy as np

RandomSource = Callable[[], float]


def make_random_source(seed: Optional[int] = None) -> RandomSource:
    """
    Create a uniform [0, 1) source backed by a numpy Generator.

    Args:
        seed: Seed for reproducibility (None = fresh OS entropy)

    Returns:
        Callable returning one float per call
    """
    rng = np.random.default_rng(seed)

    def draw() -> float:
        return float(rng.random())

    return draw


def derive_seed(seed: int, tag: str) -> int:
    """Derive a stable 32-bit seed for a named sub-stream."""
    crc = zlib.crc32(tag.encode("utf-8")) & 0xFFFFFFFF
    return (int(seed) ^ crc) & 0xFFFFFFFF


def derive_random_source(seed: int, tag: str) -> RandomSource:
    """Independent random source for `tag`, reproducible from `seed`."""
    return make_random_source(derive_seed(seed, tag))


def checked_draw(source: RandomSource) -> float:
    """Draw one value and verify it lies in [0, 1)."""
    value = float(source())
    if not 0.0 <= value < 1.0:
        raise ValueError(f"Random source must return values in [0, 1), got {value}")
    return value


class SequenceRandomSource:
    """
    Replays a fixed sequence of draws.

    Useful for tests that need an exact outcome sequence. Raises
    IndexError once the sequence is exhausted unless `cycle` is set.
    """

    def __init__(self, values: Iterable[float], cycle: bool = False):
        self.values: List[float] = [float(v) for v in values]
        if not self.values:
            raise ValueError("SequenceRandomSource needs at least one value")
        self.cycle = cycle
        self.calls = 0

    def __call__(self) -> float:
        if self.calls >= len(self.values) and not self.cycle:
            raise IndexError(f"Random sequence exhausted after {self.calls} draws")
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value
