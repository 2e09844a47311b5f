"""Seedable random source shared by frame scoring and reward draws."""

from logging import getLogger
from random import Random
from typing import Protocol

logger = getLogger(__name__)


class RandomSource(Protocol):
    def random(self) -> float: ...

    def uniform(self, a: float, b: float) -> float: ...


def get_rng(seed: int | None = None) -> Random:
    """
    Returns a fresh `random.Random`. With `seed=None` the generator is seeded
    from OS entropy; pass an int to make draws and jitter reproducible.
    """
    if seed is not None:
        logger.debug(f"Seeding random source with {seed}")
    return Random(seed)
