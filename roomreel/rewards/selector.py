"""Weighted random reward draw"""

from logging import getLogger
from typing import Sequence

from roomreel.rewards.catalog import RewardEntry
from roomreel.utils.rng import RandomSource

logger = getLogger(__name__)


def validate_catalog(catalog: Sequence[RewardEntry]) -> int:
    """
    Checks every weight is a positive integer and returns the total weight.

    Raises:
        ValueError: If the catalog is empty or holds a non-positive weight.
    """
    if not catalog:
        raise ValueError("Reward catalog is empty")
    for entry in catalog:
        if isinstance(entry.weight, bool) or not isinstance(entry.weight, int) or entry.weight <= 0:
            raise ValueError(
                f"Reward weight must be a positive integer, got {entry.weight!r} for {entry.value!r}"
            )
    return sum(entry.weight for entry in catalog)


def select_reward(catalog: Sequence[RewardEntry], rng: RandomSource) -> RewardEntry:
    """
    Draws one entry with probability weight / total weight.

    r is drawn uniformly from [0, total) and each entry's weight is subtracted
    in catalog order; the first entry that brings r to <= 0 wins.

    Args:
        catalog: Reward entries in draw order, not mutated.
        rng: Random source; only `rng.random()` is used.

    Returns:
        The selected entry, always a member of `catalog`.
    """
    total_weight = validate_catalog(catalog)
    remainder = rng.random() * total_weight
    for entry in catalog:
        remainder -= entry.weight
        if remainder <= 0:
            return entry

    # Unreachable while rng.random() < 1.0
    logger.warning(
        f"Weighted draw selected nothing (remainder={remainder}, total={total_weight}); "
        "falling back to the first catalog entry"
    )
    return catalog[0]
