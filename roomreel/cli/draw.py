from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from roomreel.rewards.catalog import RewardEntry
from roomreel.rewards.selector import select_reward, validate_catalog
from roomreel.utils.rng import RandomSource


@dataclass
class DrawStat:
    entry: RewardEntry
    expected: float
    observed: float
    count: int

    def to_dict(self) -> dict:
        return {
            "type": self.entry.type,
            "value": self.entry.value,
            "rarity": self.entry.rarity.value,
            "weight": self.entry.weight,
            "expected": self.expected,
            "observed": self.observed,
            "count": self.count,
        }


def simulate_draws(
    catalog: Sequence[RewardEntry], rng: RandomSource, n: int
) -> list[DrawStat]:
    """Runs `n` independent draws and compares observed with expected frequency."""
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}")
    total_weight = validate_catalog(catalog)
    counts = Counter(select_reward(catalog, rng=rng) for _ in range(n))
    return [
        DrawStat(
            entry=entry,
            expected=entry.weight / total_weight,
            observed=counts[entry] / n,
            count=counts[entry],
        )
        for entry in catalog
    ]
