from collections import Counter
from unittest.mock import patch

import pytest

from roomreel.rewards.catalog import REWARD_CATALOG, RewardEntry, rarity_shares
from roomreel.rewards.selector import select_reward, validate_catalog
from roomreel.utils.rng import get_rng
from roomreel.utils.schemas import Rarity


class FixedDraw:
    def __init__(self, value: float) -> None:
        self.value = value

    def random(self) -> float:
        return self.value

    def uniform(self, a: float, b: float) -> float:
        return a


def test_catalog_weights():
    assert [e.weight for e in REWARD_CATALOG] == [15, 15, 15, 10, 10, 5, 8, 7, 5, 5, 2, 2, 1]
    assert validate_catalog(REWARD_CATALOG) == 100


def test_rarity_shares():
    shares = rarity_shares()
    assert shares[Rarity.COMMON] == pytest.approx(0.70)
    assert shares[Rarity.RARE] == pytest.approx(0.25)
    assert shares[Rarity.EPIC] == pytest.approx(0.05)


def test_frequencies_converge_to_weights():
    rng = get_rng(1234)
    n = 100_000
    counts = Counter(select_reward(REWARD_CATALOG, rng=rng) for _ in range(n))
    for entry in REWARD_CATALOG:
        assert counts[entry] / n == pytest.approx(entry.weight / 100, abs=0.005)


def test_always_returns_catalog_member():
    for seed in range(200):
        entry = select_reward(REWARD_CATALOG, rng=get_rng(seed))
        assert entry is not None
        assert entry in REWARD_CATALOG


def test_lowest_draw_selects_first():
    assert select_reward(REWARD_CATALOG, rng=FixedDraw(0.0)) is REWARD_CATALOG[0]


def test_highest_draw_selects_last():
    assert select_reward(REWARD_CATALOG, rng=FixedDraw(0.999999)) is REWARD_CATALOG[-1]


def test_boundary_goes_to_earlier_entry():
    catalog = (RewardEntry("a", "A", 1), RewardEntry("b", "B", 1))
    assert select_reward(catalog, rng=FixedDraw(0.5)) is catalog[0]
    assert select_reward(catalog, rng=FixedDraw(0.51)) is catalog[1]


def test_out_of_range_draw_falls_back_to_first():
    with patch("roomreel.rewards.selector.logger") as mock_logger:
        entry = select_reward(REWARD_CATALOG, rng=FixedDraw(1.5))
    assert entry is REWARD_CATALOG[0]
    mock_logger.warning.assert_called_once()


def test_draws_do_not_mutate_catalog():
    catalog = list(REWARD_CATALOG)
    for seed in range(20):
        select_reward(catalog, rng=get_rng(seed))
    assert tuple(catalog) == REWARD_CATALOG


@pytest.mark.parametrize(
    "catalog",
    [
        (),
        (RewardEntry("a", "A", 0),),
        (RewardEntry("a", "A", 3), RewardEntry("b", "B", -1)),
        (RewardEntry("a", "A", 1.5),),
        (RewardEntry("a", "A", True),),
    ],
)
def test_invalid_catalog_rejected(catalog):
    with pytest.raises(ValueError):
        select_reward(catalog, rng=get_rng(0))
