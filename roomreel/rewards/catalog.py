from dataclasses import dataclass

from roomreel.utils.schemas import Rarity, RewardPreview


@dataclass(frozen=True)
class RewardEntry:
    type: str
    value: str
    weight: int
    rarity: Rarity = Rarity.COMMON


# Common 70%, rare 25%, epic 5%
REWARD_CATALOG: tuple[RewardEntry, ...] = (
    RewardEntry("gift-card", "£3 Costa Coffee", 15),
    RewardEntry("voucher", "£5 Subway Voucher", 15),
    RewardEntry("credit", "£5 Amazon Credit", 15),
    RewardEntry("voucher", "Free McDonald's Meal", 10),
    RewardEntry("gift-card", "£4 Greggs Card", 10),
    RewardEntry("bundle", "Study Snacks Box", 5),
    RewardEntry("subscription", "Spotify Premium (3 Months)", 8, Rarity.RARE),
    RewardEntry("voucher", "£15 Domino's Voucher", 7, Rarity.RARE),
    RewardEntry("subscription", "Netflix (1 Month)", 5, Rarity.RARE),
    RewardEntry("credit", "£20 Amazon Voucher", 5, Rarity.RARE),
    RewardEntry("cash", "£50 PayPal Cash", 2, Rarity.EPIC),
    RewardEntry("voucher", "£100 ASOS Voucher", 2, Rarity.EPIC),
    RewardEntry("mystery", "Epic Student Bundle", 1, Rarity.EPIC),
)

REWARD_PREVIEWS: tuple[RewardPreview, ...] = (
    RewardPreview(icon="☕", name="Costa Cards", rarity=Rarity.COMMON),
    RewardPreview(icon="🎵", name="Spotify Premium", rarity=Rarity.RARE),
    RewardPreview(icon="🍕", name="Food Vouchers", rarity=Rarity.COMMON),
    RewardPreview(icon="💰", name="PayPal Cash", rarity=Rarity.EPIC),
    RewardPreview(icon="🛍️", name="ASOS Vouchers", rarity=Rarity.EPIC),
    RewardPreview(icon="🎮", name="Gaming Credit", rarity=Rarity.RARE),
)


def rarity_shares(catalog: tuple[RewardEntry, ...] = REWARD_CATALOG) -> dict[Rarity, float]:
    total = sum(entry.weight for entry in catalog)
    shares = {rarity: 0.0 for rarity in Rarity}
    for entry in catalog:
        shares[entry.rarity] += entry.weight / total
    return shares
