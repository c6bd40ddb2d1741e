"""
Policy constants for the flock and feed-formulation models.

Everything here is tuning data rather than control flow: the share of feed
eaten by birds that die before market, the reference 1-ton broiler diet, and
the matrix reformulation table. Build a new CalculationPolicy to model a
different diet or reformulation strategy.
"""
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping

# Birds that die before market eat, on average, this share of the feed a
# surviving bird needs to reach market weight.
MORTALITY_FEED_SHARE = 0.2

BATCH_KG = 1000.0


@dataclass(frozen=True)
class FeedIngredient:
    name: str
    quantity_kg: float  # within a BATCH_KG batch
    price_per_ton: float | None

    def cost(self) -> float:
        return self.quantity_kg * (self.price_per_ton or 0.0) / 1000


REFERENCE_BASKET = (
    FeedIngredient("Corn", 488.2, 232),
    FeedIngredient("Soybean meal", 434.3, 624),
    FeedIngredient("Soybean oil", 44.6, 1600),
    FeedIngredient("Synthetic AA", 6.5, 2854),
    FeedIngredient("Other raw materials", 26.4, 10),
)

# Multiplicative quantity factors applied when the additive's nutrient matrix
# is credited in the formulation.
MATRIX_ADJUSTMENTS: Mapping[str, float] = MappingProxyType({
    "Corn": 1.036,                  # +3.6%
    "Soybean meal": 0.956,          # -4.4%
    "Soybean oil": 0.93,            # -7.0%
    "Synthetic AA": 0.964,          # -3.6%
    "Other raw materials": 1.006,   # +0.6%
})


@dataclass(frozen=True)
class CalculationPolicy:
    mortality_feed_share: float = MORTALITY_FEED_SHARE
    basket: tuple[FeedIngredient, ...] = REFERENCE_BASKET
    ingredient_adjustments: Mapping[str, float] = field(default_factory=lambda: MATRIX_ADJUSTMENTS)
    balancing_ingredient: str = "Corn"
    batch_kg: float = BATCH_KG

    def __post_init__(self):
        names = [ing.name for ing in self.basket]
        dupes = sorted({n for n in names if names.count(n) > 1})
        if dupes:
            raise ValueError(f"Duplicate basket ingredients: {', '.join(dupes)}")
        total = sum(ing.quantity_kg for ing in self.basket)
        if abs(total - self.batch_kg) > 1e-6:
            raise ValueError(f"Basket totals {total:g} kg, expected {self.batch_kg:g} kg")

    def ingredient_names(self) -> set[str]:
        return {ing.name for ing in self.basket}

    def with_prices(self, prices: Mapping[str, float] | None) -> "CalculationPolicy":
        """Return a copy whose basket uses the given $/ton prices where provided."""
        if not prices:
            return self
        basket = tuple(
            replace(ing, price_per_ton=prices[ing.name]) if ing.name in prices else ing
            for ing in self.basket
        )
        return replace(self, basket=basket)


DEFAULT_POLICY = CalculationPolicy()
