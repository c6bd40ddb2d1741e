"""
Flock scenario cost model.

Converts an (FCR, mortality) pair plus flock size, market weight and feed
price into live weight produced, feed consumed and feed cost. Feed eaten by
birds that die before market is charged to the flock using the mortality
feed share from the policy.
"""
from dataclasses import dataclass

from tools.feed_policy import MORTALITY_FEED_SHARE


@dataclass(frozen=True)
class ScenarioResult:
    surviving_birds: float
    dead_birds: float
    total_live_weight_kg: float
    total_feed_consumed_kg: float
    feed_for_mortalities_kg: float
    total_feed_cost: float


def safe_div(a: float, b: float, default: float = 0.0) -> float:
    return a / b if b else default


def cost_per_kg(total_cost: float, live_weight_kg: float) -> float:
    """Cost per kg of live weight; 0 when nothing reaches market."""
    return safe_div(total_cost, live_weight_kg) if live_weight_kg > 0 else 0.0


def compute_scenario(
    fcr: float,
    mortality_rate_percent: float,
    number_of_broilers: float,
    broiler_weight_kg: float,
    price_per_kg_feed: float,
    mortality_feed_share: float = MORTALITY_FEED_SHARE,
) -> ScenarioResult:
    surviving = number_of_broilers * (1 - mortality_rate_percent / 100)
    dead = number_of_broilers - surviving
    live_weight = surviving * broiler_weight_kg

    feed_for_survivors = surviving * broiler_weight_kg * fcr
    feed_for_mortalities = dead * broiler_weight_kg * fcr * mortality_feed_share
    total_feed = feed_for_survivors + feed_for_mortalities

    return ScenarioResult(
        surviving_birds=surviving,
        dead_birds=dead,
        total_live_weight_kg=live_weight,
        total_feed_consumed_kg=total_feed,
        feed_for_mortalities_kg=feed_for_mortalities,
        total_feed_cost=total_feed * price_per_kg_feed,
    )


def adjusted_mortality_rate(mortality_rate: float, reduction_points: float) -> float:
    """Apply an additive's mortality reduction (percentage points), floored at 0."""
    return max(0.0, mortality_rate - reduction_points)


def roi_percent(net_savings: float, investment: float) -> float:
    """
    Net savings over investment, as a percentage.
    Free additive with positive savings is infinite ROI; otherwise 0.
    """
    if investment > 0:
        return net_savings / investment * 100.0
    return float("inf") if net_savings > 0 else 0.0
