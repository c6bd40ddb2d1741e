"""
Matrix ROI model: the additive's nutrient matrix is credited in the diet, so
the 1-ton formulation is rebuilt around it instead of adding it on top.

The reference basket is scaled by the policy's adjustment table, the additive
is inserted as its own line, and the balancing ingredient absorbs whatever is
needed to bring the batch back to exactly batch_kg. The saving per ton is net
of the additive because the additive is priced inside the basket.
"""
import logging
from dataclasses import dataclass, replace
from typing import Iterable, Mapping

from tools.additive_data import AdditiveReference, get_additive
from tools.farm_input import FarmInput
from tools.feed_policy import DEFAULT_POLICY, CalculationPolicy, FeedIngredient
from tools.scenario import adjusted_mortality_rate, compute_scenario, roi_percent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatrixCalculationOutput:
    baseline_cost_per_ton: float
    reformulated_cost_per_ton: float
    savings_per_ton: float
    savings_per_cycle: float
    total_feed_consumed_tons: float
    total_additive_cost: float
    roi: float
    adjusted_mortality_rate: float
    reformulated_basket: tuple[FeedIngredient, ...]


def basket_cost_per_ton(basket: Iterable[FeedIngredient]) -> float:
    return sum(ing.cost() for ing in basket)


def reformulate_basket(
    policy: CalculationPolicy,
    additive_name: str,
    inclusion_rate_g_per_ton: float,
    additive_cost_per_kg: float,
) -> tuple[FeedIngredient, ...]:
    """Apply the matrix adjustments, add the additive line, rebalance to batch_kg."""
    names = policy.ingredient_names()
    if policy.balancing_ingredient not in names:
        raise ValueError(
            f"Balancing ingredient {policy.balancing_ingredient!r} is not in the basket"
        )

    lines = [
        replace(ing, quantity_kg=ing.quantity_kg * policy.ingredient_adjustments.get(ing.name, 1.0))
        for ing in policy.basket
    ]
    lines.append(FeedIngredient(
        name=additive_name,
        quantity_kg=inclusion_rate_g_per_ton / 1000,
        price_per_ton=additive_cost_per_kg * 1000,
    ))

    difference = policy.batch_kg - sum(ing.quantity_kg for ing in lines)
    lines = [
        replace(ing, quantity_kg=ing.quantity_kg + difference)
        if ing.name == policy.balancing_ingredient and ing is not lines[-1] else ing
        for ing in lines
    ]
    return tuple(lines)


def calculate_matrix_savings(
    data: FarmInput,
    additives: Mapping[str, AdditiveReference] | None = None,
    policy: CalculationPolicy | None = None,
) -> MatrixCalculationOutput:
    policy = (policy or DEFAULT_POLICY).with_prices(data.ingredient_prices)
    ref = get_additive(data.additive_type, additives)

    baseline_cost = basket_cost_per_ton(policy.basket)
    basket = reformulate_basket(
        policy, data.additive_type, data.additive_inclusion_rate, data.additive_cost
    )
    reformulated_cost = basket_cost_per_ton(basket)
    savings_per_ton = baseline_cost - reformulated_cost

    mortality = adjusted_mortality_rate(data.mortality_rate, ref.mortality_reduction_points)
    flock = compute_scenario(
        data.fcr, mortality, data.number_of_broilers, data.broiler_weight,
        0.0, policy.mortality_feed_share,
    )
    feed_tons = flock.total_feed_consumed_kg / 1000

    savings_per_cycle = feed_tons * savings_per_ton
    additive_cost = feed_tons * (data.additive_inclusion_rate / 1000) * data.additive_cost
    roi = roi_percent(savings_per_cycle, additive_cost)

    logger.debug(
        "matrix roi additive=%s savings_per_ton=%.4f savings_per_cycle=%.2f roi=%s",
        data.additive_type, savings_per_ton, savings_per_cycle, roi,
    )

    return MatrixCalculationOutput(
        baseline_cost_per_ton=baseline_cost,
        reformulated_cost_per_ton=reformulated_cost,
        savings_per_ton=savings_per_ton,
        savings_per_cycle=savings_per_cycle,
        total_feed_consumed_tons=feed_tons,
        total_additive_cost=additive_cost,
        roi=roi,
        adjusted_mortality_rate=mortality,
        reformulated_basket=basket,
    )
