"""
On-top ROI model: the additive goes into an unchanged diet, so only its FCR
and mortality effects are credited. Compares a no-additive baseline with the
with-additive flock over one production cycle.
"""
import logging
from dataclasses import dataclass
from typing import Mapping

from tools.additive_data import AdditiveReference, get_additive
from tools.farm_input import ApplicationType, FarmInput
from tools.feed_policy import DEFAULT_POLICY, CalculationPolicy
from tools.matrix_calculator import calculate_matrix_savings
from tools.scenario import (
    adjusted_mortality_rate,
    compute_scenario,
    cost_per_kg,
    roi_percent,
    safe_div,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BaselineCost:
    cost_per_kg_live_weight: float
    total_cost: float


@dataclass(frozen=True)
class AdditiveCost:
    cost_per_kg_live_weight: float
    total_cost: float
    improved_fcr: float

    @property
    def improved_fcr_display(self) -> float:
        return round(self.improved_fcr, 2)


@dataclass(frozen=True)
class Comparison:
    total_cost_savings: float
    roi: float
    cost_reduction_percentage: float

    @property
    def total_cost_savings_rounded(self) -> int:
        return round(self.total_cost_savings)


@dataclass(frozen=True)
class CalculationOutput:
    baseline: BaselineCost
    with_additive: AdditiveCost
    comparison: Comparison
    total_additive_cost: float
    adjusted_mortality_rate: float


def calculate_roi(
    data: FarmInput,
    fcr_improvement_percent: float | None = None,
    additives: Mapping[str, AdditiveReference] | None = None,
    policy: CalculationPolicy | None = None,
) -> CalculationOutput:
    policy = policy or DEFAULT_POLICY
    ref = get_additive(data.additive_type, additives)
    if fcr_improvement_percent is None:
        fcr_improvement_percent = ref.fcr_improvement_percent

    price_per_kg_feed = safe_div(data.feed_cost_per_live_weight, data.fcr) if data.fcr > 0 else 0.0
    improved_fcr = data.fcr * (1 - fcr_improvement_percent / 100)

    def scenario(fcr, mortality):
        return compute_scenario(
            fcr, mortality, data.number_of_broilers, data.broiler_weight,
            price_per_kg_feed, policy.mortality_feed_share,
        )

    base = scenario(data.fcr, data.mortality_rate)
    base_cost_per_kg = cost_per_kg(base.total_feed_cost, base.total_live_weight_kg)

    mortality = adjusted_mortality_rate(data.mortality_rate, ref.mortality_reduction_points)
    treated = scenario(improved_fcr, mortality)

    additive_kg = treated.total_feed_consumed_kg / 1000 * data.additive_inclusion_rate / 1000
    additive_cost = additive_kg * data.additive_cost
    total_with_additive = treated.total_feed_cost + additive_cost
    treated_cost_per_kg = cost_per_kg(total_with_additive, treated.total_live_weight_kg)

    savings = base.total_feed_cost - total_with_additive
    roi = roi_percent(savings, additive_cost)
    reduction = (
        (base_cost_per_kg - treated_cost_per_kg) / base_cost_per_kg * 100.0
        if base_cost_per_kg > 0 else 0.0
    )

    logger.debug(
        "on-top roi additive=%s savings=%.2f additive_cost=%.2f roi=%s",
        data.additive_type, savings, additive_cost, roi,
    )

    return CalculationOutput(
        baseline=BaselineCost(base_cost_per_kg, base.total_feed_cost),
        with_additive=AdditiveCost(treated_cost_per_kg, total_with_additive, improved_fcr),
        comparison=Comparison(savings, roi, reduction),
        total_additive_cost=additive_cost,
        adjusted_mortality_rate=mortality,
    )


def run_calculation(
    data: FarmInput,
    additives: Mapping[str, AdditiveReference] | None = None,
    policy: CalculationPolicy | None = None,
):
    """Dispatch on application type. Returns (mode, output)."""
    if data.application_type == ApplicationType.MATRIX:
        return ApplicationType.MATRIX.value, calculate_matrix_savings(data, additives, policy)
    return ApplicationType.ON_TOP.value, calculate_roi(data, additives=additives, policy=policy)
