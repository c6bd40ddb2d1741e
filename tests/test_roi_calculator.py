import math

import pytest

from tools.additive_data import AdditiveReference
from tools.farm_input import FarmInput, parse_farm_input
from tools.feed_policy import CalculationPolicy
from tools.matrix_calculator import MatrixCalculationOutput
from tools.roi_calculator import CalculationOutput, calculate_roi, run_calculation


def test_reference_scenario(farm_input):
    out = calculate_roi(farm_input, 2.5)

    assert out.baseline.total_cost == pytest.approx(17424)
    assert out.baseline.cost_per_kg_live_weight == pytest.approx(0.726)

    assert out.adjusted_mortality_rate == pytest.approx(2.5)
    assert out.with_additive.improved_fcr == pytest.approx(1.56)
    assert out.total_additive_cost == pytest.approx(57.33)
    assert out.with_additive.total_cost == pytest.approx(17256.33)
    assert out.with_additive.cost_per_kg_live_weight == pytest.approx(17256.33 / 24375)

    assert out.comparison.total_cost_savings == pytest.approx(167.67)
    assert out.comparison.total_cost_savings_rounded == 168
    assert out.comparison.roi == pytest.approx(167.67 / 57.33 * 100)
    assert out.comparison.roi == pytest.approx(292.5, abs=0.1)
    assert out.comparison.cost_reduction_percentage == pytest.approx(
        (0.726 - 17256.33 / 24375) / 0.726 * 100
    )


def test_fcr_improvement_defaults_to_reference_table(farm_input):
    assert calculate_roi(farm_input) == calculate_roi(farm_input, 2.5)


def test_zero_fcr_gives_zero_costs_not_errors(farm_input):
    data = farm_input.model_copy(update={"fcr": 0.0})
    out = calculate_roi(data, 2.5)
    assert out.baseline.cost_per_kg_live_weight == 0
    assert out.with_additive.cost_per_kg_live_weight == 0
    assert not math.isnan(out.comparison.roi)
    assert out.comparison.cost_reduction_percentage == 0


def test_full_mortality_gives_zero_cost_per_kg(farm_input):
    data = farm_input.model_copy(update={"mortality_rate": 100.0})
    out = calculate_roi(data, 2.5)
    # Pro Solution drops mortality to 98.5%, so only the baseline flock is wiped out.
    assert out.baseline.cost_per_kg_live_weight == 0
    assert out.comparison.cost_reduction_percentage == 0

    table = {"Nothing": AdditiveReference("Nothing", 100, 10, 1.0)}
    data = data.model_copy(update={"additive_type": "Nothing"})
    out = calculate_roi(data, additives=table)
    assert out.with_additive.cost_per_kg_live_weight == 0


def test_free_additive_with_savings_is_infinite_roi(farm_input):
    data = FarmInput.model_construct(**{**farm_input.model_dump(), "additive_cost": 0.0})
    out = calculate_roi(data, 2.5)
    assert out.total_additive_cost == 0
    assert out.comparison.total_cost_savings > 0
    assert out.comparison.roi == math.inf


def test_free_additive_without_savings_is_zero_roi(farm_input):
    table = {"Inert": AdditiveReference("Inert", 100, 0.0, 0.0)}
    data = FarmInput.model_construct(
        **{**farm_input.model_dump(), "additive_type": "Inert", "additive_cost": 0.0}
    )
    out = calculate_roi(data, additives=table)
    assert out.comparison.total_cost_savings == 0
    assert out.comparison.roi == 0


def test_additive_without_mortality_effect_keeps_rate(base_input):
    data = parse_farm_input({**base_input, "additive_type": "Belfeed"})
    out = calculate_roi(data)
    assert out.adjusted_mortality_rate == 4


def test_mortality_reduction_clamped_at_zero(base_input):
    data = parse_farm_input({
        **base_input, "additive_type": "Jefo P(OA+EO)",
        "application_type": None, "mortality_rate": 1,
    })
    assert calculate_roi(data).adjusted_mortality_rate == 0


def test_mortality_feed_share_from_policy(farm_input):
    default = calculate_roi(farm_input)
    no_waste = calculate_roi(farm_input, policy=CalculationPolicy(mortality_feed_share=0.0))
    assert no_waste.baseline.total_cost == pytest.approx(38400 * 0.45)
    assert no_waste.baseline.total_cost < default.baseline.total_cost


def test_calculation_is_idempotent(farm_input):
    assert calculate_roi(farm_input) == calculate_roi(farm_input)


def test_run_calculation_dispatches_on_application_type(base_input):
    mode, out = run_calculation(parse_farm_input(base_input))
    assert mode == "on-top"
    assert isinstance(out, CalculationOutput)

    mode, out = run_calculation(parse_farm_input({**base_input, "application_type": "matrix"}))
    assert mode == "matrix"
    assert isinstance(out, MatrixCalculationOutput)
