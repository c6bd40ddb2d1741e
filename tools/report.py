"""
Display formatting for calculator results: plain-text summaries and
JSON-safe payloads. Infinite ROI renders as "∞" in text and null in JSON.
"""
import math

from tools.matrix_calculator import MatrixCalculationOutput
from tools.roi_calculator import CalculationOutput


def money(x: float, digits: int = 2) -> str:
    sign = "-" if x < 0 else ""
    return f"{sign}${abs(x):,.{digits}f}"


def pct(x: float) -> str:
    return "∞ %" if math.isinf(x) else f"{x:.1f} %"


def ratio(roi_pct: float) -> str:
    return "∞ : 1" if math.isinf(roi_pct) else f"{roi_pct / 100:.1f} : 1"


def _finite(x: float) -> float | None:
    return None if math.isinf(x) or math.isnan(x) else x


def roi_payload(out: CalculationOutput) -> dict:
    return {
        "baseline": {
            "cost_per_kg_live_weight": out.baseline.cost_per_kg_live_weight,
            "total_cost": out.baseline.total_cost,
        },
        "with_additive": {
            "cost_per_kg_live_weight": out.with_additive.cost_per_kg_live_weight,
            "total_cost": out.with_additive.total_cost,
            "improved_fcr": out.with_additive.improved_fcr_display,
        },
        "comparison": {
            "total_cost_savings": out.comparison.total_cost_savings_rounded,
            "total_cost_savings_exact": out.comparison.total_cost_savings,
            "roi": _finite(out.comparison.roi),
            "cost_reduction_percentage": out.comparison.cost_reduction_percentage,
        },
        "total_additive_cost": out.total_additive_cost,
        "adjusted_mortality_rate": out.adjusted_mortality_rate,
    }


def matrix_payload(out: MatrixCalculationOutput) -> dict:
    return {
        "baseline_cost_per_ton": round(out.baseline_cost_per_ton, 2),
        "reformulated_cost_per_ton": round(out.reformulated_cost_per_ton, 2),
        "savings_per_ton": round(out.savings_per_ton, 2),
        "savings_per_cycle": round(out.savings_per_cycle),
        "total_feed_consumed_tons": out.total_feed_consumed_tons,
        "total_additive_cost": out.total_additive_cost,
        "roi": _finite(out.roi),
        "adjusted_mortality_rate": out.adjusted_mortality_rate,
        "reformulated_basket": [
            {"name": ing.name, "quantity_kg": ing.quantity_kg, "price_per_ton": ing.price_per_ton}
            for ing in out.reformulated_basket
        ],
    }


def roi_display(out: CalculationOutput) -> dict:
    return {
        "baseline_cost_per_kg": money(out.baseline.cost_per_kg_live_weight, 3),
        "with_additive_cost_per_kg": money(out.with_additive.cost_per_kg_live_weight, 3),
        "improved_fcr": f"{out.with_additive.improved_fcr_display:g}",
        "cost_reduction": pct(out.comparison.cost_reduction_percentage),
        "total_cost_savings": money(out.comparison.total_cost_savings_rounded, 0),
        "roi": ratio(out.comparison.roi),
    }


def matrix_display(out: MatrixCalculationOutput) -> dict:
    return {
        "baseline_cost_per_ton": money(out.baseline_cost_per_ton),
        "savings_per_ton": money(out.savings_per_ton),
        "savings_per_cycle": money(round(out.savings_per_cycle), 0),
        "roi": ratio(out.roi),
    }


def roi_summary(out: CalculationOutput, additive_type: str) -> str:
    d = roi_display(out)
    return f"""
Key Metrics (On-Top Application): {additive_type}
---------------------------
Cost per kg live weight: {d['baseline_cost_per_kg']} baseline | {d['with_additive_cost_per_kg']} with additive
Improved FCR: {d['improved_fcr']}
Cost reduction: {d['cost_reduction']}
Total cost savings: {d['total_cost_savings']}
Return on investment: {d['roi']}
""".strip()


def matrix_summary(out: MatrixCalculationOutput, additive_type: str) -> str:
    d = matrix_display(out)
    return f"""
Feed Cost Savings (Matrix Application): {additive_type}
---------------------------
Baseline feed cost: {d['baseline_cost_per_ton']}/ton
Savings per ton of complete feed: {d['savings_per_ton']}
Savings per cycle: {d['savings_per_cycle']}
Return on investment: {d['roi']}
""".strip()
