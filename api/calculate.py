"""
Calculator API: ROI numbers and smart suggestions as separate endpoints,
so a failing suggestion service never holds back the numeric result.
"""
import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException

from agents.advisor import SuggestionRequest, get_smart_suggestions
from tools import policy_store
from tools.additive_data import all_additives
from tools.farm_input import InvalidInput, parse_farm_input
from tools.report import (
    matrix_display,
    matrix_payload,
    matrix_summary,
    roi_display,
    roi_payload,
    roi_summary,
)
from tools.roi_calculator import calculate_roi, run_calculation

logger = logging.getLogger(__name__)

router = APIRouter()


def _validated(payload: dict[str, Any], additives, policy):
    try:
        return parse_farm_input(payload, additives, policy)
    except InvalidInput as e:
        logger.info("rejected calculation input: %s", e)
        raise HTTPException(status_code=422, detail=e.errors)


@router.get("/additives")
async def list_additives():
    additives, _ = policy_store.load()
    return {"additives": [a.as_dict() for a in all_additives(additives)]}


@router.post("/calculate")
async def calculate(payload: dict[str, Any] = Body(...)):
    additives, policy = policy_store.load()
    data = _validated(payload, additives, policy)
    mode, out = run_calculation(data, additives, policy)

    if mode == "matrix":
        return {
            "mode": mode,
            "result": matrix_payload(out),
            "display": matrix_display(out),
            "summary": matrix_summary(out, data.additive_type),
        }
    return {
        "mode": mode,
        "result": roi_payload(out),
        "display": roi_display(out),
        "summary": roi_summary(out, data.additive_type),
    }


@router.post("/suggestions")
async def suggestions(payload: dict[str, Any] = Body(...)):
    additives, policy = policy_store.load()
    data = _validated(payload, additives, policy)
    out = calculate_roi(data, additives=additives, policy=policy)

    req = SuggestionRequest(
        additive_type=data.additive_type,
        feed_cost_per_live_weight=data.feed_cost_per_live_weight,
        broiler_weight=data.broiler_weight,
        mortality_rate=data.mortality_rate,
        baseline_fcr=data.fcr,
        current_fcr=out.with_additive.improved_fcr_display,
        all_additives=tuple(all_additives(additives)),
    )
    text, fallback = await get_smart_suggestions(req)
    return {"suggestions": text, "fallback": fallback}
