"""
Reads policy overrides from the JSON file named by Settings.policy_file.
Reloaded on every access, so no restart is needed after tuning the tables.

Example data/policy.json:
{
  "mortality_feed_share": 0.25,
  "balancing_ingredient": "Other raw materials",
  "ingredient_adjustments": {"Corn": 1.03},
  "additives": {
    "Belfeed": {"cost": 8.5},
    "New Enzyme": {"inclusion_rate": 200, "cost": 20, "fcr_improvement_percent": 4}
  }
}
"""
import json
import logging
from dataclasses import replace
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from config import get_settings
from tools.additive_data import ADDITIVES, AdditiveReference
from tools.feed_policy import DEFAULT_POLICY, CalculationPolicy, FeedIngredient

logger = logging.getLogger(__name__)


def _policy_path() -> Path:
    return Path(get_settings().policy_file)


def _read(path: Path | None = None) -> dict:
    path = path or _policy_path()
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, ValueError):
        logger.warning("could not read policy file %s; using defaults", path, exc_info=True)
        return {}
    if not isinstance(data, dict):
        logger.warning("policy file %s is not a JSON object; using defaults", path)
        return {}
    return data


def additives_from(data: dict) -> Mapping[str, AdditiveReference]:
    overrides = data.get("additives") or {}
    table = dict(ADDITIVES)
    for name, fields in overrides.items():
        fields = {k: v for k, v in fields.items() if k != "name"}
        if name in table:
            table[name] = replace(table[name], **fields)
        else:
            table[name] = AdditiveReference(name=name, **fields)
    return MappingProxyType(table)


def policy_from(data: dict) -> CalculationPolicy:
    changes = {}
    if "mortality_feed_share" in data:
        changes["mortality_feed_share"] = float(data["mortality_feed_share"])
    if "balancing_ingredient" in data:
        changes["balancing_ingredient"] = str(data["balancing_ingredient"])
    if "basket" in data:
        changes["basket"] = tuple(
            FeedIngredient(
                name=row["name"],
                quantity_kg=float(row["quantity_kg"]),
                price_per_ton=None if row.get("price_per_ton") is None else float(row["price_per_ton"]),
            )
            for row in data["basket"]
        )
    if "ingredient_adjustments" in data:
        merged = dict(DEFAULT_POLICY.ingredient_adjustments)
        merged.update({k: float(v) for k, v in data["ingredient_adjustments"].items()})
        changes["ingredient_adjustments"] = MappingProxyType(merged)
    return replace(DEFAULT_POLICY, **changes) if changes else DEFAULT_POLICY


def load(path: Path | None = None) -> tuple[Mapping[str, AdditiveReference], CalculationPolicy]:
    """Return (additive table, calculation policy) with file overrides applied."""
    data = _read(path)
    try:
        return additives_from(data), policy_from(data)
    except (TypeError, ValueError, KeyError, AttributeError):
        logger.warning("invalid policy overrides; using defaults", exc_info=True)
        return ADDITIVES, DEFAULT_POLICY
