import json

import pytest

from tools import policy_store
from tools.additive_data import ADDITIVES
from tools.feed_policy import DEFAULT_POLICY


def test_missing_file_returns_defaults(tmp_path):
    additives, policy = policy_store.load(tmp_path / "nope.json")
    assert dict(additives) == dict(ADDITIVES)
    assert policy is DEFAULT_POLICY


def test_overrides_are_merged(tmp_path):
    path = tmp_path / "policy.json"
    path.write_text(json.dumps({
        "mortality_feed_share": 0.25,
        "balancing_ingredient": "Other raw materials",
        "ingredient_adjustments": {"Corn": 1.03},
        "additives": {
            "Belfeed": {"cost": 8.5},
            "Enzyme X": {"inclusion_rate": 200, "cost": 20, "fcr_improvement_percent": 4},
        },
    }))
    additives, policy = policy_store.load(path)

    assert additives["Belfeed"].cost == 8.5
    assert additives["Belfeed"].inclusion_rate == ADDITIVES["Belfeed"].inclusion_rate
    assert additives["Enzyme X"].mortality_reduction_points == 0
    assert "Jefo Pro Solution" in additives

    assert policy.mortality_feed_share == 0.25
    assert policy.balancing_ingredient == "Other raw materials"
    assert policy.ingredient_adjustments["Corn"] == 1.03
    assert policy.ingredient_adjustments["Soybean meal"] == 0.956
    assert policy.basket == DEFAULT_POLICY.basket


def test_basket_override(tmp_path):
    path = tmp_path / "policy.json"
    path.write_text(json.dumps({"basket": [
        {"name": "Corn", "quantity_kg": 700, "price_per_ton": 240},
        {"name": "Wheat", "quantity_kg": 300},
    ]}))
    _, policy = policy_store.load(path)
    assert [i.name for i in policy.basket] == ["Corn", "Wheat"]
    assert policy.basket[1].price_per_ton is None


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", '{"additives": {"X": {"bogus": 1}}}'])
def test_bad_file_falls_back_to_defaults(tmp_path, content):
    path = tmp_path / "policy.json"
    path.write_text(content)
    additives, policy = policy_store.load(path)
    assert dict(additives) == dict(ADDITIVES)
    assert policy is DEFAULT_POLICY


def test_load_uses_settings_path(tmp_path, monkeypatch):
    path = tmp_path / "policy.json"
    path.write_text(json.dumps({"mortality_feed_share": 0.1}))
    monkeypatch.setattr(policy_store, "_policy_path", lambda: path)
    _, policy = policy_store.load()
    assert policy.mortality_feed_share == 0.1


@pytest.mark.parametrize("basket", [
    [{"name": "Corn", "quantity_kg": 600, "price_per_ton": 232},
     {"name": "Soybean meal", "quantity_kg": 300, "price_per_ton": 624}],
    [{"name": "Corn", "quantity_kg": 500, "price_per_ton": 232},
     {"name": "Corn", "quantity_kg": 500, "price_per_ton": 240}],
])
def test_inconsistent_basket_falls_back_to_defaults(tmp_path, basket):
    path = tmp_path / "policy.json"
    path.write_text(json.dumps({"mortality_feed_share": 0.1, "basket": basket}))
    _, policy = policy_store.load(path)
    assert policy is DEFAULT_POLICY
