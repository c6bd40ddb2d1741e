import os

import pytest

# Keep tests independent of any local .env or policy file
os.environ["POLICY_FILE"] = "/nonexistent/policy.json"
os.environ.setdefault("ANTHROPIC_API_KEY", "test")

from fastapi.testclient import TestClient

from config import get_settings
from main import app
from tools.farm_input import parse_farm_input

get_settings.cache_clear()


BASE_INPUT = {
    "number_of_broilers": 10000,
    "broiler_weight": 2.5,
    "mortality_rate": 4,
    "fcr": 1.6,
    "feed_cost_per_live_weight": 0.72,
    "additive_type": "Jefo Pro Solution",
    "additive_inclusion_rate": 125,
    "additive_cost": 12,
    "application_type": "on-top",
}


@pytest.fixture
def base_input() -> dict:
    return dict(BASE_INPUT)


@pytest.fixture
def farm_input(base_input):
    return parse_farm_input(base_input)


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as client:
        yield client
