"""
Reference data for the feed additives the calculator knows about.

Each entry carries the supplier defaults shown to the farmer (inclusion rate
and price) and the performance effects the ROI model applies (FCR improvement
and mortality reduction). The table is read-only; tests and the policy file
pass their own mapping instead of mutating this one.
"""
from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class AdditiveReference:
    name: str
    inclusion_rate: float  # g per metric ton of feed
    cost: float  # $ per kg of additive
    fcr_improvement_percent: float
    mortality_reduction_points: float = 0.0
    supports_matrix_application: bool = False
    display_color: str | None = None

    def as_dict(self) -> dict:
        return asdict(self)


_SEED = (
    AdditiveReference(
        name="Jefo Pro Solution",
        inclusion_rate=125,
        cost=12.0,
        fcr_improvement_percent=2.5,
        mortality_reduction_points=1.5,
        supports_matrix_application=True,
        display_color="#00A651",
    ),
    AdditiveReference(
        name="Jefo P(OA+EO)",
        inclusion_rate=300,
        cost=6.5,
        fcr_improvement_percent=2.0,
        mortality_reduction_points=2.0,
        display_color="#F7941D",
    ),
    AdditiveReference(
        name="Belfeed",
        inclusion_rate=100,
        cost=9.0,
        fcr_improvement_percent=3.0,
        supports_matrix_application=True,
        display_color="#0072BC",
    ),
)

ADDITIVES: Mapping[str, AdditiveReference] = MappingProxyType({a.name: a for a in _SEED})


def get_additive(name: str, additives: Mapping[str, AdditiveReference] | None = None) -> AdditiveReference:
    """Look up an additive by name. Raises KeyError for unknown names."""
    table = ADDITIVES if additives is None else additives
    try:
        return table[name]
    except KeyError:
        raise KeyError(f"Unknown additive: {name!r}") from None


def all_additives(additives: Mapping[str, AdditiveReference] | None = None) -> list[AdditiveReference]:
    table = ADDITIVES if additives is None else additives
    return list(table.values())
