"""
Validated farm/additive input for the ROI engine.

parse_farm_input() is the only way raw request data should reach the
calculators: it rejects out-of-range values, resolves additive defaults and
enforces the application-type rule for additives that support matrix use.
"""
from enum import Enum
from typing import Any, Mapping

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveFloat,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)

from tools.additive_data import ADDITIVES, AdditiveReference
from tools.feed_policy import DEFAULT_POLICY, CalculationPolicy


class ApplicationType(str, Enum):
    ON_TOP = "on-top"
    MATRIX = "matrix"


class InvalidInput(ValueError):
    """Raised when farm input fails validation. `errors` holds one message per problem."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


class FarmInput(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    number_of_broilers: int = Field(gt=0)
    broiler_weight: float = Field(gt=0)
    mortality_rate: float = Field(ge=0, le=100)
    fcr: float = Field(gt=0)
    feed_cost_per_live_weight: float = Field(gt=0)
    additive_type: str
    additive_inclusion_rate: float = Field(gt=0)
    additive_cost: float = Field(gt=0)
    application_type: ApplicationType | None = None
    ingredient_prices: dict[str, PositiveFloat] | None = None

    @model_validator(mode="before")
    @classmethod
    def _fill_additive_defaults(cls, data: Any, info: ValidationInfo) -> Any:
        if not isinstance(data, dict):
            return data
        additives, _ = _context(info)
        name = data.get("additive_type")
        if not isinstance(name, str) or name not in additives:
            return data
        ref = additives[name]

        data = dict(data)
        if data.get("additive_inclusion_rate") is None:
            data["additive_inclusion_rate"] = ref.inclusion_rate
        if data.get("additive_cost") is None:
            data["additive_cost"] = ref.cost
        if data.get("application_type") == "":
            data["application_type"] = None
        if not ref.supports_matrix_application and data.get("application_type") is None:
            data["application_type"] = ApplicationType.ON_TOP.value
        return data

    @field_validator("additive_type")
    @classmethod
    def _known_additive(cls, name: str, info: ValidationInfo) -> str:
        additives, _ = _context(info)
        if name not in additives:
            raise ValueError(
                f"Unknown additive type {name!r}. Choose one of: {', '.join(additives)}"
            )
        return name

    @field_validator("ingredient_prices", mode="before")
    @classmethod
    def _no_boolean_prices(cls, prices: Any) -> Any:
        if isinstance(prices, dict):
            flags = sorted(str(k) for k, v in prices.items() if isinstance(v, bool))
            if flags:
                raise ValueError(f"Ingredient prices must be numbers: {', '.join(flags)}")
        return prices

    @field_validator("ingredient_prices")
    @classmethod
    def _known_ingredients(cls, prices: dict[str, float] | None, info: ValidationInfo):
        if prices:
            _, policy = _context(info)
            unknown = sorted(set(prices) - policy.ingredient_names())
            if unknown:
                raise ValueError(f"Unknown feed ingredients: {', '.join(unknown)}")
        return prices

    @model_validator(mode="after")
    def _check_application_type(self, info: ValidationInfo) -> "FarmInput":
        additives, policy = _context(info)
        ref = additives[self.additive_type]
        if self.application_type is None:
            raise ValueError(f"Application type is required for {self.additive_type}")
        if self.application_type is ApplicationType.MATRIX:
            if not ref.supports_matrix_application:
                raise ValueError(f"{self.additive_type} does not support matrix application")
            prices = self.ingredient_prices or {}
            missing = [
                ing.name for ing in policy.basket
                if ing.price_per_ton is None and ing.name not in prices
            ]
            if missing:
                raise ValueError(f"Matrix application needs prices for: {', '.join(missing)}")
        return self


def _context(info: ValidationInfo) -> tuple[Mapping[str, AdditiveReference], CalculationPolicy]:
    ctx = info.context or {}
    return ctx.get("additives") or ADDITIVES, ctx.get("policy") or DEFAULT_POLICY


def _format_error(err: dict) -> str:
    loc = ".".join(str(p) for p in err.get("loc", ()))
    msg = err.get("msg", "invalid value")
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return f"{loc}: {msg}" if loc else msg


def parse_farm_input(
    data: Mapping[str, Any],
    additives: Mapping[str, AdditiveReference] | None = None,
    policy: CalculationPolicy | None = None,
) -> FarmInput:
    """Validate raw input. Raises InvalidInput listing every problem found."""
    try:
        return FarmInput.model_validate(
            dict(data), context={"additives": additives, "policy": policy}
        )
    except ValidationError as e:
        raise InvalidInput([_format_error(err) for err in e.errors()]) from e
