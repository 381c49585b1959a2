"""
Write and login payload validation.

Every rule is expressed on pydantic models so all violations in a payload are
reported together, each attributed to one field. The price-band rule lives on
avg_price so a cross-field failure has a single attribution point.
"""

from datetime import date
from typing import Annotated, Any, Optional, Sequence

from pydantic import (
    BaseModel,
    Field,
    StringConstraints,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    field_validator,
)
from pydantic_core import PydanticCustomError

from isdapresyo.domain.dates import parse_calendar_date
from isdapresyo.domain.errors import ValidationFailed
from isdapresyo.domain.models.fish_price import FishPriceDraft

FishType = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
Price = Annotated[float, Field(ge=0, allow_inf_nan=False)]

_LOCATION_PREFIXES = {"body", "path", "query", "header"}


class FishPriceInput(BaseModel):
    """Create and update payloads share these rules."""

    fish_type: FishType
    min_price: Price
    max_price: Price
    avg_price: Price
    date_updated: Optional[date] = None

    @field_validator("date_updated", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> Optional[date]:
        if value is None:
            return None
        try:
            return parse_calendar_date(value)
        except ValueError:
            raise PydanticCustomError("date_format", "date_updated must be a valid date (YYYY-MM-DD)")

    @field_validator("min_price", "max_price", "avg_price", mode="before")
    @classmethod
    def _reject_bool_price(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, bool):
            raise PydanticCustomError("price_type", "{field} must be a number", {"field": info.field_name})
        return value

    @field_validator("avg_price")
    @classmethod
    def _check_price_band(cls, avg: float, info: ValidationInfo) -> float:
        low = info.data.get("min_price")
        high = info.data.get("max_price")
        if low is None or high is None:
            # A bound already failed its own rule
            return avg
        if low > high:
            raise PydanticCustomError("price_band", "min_price must be less than or equal to max_price")
        if avg < low or avg > high:
            raise PydanticCustomError("price_band", "avg_price must be between min_price and max_price")
        return avg

    def to_draft(self) -> FishPriceDraft:
        return FishPriceDraft(
            fish_type=self.fish_type,
            min_price=self.min_price,
            max_price=self.max_price,
            avg_price=self.avg_price,
            date_updated=self.date_updated,
        )


class LoginInput(BaseModel):
    username: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
    password: Annotated[str, StringConstraints(min_length=1, max_length=200)]


_fish_type_adapter = TypeAdapter(FishType)


def validate_fish_type(value: Any) -> str:
    """Trim and length-check a fish_type taken from the URL path."""
    try:
        return _fish_type_adapter.validate_python(value)
    except ValidationError as e:
        raise ValidationFailed(collect_errors(e.errors(), default_field="fish_type"))


def collect_errors(errors: Sequence[dict[str, Any]], default_field: str = "body") -> list[dict[str, str]]:
    """Flatten pydantic/FastAPI error dicts to [{"field", "message"}]."""
    collected = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        collected.append({
            "field": ".".join(loc) or default_field,
            "message": str(err.get("msg", "Invalid value")),
        })
    return collected
