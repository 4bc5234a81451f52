"""
Base schemas with standardized field types for consistent API responses.

All public payloads use camelCase keys; models accept either camelCase or
snake_case on input.
"""

from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

from ..core.timezone_utils import ensure_utc, parse_iso_datetime


def _parse_optional_datetime(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            return parse_iso_datetime(value)
        except ValueError as exc:
            raise ValueError("Invalid date format") from exc
    return value


# Timestamps read back from SQLite are naive; always emit them as UTC
UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]
OptionalDateInput = Annotated[Optional[datetime], BeforeValidator(_parse_optional_datetime)]


class StandardizedModel(BaseModel):
    """Base model for response DTOs built from ORM rows."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


class RequestModel(BaseModel):
    """Base model for request bodies; unknown keys are ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        use_enum_values=True,
    )
