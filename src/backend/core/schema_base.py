"""
Base schema model for API requests and responses.

Gives every schema camelCase field names on the wire (the portal and
dashboard front-ends speak camelCase), accepts snake_case input as well,
reads straight from ORM rows, and serializes datetimes as UTC ISO strings
and decimals as plain numbers.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, field_serializer


def to_camel(string: str) -> str:
    """
    Convert snake_case to camelCase.

    Example:
        >>> to_camel("service_request_id")
        'serviceRequestId'
    """
    parts = string.split("_")
    return parts[0] + "".join(word.capitalize() for word in parts[1:])


def serialize_datetime(dt: datetime | None) -> str | None:
    """
    Serialize a datetime as ISO 8601 with a 'Z' suffix.

    Database values are stored as naive UTC; aware values are converted to
    UTC first.
    """
    if dt is None:
        return None

    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)

    return dt.isoformat() + "Z"


class HTTPSchemaModel(BaseModel):
    """
    Base model for all HTTP API schemas.

    - camelCase aliases for every field, snake_case still accepted
    - from_attributes=True so ORM rows validate directly
    - enum fields hold their plain string values, ready for the string columns
    - datetimes rendered with a 'Z' suffix, Decimal columns as floats
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    @field_serializer("*", mode="wrap")
    @classmethod
    def serialize_special_types(cls, value: Any, handler: Any) -> Any:
        if isinstance(value, datetime):
            return serialize_datetime(value)
        if isinstance(value, Decimal):
            return float(value)
        return handler(value)
