"""
Shared Pydantic configuration for domain models

API payloads use camelCase keys (``imageUrl``, ``createdAt``) while Python
code and SQL columns use snake_case. Models accept either form on input.
"""
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def _decimals_to_float(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, dict):
        return {k: _decimals_to_float(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_decimals_to_float(v) for v in value]
    return value


class DomainModel(BaseModel):
    """Base for entities returned by repositories"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_dict(self) -> dict:
        """
        Convert to a JSON-ready dictionary with camelCase keys

        Decimal values become floats; datetimes are left for FastAPI to encode.
        """
        return _decimals_to_float(self.model_dump(by_alias=True))


class RequestSchema(BaseModel):
    """Base for request bodies; unknown keys are ignored"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )
