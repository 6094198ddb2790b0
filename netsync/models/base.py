# =============================================================================
# Base Models and Shared Types
# =============================================================================
# Shared base model configuration and the wire timestamp type used by every
# NDEx-facing model.
# =============================================================================

"""Base model and timestamp type for NDEx wire objects."""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

__all__ = ["NdexModel", "EpochMillis", "to_epoch_millis"]


def to_epoch_millis(value: datetime) -> int:
    """
    Convert a datetime to NDEx's millisecond epoch representation.

    Naive datetimes are treated as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


EpochMillis = Annotated[
    datetime,
    PlainSerializer(to_epoch_millis, return_type=int, when_used="json"),
]
"""Timestamp that parses NDEx epoch milliseconds (or ISO strings) and serializes back to milliseconds."""


class NdexModel(BaseModel):
    """
    Base for models exchanged with an NDEx server.

    Fields are snake_case in Python and camelCase on the wire. Unknown wire
    fields are ignored so that newer server versions do not break parsing.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self) -> dict:
        """Serialize to the JSON-compatible camelCase shape NDEx expects."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
