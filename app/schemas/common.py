from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel

from app.utils.serialization import format_timestamp

T = TypeVar("T")


class CamelModel(BaseModel):
    """Schema base exposing camelCase names on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class TimestampedRead(CamelModel):
    created_at: Optional[datetime] = None

    @field_serializer("created_at")
    def serialize_created_at(self, value: Optional[datetime]) -> Optional[str]:
        return format_timestamp(value)


class PagedResponse(CamelModel, Generic[T]):
    data: List[T]
    total_count: int
