"""
Shared base for API schemas
"""

from pydantic import BaseModel, ConfigDict
from datetime import datetime, timezone
from typing import Optional
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Schema that speaks camelCase JSON and accepts snake_case too"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Timestamps are stored as naive UTC; offsets are converted on input"""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
