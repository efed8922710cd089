"""Shared columns for the catalog and question tables."""

from datetime import datetime
from typing import Any, Optional

import sqlalchemy as sa
from sqlmodel import Field, SQLModel


def _timestamp(**column_kwargs) -> Any:
    return Field(
        default=None,
        sa_type=sa.DateTime(timezone=True),
        sa_column_kwargs={"server_default": sa.func.now(), **column_kwargs},
    )


class BaseModel(SQLModel):
    """Row timestamps, both filled in by the database.

    Attributes:
        created_at: Insert time, exposed as ``createdAt`` in API responses
        updated_at: Time of the last UPDATE
    """

    created_at: Optional[datetime] = _timestamp()
    updated_at: Optional[datetime] = _timestamp(onupdate=sa.func.now())
