from datetime import UTC, datetime

import sqlalchemy as sa
from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(UTC)


class Entity(BaseModel):
    """Base entity class with a database-assigned integer identifier."""

    model_config = ConfigDict(from_attributes=True)

    id: int = PydanticField(description="Unique identifier for the entity")

    created_at: datetime | None = PydanticField(default=None)
    updated_at: datetime | None = PydanticField(default=None)


class EntityTable(SQLModel, table=False):
    """Base table with an autoincrement primary key and audit timestamps."""

    id: int | None = Field(
        default=None,
        primary_key=True,
        description="Unique identifier for the entity",
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=sa.DateTime(timezone=True),
        nullable=False,
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=sa.DateTime(timezone=True),
        nullable=False,
        sa_column_kwargs={"onupdate": utc_now},
    )
