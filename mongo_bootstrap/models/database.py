"""
Two-phase database handles.

MongoDB only persists a database after its first write; asking the client
for `client[name]` returns a handle whether or not anything exists. The
runner keeps the two phases apart so callers can tell which databases were
actually written to.
"""
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class DatabaseRef(BaseModel):
    """Logical reference to a database. Existence is not guaranteed."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Database name")

    def materialize(self) -> "MaterializedDatabase":
        """Promote after a write (or an existing collection) confirmed the database."""
        return MaterializedDatabase(name=self.name)


class MaterializedDatabase(BaseModel):
    """Database confirmed to exist on the server."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Database name")
    confirmed_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When existence was confirmed",
    )
