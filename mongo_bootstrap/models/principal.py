"""
Principal (database user) model.
"""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator


class GrantUpdatePolicy(str, Enum):
    """How grants of an existing principal are reconciled."""
    REPLACE = "replace"


# Existing principals get exactly the supplied grants; anything else is dropped.
GRANT_UPDATE_POLICY = GrantUpdatePolicy.REPLACE


class Grant(BaseModel):
    """A (role, database) pair."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(..., min_length=1, description="Built-in or custom role name")
    db: str = Field(..., min_length=1, description="Database the role applies to")

    def to_document(self) -> dict:
        return {"role": self.role, "db": self.db}


class Principal(BaseModel):
    """
    A database user with its credential and grants.

    The credential is a SecretStr so it never shows up in reprs or logs.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="User name, unique per database")
    credential: SecretStr = Field(..., description="Password")
    grants: tuple[Grant, ...] = Field(..., min_length=1, description="Role grants")

    @field_validator("grants")
    @classmethod
    def dedupe_grants(cls, value: tuple[Grant, ...]) -> tuple[Grant, ...]:
        """Collapse duplicate grants, keeping first-seen order."""
        seen = []
        for grant in value:
            if grant not in seen:
                seen.append(grant)
        return tuple(seen)

    def roles_document(self) -> list[dict]:
        """Roles array as expected by createUser/updateUser."""
        return [grant.to_document() for grant in self.grants]
