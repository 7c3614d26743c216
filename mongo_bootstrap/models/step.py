"""
Bootstrap steps and run results.

A plan is an ordered list of steps. Each step walks the state machine

    NOT_CHECKED -> CHECKED -> {CREATED | UPDATED | NO_OP} -> DONE

and leaves behind a StepReport.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from mongo_bootstrap.models.database import MaterializedDatabase
from mongo_bootstrap.models.principal import Principal


class StepState(str, Enum):
    """Per-step lifecycle states."""
    NOT_CHECKED = "not_checked"
    CHECKED = "checked"
    CREATED = "created"
    UPDATED = "updated"
    NO_OP = "no_op"
    DONE = "done"


class StepOutcome(str, Enum):
    """Terminal outcome reported for a step."""
    CREATED = "created"
    UPDATED = "updated"
    NO_OP = "no_op"


class EnsurePrincipal(BaseModel):
    """Create the principal, or overwrite its credential and grants."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["principal"] = "principal"
    database: str = Field(..., min_length=1)
    principal: Principal

    def describe(self) -> str:
        return f'user "{self.principal.name}" on "{self.database}"'


class EnsureCollection(BaseModel):
    """Create the collection if absent. Options apply only at creation."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["collection"] = "collection"
    database: str = Field(..., min_length=1)
    collection: str = Field(..., min_length=1)
    options: dict[str, Any] = Field(default_factory=dict)

    @property
    def namespace(self) -> str:
        return f"{self.database}.{self.collection}"

    def describe(self) -> str:
        return f'collection "{self.namespace}"'


BootstrapStep = Annotated[
    Union[EnsurePrincipal, EnsureCollection],
    Field(discriminator="kind"),
]


class BootstrapPlan(BaseModel):
    """Ordered list of steps, as loaded from a plan file."""
    steps: list[BootstrapStep] = Field(default_factory=list)


class StepReport(BaseModel):
    """What happened to a single step."""

    step: BootstrapStep
    outcome: StepOutcome
    states: list[StepState] = Field(default_factory=list, description="States traversed")
    conflict: bool = Field(
        default=False,
        description="Outcome was reached after the create call reported a duplicate",
    )

    @property
    def message(self) -> str:
        """Human readable status line."""
        step = self.step
        if isinstance(step, EnsurePrincipal):
            verb = "Created" if self.outcome == StepOutcome.CREATED else "Updated"
            return f'{verb} user "{step.principal.name}" on "{step.database}"'
        if self.outcome == StepOutcome.CREATED:
            return f'Created collection "{step.namespace}"'
        return f'Collection "{step.namespace}" already exists'


class BootstrapResult(BaseModel):
    """Structured summary of a bootstrap run."""

    reports: list[StepReport] = Field(default_factory=list)
    materialized: list[MaterializedDatabase] = Field(
        default_factory=list,
        description="Databases confirmed to exist, in first-seen order",
    )
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: Optional[datetime] = None

    @property
    def materialized_names(self) -> list[str]:
        return [database.name for database in self.materialized]

    def mark_materialized(self, database: MaterializedDatabase) -> None:
        if database.name not in self.materialized_names:
            self.materialized.append(database)

    def _count(self, outcome: StepOutcome) -> int:
        return sum(1 for report in self.reports if report.outcome == outcome)

    @property
    def created(self) -> int:
        return self._count(StepOutcome.CREATED)

    @property
    def updated(self) -> int:
        return self._count(StepOutcome.UPDATED)

    @property
    def no_op(self) -> int:
        return self._count(StepOutcome.NO_OP)

    def summary(self) -> dict:
        """Counts for automation."""
        return {
            "steps": len(self.reports),
            "created": self.created,
            "updated": self.updated,
            "no_op": self.no_op,
            "materialized": self.materialized_names,
        }

    def to_json_dict(self) -> dict:
        """JSON-safe dump with credentials masked."""
        data = self.model_dump(mode="json")
        data["summary"] = self.summary()
        return data
