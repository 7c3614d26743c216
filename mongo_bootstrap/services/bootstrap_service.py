"""
Bootstrap runner.

Applies an ordered list of ensure-principal / ensure-collection steps so
that repeated runs converge to the same state:

- Principals are looked up with usersInfo; existing ones are overwritten
  (credential and full grant list), missing ones are created.
- Collections are looked up with listCollections; missing ones are created
  with their options, existing ones are left alone.

The run is strictly sequential. Any connection, authentication or
permission error aborts the remaining steps.
"""
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Iterable, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import OperationFailure, PyMongoError

from mongo_bootstrap.core.errors import (
    ConflictError,
    is_duplicate_error,
    translate_error,
)
from mongo_bootstrap.models.database import DatabaseRef
from mongo_bootstrap.models.principal import GRANT_UPDATE_POLICY
from mongo_bootstrap.models.step import (
    BootstrapResult,
    BootstrapStep,
    EnsureCollection,
    EnsurePrincipal,
    StepReport,
    StepState,
)
from mongo_bootstrap.services.step_state import StepTracker

logger = logging.getLogger(__name__)


class ConflictPolicy(str, Enum):
    """What to do when a create call reports the target already exists."""
    AS_NO_OP = "as_no_op"
    FATAL = "fatal"


EventCallback = Callable[[StepReport], None]


class BootstrapRunner:
    """Runs bootstrap steps against a single MongoDB client."""

    def __init__(
        self,
        client: AsyncIOMotorClient,
        conflict_policy: ConflictPolicy = ConflictPolicy.AS_NO_OP,
        on_event: Optional[EventCallback] = None,
    ):
        self.client = client
        self.conflict_policy = ConflictPolicy(conflict_policy)
        self.on_event = on_event

    async def run(self, steps: Iterable[BootstrapStep]) -> BootstrapResult:
        """
        Apply steps in order.

        Args:
            steps: Ordered bootstrap steps

        Returns:
            BootstrapResult with one report per step

        Raises:
            BootstrapError: On the first fatal error. Steps after it are not run.
        """
        steps = list(steps)
        result = BootstrapResult()

        await self.ping()
        logger.info(f"Applying {len(steps)} bootstrap steps")

        for step in steps:
            report = await self.apply(step, result)
            result.reports.append(report)
            self._emit(report)

        result.finished_at = datetime.now(timezone.utc)
        logger.info(
            f"Bootstrap complete: {result.created} created, "
            f"{result.updated} updated, {result.no_op} unchanged"
        )
        return result

    async def ping(self) -> None:
        """Verify the server is reachable before touching anything."""
        try:
            await self.client.admin.command("ping")
        except PyMongoError as e:
            raise translate_error(e) from e

    async def apply(self, step: BootstrapStep, result: BootstrapResult) -> StepReport:
        """Apply a single step, translating driver errors."""
        try:
            if isinstance(step, EnsurePrincipal):
                return await self.ensure_principal(step)
            if isinstance(step, EnsureCollection):
                return await self.ensure_collection(step, result)
        except PyMongoError as e:
            raise translate_error(e, step) from e
        raise TypeError(f"Unsupported bootstrap step: {type(step).__name__}")

    def _database(self, ref: DatabaseRef) -> AsyncIOMotorDatabase:
        return self.client[ref.name]

    # ==================== Principals ====================

    async def ensure_principal(self, step: EnsurePrincipal) -> StepReport:
        """Create the principal or overwrite its credential and grants."""
        tracker = StepTracker(step)
        db = self._database(DatabaseRef(name=step.database))
        principal = step.principal

        info = await db.command("usersInfo", principal.name)
        tracker.checked()

        if info.get("users"):
            await self._update_user(db, step)
            outcome = tracker.finish(StepState.UPDATED)
            return StepReport(step=step, outcome=outcome, states=tracker.history)

        try:
            await db.command(
                "createUser",
                principal.name,
                pwd=principal.credential.get_secret_value(),
                roles=principal.roles_document(),
            )
        except OperationFailure as e:
            if not is_duplicate_error(e):
                raise
            self._handle_conflict(step, e)
            # Someone else created it; converge the grants anyway.
            await self._update_user(db, step)
            outcome = tracker.finish(StepState.UPDATED)
            return StepReport(step=step, outcome=outcome, states=tracker.history, conflict=True)

        outcome = tracker.finish(StepState.CREATED)
        return StepReport(step=step, outcome=outcome, states=tracker.history)

    async def _update_user(self, db: AsyncIOMotorDatabase, step: EnsurePrincipal) -> None:
        principal = step.principal
        logger.debug(f"Updating {step.describe()} (grants: {GRANT_UPDATE_POLICY.value})")
        # updateUser replaces the roles array wholesale
        await db.command(
            "updateUser",
            principal.name,
            pwd=principal.credential.get_secret_value(),
            roles=principal.roles_document(),
        )

    # ==================== Collections ====================

    async def ensure_collection(
        self,
        step: EnsureCollection,
        result: Optional[BootstrapResult] = None,
    ) -> StepReport:
        """Create the collection if it does not exist. Never alters an existing one."""
        tracker = StepTracker(step)
        ref = DatabaseRef(name=step.database)
        db = self._database(ref)

        names = await db.list_collection_names(filter={"name": step.collection})
        tracker.checked()

        conflict = False
        if step.collection in names:
            outcome = tracker.finish(StepState.NO_OP)
        else:
            try:
                await db.create_collection(step.collection, **step.options)
                outcome = tracker.finish(StepState.CREATED)
            except PyMongoError as e:
                if not is_duplicate_error(e):
                    raise
                self._handle_conflict(step, e)
                conflict = True
                outcome = tracker.finish(StepState.NO_OP)

        if result is not None:
            result.mark_materialized(ref.materialize())

        return StepReport(step=step, outcome=outcome, states=tracker.history, conflict=conflict)

    # ==================== Helpers ====================

    def _handle_conflict(self, step: BootstrapStep, error: PyMongoError) -> None:
        if self.conflict_policy == ConflictPolicy.FATAL:
            raise ConflictError(f"{step.describe()} was created concurrently: {error}", step=step)
        logger.warning(f"{step.describe()} was created concurrently, treating as existing")

    def _emit(self, report: StepReport) -> None:
        logger.info(report.message)
        if self.on_event is not None:
            self.on_event(report)
