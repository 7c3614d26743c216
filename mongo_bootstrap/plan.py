"""
Bootstrap plans.

The default plan mirrors the environment bring-up of the product service:

1. admin user with root on admin (used by tools like mongo-express)
2. service user with readWrite on the service database
3. base collections in the service database (first write materializes it)

A JSON plan file can replace the default list entirely.
"""
import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from mongo_bootstrap.config import Settings
from mongo_bootstrap.core.errors import PlanError
from mongo_bootstrap.database.databases import admin_db
from mongo_bootstrap.models.principal import Grant, Principal
from mongo_bootstrap.models.step import (
    BootstrapPlan,
    BootstrapStep,
    EnsureCollection,
    EnsurePrincipal,
)

logger = logging.getLogger(__name__)


def default_steps(settings: Settings) -> list[BootstrapStep]:
    """Build the default step list from settings."""
    service_db_name = settings.service_db_name

    steps: list[BootstrapStep] = [
        EnsurePrincipal(
            database=admin_db.DB_NAME,
            principal=Principal(
                name=settings.admin_username,
                credential=settings.admin_password,
                grants=(Grant(role=admin_db.ROOT_ROLE, db=admin_db.DB_NAME),),
            ),
        ),
        EnsurePrincipal(
            database=service_db_name,
            principal=Principal(
                name=settings.service_username,
                credential=settings.service_password,
                grants=(Grant(role=settings.service_role, db=service_db_name),),
            ),
        ),
    ]
    for collection in settings.service_collections:
        steps.append(EnsureCollection(database=service_db_name, collection=collection))
    return steps


def load_plan(path: Union[str, Path]) -> list[BootstrapStep]:
    """
    Load steps from a JSON plan file.

    Args:
        path: File containing {"steps": [...]}

    Returns:
        Steps in file order

    Raises:
        PlanError: If the file is missing, not JSON, or fails validation
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text())
    except OSError as e:
        raise PlanError(f"Cannot read plan file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise PlanError(f"Plan file {path} is not valid JSON: {e}") from e

    try:
        plan = BootstrapPlan.model_validate(raw)
    except ValidationError as e:
        raise PlanError(f"Invalid plan file {path}: {e}") from e

    logger.info(f"Loaded {len(plan.steps)} steps from {path}")
    return list(plan.steps)


def resolve_steps(settings: Settings, plan_file: Optional[str] = None) -> list[BootstrapStep]:
    """Steps from the given plan file, the configured plan file, or the default plan."""
    plan_file = plan_file or settings.bootstrap_plan_file
    if plan_file:
        return load_plan(plan_file)
    try:
        return default_steps(settings)
    except ValidationError as e:
        raise PlanError(f"Invalid bootstrap settings: {e}") from e
