"""
Data models - principals, bootstrap steps, results and database handles.
"""
from mongo_bootstrap.models.database import DatabaseRef, MaterializedDatabase
from mongo_bootstrap.models.principal import (
    GRANT_UPDATE_POLICY,
    Grant,
    GrantUpdatePolicy,
    Principal,
)
from mongo_bootstrap.models.step import (
    BootstrapPlan,
    BootstrapResult,
    BootstrapStep,
    EnsureCollection,
    EnsurePrincipal,
    StepOutcome,
    StepReport,
    StepState,
)

__all__ = [
    "DatabaseRef",
    "MaterializedDatabase",
    "GRANT_UPDATE_POLICY",
    "Grant",
    "GrantUpdatePolicy",
    "Principal",
    "BootstrapPlan",
    "BootstrapResult",
    "BootstrapStep",
    "EnsureCollection",
    "EnsurePrincipal",
    "StepOutcome",
    "StepReport",
    "StepState",
]
