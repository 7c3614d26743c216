"""
Bootstrap error taxonomy.

Every failure raised by a bootstrap run derives from BootstrapError. Driver
errors are translated at the step boundary so the CLI only has to know
about this module:

- BootstrapConnectionError: server unreachable or credentials rejected
- BootstrapPermissionError: authenticated but not allowed to manage users/collections
- ConflictError: create call lost a race with another writer (fatal policy only)
- PlanError: step definitions failed validation
- InvalidStepTransition: step state machine misuse

None of these are retried; re-running the whole plan is the retry.
"""
from typing import Any, Optional

from pymongo.errors import (
    AutoReconnect,
    CollectionInvalid,
    ConnectionFailure,
    OperationFailure,
    PyMongoError,
    ServerSelectionTimeoutError,
)

# Server error codes
UNAUTHORIZED = 13
AUTHENTICATION_FAILED = 18
NAMESPACE_EXISTS = 48
USER_ALREADY_EXISTS = 51003


class BootstrapError(Exception):
    """Base class for all fatal bootstrap failures."""

    def __init__(self, message: str, step: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.step = step

    def __str__(self) -> str:
        if self.step is not None:
            return f"{self.message} (step: {self.step.describe()})"
        return self.message


class BootstrapConnectionError(BootstrapError):
    """Server unreachable or authentication rejected."""


class BootstrapPermissionError(BootstrapError):
    """Authenticated principal lacks rights for the requested operation."""


class ConflictError(BootstrapError):
    """Target was created by someone else between the check and the create."""


class PlanError(BootstrapError):
    """Bootstrap plan could not be loaded or validated."""


class InvalidStepTransition(BootstrapError):
    """A step tried to move between states the state machine does not allow."""

    def __init__(self, from_state: Any, to_state: Any, step: Optional[Any] = None):
        super().__init__(
            f"Invalid step transition {from_state.value} -> {to_state.value}",
            step=step,
        )
        self.from_state = from_state
        self.to_state = to_state


def is_duplicate_error(exc: BaseException) -> bool:
    """Return True if exc signals that the create target already exists."""
    if isinstance(exc, CollectionInvalid):
        return True
    if isinstance(exc, OperationFailure):
        return exc.code in (NAMESPACE_EXISTS, USER_ALREADY_EXISTS)
    return False


def translate_error(exc: PyMongoError, step: Optional[Any] = None) -> BootstrapError:
    """Map a driver error onto the bootstrap taxonomy."""
    # ServerSelectionTimeoutError and AutoReconnect are ConnectionFailure subclasses
    if isinstance(exc, (ConnectionFailure, ServerSelectionTimeoutError, AutoReconnect)):
        return BootstrapConnectionError(f"MongoDB unreachable: {exc}", step=step)

    if isinstance(exc, OperationFailure):
        if exc.code == AUTHENTICATION_FAILED:
            return BootstrapConnectionError(f"Authentication failed: {exc}", step=step)
        if exc.code == UNAUTHORIZED:
            return BootstrapPermissionError(f"Permission denied: {exc}", step=step)
        if exc.code in (NAMESPACE_EXISTS, USER_ALREADY_EXISTS):
            return ConflictError(f"Already exists: {exc}", step=step)

    if isinstance(exc, CollectionInvalid):
        return ConflictError(f"Already exists: {exc}", step=step)

    return BootstrapError(f"MongoDB error: {exc}", step=step)
