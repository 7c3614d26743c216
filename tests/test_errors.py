"""
Tests for driver error translation.
"""

import pytest
from pymongo.errors import (
    AutoReconnect,
    CollectionInvalid,
    ConnectionFailure,
    OperationFailure,
    PyMongoError,
    ServerSelectionTimeoutError,
)

from mongo_bootstrap.core.errors import (
    BootstrapConnectionError,
    BootstrapError,
    BootstrapPermissionError,
    ConflictError,
    is_duplicate_error,
    translate_error,
)


class TestTranslateError:
    """translate_error maps pymongo errors onto the bootstrap taxonomy."""

    @pytest.mark.parametrize(
        "error",
        [
            ServerSelectionTimeoutError("No servers found"),
            ConnectionFailure("connection closed"),
            AutoReconnect("reconnecting"),
            OperationFailure("Authentication failed.", code=18),
        ],
    )
    def test_connection_errors(self, error):
        assert isinstance(translate_error(error), BootstrapConnectionError)

    def test_unauthorized_is_permission_error(self):
        error = OperationFailure("not authorized on admin to execute command", code=13)
        assert isinstance(translate_error(error), BootstrapPermissionError)

    @pytest.mark.parametrize(
        "error",
        [
            OperationFailure("User already exists", code=51003),
            OperationFailure("Collection already exists", code=48),
            CollectionInvalid("collection user already exists"),
        ],
    )
    def test_duplicates_are_conflicts(self, error):
        assert isinstance(translate_error(error), ConflictError)
        assert is_duplicate_error(error)

    def test_other_errors_are_generic(self):
        translated = translate_error(OperationFailure("BadValue", code=2))
        assert type(translated) is BootstrapError

    def test_generic_pymongo_error(self):
        translated = translate_error(PyMongoError("boom"))
        assert type(translated) is BootstrapError
        assert "boom" in str(translated)

    def test_step_is_attached(self, user_collection_step):
        translated = translate_error(ConnectionFailure("gone"), step=user_collection_step)
        assert translated.step is user_collection_step
        assert 'collection "svc-db.user"' in str(translated)

    def test_non_duplicate_operation_failure(self):
        assert not is_duplicate_error(OperationFailure("nope", code=13))
        assert not is_duplicate_error(ValueError("nope"))
