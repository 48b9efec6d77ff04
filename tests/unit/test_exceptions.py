"""Unit tests for custom exception hierarchy"""
import logging
from datetime import datetime

from landlord.exceptions import (
    ConfigurationError,
    InsufficientResourceError,
    InvalidQuestTransitionError,
    LandlordError,
    PermissionDeniedError,
    PersistenceError,
    RecordNotFoundError,
    StorageUnavailableError,
    ValidationError,
    wrap_storage_exception,
)


class TestLandlordError:
    """Test base exception class"""

    def test_basic_exception(self):
        error = LandlordError("Test error")

        assert error.message == "Test error"
        assert error.user_message == "Something went amiss in the realm. Please try again."
        assert error.request_id is not None
        assert isinstance(error.timestamp, datetime)

    def test_exception_with_context(self):
        error = LandlordError(
            message="Failed to save progress",
            user_id="agent_123",
            operation="complete_quest",
            context={"quest_id": "abc-123"},
            user_message="Could not record your quest",
        )

        assert error.user_id == "agent_123"
        assert error.operation == "complete_quest"
        assert error.context["quest_id"] == "abc-123"
        assert error.user_message == "Could not record your quest"

    def test_exception_with_cause(self):
        original_error = ValueError("Invalid value")

        error = LandlordError(message="Validation failed", cause=original_error)

        assert error.cause is original_error

    def test_to_dict(self):
        error = LandlordError("Test error", request_id="req-1")

        data = error.to_dict()

        assert data["error"] == "LandlordError"
        assert data["message"] == "Test error"
        assert data["request_id"] == "req-1"
        assert "timestamp" in data

    def test_logged_on_creation(self, caplog):
        with caplog.at_level(logging.ERROR, logger="landlord.exceptions"):
            LandlordError("Logged error")

        assert "Logged error" in caplog.text


class TestValidationErrors:
    """Caller input errors"""

    def test_validation_error_fields(self):
        error = ValidationError("must not be negative", field="price", value=-1)

        assert error.field == "price"
        assert error.value == -1
        assert error.user_message == "Invalid price: must not be negative"
        assert isinstance(error, LandlordError)

    def test_validation_error_logged_as_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="landlord.exceptions"):
            ValidationError("bad input")

        assert caplog.records[-1].levelno == logging.WARNING

    def test_invalid_quest_transition(self):
        error = InvalidQuestTransitionError("already completed", quest_id="q-1")

        assert isinstance(error, ValidationError)
        assert error.quest_id == "q-1"
        assert error.field == "status"

    def test_insufficient_resource(self):
        error = InsufficientResourceError("No shields remaining", resource="shields")

        assert isinstance(error, ValidationError)
        assert "shields" in error.user_message


class TestOtherErrors:

    def test_record_not_found(self):
        error = RecordNotFoundError("missing", record_type="UserProgress", record_id="agent_1")

        assert error.record_id == "agent_1"
        assert error.context == {"record_type": "UserProgress", "record_id": "agent_1"}

    def test_persistence_reasons(self):
        assert StorageUnavailableError().reason == "network_failure"
        assert PermissionDeniedError().reason == "permission_denied"
        assert isinstance(StorageUnavailableError(), PersistenceError)

    def test_configuration_error(self):
        assert ConfigurationError("bad", config_key="API_PORT").config_key == "API_PORT"


class TestWrapStorageException:
    """Low-level storage errors mapped onto the hierarchy"""

    def test_permission_error(self):
        error = wrap_storage_exception(PermissionError("denied"), operation="save_user_progress", user_id="u1")

        assert isinstance(error, PermissionDeniedError)
        assert error.operation == "save_user_progress"
        assert error.user_id == "u1"

    def test_os_error(self):
        assert isinstance(wrap_storage_exception(OSError("disk"), operation="load"), StorageUnavailableError)

    def test_timeout(self):
        assert isinstance(wrap_storage_exception(TimeoutError(), operation="load"), StorageUnavailableError)

    def test_other_error(self):
        error = wrap_storage_exception(ValueError("corrupt"), operation="load")

        assert type(error) is PersistenceError
        assert error.cause is not None
