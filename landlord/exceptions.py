"""
Standardized exception hierarchy for the LandLord progression engine
Provides rich context, consistent logging, and user-friendly error messages
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import logging

logger = logging.getLogger(__name__)


class LandlordError(Exception):
    """
    Base exception for all LandLord errors

    Provides:
    - Automatic timestamping
    - Request ID for tracing
    - User-friendly messages
    - Structured context
    - Automatic logging

    Example:
        raise LandlordError(
            message="Failed to save progress",
            user_id="123456",
            operation="complete_quest",
            context={"quest_id": "abc-123"}
        )
    """

    log_level = logging.ERROR

    def __init__(
        self,
        message: str,
        user_id: Optional[str] = None,
        request_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.user_id = user_id
        self.request_id = request_id or str(uuid4())
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or "Something went amiss in the realm. Please try again."
        self.timestamp = datetime.now(timezone.utc)

        # Auto-log on creation
        self._log_error()

    def _log_error(self) -> None:
        """Log error with full context"""
        log_data = {
            "error_type": self.__class__.__name__,
            "error_message": self.message,  # Avoid conflict with logging's 'message' field
            "request_id": self.request_id,
            "user_id": self.user_id,
            "operation": self.operation,
            "error_context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

        if self.cause:
            log_data["cause"] = str(self.cause)
            logger.log(
                self.log_level,
                f"{self.__class__.__name__}: {self.message}",
                extra=log_data,
                exc_info=self.cause,
            )
        else:
            logger.log(self.log_level, f"{self.__class__.__name__}: {self.message}", extra=log_data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for API responses"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "user_message": self.user_message,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat()
        }


# ==========================================
# Validation Errors (Caller Input)
# ==========================================

class ValidationError(LandlordError):
    """
    Raised when quest or user input fails validation

    Examples:
    - Negative rewards
    - Unknown quest type
    - Completing a quest twice

    Never mutates stored state.
    """

    log_level = logging.WARNING

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        kwargs.setdefault("user_message", f"Invalid {field}: {message}" if field else message)
        kwargs.setdefault("context", {"field": field, "value": value})
        super().__init__(message=message, **kwargs)


class InvalidQuestTransitionError(ValidationError):
    """Quest status can only move NotStarted -> InProgress -> Completed"""

    def __init__(self, message: str, quest_id: Optional[str] = None, **kwargs):
        self.quest_id = quest_id
        super().__init__(
            message=message,
            field="status",
            user_message="That quest cannot change to the requested status.",
            context={"quest_id": quest_id},
            **kwargs
        )


class InsufficientResourceError(ValidationError):
    """Spending a shield or heart the user does not have"""

    def __init__(self, message: str, resource: Optional[str] = None, **kwargs):
        self.resource = resource
        super().__init__(
            message=message,
            field=resource,
            user_message=f"No {resource or 'resource'} remaining. Rest and return anon.",
            context={"resource": resource},
            **kwargs
        )


# ==========================================
# Lookup Errors
# ==========================================

class RecordNotFoundError(LandlordError):
    """Requested user progress or quest does not exist"""

    log_level = logging.WARNING

    def __init__(
        self,
        message: str,
        record_type: Optional[str] = None,
        record_id: Optional[str] = None,
        **kwargs
    ):
        self.record_type = record_type
        self.record_id = record_id
        super().__init__(
            message=message,
            user_message=f"{record_type or 'Record'} not found in the royal records.",
            context={"record_type": record_type, "record_id": record_id},
            **kwargs
        )


# ==========================================
# Persistence Errors
# ==========================================

class PersistenceError(LandlordError):
    """
    Base class for storage collaborator failures

    Surfaced to the caller for retry; the engine itself never retries.
    """

    reason = "unknown"


class StorageUnavailableError(PersistenceError):
    """Storage could not be reached or written"""

    reason = "network_failure"

    def __init__(self, message: str = "Storage unavailable", **kwargs):
        super().__init__(
            message=message,
            user_message="The royal messengers failed to deliver. Please try again in a moment.",
            **kwargs
        )


class PermissionDeniedError(PersistenceError):
    """Storage refused the operation"""

    reason = "permission_denied"

    def __init__(self, message: str = "Permission denied", **kwargs):
        super().__init__(
            message=message,
            user_message="Thou lack the proper authority for this action.",
            **kwargs
        )


# ==========================================
# Configuration Errors
# ==========================================

class ConfigurationError(LandlordError):
    """System configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        self.config_key = config_key
        super().__init__(
            message=message,
            user_message="The system is not properly configured. Please contact support.",
            context={"config_key": config_key},
            **kwargs
        )


# ==========================================
# Helper Functions
# ==========================================

def wrap_storage_exception(
    error: Exception,
    operation: str,
    user_id: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None
) -> LandlordError:
    """
    Wrap low-level storage exceptions into our exception hierarchy

    Args:
        error: Original exception
        operation: What operation was being performed
        user_id: User ID if applicable
        context: Additional context

    Returns:
        Appropriate PersistenceError subclass

    Example:
        try:
            path.write_text(payload)
        except OSError as e:
            raise wrap_storage_exception(e, operation="save_user_progress", user_id="123")
    """
    if isinstance(error, PermissionError):
        return PermissionDeniedError(
            message=f"Storage permission denied: {error}",
            user_id=user_id,
            operation=operation,
            context=context,
            cause=error
        )
    elif isinstance(error, (OSError, TimeoutError)):
        return StorageUnavailableError(
            message=f"Storage operation failed: {error}",
            user_id=user_id,
            operation=operation,
            context=context,
            cause=error
        )

    # Generic fallback
    return PersistenceError(
        message=f"{operation} failed: {error}",
        user_id=user_id,
        operation=operation,
        context=context,
        cause=error
    )
