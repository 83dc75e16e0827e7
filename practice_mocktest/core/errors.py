# practice_mocktest/core/errors.py
"""
Application error taxonomy.

Every error a service raises on purpose is an ``AppError``; the API layer
turns it into a structured response using ``status_code`` and ``to_dict()``.
Anything else reaching the boundary is treated as an unexpected failure.
"""

from datetime import datetime, timezone
from typing import Dict, Any, Optional


class AppError(Exception):
    """Base application error"""

    status_code = 500
    error_type = "server_error"

    def __init__(self, message: str, status_code: Optional[int] = None, is_operational: bool = True):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.is_operational = is_operational
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "error": self.message,
            "type": self.error_type,
            "statusCode": self.status_code,
            "timestamp": self.timestamp.isoformat()
        }


class ValidationError(AppError):
    """Malformed or out-of-range input (400)"""

    status_code = 400
    error_type = "validation_error"

    def __init__(self, message: str, fields: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.fields = fields

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        if self.fields:
            payload["fields"] = self.fields
        return payload


class AuthenticationError(AppError):
    status_code = 401
    error_type = "authentication_error"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class AuthorizationError(AppError):
    status_code = 403
    error_type = "authorization_error"

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message)


class NotFoundError(AppError):
    """Referenced resource does not exist (404)"""

    status_code = 404
    error_type = "not_found_error"

    def __init__(self, resource: str):
        super().__init__(f"{resource} not found")
        self.resource = resource


class SessionNotFound(NotFoundError):
    def __init__(self):
        super().__init__("Test session")


class BusinessLogicError(AppError):
    """Valid input that violates a domain rule (422)"""

    status_code = 422
    error_type = "business_logic_error"

    def __init__(self, message: str):
        super().__init__(message)


class SessionAlreadyActive(BusinessLogicError):
    error_type = "session_already_active"

    def __init__(self):
        super().__init__(
            "You already have an active test session. Please complete or abandon it first."
        )


class InsufficientQuestions(BusinessLogicError):
    error_type = "insufficient_questions"

    def __init__(self, available_count: int, requested_count: int):
        super().__init__(
            f"Insufficient questions available. Found {available_count}, need {requested_count}"
        )
        self.available_count = available_count
        self.requested_count = requested_count

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["availableCount"] = self.available_count
        payload["requestedCount"] = self.requested_count
        return payload


class ExtensionLimitReached(BusinessLogicError):
    error_type = "extension_limit_reached"

    def __init__(self, limit: int):
        super().__init__(f"Maximum time extensions ({limit}) reached")
        self.limit = limit


class InvalidQuestionIndex(BusinessLogicError):
    error_type = "invalid_question_index"

    def __init__(self, question_index: int, total_questions: int):
        super().__init__(
            f"Invalid question index {question_index}; session has {total_questions} questions"
        )
        self.question_index = question_index


class SessionExpired(BusinessLogicError):
    error_type = "session_expired"

    def __init__(self):
        super().__init__("Test session time has expired. Extend the time or submit the test.")


class DatabaseError(AppError):
    """Persistence failure; never exposes internal detail to clients (500)"""

    status_code = 500
    error_type = "database_error"

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message, is_operational=False)

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["error"] = "An unexpected error occurred"
        return payload
