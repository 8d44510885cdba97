"""
Domain exceptions for the Gradeflow backend
===========================================

Services raise these; the API layer maps them onto HTTP responses in one
place (see `gradeflow.main`). None of them is fatal: each one describes a
request the caller may correct and retry.

Usage:
    from gradeflow.core.exceptions import NotFoundError, ForbiddenError

    if task is None:
        raise NotFoundError("Task", task_id)
"""

from typing import Any, Dict, Optional


class GradeflowError(Exception):
    """Base exception for all Gradeflow domain errors"""

    status_code: int = 400

    def __init__(
        self,
        message: str,
        code: str = "GRADEFLOW_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "detail": self.message,
            "details": self.details
        }


class NotFoundError(GradeflowError):
    """Referenced task/poll/ticket/user does not exist (or is not visible)"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} with ID {resource_id} not found",
            code="NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class ForbiddenError(GradeflowError):
    """Principal lacks the role or ownership required for the mutation"""

    status_code = 403

    def __init__(self, message: str = "Not authorized to perform this action"):
        super().__init__(message, code="FORBIDDEN")


class ValidationError(GradeflowError):
    """Malformed input"""

    status_code = 422

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


# ============================================
# Poll Errors
# ============================================

class PollClosedError(GradeflowError):
    status_code = 409

    def __init__(self, poll_id: str):
        super().__init__("Poll is closed", code="POLL_CLOSED", details={"poll_id": poll_id})


class AlreadyVotedError(GradeflowError):
    status_code = 409

    def __init__(self, poll_id: str):
        super().__init__("You have already voted", code="ALREADY_VOTED", details={"poll_id": poll_id})


class InvalidOptionError(GradeflowError):
    status_code = 400

    def __init__(self, poll_id: str, option_id: str):
        super().__init__(
            "Invalid option",
            code="INVALID_OPTION",
            details={"poll_id": poll_id, "option_id": option_id}
        )


# ============================================
# State Machine Errors
# ============================================

class InvalidStateError(GradeflowError):
    """Disallowed state transition (task status jump, re-closing a poll)"""

    status_code = 409

    def __init__(self, message: str, current: Optional[str] = None, requested: Optional[str] = None):
        details = {}
        if current is not None:
            details["current"] = current
        if requested is not None:
            details["requested"] = requested
        super().__init__(message, code="INVALID_STATE", details=details)
