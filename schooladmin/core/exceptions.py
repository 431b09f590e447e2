# schooladmin/core/exceptions.py
"""Custom exceptions for the school administration API."""
from fastapi import HTTPException
from typing import Any, Dict, Optional

from .results import Outcome, ServiceResult


class SchoolAdminException(HTTPException):
    """Base exception for the school administration API."""
    def __init__(
        self,
        status_code: int,
        detail: Any,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class NotFoundError(SchoolAdminException):
    """Exception raised when an id-targeted record is missing."""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(status_code=404, detail={"error": "Not Found", "message": message})


class ConflictError(SchoolAdminException):
    """Exception raised when a unique key already exists."""
    def __init__(self, message: str):
        super().__init__(status_code=409, detail={"error": "Conflict", "message": message})


class InvalidCredentialError(SchoolAdminException):
    def __init__(self, message: str = "Invalid password"):
        super().__init__(status_code=401, detail={"error": "Invalid Credential", "message": message})


class ValidationError(SchoolAdminException):
    """Exception raised for validation errors."""
    def __init__(self, message: str, field: Optional[str] = None):
        detail = {"error": "Validation Error", "message": message}
        if field:
            detail["field"] = field
        super().__init__(status_code=422, detail=detail)


_OUTCOME_ERRORS = {
    Outcome.NOT_FOUND: NotFoundError,
    Outcome.CONFLICT: ConflictError,
    Outcome.INVALID_CREDENTIAL: InvalidCredentialError,
    Outcome.INVALID: ValidationError,
}


def raise_for_result(result: ServiceResult) -> None:
    """Translate a failed service result into its HTTP exception.

    ``OK`` and ``EMPTY`` pass through; the caller renders both.
    """
    error_cls = _OUTCOME_ERRORS.get(result.outcome)
    if error_cls is not None:
        raise error_cls(result.message)
