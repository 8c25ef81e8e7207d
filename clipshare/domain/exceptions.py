# clipshare/domain/exceptions.py

"""
Custom exceptions for the application.

This module defines the domain exceptions raised by the clip store and
the clip service. Each one carries a human-readable ``detail`` and an
``internal_code`` that the HTTP layer maps to a status code.
"""

from typing import Any, Dict, Optional


class DomainException(Exception):
    """
    Base exception for every clipshare domain error.
    """

    def __init__(
            self,
            detail: str = "Domain error",
            internal_code: str = "DOMAIN_ERROR",
            details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(detail)
        self.detail = detail
        self.internal_code = internal_code
        self.details = details or {}


class ResourceNotFoundException(DomainException):
    """Resource not found (or no longer visible)."""

    def __init__(self, detail: str = "Resource not found", resource_id: Any = None):
        resource_info = f" (ID: {resource_id})" if resource_id is not None else ""
        super().__init__(
            detail=f"{detail}{resource_info}",
            internal_code="RESOURCE_NOT_FOUND"
        )
        self.resource_id = resource_id


class ResourceAlreadyExistsException(DomainException):
    """Resource already exists."""

    def __init__(self, detail: str = "Resource already exists", resource_id: Any = None):
        resource_info = f" (ID: {resource_id})" if resource_id is not None else ""
        super().__init__(
            detail=f"{detail}{resource_info}",
            internal_code="RESOURCE_ALREADY_EXISTS"
        )
        self.resource_id = resource_id


class PermissionDeniedException(DomainException):
    """
    Access denied.

    The detail is a hint meant for the end user; it never contains the
    protected secret.
    """

    def __init__(self, detail: str = "Permission denied"):
        super().__init__(
            detail=detail,
            internal_code="PERMISSION_DENIED"
        )

    @property
    def hint(self) -> str:
        return self.detail


class DatabaseOperationException(DomainException):
    """Error while talking to the backing store, or any other internal failure."""

    def __init__(self, detail: str = "Error executing database operation",
                 original_error: Optional[Exception] = None):
        super().__init__(
            detail=detail,
            internal_code="DATABASE_OPERATION_ERROR"
        )
        self.original_error = original_error


class InvalidInputException(DomainException):
    """Invalid input data, reported field by field."""

    def __init__(self, detail: str = "Invalid input data", fields: Optional[Dict[str, str]] = None):
        fields = fields or {}
        field_errors = ""
        if fields:
            field_errors = ": " + ", ".join([f"{field}: {error}" for field, error in fields.items()])

        super().__init__(
            detail=f"{detail}{field_errors}",
            internal_code="INVALID_INPUT",
            details=fields,
        )
        self.fields = fields
