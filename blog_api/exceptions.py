"""
Custom Exception Classes for the Blog API

The repository layer raises exactly three kinds of failure, shared by the
relational and the in-memory implementations:

- ResourceNotFoundError (PostNotFoundError, TagNotFoundError): the referenced
  post or tag does not exist.
- DuplicateError: a uniqueness rule was violated (tag name).
- UnexpectedError: any other storage failure.

Each exception carries the HTTP status and error code the transport layer
answers with, so route handlers can let them propagate.
"""

from enum import Enum
from typing import Any

from fastapi import status


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in error responses."""

    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class BlogAPIError(Exception):
    """Base exception class for all Blog API exceptions"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Resource Not Found Exceptions
# ============================================================================


class ResourceNotFoundError(BlogAPIError):
    """Base class for resource not found errors"""

    def __init__(self, resource_type: str, resource_id: Any | None = None):
        message = f"{resource_type} not found"
        if resource_id is not None:
            message = f"{resource_type} with id '{resource_id}' not found"
        self.resource_id = resource_id
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code=ErrorCode.RESOURCE_NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class PostNotFoundError(ResourceNotFoundError):
    """Raised when a post is not found"""

    def __init__(self, post_id: Any | None = None):
        super().__init__(resource_type="Post", resource_id=post_id)


class TagNotFoundError(ResourceNotFoundError):
    """Raised when a tag is not found"""

    def __init__(self, tag_id: Any | None = None):
        super().__init__(resource_type="Tag", resource_id=tag_id)


# ============================================================================
# Constraint & Storage Exceptions
# ============================================================================


class DuplicateError(BlogAPIError):
    """Raised when creating a resource that collides with an existing one"""

    def __init__(self, resource_type: str, field: str, value: Any, resource_id: Any | None = None):
        self.resource_id = resource_id
        super().__init__(
            message=f"{resource_type} with {field} '{value}' already exists",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code=ErrorCode.DUPLICATE_RESOURCE,
            details={"resource_type": resource_type, "field": field, "value": value, "resource_id": resource_id},
        )


class UnexpectedError(BlogAPIError):
    """Raised when the store fails in a way no other exception describes"""

    def __init__(self, detail: str, operation: str | None = None):
        self.detail = detail
        details = {"operation": operation} if operation else {}
        super().__init__(
            message=f"Unexpected error: [{detail}]",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code=ErrorCode.INTERNAL_ERROR,
            details=details,
        )
