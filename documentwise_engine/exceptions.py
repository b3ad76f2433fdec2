# ## File: documentwise_engine/exceptions.py
# Version: 1.0.0
# Date: 2026-09-02
# Purpose: Exception hierarchy for DocumentWise.
#          The API client converts these into ActionResult error strings,
#          so pages only ever see plain messages.

from typing import Optional


class DocumentWiseException(Exception):
    """Base exception for all DocumentWise errors."""

    def __init__(self, message: str, details: str = None):
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self):
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigurationError(DocumentWiseException):
    """Raised when the API base URLs or other settings are missing or invalid."""
    pass


class ValidationError(DocumentWiseException):
    """Raised when client-side validation fails before any request is sent."""
    pass


class ApiError(DocumentWiseException):
    """Raised when the backend answers with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: str = None):
        self.status_code = status_code
        super().__init__(message, details)


class NotFoundError(ApiError):
    """Raised for 404 responses on a known resource."""

    def __init__(self, message: str, details: str = None):
        super().__init__(message, status_code=404, details=details)


class TransportError(DocumentWiseException):
    """Raised when the request never produced a response (DNS, refused, timeout)."""
    pass
