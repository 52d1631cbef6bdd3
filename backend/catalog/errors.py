"""
Catalog service error taxonomy.

Every failure of a remote catalog call surfaces as one of these:
  - TransportError:  network failure, timeout, 5xx, unreadable body
  - ValidationError: the catalog API rejected the payload (4xx other than 404)
  - NotFoundError:   the target id does not exist (404)

Callers that do not care about the distinction catch CatalogServiceError.
"""

from typing import Any


class CatalogServiceError(Exception):
    """Base class for failed catalog API calls."""

    def __init__(
        self,
        message: str,
        *,
        method: str | None = None,
        path: str | None = None,
        status_code: int | None = None,
        detail: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.method = method
        self.path = path
        self.status_code = status_code
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "method": self.method,
            "path": self.path,
            "status_code": self.status_code,
            "detail": self.detail,
        }


class TransportError(CatalogServiceError):
    """The catalog API could not be reached or answered with a server error."""


class ValidationError(CatalogServiceError):
    """The catalog API rejected the submitted record."""


class NotFoundError(CatalogServiceError):
    """The requested record does not exist on the catalog API."""
