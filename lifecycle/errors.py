"""Typed errors raised by the entity lifecycle layer.

Every error carries a machine readable ``code`` and the HTTP status the API
answers with. The body is always ``{"error": message, "code": code}``.
"""

from __future__ import annotations


class ApiError(Exception):
    status_code = 400

    def __init__(self, message: str, code: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message, "code": self.code}

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        return f"{type(self).__name__}({self.code!r}, {self.status_code})"


class ValidationFailed(ApiError):
    """A request field is missing, malformed or out of range."""


class ReferenceNotFound(ApiError):
    """A foreign key in the payload names a row that does not exist."""


class DuplicateValue(ApiError):
    """A unique constraint rejected the write."""


class InvalidTransition(ApiError):
    def __init__(self, message: str):
        super().__init__(message, "INVALID_TRANSITION")


class NotFound(ApiError):
    status_code = 404


class ResourceInUse(ApiError):
    status_code = 409


class Unauthorized(ApiError):
    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, "UNAUTHORIZED")


class Forbidden(ApiError):
    status_code = 403

    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(message, "FORBIDDEN")
