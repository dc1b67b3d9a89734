"""API errors and validation helpers."""

from typing import Any


class ApiError(Exception):
    """Base API error with an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message}


class ValidationError(ApiError):
    """Client input error."""

    status_code = 400

    def __init__(self, message: str = "Validation error"):
        super().__init__(message)


class ServiceError(ApiError):
    """Request failed on the server side (database, schema)."""

    status_code = 500

    def __init__(self, message: str = "Request failed"):
        super().__init__(message)


def validate_body(body: Any) -> dict[str, Any]:
    """Request bodies are JSON objects; a missing body counts as empty."""
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body
