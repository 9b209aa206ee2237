"""Relay error hierarchy and the JSON error response builder."""

from fastapi.responses import JSONResponse

from app.models import ErrorBody
from app.utils.cors import apply_cors_headers


class RelayError(Exception):
    """Base class for client-facing errors raised before the upstream call."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingApiKeyError(RelayError):
    status_code = 400

    def __init__(self) -> None:
        super().__init__("Missing x-api-key header")


class MalformedBodyError(RelayError):
    status_code = 400


class PayloadTooLargeError(RelayError):
    status_code = 413

    def __init__(self, limit: int) -> None:
        super().__init__(f"Request body exceeds the {limit} byte limit")
        self.limit = limit


def error_response(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    """Build a CORS-decorated ``{"error": message}`` response."""
    response = JSONResponse(
        status_code=status_code,
        content=ErrorBody(error=message).model_dump(),
        headers=headers,
    )
    return apply_cors_headers(response)
