"""Custom exception classes for structured error handling."""

from typing import Any


class PolyglotError(Exception):
    """Base exception for all Polyglot errors."""

    def __init__(self, code: str, message: str, status_code: int = 500) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message}


class InvalidInputError(PolyglotError):
    def __init__(self, message: str = "Message is required") -> None:
        super().__init__(code="INVALID_INPUT", message=message, status_code=400)


class UpstreamUnavailableError(PolyglotError):
    def __init__(self, message: str = "Inference server not available") -> None:
        super().__init__(code="UPSTREAM_UNAVAILABLE", message=message, status_code=503)


class InternalError(PolyglotError):
    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(code="INTERNAL_ERROR", message=message, status_code=500)
