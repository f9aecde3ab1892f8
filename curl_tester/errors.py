from __future__ import annotations

from typing import Any


MISSING_CREDENTIAL_MESSAGE = "Groq API key not configured"


class RelayError(RuntimeError):
    """Base error rendered as a JSON body with a fixed status code."""

    status_code = 500

    def __init__(self, message: str, *, status_code: int | None = None, payload: dict[str, Any] | None = None) -> None:
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload if payload is not None else {"error": message}
        super().__init__(message)


class InputError(RelayError):
    """Raised when the request body is missing a required field."""

    status_code = 400


class ConfigError(RelayError):
    """Raised when no upstream credential is configured."""

    status_code = 500

    def __init__(self, message: str = MISSING_CREDENTIAL_MESSAGE) -> None:
        super().__init__(message)


class UpstreamError(RelayError):
    """Raised when the completions endpoint answers with a non-success status."""

    def __init__(self, message: str, *, status_code: int, payload: dict[str, Any] | None = None) -> None:
        super().__init__(message, status_code=status_code, payload=payload)
