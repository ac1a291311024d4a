from __future__ import annotations

from typing import Optional


class CleverApiError(Exception):
    """Base class for every failure raised by the CleverCoin client."""

    kind = "error"

    def __init__(self, message: str, *, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class ValidationError(CleverApiError):
    """Caller misuse detected before any network I/O."""

    kind = "validation"


class TransportError(CleverApiError):
    """Network or TLS failure while talking to the API."""

    kind = "transport"

    def __init__(self, message: str, *, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.code = code


class ProtocolError(CleverApiError):
    """HTTP 200 whose body is not a JSON object."""

    kind = "protocol"

    def __init__(self, message: str, *, body: str = "") -> None:
        super().__init__(message, status=200)
        self.body = body


class ApiError(CleverApiError):
    """Non-200 answer from the API."""

    kind = "api"

    def __init__(self, status: int, message: str) -> None:
        super().__init__(f"API responds with HTTP status {status}: {message}", status=status)
        self.message = message
