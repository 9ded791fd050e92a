from __future__ import annotations

"""Closed error taxonomy for ticket submissions.

Every submission ends in success or exactly one of the ``SubmissionError``
variants below. ``error_code`` values are stable identifiers that appear in
structured logs.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


class ErrorCode:
    MISSING_ENDPOINT = "missing_endpoint"
    TRANSPORT = "transport_error"
    HTTP = "http_error"
    NO_CONNECTIVITY = "no_connectivity"
    TIMEOUT = "timeout"
    SUBMISSION_FAILED = "submission_failed"


INVALID_URL = "Invalid URL"
INVALID_RESPONSE_FORMAT = "Invalid response format"


class SubmissionError(Exception):
    """Base class for every terminal submission failure."""

    error_code: str = ErrorCode.SUBMISSION_FAILED
    default_message: str = "Submission failed"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)

    def _key(self) -> Tuple[object, ...]:
        return ()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SubmissionError):
            return NotImplemented
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self) -> int:
        return hash((type(self), self._key()))

    def __repr__(self) -> str:
        key = self._key()
        inner = ", ".join(repr(part) for part in key)
        return f"{type(self).__name__}({inner})"

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class MissingEndpoint(SubmissionError):
    error_code = ErrorCode.MISSING_ENDPOINT
    default_message = "HelpBridge base URL not set."


class TransportError(SubmissionError):
    error_code = ErrorCode.TRANSPORT

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def _key(self) -> Tuple[object, ...]:
        return (self.message,)


class HttpError(SubmissionError):
    error_code = ErrorCode.HTTP

    def __init__(self, status_code: int) -> None:
        super().__init__(
            f"Error occurred while submitting support ticket. HTTP Status Code: {status_code}"
        )
        self.status_code = status_code

    def _key(self) -> Tuple[object, ...]:
        return (self.status_code,)


class NoConnectivity(SubmissionError):
    error_code = ErrorCode.NO_CONNECTIVITY
    default_message = "No Internet connection. Please reconnect and try again."


class Timeout(SubmissionError):
    error_code = ErrorCode.TIMEOUT
    default_message = (
        "We didn't hear back from the support server in time, please try again later."
    )


class SubmissionFailed(SubmissionError):
    error_code = ErrorCode.SUBMISSION_FAILED
    default_message = (
        "Error occurred while submitting support ticket. Please try again later."
    )


@dataclass(frozen=True)
class SubmissionResult:
    ok: bool
    error: Optional[SubmissionError] = None

    @classmethod
    def success(cls) -> "SubmissionResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: SubmissionError) -> "SubmissionResult":
        return cls(ok=False, error=error)

    def raise_for_error(self) -> None:
        """Raise the carried error, if any."""

        if self.error is not None:
            raise self.error


__all__ = [
    "ErrorCode",
    "HttpError",
    "INVALID_RESPONSE_FORMAT",
    "INVALID_URL",
    "MissingEndpoint",
    "NoConnectivity",
    "SubmissionError",
    "SubmissionFailed",
    "SubmissionResult",
    "Timeout",
    "TransportError",
]
