"""Client for submitting support tickets to a HelpBridge backend."""
from __future__ import annotations

from .error_codes import (
    ErrorCode,
    HttpError,
    MissingEndpoint,
    NoConnectivity,
    SubmissionError,
    SubmissionFailed,
    SubmissionResult,
    Timeout,
    TransportError,
)
from .logging_utils import configure_logging
from .models import SupportTicket
from .service import HelpBridgeService
from .transport import RequestsTransport, Transport, TransportFailure

__version__ = "0.1.0"

__all__ = [
    "ErrorCode",
    "HelpBridgeService",
    "HttpError",
    "MissingEndpoint",
    "NoConnectivity",
    "RequestsTransport",
    "SubmissionError",
    "SubmissionFailed",
    "SubmissionResult",
    "SupportTicket",
    "Timeout",
    "Transport",
    "TransportError",
    "TransportFailure",
    "configure_logging",
]
