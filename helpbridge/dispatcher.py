"""Send a built ticket request and reduce the outcome to one result.

Classification lives in ``classify_failure`` and ``classify_response``; the
blocking ``dispatch`` and callback ``dispatch_with_completion`` adapters only
differ in how they wait for the transport.
"""
from __future__ import annotations

from typing import Any, Callable, Optional

from .error_codes import (
    INVALID_RESPONSE_FORMAT,
    HttpError,
    NoConnectivity,
    SubmissionError,
    SubmissionResult,
    Timeout,
    TransportError,
)
from .logging_utils import LOGGER, _submission_event, redact_url
from .request_builder import TicketRequest
from .transport import (
    NOT_CONNECTED_TO_INTERNET,
    TIMED_OUT,
    Transport,
    failure_from_exception,
)

SUCCESS_STATUS = 200

ResultCallback = Callable[[SubmissionResult], None]


def classify_failure(exc: BaseException) -> SubmissionError:
    """Map anything a transport raised to a ``SubmissionError``.

    Exceptions without a recognised code become ``TransportError`` carrying
    their description.
    """

    if isinstance(exc, SubmissionError):
        return exc

    failure = failure_from_exception(exc)
    if failure.code == NOT_CONNECTED_TO_INTERNET:
        return NoConnectivity()
    if failure.code == TIMED_OUT:
        return Timeout()
    return TransportError(failure.description)


def _status_of(response: Any) -> Optional[int]:
    status = getattr(response, "status_code", None)
    if status is None:
        status = getattr(response, "status", None)
    if isinstance(status, bool) or not isinstance(status, int):
        return None
    return status


def classify_response(response: Any) -> Optional[SubmissionError]:
    """Return ``None`` for a successful response, else the matching error.

    Any 200 counts as success; the body is not inspected.
    """

    status = _status_of(response)
    if status is None:
        return TransportError(INVALID_RESPONSE_FORMAT)
    if status != SUCCESS_STATUS:
        return HttpError(status)
    return None


def _record_outcome(request: TicketRequest, error: Optional[SubmissionError], response: Any = None) -> None:
    if error is None:
        _submission_event(
            "state",
            phase="succeeded",
            url=redact_url(request.url),
            http_status=_status_of(response),
        )
        return
    _submission_event(
        "state",
        phase="failed",
        url=redact_url(request.url),
        error_code=error.error_code,
    )


def dispatch(transport: Transport, request: TicketRequest) -> None:
    """Send ``request`` and block until it settles.

    Returns on success; raises the matching ``SubmissionError`` otherwise.
    """

    _submission_event("state", phase="dispatched", url=redact_url(request.url), mode="blocking")
    try:
        response = transport.send(request)
    except Exception as exc:
        error = classify_failure(exc)
        _record_outcome(request, error)
        if error is exc:
            raise
        raise error from exc

    error = classify_response(response)
    _record_outcome(request, error, response)
    if error is not None:
        raise error


def dispatch_with_completion(
    transport: Transport,
    request: TicketRequest,
    completion: ResultCallback,
) -> None:
    """Start sending ``request`` and return immediately.

    ``completion`` is called exactly once with a ``SubmissionResult``. It runs
    on a transport worker thread; an exception it raises is written to the
    ``helpbridge`` logger and goes no further.
    """

    def _on_settled(response: Any, exc: Optional[BaseException]) -> None:
        error = classify_failure(exc) if exc is not None else classify_response(response)
        _record_outcome(request, error, response)
        result = SubmissionResult.success() if error is None else SubmissionResult.failure(error)
        try:
            completion(result)
        except Exception:  # noqa: BLE001 - nobody collects the worker's future
            LOGGER.exception("Submission completion handler raised")

    _submission_event("state", phase="dispatched", url=redact_url(request.url), mode="callback")
    transport.send_with_completion(request, _on_settled)


def complete_with_error(completion: ResultCallback, error: SubmissionError) -> None:
    """Deliver a failure that happened before dispatch."""

    completion(SubmissionResult.failure(error))


__all__ = [
    "SUCCESS_STATUS",
    "classify_failure",
    "classify_response",
    "complete_with_error",
    "dispatch",
    "dispatch_with_completion",
]
