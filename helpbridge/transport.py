"""HTTP transport used to deliver ticket requests.

A transport exposes a blocking ``send`` and a callback-driven
``send_with_completion``. Low-level failures are reported as
``TransportFailure`` carrying a URL-loading style error code, so the
dispatcher can classify them without knowing which HTTP library ran.
"""
from __future__ import annotations

import errno
import socket
from concurrent.futures import ThreadPoolExecutor
from threading import Lock
from typing import Any, Callable, Iterator, Optional

import requests

from . import config
from .request_builder import TicketRequest

UNKNOWN = -1
TIMED_OUT = -1001
UNSUPPORTED_URL = -1002
CANNOT_FIND_HOST = -1003
CANNOT_CONNECT_TO_HOST = -1004
NOT_CONNECTED_TO_INTERNET = -1009

_NO_ROUTE_ERRNOS = {
    errno.ENETUNREACH,
    errno.ENETDOWN,
    errno.EHOSTUNREACH,
}

CompletionFn = Callable[[Any, Optional[BaseException]], None]


class TransportFailure(Exception):
    def __init__(self, code: int, description: str) -> None:
        super().__init__(description)
        self.code = code
        self.description = description or f"Transport failure (code {code})"

    def __str__(self) -> str:
        return self.description


def _iter_causes(exc: BaseException) -> Iterator[BaseException]:
    """Walk an exception and everything it wraps (urllib3 reasons included)."""

    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        nested = [
            getattr(current, "reason", None),
            current.__cause__,
            current.__context__,
            *current.args,
        ]
        stack.extend(item for item in nested if isinstance(item, BaseException))


def _is_no_route(exc: BaseException) -> bool:
    for cause in _iter_causes(exc):
        if isinstance(cause, socket.gaierror):
            if cause.errno == getattr(socket, "EAI_AGAIN", None):
                return True
            continue
        if isinstance(cause, OSError) and cause.errno in _NO_ROUTE_ERRNOS:
            return True
    return False


def _is_dns_failure(exc: BaseException) -> bool:
    return any(isinstance(cause, socket.gaierror) for cause in _iter_causes(exc))


def failure_from_exception(exc: BaseException) -> TransportFailure:
    """Translate a requests/socket exception into a ``TransportFailure``."""

    if isinstance(exc, TransportFailure):
        return exc

    description = str(exc) or type(exc).__name__
    if isinstance(exc, (requests.Timeout, socket.timeout)):
        code = TIMED_OUT
    elif isinstance(
        exc,
        (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema, requests.exceptions.InvalidSchema),
    ):
        code = UNSUPPORTED_URL
    elif isinstance(exc, requests.ConnectionError) or (
        isinstance(exc, OSError) and not isinstance(exc, requests.RequestException)
    ):
        if _is_no_route(exc):
            code = NOT_CONNECTED_TO_INTERNET
        elif _is_dns_failure(exc):
            code = CANNOT_FIND_HOST
        else:
            code = CANNOT_CONNECT_TO_HOST
    else:
        code = UNKNOWN
    return TransportFailure(code, description)


class Transport:
    """Base transport.

    Subclasses implement ``send``; the callback variant runs ``send`` on a
    small worker pool owned by the transport.
    """

    def __init__(self, max_workers: Optional[int] = None) -> None:
        workers = config.MAX_CALLBACK_WORKERS if max_workers is None else max_workers
        self._max_workers = max(1, workers)
        self._executor: Optional[ThreadPoolExecutor] = None
        self._lock = Lock()

    def send(self, request: TicketRequest) -> Any:
        """Deliver ``request`` and return an object exposing ``status_code``."""

        raise NotImplementedError

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers,
                    thread_name_prefix="helpbridge",
                )
            return self._executor

    def send_with_completion(self, request: TicketRequest, completion: CompletionFn) -> None:
        """Start delivering ``request`` and call ``completion(response, error)`` once."""

        def _run() -> None:
            try:
                response = self.send(request)
            except Exception as exc:  # noqa: BLE001 - handed to the completion
                completion(None, exc)
                return
            completion(response, None)

        self._get_executor().submit(_run)

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)


class RequestsTransport(Transport):
    """Transport backed by a ``requests.Session``."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        *,
        timeout: Optional[float] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        super().__init__(max_workers=max_workers)
        self._session = session if session is not None else requests.Session()
        self._timeout = config.REQUEST_TIMEOUT_SECONDS if timeout is None else timeout

    @property
    def session(self) -> requests.Session:
        return self._session

    def send(self, request: TicketRequest) -> requests.Response:
        try:
            return self._session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
                timeout=self._timeout,
            )
        except (requests.RequestException, OSError) as exc:
            raise failure_from_exception(exc) from exc


_SHARED_TRANSPORT: Optional[RequestsTransport] = None
_SHARED_LOCK = Lock()


def shared_transport() -> RequestsTransport:
    """Return the process-wide default transport, creating it on first use."""

    global _SHARED_TRANSPORT

    with _SHARED_LOCK:
        if _SHARED_TRANSPORT is None:
            _SHARED_TRANSPORT = RequestsTransport()
        return _SHARED_TRANSPORT


__all__ = [
    "CANNOT_CONNECT_TO_HOST",
    "CANNOT_FIND_HOST",
    "NOT_CONNECTED_TO_INTERNET",
    "RequestsTransport",
    "TIMED_OUT",
    "Transport",
    "TransportFailure",
    "UNKNOWN",
    "UNSUPPORTED_URL",
    "failure_from_exception",
    "shared_transport",
]
