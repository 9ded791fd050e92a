from __future__ import annotations

from typing import Mapping, Optional

from .config import ServiceConfig, resolve_service_config
from .dispatcher import ResultCallback, complete_with_error, dispatch, dispatch_with_completion
from .error_codes import SubmissionError
from .logging_utils import _submission_event, redact_url
from .models import SupportTicket
from .request_builder import TicketRequest, build_request
from .transport import Transport, shared_transport


class HelpBridgeService:
    """Submit support tickets to the HelpBridge backend.

    The endpoint is resolved once here: ``HELPBRIDGE_BASE_URL`` wins when set,
    otherwise ``base_url`` is used, otherwise ``MissingEndpoint`` is raised.
    ``transport`` defaults to the shared ``RequestsTransport``; pass your own
    to substitute a test double.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[Transport] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._config = resolve_service_config(base_url, environ=environ)
        self._transport = transport if transport is not None else shared_transport()

    @property
    def config(self) -> ServiceConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def transport(self) -> Transport:
        return self._transport

    def _build(self, ticket: SupportTicket) -> TicketRequest:
        request = build_request(ticket, self._config.base_url)
        _submission_event(
            "state",
            phase="built",
            url=redact_url(request.url),
            body_bytes=len(request.body),
        )
        return request

    def submit_support_ticket(self, ticket: SupportTicket) -> None:
        """Submit ``ticket`` and wait for the backend.

        Raises a ``SubmissionError`` subclass on any failure.
        """

        request = self._build(ticket)
        dispatch(self._transport, request)

    def submit_support_ticket_with_completion(
        self,
        ticket: SupportTicket,
        completion: ResultCallback,
    ) -> None:
        """Submit ``ticket`` in the background and report through ``completion``.

        The request is on its way before this returns. ``completion`` receives
        exactly one ``SubmissionResult``; an invalid URL is reported
        synchronously, before this method returns.
        """

        try:
            request = self._build(ticket)
        except SubmissionError as exc:
            complete_with_error(completion, exc)
            return
        dispatch_with_completion(self._transport, request, completion)


__all__ = ["HelpBridgeService"]
