"""Build the outbound ticket form post."""
from __future__ import annotations

import re
import urllib.parse
from dataclasses import dataclass, field
from typing import Dict

import requests

from . import config
from .error_codes import INVALID_URL, TransportError
from .models import SupportTicket

# Characters that can never appear unescaped in a URL.
_ILLEGAL_URL_CHARS = re.compile(r"[\x00-\x20\x7f<>\"{}|\\^`]")
_BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

# (form field, ticket attribute) in wire order.
FORM_FIELDS: tuple[tuple[str, str], ...] = (
    ("name", "name"),
    ("from", "email"),
    ("type", "type"),
    ("subject", "subject"),
    ("reply", "message"),
)


@dataclass(frozen=True)
class TicketRequest:
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    method: str = "POST"


def build_ticket_url(base_url: str) -> str:
    """Return the create-ticket URL for ``base_url``.

    Raises ``TransportError("Invalid URL")`` when the result is not a usable
    absolute URL. Nothing is sent over the network.
    """

    url = f"{base_url}{config.TICKET_PATH}"
    if not base_url or _ILLEGAL_URL_CHARS.search(url) or _BAD_PERCENT_ESCAPE.search(url):
        raise TransportError(INVALID_URL)

    try:
        parsed = urllib.parse.urlsplit(url)
    except ValueError as exc:
        raise TransportError(INVALID_URL) from exc
    if not parsed.scheme or not parsed.netloc:
        raise TransportError(INVALID_URL)

    try:
        requests.PreparedRequest().prepare_url(url, None)
    except requests.exceptions.RequestException as exc:
        raise TransportError(INVALID_URL) from exc
    return url


def build_headers(base_url: str) -> Dict[str, str]:
    headers = dict(config.COMMON_HEADERS)
    headers["Content-Type"] = f"multipart/form-data; boundary={config.BOUNDARY}"
    headers["Referer"] = base_url
    return headers


def build_body(ticket: SupportTicket) -> bytes:
    """Encode ``ticket`` as a multipart/form-data body with the fixed boundary."""

    delimiter = f"--{config.BOUNDARY}\r\n"
    parts = [
        f'{delimiter}Content-Disposition: form-data; name="{form_field}"\r\n\r\n'
        f"{getattr(ticket, attribute)}\r\n"
        for form_field, attribute in FORM_FIELDS
    ]
    parts.append(f"--{config.BOUNDARY}--\r\n")
    return "".join(parts).encode("utf-8")


def build_request(ticket: SupportTicket, base_url: str) -> TicketRequest:
    url = build_ticket_url(base_url)
    return TicketRequest(
        url=url,
        headers=build_headers(base_url),
        body=build_body(ticket),
    )


__all__ = [
    "FORM_FIELDS",
    "TicketRequest",
    "build_body",
    "build_headers",
    "build_request",
    "build_ticket_url",
]
