from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SupportTicket:
    """A support request as typed by the user.

    Fields are sent verbatim; validation belongs to the caller or the backend.
    ``type`` is the backend's category code, e.g. ``"1"`` or ``"2"``.
    """

    name: str
    email: str
    type: str
    subject: str
    message: str


__all__ = ["SupportTicket"]
