"""Configuration constants for the HelpBridge ticket client."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Mapping, Optional

from .error_codes import MissingEndpoint

BASE_URL_ENV_VAR: str = "HELPBRIDGE_BASE_URL"
TICKET_PATH: str = "/en/customer/create-ticket/"

# The backend expects a Safari form post; keep these byte-for-byte.
BOUNDARY: str = "----WebKitFormBoundaryq0qKH8apUNfyKGNp"

COMMON_HEADERS: dict[str, str] = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-GB,en;q=0.9",
    "Priority": "u=0, i",
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
        "(KHTML, like Gecko) Version/17.4.1 Safari/605.1.15"
    ),
}


def _parse_int_setting(env_var: str, default: int, *, minimum: int = 1) -> int:
    """Parse an integer knob from the environment with a lower bound."""

    try:
        value = int(os.getenv(env_var, str(default)))
    except ValueError:
        return default
    return max(minimum, value)


# Per-request timeout handed to requests (seconds).
REQUEST_TIMEOUT_SECONDS: int = _parse_int_setting("HELPBRIDGE_TIMEOUT_SECONDS", 60)
# Worker threads used by callback-style submissions.
MAX_CALLBACK_WORKERS: int = _parse_int_setting("HELPBRIDGE_MAX_CALLBACK_WORKERS", 4)

_LOG_FILE_RAW = os.getenv("HELPBRIDGE_LOG_FILE", "").strip()
LOG_FILE: Optional[Path] = Path(_LOG_FILE_RAW) if _LOG_FILE_RAW else None
LOG_TO_STDOUT: bool = os.getenv("HELPBRIDGE_LOG_STDOUT", "0").strip().lower() not in {
    "",
    "0",
    "false",
}

EndpointSource = Literal["env", "argument"]


@dataclass(frozen=True)
class ServiceConfig:
    base_url: str
    source: EndpointSource


def resolve_service_config(
    base_url: Optional[str] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> ServiceConfig:
    """Resolve the backend endpoint once for a service instance.

    The environment override always wins when the variable is present, then
    the explicit ``base_url``. Raises ``MissingEndpoint`` when neither yields
    a value.
    """

    env = os.environ if environ is None else environ
    env_value = env.get(BASE_URL_ENV_VAR)
    if env_value is not None:
        return ServiceConfig(base_url=env_value, source="env")
    if base_url is not None:
        return ServiceConfig(base_url=base_url, source="argument")
    raise MissingEndpoint()


__all__ = [
    "BASE_URL_ENV_VAR",
    "BOUNDARY",
    "COMMON_HEADERS",
    "LOG_FILE",
    "LOG_TO_STDOUT",
    "MAX_CALLBACK_WORKERS",
    "REQUEST_TIMEOUT_SECONDS",
    "ServiceConfig",
    "TICKET_PATH",
    "resolve_service_config",
]
