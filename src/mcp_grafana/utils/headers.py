"""Utilities for forwarding request headers into the Grafana config."""

from __future__ import annotations

import json
from typing import Mapping

import structlog
from starlette.datastructures import Headers

from ..settings import GrafanaSettings

logger = structlog.get_logger(__name__)

WILDCARD = "*"


def canonical_header_key(name: str) -> str:
    """Return the canonical MIME form of a header name (``x-custom`` -> ``X-Custom``)."""
    return "-".join(part[:1].upper() + part[1:].lower() for part in name.split("-"))


def forward_request_headers_from_env(
    grafana_settings: GrafanaSettings | None = None,
) -> list[str] | None:
    """Return the allow-list of request headers to forward.

    ``None`` means forwarding is disabled. ``["*"]`` means every header
    present on the request is forwarded.
    """
    grafana_settings = grafana_settings or GrafanaSettings()
    raw = grafana_settings.GRAFANA_FORWARD_REQUEST_HEADERS
    if not raw:
        return None
    return [part.strip() for part in raw.split(",")]


def extra_headers_from_env(grafana_settings: GrafanaSettings | None = None) -> dict[str, str]:
    """Decode the static GRAFANA_EXTRA_HEADERS JSON object.

    Malformed values are logged and treated as unset.
    """
    grafana_settings = grafana_settings or GrafanaSettings()
    raw = grafana_settings.GRAFANA_EXTRA_HEADERS
    if not raw:
        return {}

    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("Failed to parse GRAFANA_EXTRA_HEADERS", error=str(e))
        return {}

    if not isinstance(decoded, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in decoded.items()
    ):
        logger.warning("GRAFANA_EXTRA_HEADERS must be a JSON object of strings")
        return {}
    return decoded


def _first_values(headers: Headers | Mapping[str, str]) -> dict[str, str]:
    """Map lowercased header name -> first value sent."""
    first: dict[str, str] = {}
    # Headers.items() yields every raw pair, repeats included
    for name, value in headers.items():
        first.setdefault(name.lower(), value)
    return first


def extract_forwarded_headers(
    headers: Headers | Mapping[str, str],
    allowed: list[str] | None,
) -> dict[str, str] | None:
    """Copy allow-listed headers with non-empty values out of ``headers``.

    Lookup is case-insensitive; result keys use the allow-list spelling, or
    the canonical header name in wildcard mode. When a header was sent more
    than once, the first value wins.
    """
    if not allowed:
        return None

    request_headers = _first_values(headers)
    forwarded: dict[str, str] = {}

    if allowed == [WILDCARD]:
        for name, value in request_headers.items():
            if value:
                forwarded[canonical_header_key(name)] = value
        return forwarded

    for name in dict.fromkeys(allowed):
        value = request_headers.get(name.lower())
        if value:
            forwarded[name] = value
    return forwarded
