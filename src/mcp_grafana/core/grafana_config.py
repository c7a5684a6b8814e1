"""
Request-scoped Grafana configuration.

Builds a GrafanaConfig from an incoming request plus the process
environment, and carries it through the request via contextvars.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import Context, ContextVar

import structlog
from starlette.datastructures import Headers
from starlette.requests import HTTPConnection

from ..models.grafana import GrafanaConfig
from ..settings import GrafanaSettings
from ..utils.headers import (
    extra_headers_from_env,
    extract_forwarded_headers,
    forward_request_headers_from_env,
)

logger = structlog.get_logger(__name__)

GRAFANA_URL_HEADER = "X-Grafana-URL"
GRAFANA_SERVICE_ACCOUNT_TOKEN_HEADER = "X-Grafana-Service-Account-Token"
GRAFANA_API_KEY_HEADER = "X-Grafana-API-Key"  # deprecated
GRAFANA_ORG_ID_HEADER = "X-Grafana-Org-Id"

_grafana_config: ContextVar[GrafanaConfig | None] = ContextVar("grafana_config", default=None)


def _resolve_api_key(headers: Headers, grafana_settings: GrafanaSettings) -> str | None:
    if token := headers.get(GRAFANA_SERVICE_ACCOUNT_TOKEN_HEADER):
        return token
    if api_key := headers.get(GRAFANA_API_KEY_HEADER):
        logger.warning(
            f"{GRAFANA_API_KEY_HEADER} header is deprecated, "
            f"use {GRAFANA_SERVICE_ACCOUNT_TOKEN_HEADER} instead"
        )
        return api_key
    if grafana_settings.GRAFANA_SERVICE_ACCOUNT_TOKEN:
        return grafana_settings.GRAFANA_SERVICE_ACCOUNT_TOKEN
    if grafana_settings.GRAFANA_API_KEY:
        logger.warning(
            "GRAFANA_API_KEY is deprecated, use GRAFANA_SERVICE_ACCOUNT_TOKEN instead"
        )
        return grafana_settings.GRAFANA_API_KEY
    return None


def _resolve_org_id(headers: Headers, grafana_settings: GrafanaSettings) -> int | None:
    raw = (headers.get(GRAFANA_ORG_ID_HEADER) or "").strip() or grafana_settings.GRAFANA_ORG_ID
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring invalid Grafana org id", org_id=raw)
        return None


def extract_grafana_info_from_headers(
    request: HTTPConnection,
    grafana_settings: GrafanaSettings | None = None,
) -> GrafanaConfig:
    """Build the Grafana config for ``request``.

    Request headers override environment values. Forwarded headers override
    static GRAFANA_EXTRA_HEADERS entries with the same name.
    """
    grafana_settings = grafana_settings or GrafanaSettings()
    headers = request.headers

    allowed = forward_request_headers_from_env(grafana_settings)
    forwarded = extract_forwarded_headers(headers, allowed)

    extra_headers = extra_headers_from_env(grafana_settings)
    if forwarded:
        extra_headers.update(forwarded)

    url = headers.get(GRAFANA_URL_HEADER) or grafana_settings.GRAFANA_URL

    return GrafanaConfig(
        url=url.rstrip("/"),
        api_key=_resolve_api_key(headers, grafana_settings),
        org_id=_resolve_org_id(headers, grafana_settings),
        extra_headers=extra_headers,
    )


def attach_grafana_config(
    ctx: Context,
    request: HTTPConnection,
    grafana_settings: GrafanaSettings | None = None,
) -> Context:
    """Return a copy of ``ctx`` with the request's Grafana config bound to it."""
    config = extract_grafana_info_from_headers(request, grafana_settings)
    new_ctx = ctx.copy()
    new_ctx.run(_grafana_config.set, config)
    return new_ctx


def grafana_config_from_context(ctx: Context | None = None) -> GrafanaConfig:
    """Return the Grafana config bound to ``ctx`` (or the current context).

    Falls back to an empty default config when none is bound.
    """
    config = _grafana_config.get() if ctx is None else ctx.get(_grafana_config)
    return config if config is not None else GrafanaConfig()


def bound_grafana_config() -> GrafanaConfig | None:
    """Return the config bound to the current context, or None."""
    return _grafana_config.get()


@contextmanager
def bind_grafana_config(config: GrafanaConfig) -> Iterator[GrafanaConfig]:
    """Bind ``config`` to the current context for the duration of the block."""
    token = _grafana_config.set(config)
    try:
        yield config
    finally:
        _grafana_config.reset(token)
