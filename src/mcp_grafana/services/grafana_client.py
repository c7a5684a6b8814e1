"""HTTP client for talking to Grafana on behalf of the current request."""

from typing import Any

import httpx
import structlog

from ..core.grafana_config import GRAFANA_ORG_ID_HEADER, grafana_config_from_context
from ..models.grafana import GrafanaConfig

logger = structlog.get_logger(__name__)

# Owned by the outbound transport; never copied from forwarded headers.
TRANSPORT_HEADERS = frozenset(
    {
        "host",
        "content-length",
        "transfer-encoding",
        "accept-encoding",
        # Hop-by-hop
        "connection",
        "keep-alive",
        "upgrade",
        "te",
        "trailer",
    }
)


def is_transport_header(name: str) -> bool:
    name_lower = name.lower()
    return name_lower in TRANSPORT_HEADERS or name_lower.startswith("proxy-")


def build_grafana_headers(config: GrafanaConfig) -> httpx.Headers:
    """Outbound headers for ``config``.

    Extra headers are applied last and case-insensitively, so a forwarded
    ``Authorization`` header replaces the configured service account token.
    Transport-owned and hop-by-hop headers are skipped, since a wildcard
    allow-list copies them from the incoming request.
    """
    headers = httpx.Headers()
    if config.api_key:
        headers["Authorization"] = f"Bearer {config.api_key}"
    if config.org_id is not None:
        headers[GRAFANA_ORG_ID_HEADER] = str(config.org_id)
    for name, value in config.extra_headers.items():
        if is_transport_header(name):
            continue
        headers[name] = value
    return headers


def create_grafana_client(config: GrafanaConfig | None = None, **kwargs: Any) -> httpx.AsyncClient:
    """Create an AsyncClient pointed at the Grafana instance in ``config``.

    Defaults to the config bound to the current request context. Extra
    keyword arguments are passed through to ``httpx.AsyncClient``.
    """
    if config is None:
        config = grafana_config_from_context()

    headers = build_grafana_headers(config)
    headers.update(kwargs.pop("headers", None) or {})
    logger.debug("Creating Grafana client", grafana_url=config.url)
    return httpx.AsyncClient(base_url=config.url, headers=headers, **kwargs)
