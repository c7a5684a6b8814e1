"""Middleware that binds the request's Grafana config for downstream handlers.

The config is built once per HTTP/websocket connection from the request
headers and the environment, and is only visible while the wrapped app
handles that connection.
"""

import structlog
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Receive, Scope, Send

from ..core.grafana_config import bind_grafana_config, extract_grafana_info_from_headers

logger = structlog.get_logger(__name__)

_CONNECTION_SCOPES = {"http", "websocket"}


class GrafanaConfigMiddleware:
    """Attach a fresh GrafanaConfig to every incoming connection."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in _CONNECTION_SCOPES:
            await self.app(scope, receive, send)
            return

        config = extract_grafana_info_from_headers(HTTPConnection(scope))
        logger.debug(
            "Bound Grafana config",
            grafana_url=config.url,
            extra_header_names=sorted(config.extra_headers),
        )

        with bind_grafana_config(config):
            await self.app(scope, receive, send)
