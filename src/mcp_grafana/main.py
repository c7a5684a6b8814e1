"""FastAPI application wiring for Grafana header forwarding"""

import structlog
from fastapi import FastAPI

from .middleware import GrafanaConfigMiddleware
from .settings import settings
from .utils.setup_logging import setup_logging

logger = structlog.getLogger(__name__)


def create_app(app: FastAPI | None = None) -> FastAPI:
    """Install request-scoped Grafana config handling on ``app``.

    Creates a bare FastAPI application when none is given.
    """
    setup_logging()
    if app is None:
        app = FastAPI(title=settings.app.PROJECT_NAME)
    app.add_middleware(GrafanaConfigMiddleware)
    logger.info("Grafana config middleware installed")
    return app
