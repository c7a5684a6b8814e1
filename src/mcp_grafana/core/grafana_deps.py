"""Grafana config dependencies for FastAPI endpoints"""

from typing import Annotated

from fastapi import Depends, Request

from ..models.grafana import GrafanaConfig
from .grafana_config import bound_grafana_config, extract_grafana_info_from_headers


async def get_grafana_config(request: Request) -> GrafanaConfig:
    """FastAPI dependency returning the request's Grafana config.

    Uses the config bound by GrafanaConfigMiddleware when it is installed,
    otherwise builds one from the request.
    """
    config = bound_grafana_config()
    if config is not None:
        return config
    return extract_grafana_info_from_headers(request)


GrafanaConfigDep = Annotated[GrafanaConfig, Depends(get_grafana_config)]
