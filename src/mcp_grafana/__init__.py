"""Forward incoming request headers into a request-scoped Grafana config."""

from .core.grafana_config import (
    attach_grafana_config,
    bind_grafana_config,
    extract_grafana_info_from_headers,
    grafana_config_from_context,
)
from .core.grafana_deps import GrafanaConfigDep, get_grafana_config
from .middleware import GrafanaConfigMiddleware
from .models import GrafanaConfig
from .services.grafana_client import create_grafana_client
from .utils.headers import (
    extra_headers_from_env,
    extract_forwarded_headers,
    forward_request_headers_from_env,
)

__all__ = [
    "GrafanaConfig",
    "GrafanaConfigDep",
    "GrafanaConfigMiddleware",
    "attach_grafana_config",
    "bind_grafana_config",
    "create_grafana_client",
    "extra_headers_from_env",
    "extract_forwarded_headers",
    "extract_grafana_info_from_headers",
    "forward_request_headers_from_env",
    "get_grafana_config",
    "grafana_config_from_context",
]
