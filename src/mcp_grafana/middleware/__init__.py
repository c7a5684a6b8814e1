from .grafana_config import GrafanaConfigMiddleware

__all__ = ["GrafanaConfigMiddleware"]
