from .grafana import GrafanaConfig

__all__ = ["GrafanaConfig"]
