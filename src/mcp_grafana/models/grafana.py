"""Request-scoped Grafana configuration model"""

from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from ..settings import DEFAULT_GRAFANA_URL


class GrafanaConfig(BaseModel):
    """Snapshot of the Grafana connection details for a single request.

    ``extra_headers`` holds the static GRAFANA_EXTRA_HEADERS overlaid with the
    headers forwarded from the incoming request. It is a read-only view over
    a private copy, so the snapshot cannot change once built.
    """

    model_config = ConfigDict(frozen=True)

    url: str = DEFAULT_GRAFANA_URL
    api_key: str | None = None
    org_id: int | None = None
    extra_headers: Mapping[str, str] = Field(default_factory=dict, validate_default=True)

    @field_validator("extra_headers", mode="after")
    @classmethod
    def _read_only_headers(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(v))

    @field_serializer("extra_headers")
    def _dump_headers(self, v: Mapping[str, str]) -> dict[str, str]:
        return dict(v)
