"""Global pytest configuration and fixtures

Every test starts from a clean Grafana environment and an empty working
directory, so a developer's shell or .env file cannot leak into results.
"""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_grafana_env(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("GRAFANA_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
