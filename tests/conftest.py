"""Pytest configuration and shared fixtures for all tests."""

import pytest

CONFIG_VARIABLES = (
    "BUILD_SCAN_SERVER",
    "ENRICHER_COMMAND_TIMEOUT",
    "DISABLE_GIT_METADATA",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolate_enricher_config(monkeypatch):
    """Keep the developer's own enricher settings out of the tests.

    Detection code works on injected Environment snapshots, but
    load_config() and the CLI read the process environment.
    """
    for name in CONFIG_VARIABLES:
        monkeypatch.delenv(name, raising=False)
