"""Shared fixtures."""

import pytest

from wakehost.config import loader


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep WAKEHOST_* variables from the developer's shell out of the tests."""
    for var in (
        loader.ENV_MAC,
        loader.ENV_HOST,
        loader.ENV_BROADCAST,
        loader.ENV_PORT,
        loader.ENV_MAX_ATTEMPTS,
        loader.ENV_INTERVAL,
        "WAKEHOST_CONFIG",
    ):
        monkeypatch.delenv(var, raising=False)
