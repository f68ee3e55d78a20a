"""Shared fixtures."""

import pytest

from graphsim.config import CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def _builtin_config(monkeypatch):
    """Run every test against the built-in defaults unless it sets GRAPHSIM_CONFIG itself."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
