"""Shared test fixtures for cafe24-mcp."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path

_ENV_VARS = (
    "CAFE24_MCP_CONFIG",
    "CAFE24_MALL_ID",
    "CAFE24_ACCESS_TOKEN",
    "CAFE24_CLIENT_ID",
    "CAFE24_CLIENT_SECRET",
    "CAFE24_REFRESH_TOKEN",
    "CAFE24_AUTHORIZATION_CODE",
    "CAFE24_OAUTH_SCOPE",
    "CAFE24_OAUTH_STATE",
    "XDG_CONFIG_HOME",
)


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty working dir and home, with no cafe24 env vars set."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return tmp_path
