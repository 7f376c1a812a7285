"""Build a :class:`Cafe24Config` from TOML layers and the environment.

Layers, weakest first:

    * model defaults
    * ``$XDG_CONFIG_HOME/cafe24-mcp/config.toml`` (``~/.config`` without XDG)
    * ``cafe24-mcp.toml`` in the working directory
    * the file named by ``$CAFE24_MCP_CONFIG``
    * the ``path`` given to :func:`load_config`
    * the ``overrides`` mapping given to :func:`load_config`

Tables merge key by key, so a project file can change one HTTP setting
and keep the rest from the user file.

Credentials usually live in the environment rather than in a file.
After validation every auth value that is still unset is read from the
variable its ``*_env`` field names, and the mall ID from
``mall.mall_id_env``. A value written in a file always wins over the
environment.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from cafe24_mcp.core.errors import ConfigError

from .schema import Cafe24Config

APP_DIR = "cafe24-mcp"
PROJECT_FILE = "cafe24-mcp.toml"
CONFIG_PATH_ENV = "CAFE24_MCP_CONFIG"

# AuthConfig attributes that have a matching ``<name>_env`` attribute.
_ENV_BACKED_AUTH = (
    "access_token",
    "client_id",
    "client_secret",
    "refresh_token",
    "authorization_code",
    "scope",
    "state",
)


def _user_config_path() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    root = Path(xdg) if xdg else Path.home() / ".config"
    return root / APP_DIR / "config.toml"


def _project_config_path() -> Path:
    return Path.cwd() / PROJECT_FILE


def _config_files(explicit: str | Path | None) -> list[Path]:
    """Every TOML layer that applies, weakest first.

    The implicit user and project files are skipped when absent. A path
    named by ``$CAFE24_MCP_CONFIG`` or passed in explicitly must exist.
    """
    found = [p for p in (_user_config_path(), _project_config_path()) if p.is_file()]

    from_env = os.environ.get(CONFIG_PATH_ENV)
    if from_env:
        if not Path(from_env).is_file():
            msg = f"{CONFIG_PATH_ENV} points to non-existent file: {from_env}"
            raise ConfigError(msg)
        found.append(Path(from_env))

    if explicit is not None:
        if not Path(explicit).is_file():
            msg = f"Config file not found: {explicit}"
            raise ConfigError(msg)
        found.append(Path(explicit))

    return found


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read config file {path}: {e}"
        raise ConfigError(msg) from e


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return *base* updated with *override*, descending into nested tables.

    Neither argument is modified.
    """
    out = dict(base)
    for key, value in override.items():
        current = out.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            out[key] = _deep_merge(current, value)
        else:
            out[key] = value
    return out


def _fill_from_env(config: Cafe24Config) -> None:
    mall = config.mall
    if not mall.mall_id and mall.mall_id_env:
        mall.mall_id = os.environ.get(mall.mall_id_env, "")

    auth = config.auth
    for name in _ENV_BACKED_AUTH:
        if getattr(auth, name) is not None:
            continue
        variable = getattr(auth, f"{name}_env")
        if variable:
            # An exported-but-empty variable counts as unset.
            setattr(auth, name, os.environ.get(variable) or None)


def load_config(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Cafe24Config:
    """Resolve the effective configuration.

    Args:
        path: A config file applied above every discovered file.
        overrides: Raw settings applied above every file, in the same
            nested shape as the TOML.

    Raises:
        ConfigError: A named file is missing, a file is not valid TOML,
            or the merged settings fail model validation.
    """
    raw: dict[str, Any] = {}
    for layer in _config_files(path):
        raw = _deep_merge(raw, _read_toml(layer))
    if overrides:
        raw = _deep_merge(raw, overrides)

    try:
        config = Cafe24Config.model_validate(raw)
    except Exception as e:
        msg = f"Configuration validation failed: {e}"
        raise ConfigError(msg) from e

    _fill_from_env(config)
    return config
