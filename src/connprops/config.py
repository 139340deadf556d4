"""Settings management with XDG paths and precedence resolution.

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.connprops/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Precedence resolution** -- :func:`load_settings` layers environment
  variables over ``config.json`` and the file over built-in defaults.

Only preferences that shape credential resolution live here (prompt
timeout, default token type, whether to prompt). Connection profiles are
the host application's business.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any

from connprops.exceptions import ConfigError
from connprops.models import ResolverSettings

_APP_NAME = "connprops"
_CONFIG_FILENAME = "config.json"

ENV_PROMPT_TIMEOUT = "CONNPROPS_PROMPT_TIMEOUT"
ENV_DEFAULT_TOKEN_TYPE = "CONNPROPS_DEFAULT_TOKEN_TYPE"
ENV_NO_INPUT = "CONNPROPS_NO_INPUT"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/connprops/`` (default ``~/.config/connprops/``).
    On macOS/Windows: ``~/.connprops/``.

    Returns:
        Absolute path to the configuration directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/connprops/`` (default ``~/.local/share/connprops/``).
    On macOS/Windows: ``~/.connprops/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def settings_path() -> Path:
    """Path to the settings file."""
    return get_config_dir() / _CONFIG_FILENAME


# --- Precedence resolution ---


def _load_settings_file() -> dict[str, Any]:
    path = settings_path()
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid settings file at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid settings file at {path}: expected a JSON object")
    return data


def _parse_bool(var_name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigError(f"Environment variable '{var_name}' is not a boolean: {raw!r}")


def load_settings() -> ResolverSettings:
    """Resolve settings with the full precedence chain.

    Precedence (high to low):
        1. Environment variables (``CONNPROPS_PROMPT_TIMEOUT``,
           ``CONNPROPS_DEFAULT_TOKEN_TYPE``, ``CONNPROPS_NO_INPUT``)
        2. User settings file (``~/.config/connprops/config.json``)
        3. Defaults

    Returns:
        The effective :class:`~connprops.models.ResolverSettings`.

    Raises:
        ConfigError: If the settings file is not valid JSON, an environment
            variable cannot be parsed, or the merged values fail validation.
    """
    data = _load_settings_file()

    timeout = os.environ.get(ENV_PROMPT_TIMEOUT)
    if timeout:
        try:
            data["prompt_timeout"] = float(timeout)
        except ValueError as exc:
            raise ConfigError(
                f"Environment variable '{ENV_PROMPT_TIMEOUT}' is not a number: {timeout!r}"
            ) from exc

    token_type = os.environ.get(ENV_DEFAULT_TOKEN_TYPE)
    if token_type:
        data["default_token_type"] = token_type

    no_input = os.environ.get(ENV_NO_INPUT)
    if no_input is not None:
        data["do_prompting"] = not _parse_bool(ENV_NO_INPUT, no_input)

    try:
        return ResolverSettings.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid settings: {exc}") from exc
