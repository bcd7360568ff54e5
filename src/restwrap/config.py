"""Configuration resolution with environment and project-file precedence.

:func:`resolve_config` builds a :class:`~restwrap.models.ClientConfig` from,
highest precedence first:

1. Explicit keyword arguments.
2. Environment variables: ``RESTWRAP_API_KEY`` (or
   ``RESTWRAP_API_KEY_SOURCE``, a credential source descriptor),
   ``RESTWRAP_BASE_URL`` and ``RESTWRAP_CACHE_TTL``.
3. Project-local config: ``./restwrap.json`` in the working directory.
4. Model defaults.

Credentials can be given indirectly through :func:`resolve_credential`
descriptors (``env:VAR`` or ``file:/path``) so that keys stay out of
project files.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from restwrap.exceptions import ConfigError
from restwrap.models import ClientConfig

_PROJECT_CONFIG_FILENAME = "restwrap.json"

ENV_API_KEY = "RESTWRAP_API_KEY"
ENV_API_KEY_SOURCE = "RESTWRAP_API_KEY_SOURCE"
ENV_BASE_URL = "RESTWRAP_BASE_URL"
ENV_CACHE_TTL = "RESTWRAP_CACHE_TTL"


def load_project_config(directory: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load ``restwrap.json`` from *directory* (default: the working directory).

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file is not a valid JSON object.
    """
    path = (directory or Path.cwd()) / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Project config at {path} must be a JSON object")
    return data


def resolve_credential(source: str) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace
        - anything else is returned as the literal credential

    Raises:
        ConfigError: If the variable is unset or the file cannot be read.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    return source


def resolve_config(
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    cache_ttl: Optional[int] = None,
    project_dir: Optional[Path] = None,
) -> ClientConfig:
    """Resolve the effective client configuration.

    Precedence (high to low):
        1. Keyword arguments
        2. ``RESTWRAP_*`` environment variables
        3. Project config (``./restwrap.json``; its ``api_key`` may be a
           credential source descriptor)
        4. Defaults

    Raises:
        ConfigError: On unreadable sources or invalid values.
    """
    values: dict[str, Any] = {}

    # 3. Project-local config
    project = load_project_config(project_dir)
    if project is not None:
        values.update(project)
        if isinstance(values.get("api_key"), str):
            values["api_key"] = resolve_credential(values["api_key"])

    # 2. Environment variables
    env_source = os.environ.get(ENV_API_KEY_SOURCE)
    if env_source:
        values["api_key"] = resolve_credential(env_source)
    env_key = os.environ.get(ENV_API_KEY)
    if env_key:
        values["api_key"] = env_key
    env_base_url = os.environ.get(ENV_BASE_URL)
    if env_base_url:
        values["base_url"] = env_base_url
    env_ttl = os.environ.get(ENV_CACHE_TTL)
    if env_ttl:
        try:
            values["cache_ttl"] = int(env_ttl)
        except ValueError as exc:
            raise ConfigError(
                f"{ENV_CACHE_TTL} must be an integer number of milliseconds, got {env_ttl!r}"
            ) from exc

    # 1. Explicit arguments
    if api_key is not None:
        values["api_key"] = api_key
    if base_url is not None:
        values["base_url"] = base_url
    if cache_ttl is not None:
        values["cache_ttl"] = cache_ttl

    try:
        return ClientConfig(**values)
    except (PydanticValidationError, TypeError) as exc:
        raise ConfigError(f"Invalid client configuration: {exc}") from exc
