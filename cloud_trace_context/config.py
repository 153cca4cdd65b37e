"""Configuration loading for the trace context middleware.

Options are resolved with the following priority (highest first):

1. Explicit keyword overrides
2. Environment variables (``CLOUD_TRACE_*``)
3. A TOML config file (``[trace_context]`` table)
4. Defaults
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from cloud_trace_context.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "cloud_trace_context.toml"
CONFIG_SECTION = "trace_context"

ENV_VARS = {
    "trace_context_header": "CLOUD_TRACE_CONTEXT_HEADER",
    "project_id": "CLOUD_TRACE_PROJECT_ID",
    "on_malformed_header": "CLOUD_TRACE_ON_MALFORMED_HEADER",
    "attach_otel_context": "CLOUD_TRACE_ATTACH_OTEL_CONTEXT",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class TraceContextOptions(BaseModel):
    """Static options supplied when the middleware is installed."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    trace_context_header: str = "x-cloud-trace-context"
    project_id: str = "my-project"
    # "fail" keeps the hard failure on malformed headers; "regenerate" treats
    # them as absent.
    on_malformed_header: Literal["fail", "regenerate"] = "fail"
    attach_otel_context: bool = True

    @field_validator("trace_context_header")
    @classmethod
    def normalize_header(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("trace_context_header must not be empty")
        return v

    @field_validator("project_id")
    @classmethod
    def validate_project_id(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("project_id must not be empty")
        return v


def find_config_file() -> Optional[str]:
    """Look for a config file in the current directory, then ~/.config."""
    candidates = [
        Path.cwd() / CONFIG_FILE_NAME,
        Path.home() / ".config" / CONFIG_FILE_NAME,
    ]
    for candidate in candidates:
        if candidate.is_file():
            return str(candidate)
    return None


def load_toml_config(path: str) -> Dict[str, Any]:
    """
    Load a TOML config file.

    Returns an empty dict if the file does not exist.

    Raises:
        ConfigError: if the file is not valid TOML
    """
    config_path = Path(path)
    if not config_path.is_file():
        return {}
    try:
        with config_path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError("Invalid TOML config file", {"path": path, "error": str(e)}) from e


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError("Invalid boolean environment variable", {"name": name, "value": value})


def load_env_config() -> Dict[str, Any]:
    """Read options from CLOUD_TRACE_* environment variables."""
    loaded: Dict[str, Any] = {}
    for key, env_name in ENV_VARS.items():
        value = os.environ.get(env_name)
        if value is None:
            continue
        if key == "attach_otel_context":
            loaded[key] = _parse_bool(env_name, value)
        else:
            loaded[key] = value
    return loaded


def load_config_with_priority(
    overrides: Optional[Dict[str, Any]] = None,
    config_file: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Merge config from file, environment and explicit overrides.

    Overrides whose value is None are ignored.
    """
    merged: Dict[str, Any] = {}

    path = config_file or find_config_file()
    if path:
        file_config = load_toml_config(path)
        section = file_config.get(CONFIG_SECTION, {})
        if not isinstance(section, dict):
            raise ConfigError(f"[{CONFIG_SECTION}] must be a table", {"path": path})
        merged.update(section)
        logger.debug("Loaded trace context config from %s", path)

    merged.update(load_env_config())
    merged.update({k: v for k, v in (overrides or {}).items() if v is not None})
    return merged


def load_options(config_file: Optional[str] = None, **overrides: Any) -> TraceContextOptions:
    """
    Build validated TraceContextOptions.

    Raises:
        ConfigError: if any option is unknown or invalid
    """
    merged = load_config_with_priority(overrides=overrides, config_file=config_file)
    try:
        return TraceContextOptions(**merged)
    except ValidationError as e:
        raise ConfigError("Invalid trace context options", {"errors": e.errors()}) from e
