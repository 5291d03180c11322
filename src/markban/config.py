"""Configuration: defaults, an optional YAML file and environment overrides."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULTS = {
    "base-url": "http://localhost:8080",
    "timeout": 10.0,
    "fetch-retries": 2,
    "retry-backoff": 0.5,
}

CONFIG_PATH = Path("~/.config/markban/config.yaml")
ENV_PREFIX = "MARKBAN_"


def _python_key(key: str) -> str:
    """Convert file-style key (hyphenated) to Python-style (underscored)."""
    return key.replace("-", "_")


def _file_key(python_key: str) -> str:
    """Convert Python-style key (underscored) to file-style (hyphenated)."""
    return python_key.replace("_", "-")


def _coerce_value(key: str, raw):
    """Type-coerce a value using the type of its default."""
    default = DEFAULTS.get(key)
    if default is None or not isinstance(raw, str):
        return raw
    if isinstance(default, bool):
        return raw.lower() in ("true", "yes", "1")
    if isinstance(default, int):
        return int(raw)
    if isinstance(default, float):
        return float(raw)
    return raw


def _read_file(path: Path) -> dict[str, Any]:
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    section = data.get("markban") if isinstance(data, dict) else None
    if not isinstance(section, dict):
        logger.debug("no markban section in %s", path)
        return {}
    return section


def read_config(path: str | Path | None = None, environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Read configuration into a {python_key: value} dict.

    Defaults are overridden by the "markban" section of the YAML file, which
    is in turn overridden by MARKBAN_* environment variables. An explicit
    path must exist; the default path is only read if present.
    """
    environ = os.environ if environ is None else environ
    merged: dict[str, Any] = dict(DEFAULTS)

    if path is not None:
        merged.update({_file_key(str(k)): v for k, v in _read_file(Path(path)).items()})
    else:
        default_path = CONFIG_PATH.expanduser()
        if default_path.is_file():
            merged.update({_file_key(str(k)): v for k, v in _read_file(default_path).items()})

    for env_key, raw in environ.items():
        if env_key.startswith(ENV_PREFIX):
            merged[_file_key(env_key[len(ENV_PREFIX) :].lower())] = raw

    return {_python_key(k): _coerce_value(k, v) for k, v in merged.items()}
