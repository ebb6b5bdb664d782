"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables, exposes
project-level configuration constants used across the codebase (e.g.
HTTP_VERIFY, GITHUB_TIMEOUT, MAX_FILE_CHARS) and builds the nested
configuration mapping consumed by the provider registry.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


# Network / HTTP
HTTP_VERIFY = _env_bool("HTTP_VERIFY", True)
GITHUB_TIMEOUT = _env_float("GITHUB_TIMEOUT", 20.0)

# Integrations: JSON file with an "integrations.github" array
GITHUB_CONFIG_FILE = os.environ.get("GITHUB_CONFIG_FILE", "").strip()

# Limits / output
MAX_FILE_CHARS = _env_int("MAX_FILE_CHARS", 200_000)

LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING").strip().upper()


def get_config_value(config: Mapping[str, Any], key: str) -> Optional[Any]:
    """Look up a dotted key (e.g. 'integrations.github') in a nested mapping.

    Returns None when any segment is missing or an intermediate value is
    not a mapping.
    """
    node: Any = config
    for part in key.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return None
        node = node[part]
    return node


def load_app_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Build the configuration mapping for the reader registry.

    Reads `path` (or GITHUB_CONFIG_FILE) as JSON when given. Otherwise, if
    GITHUB_TOKEN is present, configures github.com with that token.
    """
    file_path = (path if path is not None else GITHUB_CONFIG_FILE).strip()
    if file_path:
        return json.loads(Path(file_path).read_text(encoding="utf-8"))

    token = (os.environ.get("GITHUB_TOKEN") or "").strip()
    if token:
        return {"integrations": {"github": [{"host": "github.com", "token": token}]}}
    return {}


def configure_logging(level: Optional[str] = None) -> None:
    # Log to stderr; stdout carries the stdio transport
    logging.basicConfig(
        level=(level or LOG_LEVEL),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
