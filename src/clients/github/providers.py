"""Provider registry: turn `integrations.github` configuration into ProviderConfig records."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from config import get_config_value
from core.errors import ProviderConfigError
from core.models import (
    DEFAULT_API_BASE_URL,
    DEFAULT_HOST,
    DEFAULT_RAW_BASE_URL,
    ProviderConfig,
)

logger = logging.getLogger(__name__)

CONFIG_KEY = "integrations.github"


def _optional_string(entry: Mapping[str, Any], key: str) -> Optional[str]:
    value = entry.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ProviderConfigError(f"Invalid type in config for key '{key}', expected string")
    return value


def _strip_trailing_slashes(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    return url.rstrip("/") or None


def _read_provider(entry: Mapping[str, Any]) -> ProviderConfig:
    host = (_optional_string(entry, "host") or DEFAULT_HOST).lower()
    api_base_url = _strip_trailing_slashes(_optional_string(entry, "apiBaseUrl"))
    raw_base_url = _strip_trailing_slashes(_optional_string(entry, "rawBaseUrl"))
    token = _optional_string(entry, "token") or None

    if host == DEFAULT_HOST:
        api_base_url = api_base_url or DEFAULT_API_BASE_URL
        raw_base_url = raw_base_url or DEFAULT_RAW_BASE_URL

    if not api_base_url and not raw_base_url:
        raise ProviderConfigError(
            f"GitHub integration for '{host}' must configure an explicit apiBaseUrl and rawBaseUrl"
        )

    return ProviderConfig(
        host=host,
        api_base_url=api_base_url,
        raw_base_url=raw_base_url,
        token=token,
    )


def load_providers(config: Mapping[str, Any]) -> List[ProviderConfig]:
    """Read every configured provider, in configuration order.

    A github.com provider with the public default endpoints and no token is
    appended last when the configuration does not mention github.com.
    """
    entries = get_config_value(config, CONFIG_KEY)
    if entries is None:
        entries = []
    if not isinstance(entries, list):
        raise ProviderConfigError(f"Invalid type in config for key '{CONFIG_KEY}', expected array")

    providers: List[ProviderConfig] = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            raise ProviderConfigError(f"Invalid entry in '{CONFIG_KEY}', expected object")
        providers.append(_read_provider(entry))

    if not any(p.host == DEFAULT_HOST for p in providers):
        providers.append(
            ProviderConfig(
                host=DEFAULT_HOST,
                api_base_url=DEFAULT_API_BASE_URL,
                raw_base_url=DEFAULT_RAW_BASE_URL,
            )
        )

    logger.debug("Loaded GitHub providers: %s", ", ".join(str(p) for p in providers))
    return providers
