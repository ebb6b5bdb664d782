"""Single-file fetcher: resolve a target URL against one provider and GET it.

Each call picks the endpoint (Contents API or raw host) from the provider,
issues exactly one request and maps the outcome to bytes or a typed error.
Nothing is cached and nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

import httpx

from core.errors import NotFoundError, RemoteError, TransportError
from core.models import ProviderConfig

from .urls import build_api_url, build_raw_url, parse_target, use_api

logger = logging.getLogger(__name__)


class ContentFetcher:
    RAW_ACCEPT = "application/vnd.github.v3.raw"

    def __init__(
        self,
        provider: ProviderConfig,
        *,
        timeout: float = 20.0,
        verify: bool = True,
    ) -> None:
        self._provider = provider
        self._timeout = float(timeout)
        self._verify = bool(verify)

    async def read(self, url: str) -> bytes:
        """Return the raw bytes of the file `url` points at."""
        target = parse_target(url)
        api = use_api(self._provider)
        resolved = build_api_url(target, self._provider) if api else build_raw_url(target, self._provider)
        logger.debug("Reading %s via %s endpoint %s", url, "api" if api else "raw", resolved)

        try:
            async with self._create_client(self._build_headers(api=api)) as client:
                resp = await client.get(resolved)
        except httpx.HTTPError as e:
            raise TransportError(f"Unable to read {url}, {e}", url=url, resolved_url=resolved) from e

        if resp.is_success:
            return resp.content

        message = f"{url} could not be read as {resolved}, {resp.status_code} {resp.reason_phrase}"
        if resp.status_code == 404:
            raise NotFoundError(message, url=url, resolved_url=resolved, status=resp.status_code)
        raise RemoteError(message, url=url, resolved_url=resolved, status=resp.status_code)

    # --- HTTP helpers ---

    def _build_headers(self, *, api: bool) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        if api:
            headers["Accept"] = self.RAW_ACCEPT
        if self._provider.token:
            headers["Authorization"] = f"token {self._provider.token}"
        return headers

    def _create_client(self, headers: Optional[Dict[str, str]] = None) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers=dict(headers or {}),
            timeout=self._timeout,
            verify=self._verify,
            follow_redirects=True,
        )
