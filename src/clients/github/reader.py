"""GitHub URL reader: the composition root for one configured provider.

Single-file reads go through ContentFetcher (endpoint chosen per call from
the provider); tree reads go through ArchiveReader, which only needs the
repository URL and ref.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence

from core.interfaces import ReaderEntry
from core.models import ProviderConfig, ReadTreeResult

from .archive import ArchiveReader
from .fetcher import ContentFetcher
from .providers import load_providers
from .urls import url_host


class GithubUrlReader:
    """Reads files from GitHub v3 APIs, such as the one exposed by GitHub itself."""

    def __init__(
        self,
        provider: ProviderConfig,
        *,
        timeout: float = 20.0,
        verify: bool = True,
        fetcher: Optional[ContentFetcher] = None,
        archive_reader: Optional[ArchiveReader] = None,
    ) -> None:
        self._provider = provider
        self._fetcher = fetcher or ContentFetcher(provider, timeout=timeout, verify=verify)
        self._archive_reader = archive_reader or ArchiveReader(timeout=timeout, verify=verify)

    @property
    def provider(self) -> ProviderConfig:
        return self._provider

    @classmethod
    def factory(
        cls,
        config: Mapping[str, Any],
        *,
        timeout: float = 20.0,
        verify: bool = True,
    ) -> List[ReaderEntry]:
        """Build one reader per configured provider, each matched by exact host."""
        entries: List[ReaderEntry] = []
        for provider in load_providers(config):
            reader = cls(provider, timeout=timeout, verify=verify)
            entries.append(ReaderEntry(reader=reader, predicate=_host_predicate(provider.host)))
        return entries

    async def read(self, url: str) -> bytes:
        return await self._fetcher.read(url)

    async def read_tree(self, repo_url: str, ref: str, path_prefixes: Sequence[str]) -> ReadTreeResult:
        return await self._archive_reader.read_tree(repo_url, ref, path_prefixes)

    def __str__(self) -> str:
        return str(self._provider)


def _host_predicate(host: str):
    def predicate(url: str) -> bool:
        return url_host(url) == host

    return predicate
