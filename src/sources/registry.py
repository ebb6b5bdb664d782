"""Host-keyed registry of URL readers.

Exposes build_registry which turns the integrations configuration into
one reader per provider, and UrlReaderRegistry which dispatches a URL to
the first reader whose predicate accepts it.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Sequence

from clients.github import GithubUrlReader
from core.errors import UnsupportedHostError
from core.interfaces import ReaderEntry, UrlReader
from core.models import ReadTreeResult


class UrlReaderRegistry:
    def __init__(self, entries: Sequence[ReaderEntry]) -> None:
        self._entries: List[ReaderEntry] = list(entries)

    @property
    def entries(self) -> List[ReaderEntry]:
        return list(self._entries)

    def reader_for(self, url: str) -> UrlReader:
        """Return the first registered reader whose predicate matches `url`.

        Priority follows registration order: explicit providers first, the
        default github.com provider last.
        """
        for entry in self._entries:
            if entry.predicate(url):
                return entry.reader
        raise UnsupportedHostError(f"No reader is configured for {url}")

    async def read(self, url: str) -> bytes:
        return await self.reader_for(url).read(url)

    async def read_tree(self, repo_url: str, ref: str, path_prefixes: Sequence[str]) -> ReadTreeResult:
        return await self.reader_for(repo_url).read_tree(repo_url, ref, path_prefixes)


def build_registry(
    config: Mapping[str, Any],
    *,
    timeout: float = 20.0,
    verify: bool = True,
) -> UrlReaderRegistry:
    return UrlReaderRegistry(GithubUrlReader.factory(config, timeout=timeout, verify=verify))
