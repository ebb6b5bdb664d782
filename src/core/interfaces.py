"""Core protocol and interface definitions.

Defines the UrlReader protocol implemented by provider-specific readers
and the (reader, predicate) pairs returned by reader factories.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol, Sequence

from core.models import ReadTreeResult


class UrlReader(Protocol):
    """Contract for any URL reader (GitHub, GitHub Enterprise, etc.)."""
    async def read(self, url: str) -> bytes:
        ...

    async def read_tree(
        self,
        repo_url: str,
        ref: str,
        path_prefixes: Sequence[str],
    ) -> ReadTreeResult:
        ...


UrlPredicate = Callable[[str], bool]


@dataclass(frozen=True)
class ReaderEntry:
    reader: UrlReader
    predicate: UrlPredicate
