"""Immutable dataclasses shared by the reader components.

Includes the provider record built from configuration, the parsed form of
a target URL, and the file/tree results returned by tree reads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional


PathKind = Literal["blob", "raw"]

DEFAULT_HOST = "github.com"
DEFAULT_API_BASE_URL = "https://api.github.com"
DEFAULT_RAW_BASE_URL = "https://raw.githubusercontent.com"


@dataclass(frozen=True)
class ProviderConfig:
    """One configured backing host.

    Field groups:
    - Matching: host
    - Endpoints: api_base_url, raw_base_url (no trailing slash)
    - Auth: token (anonymous access when None)
    """

    host: str
    api_base_url: Optional[str] = None
    raw_base_url: Optional[str] = None
    token: Optional[str] = field(default=None, repr=False)

    def __str__(self) -> str:
        return f"github{{host={self.host},authed={bool(self.token)}}}"


@dataclass(frozen=True)
class TargetDescriptor:
    owner: str
    repo: str
    ref: str
    path_kind: PathKind
    path: str


@dataclass(frozen=True, slots=True)
class TreeFile:
    # Bytes are captured while the archive entry is drained; never re-read later
    path: str
    data: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.data)

    async def content(self) -> bytes:
        return self.data


class ReadTreeResult:
    """Files materialized from a repository archive.

    Only constructed once the archive stream has ended, so `files()` is
    always the complete, ordered snapshot.
    """

    def __init__(self, files: List[TreeFile]) -> None:
        self._files = tuple(files)

    def files(self) -> List[TreeFile]:
        return list(self._files)

    def archive(self) -> bytes:
        raise NotImplementedError("Whole-archive output is not implemented")

    def dir(self, out_dir: Optional[str] = None) -> str:
        raise NotImplementedError("On-disk materialization is not implemented")
