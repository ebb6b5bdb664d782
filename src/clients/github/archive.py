"""Archive reader: materialize a repository ref from its streamed `.tar.gz`.

The tarball is decoded while it downloads. Entries arrive one at a time
and each one is fully drained before the next header can be read, so the
bytes of every retained file are captured during that drain. The result
only exists once the gzip stream has reached its trailer and the response
body has been consumed to its end; a failure anywhere along the way
surfaces as an error and no partial tree is returned.
"""

from __future__ import annotations

import asyncio
import io
import logging
import tarfile
import zlib
from dataclasses import dataclass
from typing import IO, Iterable, Iterator, List, Optional, Sequence

import httpx

from core.errors import ArchiveError, NotFoundError, RemoteError, TransportError
from core.models import ReadTreeResult, TreeFile
from core.paths import normalize_posix_relpath, starts_with_any

from .urls import build_archive_url, parse_repo_url

logger = logging.getLogger(__name__)

_DRAIN_CHUNK = 64 * 1024
_DECODE_ERRORS = (tarfile.TarError, EOFError, zlib.error)


class _GunzipStream(io.RawIOBase):
    """Read-only file object inflating a gzip body delivered as byte chunks.

    The tar layer may stop early (a missing header looks like end-of-archive
    to it), so `finish()` is what proves the body was complete: it consumes
    the rest of the chunks and requires the gzip end-of-stream marker, whose
    CRC and length zlib verifies.
    """

    def __init__(self, chunks: Iterable[bytes]) -> None:
        self._chunks: Iterator[bytes] = iter(chunks)
        self._inflate = zlib.decompressobj(wbits=31)
        self._buf = b""

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        while not self._buf:
            if self._inflate.eof:
                return 0
            data = self._inflate.unconsumed_tail
            if not data:
                data = next(self._chunks, None)
                if data is None:
                    return 0
            self._buf = self._inflate.decompress(data, _DRAIN_CHUNK)
        n = min(len(b), len(self._buf))
        b[:n] = self._buf[:n]
        self._buf = self._buf[n:]
        return n

    def finish(self) -> None:
        self._buf = b""
        while not self._inflate.eof:
            data = self._inflate.unconsumed_tail
            if not data:
                data = next(self._chunks, None)
                if data is None:
                    raise EOFError("Compressed archive ended before the end-of-stream marker was reached")
            self._inflate.decompress(data, _DRAIN_CHUNK)
        for _ in self._chunks:
            pass


@dataclass(frozen=True)
class ArchiveEntry:
    name: str
    is_dir: bool
    # Only valid while the decoder is positioned on this entry; None for non-regular files
    reader: Optional[IO[bytes]]


def iter_archive_entries(fileobj: IO[bytes]) -> Iterator[ArchiveEntry]:
    """Yield entries of an uncompressed tar stream, strictly in archive order."""
    with tarfile.open(fileobj=fileobj, mode="r|") as tar:
        for member in tar:
            reader = tar.extractfile(member) if member.isreg() else None
            yield ArchiveEntry(name=member.name, is_dir=member.isdir(), reader=reader)


def _discard(reader: IO[bytes]) -> None:
    while reader.read(_DRAIN_CHUNK):
        pass


def collect_files(
    entries: Iterable[ArchiveEntry],
    *,
    prefixes: Sequence[str],
    expected_root: Optional[str] = None,
) -> List[TreeFile]:
    """Drain every entry and keep regular files under the archive root that start with a prefix.

    The root is the first path component of the first entry; the host wraps
    the tree in it. It usually equals `expected_root` (`{repo}-{ref}/`), but
    tags lose their leading "v", short SHAs are expanded and the repository
    name takes its canonical casing. Emitted paths are relative to the root.
    """
    root: Optional[str] = None
    wanted: List[str] = []
    files: List[TreeFile] = []

    for entry in entries:
        if root is None:
            root = entry.name.split("/", 1)[0] + "/"
            wanted = [root + prefix for prefix in prefixes]
            if expected_root is not None and root != expected_root:
                logger.debug("Archive root is %s, expected %s", root, expected_root)

        if entry.is_dir or entry.reader is None:
            continue

        if not starts_with_any(entry.name, wanted):
            _discard(entry.reader)
            continue

        data = entry.reader.read()
        files.append(TreeFile(path=entry.name[len(root):], data=data))
        logger.debug("Retained %s (%d bytes)", entry.name, len(data))

    return files


def archive_root(repo: str, ref: str) -> str:
    # The host names the top-level directory "{repo}-{ref}", with "/" in refs rendered as "-"
    return f"{repo}-{ref.replace('/', '-')}/"


class ArchiveReader:
    """Download a repository tarball and expose a filtered subset of its files."""

    def __init__(self, *, timeout: float = 20.0, verify: bool = True) -> None:
        self._timeout = float(timeout)
        self._verify = bool(verify)

    async def read_tree(self, repo_url: str, ref: str, path_prefixes: Sequence[str]) -> ReadTreeResult:
        _, repo = parse_repo_url(repo_url)
        archive_url = build_archive_url(repo_url, ref)
        root = archive_root(repo, ref)
        prefixes = [normalize_posix_relpath(p) for p in path_prefixes]

        # Decoding blocks on the network; keep it off the event loop
        files = await asyncio.to_thread(self._download, repo_url, archive_url, root, prefixes)
        logger.debug("Read %d files from %s", len(files), archive_url)
        return ReadTreeResult(files)

    def _download(self, repo_url: str, archive_url: str, root: str, prefixes: List[str]) -> List[TreeFile]:
        with self._create_client() as client:
            try:
                resp = client.send(client.build_request("GET", archive_url), stream=True)
            except httpx.HTTPError as e:
                raise TransportError(
                    f"Unable to read archive of {repo_url}, {e}", url=repo_url, resolved_url=archive_url
                ) from e

            try:
                if not resp.is_success:
                    message = (
                        f"{repo_url} archive could not be read as {archive_url}, "
                        f"{resp.status_code} {resp.reason_phrase}"
                    )
                    if resp.status_code == 404:
                        raise NotFoundError(message, url=repo_url, resolved_url=archive_url, status=resp.status_code)
                    raise RemoteError(message, url=repo_url, resolved_url=archive_url, status=resp.status_code)

                return self._extract(resp, repo_url=repo_url, archive_url=archive_url, root=root, prefixes=prefixes)
            finally:
                resp.close()

    def _extract(
        self,
        resp: httpx.Response,
        *,
        repo_url: str,
        archive_url: str,
        root: str,
        prefixes: List[str],
    ) -> List[TreeFile]:
        stream = _GunzipStream(resp.iter_bytes())
        try:
            files = collect_files(iter_archive_entries(stream), prefixes=prefixes, expected_root=root)
            stream.finish()
        except _DECODE_ERRORS as e:
            raise ArchiveError(
                f"Malformed archive for {repo_url} at {archive_url}, {e}",
                url=repo_url,
                resolved_url=archive_url,
                status=resp.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise ArchiveError(
                f"Archive stream for {repo_url} at {archive_url} was interrupted, {e}",
                url=repo_url,
                resolved_url=archive_url,
                status=resp.status_code,
            ) from e
        return files

    def _create_client(self) -> httpx.Client:
        return httpx.Client(timeout=self._timeout, verify=self._verify, follow_redirects=True)
