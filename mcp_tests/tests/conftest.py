import gzip
import io
import tarfile

import pytest


class DummyMCP:
    """Minimal FastMCP stand-in to capture tool registration."""

    def __init__(self) -> None:
        self.tools = {}

    def tool(self, *, name: str):
        def _decorator(fn):
            self.tools[name] = fn
            return fn
        return _decorator


@pytest.fixture
def dummy_mcp():
    return DummyMCP()


def build_tar(entries) -> bytes:
    """
    Build an uncompressed tar in memory.

    entries: list of (name, content) where content is bytes for a file
    or None for a directory.
    """
    raw = io.BytesIO()
    with tarfile.open(fileobj=raw, mode="w") as tar:
        for name, content in entries:
            info = tarfile.TarInfo(name)
            if content is None:
                info.type = tarfile.DIRTYPE
                info.mode = 0o755
                tar.addfile(info)
            else:
                info.size = len(content)
                tar.addfile(info, io.BytesIO(content))
    return raw.getvalue()


def build_tarball(entries) -> bytes:
    """Build a .tar.gz in memory (see build_tar for the entries format)."""
    return gzip.compress(build_tar(entries))


@pytest.fixture
def tarball():
    return build_tarball


@pytest.fixture
def raw_tar():
    return build_tar
