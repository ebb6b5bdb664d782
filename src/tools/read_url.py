"""MCP tool that reads a single file addressed by its browser URL.

Registers the 'read_url' tool which dispatches the URL to the reader
configured for its host and returns the content as UTF-8 text.
"""

from __future__ import annotations

from typing import Optional

from mcp.server.fastmcp import FastMCP

from config import GITHUB_TIMEOUT, HTTP_VERIFY, MAX_FILE_CHARS, load_app_config
from core.errors import UrlParseError
from sources.registry import UrlReaderRegistry, build_registry

TRUNCATED_MARKER = "\n\n...[TRUNCATED]..."


def _default_registry() -> UrlReaderRegistry:
    return build_registry(load_app_config(), timeout=GITHUB_TIMEOUT, verify=HTTP_VERIFY)


def register(mcp: FastMCP, *, registry: Optional[UrlReaderRegistry] = None) -> None:
    @mcp.tool(name="read_url")
    async def read_url(url: str = "", max_chars: int = MAX_FILE_CHARS) -> str:
        """Read a file from a hosted Git repository and return its UTF-8 contents.

        Parameters:
          - url: browser URL of the file, e.g.
            https://github.com/owner/repo/blob/main/path/to/file.yaml
          - max_chars: maximum characters to return (default from config).

        Returns:
          The file contents decoded as UTF-8 (invalid bytes replaced). If the
          content exceeds max_chars it is truncated and the suffix
          "\n\n...[TRUNCATED]..." appended.

        Raises:
          UrlParseError for malformed URLs, UnsupportedHostError when no
          provider serves the host, NotFoundError, TransportError or
          RemoteError when the request fails.
        """
        if not url or not url.strip():
            raise UrlParseError("Missing url")
        data = await (registry or _default_registry()).read(url.strip())
        text = data.decode("utf-8", errors="replace")
        if len(text) > max_chars:
            return text[:max_chars] + TRUNCATED_MARKER
        return text
