"""MCP tool that lists files of a repository ref from its archive.

Registers the 'read_tree' tool which downloads the ref's tarball, keeps
the files under the requested path prefixes and returns their paths
and sizes.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Union

from mcp.server.fastmcp import FastMCP

from config import GITHUB_TIMEOUT, HTTP_VERIFY, load_app_config
from core.errors import UrlParseError
from sources.registry import UrlReaderRegistry, build_registry


def _default_registry() -> UrlReaderRegistry:
    return build_registry(load_app_config(), timeout=GITHUB_TIMEOUT, verify=HTTP_VERIFY)


def register(mcp: FastMCP, *, registry: Optional[UrlReaderRegistry] = None) -> None:
    @mcp.tool(name="read_tree")
    async def read_tree(
        repo_url: str = "",
        ref: str = "main",
        paths: Optional[List[str]] = None,
    ) -> List[Dict[str, Union[str, int]]]:
        """Read a subtree of a repository at `ref`.

        Params:
          - repo_url: HTTPS repository URL, e.g. https://github.com/owner/repo.
          - ref: branch, tag or commit (default: "main").
          - paths: path prefixes to keep, relative to the repository root
            (default: [""], the whole repository).

        Returns:
          A list of {"path", "size"} records in archive order.
        """
        if not repo_url or not repo_url.strip():
            raise UrlParseError("Missing repo_url")
        ref_clean = (ref or "").strip()
        if not ref_clean:
            raise UrlParseError("Missing ref")
        prefixes = [""] if paths is None else list(paths)
        result = await (registry or _default_registry()).read_tree(repo_url.strip(), ref_clean, prefixes)
        return [{"path": f.path, "size": f.size} for f in result.files()]
