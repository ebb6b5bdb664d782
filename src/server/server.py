"""Server bootstrap for the GitHub URL reader service.

Creates the FastMCP instance, builds the reader registry from the
integrations configuration, registers the tools and starts the MCP
server (stdio transport).
"""

from mcp.server.fastmcp import FastMCP

from config import GITHUB_TIMEOUT, HTTP_VERIFY, configure_logging, load_app_config
from sources.registry import build_registry

from tools.read_tree import register as register_read_tree
from tools.read_url import register as register_read_url

mcp = FastMCP("github-url-reader")


def register_tools() -> None:
    registry = build_registry(load_app_config(), timeout=GITHUB_TIMEOUT, verify=HTTP_VERIFY)

    register_read_url(mcp, registry=registry)
    register_read_tree(mcp, registry=registry)


register_tools()


def main() -> None:
    configure_logging()
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
