from __future__ import annotations

from typing import Tuple
from urllib.parse import quote, unquote, urlparse

from core.errors import UrlParseError
from core.models import ProviderConfig, TargetDescriptor
from core.paths import encode_segments, strip_leading_slash


_PATH_KINDS = ("blob", "raw")


def _repo_segments(url: str) -> Tuple[str, ...]:
    raw = (url or "").strip()
    parsed = urlparse(raw)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise UrlParseError(f"Incorrect URL: {url}, expected an http(s) URL with a host")
    return tuple(seg for seg in parsed.path.split("/") if seg)


def _clean_repo_name(name: str) -> str:
    return name[: -len(".git")] if name.endswith(".git") else name


_DEFAULT_PORTS = {"http": 80, "https": 443}


def url_host(url: str) -> str:
    """Return the lowercased host of `url`, with ':port' only for a non-default port.

    Userinfo is ignored; '' is returned when the URL has no host.
    """
    parsed = urlparse((url or "").strip())
    host = (parsed.hostname or "").lower()
    try:
        port = parsed.port
    except ValueError:
        return ""
    if host and port is not None and port != _DEFAULT_PORTS.get(parsed.scheme):
        return f"{host}:{port}"
    return host



def parse_repo_url(repo_url: str) -> Tuple[str, str]:
    """Return (owner, repo) from any URL rooted at a repository."""
    segments = _repo_segments(repo_url)
    if len(segments) < 2:
        raise UrlParseError(f"Incorrect URL: {repo_url}, missing owner or repository name")
    owner, repo = segments[0], _clean_repo_name(segments[1])
    if not repo:
        raise UrlParseError(f"Incorrect URL: {repo_url}, missing repository name")
    return owner, repo


# Converts for example
# from: https://github.com/a/b/blob/branchname/path/to/c.yaml
# to:   TargetDescriptor(owner="a", repo="b", ref="branchname", path_kind="blob", path="path/to/c.yaml")
def parse_target(url: str) -> TargetDescriptor:
    """Decompose a browser-style file URL; never returns a partial descriptor.

    Ref and path stay in URL form (escapes intact) so an escaped "/" is not
    mistaken for a separator when the endpoint URL is built.
    """
    owner, repo = parse_repo_url(url)

    # owner / repo / kind / ref / path (the path keeps its own slashes)
    parts = urlparse(url.strip()).path.lstrip("/").split("/", 4)
    kind = parts[2] if len(parts) > 2 else ""
    ref = parts[3] if len(parts) > 3 else ""
    path = strip_leading_slash(parts[4]) if len(parts) > 4 else ""

    if kind not in _PATH_KINDS:
        raise UrlParseError(f"Incorrect URL: {url}, path kind must be one of {', '.join(_PATH_KINDS)}")
    if not ref:
        raise UrlParseError(f"Incorrect URL: {url}, missing ref")
    if not path:
        raise UrlParseError(f"Incorrect URL: {url}, missing file path")

    return TargetDescriptor(
        owner=owner,
        repo=repo,
        ref=ref,
        path_kind=kind,  # type: ignore[arg-type]
        path=path,
    )


# Converts for example
# from: https://github.com/a/b/blob/branchname/path/to/c.yaml
# to:   https://api.github.com/repos/a/b/contents/path/to/c.yaml?ref=branchname
def build_api_url(target: TargetDescriptor, provider: ProviderConfig) -> str:
    path = encode_segments(strip_leading_slash(target.path))
    return (
        f"{provider.api_base_url}/repos/{quote(target.owner, safe='')}/{quote(target.repo, safe='')}"
        f"/contents/{path}?ref={quote(unquote(target.ref), safe='')}"
    )


# Converts for example
# from: https://github.com/a/b/blob/branchname/c.yaml
# to:   https://raw.githubusercontent.com/a/b/branchname/c.yaml
def build_raw_url(target: TargetDescriptor, provider: ProviderConfig) -> str:
    path = encode_segments(strip_leading_slash(target.path))
    return (
        f"{provider.raw_base_url}/{quote(target.owner, safe='')}/{quote(target.repo, safe='')}"
        f"/{encode_segments(target.ref)}/{path}"
    )


def use_api(provider: ProviderConfig) -> bool:
    # The API is preferred whenever a token exists; raw is the anonymous default
    return bool(provider.api_base_url) and (bool(provider.token) or not provider.raw_base_url)


def build_archive_url(repo_url: str, ref: str) -> str:
    base = (repo_url or "").strip().rstrip("/")
    base = _clean_repo_name(base)
    return f"{base}/archive/{quote(ref, safe='/')}.tar.gz"
