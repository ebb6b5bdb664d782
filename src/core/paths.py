"""
Path utilities used across the project.

Provides POSIX-style normalization of caller-supplied prefixes and the
segment-wise percent-encoding used when building endpoint URLs.
"""

from __future__ import annotations

from typing import Iterable
from urllib.parse import quote, unquote


def normalize_posix_relpath(p: str) -> str:
    """Normalize a user path to a clean POSIX relative path.

    Converts backslashes to '/', trims whitespace, removes leading '/'
    and repeated './' markers. A trailing '/' is kept so directory
    prefixes stay distinguishable from file-name prefixes.
    """
    s = (p or "").strip()
    s = s.replace("\\", "/")        # Unify path separators across OSes.
    s = s.lstrip("/")               # Prevent accidental absolute paths.
    while s.startswith("./"):       # Drop repeated "./" prefixes.
        s = s[2:]
    return s


def strip_leading_slash(p: str) -> str:
    # Exactly one leading slash is removed
    return p[1:] if p.startswith("/") else p


def encode_segments(p: str) -> str:
    """Canonically percent-encode each '/'-separated segment of a URL path.

    The input is in URL form and may already carry escapes. Splitting happens
    before unquoting, so an escaped '%2F' stays inside its segment instead of
    becoming a separator, and nothing is encoded twice.
    """
    return "/".join(quote(unquote(seg), safe="") for seg in p.split("/"))


def starts_with_any(path: str, prefixes: Iterable[str]) -> bool:
    return any(path.startswith(prefix) for prefix in prefixes)
