from .archive import ArchiveReader
from .fetcher import ContentFetcher
from .providers import load_providers
from .reader import GithubUrlReader

__all__ = ["ArchiveReader", "ContentFetcher", "GithubUrlReader", "load_providers"]
