import core.paths
from core.paths import encode_segments, normalize_posix_relpath, starts_with_any, strip_leading_slash


def test_module_docstring():
    assert core.paths.__doc__.strip().startswith("Path utilities")


def test_normalize_posix_relpath():
    assert normalize_posix_relpath("  .\\docs\\guide/ ") == "docs/guide/"
    assert normalize_posix_relpath("//././src") == "src"
    assert normalize_posix_relpath(None) == ""


def test_strip_leading_slash_removes_one():
    assert strip_leading_slash("//a") == "/a"
    assert strip_leading_slash("a") == "a"


def test_encode_segments_keeps_escaped_slash_and_never_double_encodes():
    assert encode_segments("docs/a%2Fb.md") == "docs/a%2Fb.md"
    assert encode_segments("my file#1.md") == "my%20file%231.md"
    assert encode_segments("my%20file.md") == "my%20file.md"


def test_starts_with_any():
    assert starts_with_any("docs/a.md", ["src/", "docs/"])
    assert not starts_with_any("docs/a.md", [])
