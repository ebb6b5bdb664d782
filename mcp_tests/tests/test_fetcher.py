import httpx
import pytest

from clients.github.fetcher import ContentFetcher
from core.errors import NotFoundError, RemoteError, TransportError, UrlParseError
from core.models import ProviderConfig


TARGET = "https://github.com/org/repo/blob/main/a/b.yaml"
API_URL = "https://api.github.com/repos/org/repo/contents/a/b.yaml?ref=main"
RAW_URL = "https://raw.githubusercontent.com/org/repo/main/a/b.yaml"


# ---------------------------
# Helpers
# ---------------------------

def patch_transport(monkeypatch, fetcher: ContentFetcher, handler):
    """
    Patch ContentFetcher._create_client() to use httpx.MockTransport.

    Every request is recorded in the returned list.
    """
    requests = []

    def _handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    transport = httpx.MockTransport(_handler)

    def _create_client(headers=None):
        return httpx.AsyncClient(headers=dict(headers or {}), transport=transport)

    monkeypatch.setattr(fetcher, "_create_client", _create_client)
    return requests


def _provider(**overrides) -> ProviderConfig:
    values = dict(
        host="github.com",
        api_base_url="https://api.github.com",
        raw_base_url="https://raw.githubusercontent.com",
        token=None,
    )
    values.update(overrides)
    return ProviderConfig(**values)


# ---------------------------
# endpoint + headers
# ---------------------------

@pytest.mark.asyncio
async def test_read_anonymous_uses_raw_endpoint(monkeypatch):
    fetcher = ContentFetcher(_provider())
    requests = patch_transport(monkeypatch, fetcher, lambda r: httpx.Response(200, content=b"kind: x\n"))

    out = await fetcher.read(TARGET)

    assert out == b"kind: x\n"
    assert len(requests) == 1
    assert str(requests[0].url) == RAW_URL
    assert "authorization" not in requests[0].headers
    assert requests[0].headers.get("accept") != ContentFetcher.RAW_ACCEPT


@pytest.mark.asyncio
async def test_read_with_token_uses_api_endpoint(monkeypatch):
    fetcher = ContentFetcher(_provider(token="t0k"))
    requests = patch_transport(monkeypatch, fetcher, lambda r: httpx.Response(200, content=b"data"))

    assert await fetcher.read(TARGET) == b"data"

    req = requests[0]
    assert str(req.url) == API_URL
    assert req.headers["accept"] == "application/vnd.github.v3.raw"
    assert req.headers["authorization"] == "token t0k"


@pytest.mark.asyncio
async def test_read_raw_only_provider_sends_token(monkeypatch):
    fetcher = ContentFetcher(
        _provider(host="ghe.example.net", api_base_url=None, raw_base_url="https://raw.ghe.example.net", token="t")
    )
    requests = patch_transport(monkeypatch, fetcher, lambda r: httpx.Response(200, content=b""))

    await fetcher.read("https://ghe.example.net/org/repo/raw/dev/x.txt")

    assert str(requests[0].url) == "https://raw.ghe.example.net/org/repo/dev/x.txt"
    assert requests[0].headers["authorization"] == "token t"


@pytest.mark.asyncio
async def test_read_returns_bytes_untouched(monkeypatch):
    payload = bytes(range(256))
    fetcher = ContentFetcher(_provider())
    patch_transport(monkeypatch, fetcher, lambda r: httpx.Response(200, content=payload))

    assert await fetcher.read(TARGET) == payload


# ---------------------------
# errors
# ---------------------------

@pytest.mark.asyncio
async def test_read_not_found_message_has_both_urls(monkeypatch):
    fetcher = ContentFetcher(_provider())
    patch_transport(monkeypatch, fetcher, lambda r: httpx.Response(404))

    with pytest.raises(NotFoundError) as exc:
        await fetcher.read(TARGET)

    err = exc.value
    assert TARGET in str(err)
    assert RAW_URL in str(err)
    assert "404 Not Found" in str(err)
    assert err.url == TARGET
    assert err.resolved_url == RAW_URL
    assert err.status == 404


@pytest.mark.asyncio
async def test_read_other_status_is_remote_error(monkeypatch):
    fetcher = ContentFetcher(_provider(token="t"))
    patch_transport(monkeypatch, fetcher, lambda r: httpx.Response(500))

    with pytest.raises(RemoteError) as exc:
        await fetcher.read(TARGET)

    assert not isinstance(exc.value, NotFoundError)
    assert exc.value.status == 500
    assert API_URL in str(exc.value)


@pytest.mark.asyncio
async def test_read_transport_failure(monkeypatch):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    fetcher = ContentFetcher(_provider())
    patch_transport(monkeypatch, fetcher, handler)

    with pytest.raises(TransportError) as exc:
        await fetcher.read(TARGET)

    assert TARGET in str(exc.value)
    assert isinstance(exc.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_read_invalid_url_fails_before_request(monkeypatch):
    fetcher = ContentFetcher(_provider())
    requests = patch_transport(monkeypatch, fetcher, lambda r: httpx.Response(200))

    with pytest.raises(UrlParseError):
        await fetcher.read("https://github.com/org/repo/tree/main/a")
    assert requests == []
