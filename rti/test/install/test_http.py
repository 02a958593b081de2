"""Tests for rti.install.http module."""

from __future__ import annotations

from pathlib import Path

from rti.core.result import Err, Ok
from rti.install.http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from rti.install.proxy import ProxyConfig


class TestHttpError:
    def test_str_with_status(self) -> None:
        error = HttpError(url="https://x/a", status=404, message="Not Found")
        assert str(error) == "HTTP 404: Not Found (https://x/a)"

    def test_str_network(self) -> None:
        error = HttpError(url="https://x/a", status=0, message="refused")
        assert str(error) == "refused (https://x/a)"


class TestMockHttpClient:
    def test_download(self, tmp_path: Path) -> None:
        client = MockHttpClient()
        client.set_download("https://x/a.zip", b"data")

        result = client.download("https://x/a.zip", tmp_path / "a.zip")

        assert result == Ok(tmp_path / "a.zip")
        assert (tmp_path / "a.zip").read_bytes() == b"data"
        assert client.download_count() == 1

    def test_download_missing(self, tmp_path: Path) -> None:
        result = MockHttpClient().download("https://x/missing", tmp_path / "m")
        assert isinstance(result, Err)
        assert result.error.status == 404

    def test_records_proxy(self, tmp_path: Path) -> None:
        client = MockHttpClient()
        proxy = ProxyConfig(protocol="http:", host="p", port=1)
        client.set_head("https://x/a", 200)

        assert client.head("https://x/a", proxy=proxy) == Ok(200)
        assert client.proxies == [proxy]
        assert client.calls == [("head", "https://x/a")]
        assert client.download_count() == 0

    def test_progress(self, tmp_path: Path) -> None:
        client = MockHttpClient()
        client.set_download("https://x/a", b"12345")
        seen: list[tuple[int, int]] = []

        client.download("https://x/a", tmp_path / "a", progress=lambda d, t: seen.append((d, t)))

        assert seen == [(5, 5)]


def test_clients_satisfy_protocol() -> None:
    assert isinstance(MockHttpClient(), HttpClient)
    assert isinstance(RealHttpClient(), HttpClient)


def test_real_client_opener_ignores_environment() -> None:
    import urllib.request

    client = RealHttpClient()
    opener = client._opener(None)  # pyright: ignore[reportPrivateUsage]
    handlers = [h for h in opener.handlers if isinstance(h, urllib.request.ProxyHandler)]
    assert handlers
    assert handlers[0].proxies == {}


def test_real_client_opener_uses_proxy() -> None:
    import urllib.request

    proxy = ProxyConfig(protocol="http:", host="corp", port=3128)
    opener = RealHttpClient()._opener(proxy)  # pyright: ignore[reportPrivateUsage]
    handler = next(h for h in opener.handlers if isinstance(h, urllib.request.ProxyHandler))
    assert handler.proxies == {"http": "http://corp:3128", "https": "http://corp:3128"}
