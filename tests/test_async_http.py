"""fetch_text against mocked HTTP transports and local files."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from core.async_http import FetchError, fetch_text, is_remote

URL = "https://data.example.test/riders.json"


def _fetch(handler, source=URL):
    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await fetch_text(source, client=client)

    return asyncio.run(go())


def test_success_returns_body():
    assert _fetch(lambda request: httpx.Response(200, text='{"ok": true}')) == '{"ok": true}'


def test_non_success_status_raises_with_code():
    with pytest.raises(FetchError) as exc:
        _fetch(lambda request: httpx.Response(404, text="missing"))
    assert exc.value.status_code == 404


def test_transport_error_is_wrapped():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchError) as exc:
        _fetch(handler)
    assert exc.value.status_code is None
    assert isinstance(exc.value.__cause__, httpx.ConnectError)


def test_single_attempt_no_retry():
    calls = []

    def handler(request):
        calls.append(request.url)
        return httpx.Response(503)

    with pytest.raises(FetchError):
        _fetch(handler)
    assert len(calls) == 1


def test_local_file_source(tmp_path):
    path = tmp_path / "data.json"
    path.write_text('{"riders": {}}', encoding="utf-8")
    assert asyncio.run(fetch_text(str(path))) == '{"riders": {}}'
    assert asyncio.run(fetch_text(path.as_uri())) == '{"riders": {}}'


def test_missing_local_file_raises(tmp_path):
    with pytest.raises(FetchError):
        asyncio.run(fetch_text(str(tmp_path / "absent.json")))


def test_is_remote():
    assert is_remote(URL)
    assert is_remote("http://localhost:8000/data.json")
    assert not is_remote("/srv/data.json")
    assert not is_remote("file:///srv/data.json")
