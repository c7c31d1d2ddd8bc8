"""Async fetch utilities using httpx (plus local file sources)."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import httpx

from config import settings


class FetchError(RuntimeError):
    """Transport failure or non-success response while fetching a source."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def is_remote(source: str) -> bool:
    return urlparse(source).scheme in {"http", "https"}


async def fetch_text(
    source: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float | None = None,
) -> str:
    """Return the body of ``source`` as text.

    ``source`` is either an http(s) URL or a local file path. A single attempt
    is made; retrying is left to the caller.
    """
    if not is_remote(source):
        return await _read_local(source)
    close_client = False
    if client is None:
        headers = {"User-Agent": settings.DEFAULT_USER_AGENT}
        client = httpx.AsyncClient(
            headers=headers, timeout=timeout or settings.DEFAULT_TIMEOUT
        )
        close_client = True
    try:
        try:
            resp = await client.get(source)
        except httpx.HTTPError as e:
            raise FetchError(f"Request to {source} failed: {e}") from e
        if not resp.is_success:
            raise FetchError(
                f"{source} answered with HTTP {resp.status_code}",
                status_code=resp.status_code,
            )
        return resp.text
    finally:
        if close_client:
            await client.aclose()


async def _read_local(source: str) -> str:
    path = Path(urlparse(source).path if source.startswith("file:") else source)
    try:
        return await asyncio.to_thread(path.read_text, encoding="utf-8")
    except OSError as e:
        raise FetchError(f"Could not read {path}: {e}") from e
