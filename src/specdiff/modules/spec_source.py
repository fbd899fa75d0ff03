"""Specification Source Module.

Reads specification text from a filesystem path or an http(s) URL.
No retry logic: a failed read is reported and the comparison is not run.
"""

import asyncio
import logging
from pathlib import Path

import httpx

from specdiff.exceptions import SpecLoadError


logger = logging.getLogger("specdiff.source")

DEFAULT_TIMEOUT = 30.0


def is_url(location: str) -> bool:
    """True when the location should be fetched over HTTP."""
    return location.lower().startswith(("http://", "https://"))


async def fetch_spec_text(
    location: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """Read the specification text at ``location``.

    Args:
        location: Filesystem path or http(s) URL.
        client: Optional client to reuse (one is created otherwise).
        timeout: Request timeout in seconds.

    Returns:
        The raw specification text.

    Raises:
        SpecLoadError: If the file is missing, the request fails, or the
            server answers with a non-success status.
    """
    if not is_url(location):
        return _read_file(location)

    if client is None:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as owned_client:
            return await _download(owned_client, location)
    return await _download(client, location)


async def fetch_spec_texts(
    old_location: str,
    new_location: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> tuple[str, str]:
    """Read the old and new specifications concurrently."""
    if client is None:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as owned_client:
            return await fetch_spec_texts(old_location, new_location, client=owned_client)

    old_text, new_text = await asyncio.gather(
        fetch_spec_text(old_location, client=client),
        fetch_spec_text(new_location, client=client),
    )
    return old_text, new_text


def _read_file(location: str) -> str:
    logger.debug(f"Reading spec file {location}")
    try:
        return Path(location).read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise SpecLoadError(location, "file not found") from e
    except OSError as e:
        raise SpecLoadError(location, str(e)) from e


async def _download(client: httpx.AsyncClient, url: str) -> str:
    logger.debug(f"Downloading spec from {url}")
    try:
        response = await client.get(url)
    except httpx.HTTPError as e:
        raise SpecLoadError(url, f"error downloading file: {e}") from e

    if not response.is_success:
        raise SpecLoadError(url, f"status code {response.status_code}")

    return response.text
