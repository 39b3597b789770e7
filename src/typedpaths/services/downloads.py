"""Download remote content into files."""

import asyncio
import hashlib
import logging

import httpx

from ..handles.file import File
from ..handles.folder import Folder

logger = logging.getLogger(__name__)


def cache_name(url: str | httpx.URL) -> str:
    """Return the file name used for a download: the MD5 hex digest of the URL."""
    return hashlib.md5(str(url).encode("utf-8")).hexdigest()


async def fetch_bytes(url: str | httpx.URL, client: httpx.AsyncClient | None = None) -> bytes:
    """Fetch the body of ``url``.

    Raises:
        httpx.HTTPStatusError: For error responses.
        httpx.TransportError: If the request couldn't be sent.
    """
    if client is None:
        async with httpx.AsyncClient(follow_redirects=True) as owned_client:
            return await fetch_bytes(url, owned_client)

    response = await client.get(url)
    response.raise_for_status()
    return response.content


async def download_file(
    url: str | httpx.URL,
    *,
    folder: Folder | None = None,
    client: httpx.AsyncClient | None = None,
) -> File:
    """Download ``url`` into a file named after the URL's hash.

    Args:
        url: The URL to fetch.
        folder: Where to store the file, the temporary folder by default.
        client: HTTP client to use. A short-lived client is created if omitted.

    Returns:
        The downloaded file. An earlier download of the same URL is replaced.
    """
    data = await fetch_bytes(url, client)
    folder = folder or Folder.temporary()
    file = await asyncio.to_thread(folder.overwrite, cache_name(url), data)
    logger.info(f"Downloaded {url} ({len(data)} bytes) to {file.path}")
    return file


async def download_file_to(
    folder: Folder,
    url: str | httpx.URL,
    path: str,
    *,
    client: httpx.AsyncClient | None = None,
) -> File:
    """Download ``url`` into a file at ``path`` relative to ``folder``."""
    data = await fetch_bytes(url, client)
    file = await asyncio.to_thread(folder.create_file, path, data)
    logger.info(f"Downloaded {url} ({len(data)} bytes) to {file.path}")
    return file
