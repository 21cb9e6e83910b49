"""
Chunked input sources

Async readers that hand XMLTV input to the parser in chunks, from local
files or over HTTP with retry logic.
"""
import logging
from collections.abc import AsyncIterator
from pathlib import Path
import asyncio

import aiofiles
import httpx

from xmltv_stream.config import settings


logger = logging.getLogger(__name__)


async def read_file_chunks(file_path: Path | str, chunk_size: int | None = None) -> AsyncIterator[bytes]:
    """
    Read a file in fixed-size chunks without loading it whole

    Args:
        file_path: Path to file
        chunk_size: Bytes per read, defaults to the configured read size

    Raises:
        FileNotFoundError: If file doesn't exist
        OSError: If file can't be read
    """
    size = chunk_size or settings.read_chunk_size
    async with aiofiles.open(file_path, 'rb') as f:
        while True:
            chunk = await f.read(size)
            if not chunk:
                break
            yield chunk


async def stream_url_chunks(
    url: str,
    *,
    chunk_size: int | None = None,
    timeout: float | None = None,
    max_retries: int | None = None,
    backoff_factor: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None
) -> AsyncIterator[bytes]:
    """
    Stream a response body in chunks with exponential backoff retry logic

    Retries on transient network errors (timeouts, connection errors) and 5xx
    responses, but only until the first chunk has been yielded; a body that
    fails midway cannot be replayed. Does NOT retry on 4xx HTTP errors.

    Args:
        url: URL to stream from
        chunk_size: Bytes per chunk (server-dependent when None)
        timeout: HTTP timeout in seconds
        max_retries: Maximum number of attempts
        backoff_factor: Exponential backoff multiplier (waits 1, factor, factor^2, ... seconds)
        transport: Optional httpx transport (used by tests)

    Raises:
        httpx.HTTPError: If the stream fails after all retries
    """
    timeout = timeout or settings.http_timeout_sec
    max_retries = max_retries or settings.http_max_retries
    backoff_factor = backoff_factor or settings.http_backoff_factor

    logger.info(f"Streaming XMLTV from {url}...")

    last_error: Exception | None = None
    started = False

    for attempt in range(1, max_retries + 1):
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=transport, follow_redirects=True) as client:
                async with client.stream("GET", url) as response:
                    response.raise_for_status()

                    received = 0
                    async for chunk in response.aiter_bytes(chunk_size):
                        started = True
                        received += len(chunk)
                        yield chunk

                    logger.info(f"Streamed {received / (1024 * 1024):.2f} MB from {url}")
                    return

        except (httpx.TimeoutException, httpx.ConnectError, httpx.HTTPStatusError) as e:
            if isinstance(e, httpx.HTTPStatusError) and e.response.status_code < 500:
                logger.error(f"Stream request for {url} rejected with HTTP {e.response.status_code}")
                raise
            if started:
                logger.error(f"Stream from {url} broke after data was consumed: {_failure_reason(e)}")
                raise

            last_error = e
            if attempt == max_retries:
                logger.error(f"Giving up on {url} after {max_retries} stream attempts ({_failure_reason(e)})")
                break

            delay = backoff_factor ** (attempt - 1)
            logger.warning(
                f"Stream attempt {attempt}/{max_retries} for {url} hit {_failure_reason(e)}, "
                f"next attempt in {delay:.1f}s"
            )
            await asyncio.sleep(delay)

    if last_error:
        raise last_error

    raise RuntimeError(f"Failed to stream {url} after {max_retries} attempts")


def _failure_reason(error: Exception) -> str:
    if isinstance(error, httpx.HTTPStatusError):
        return f"HTTP {error.response.status_code}"
    return type(error).__name__
