"""
Async XMLTV Parsing Service

Drives the streaming parser from async chunk sources (files, HTTP).
Each chunk is fully processed and its events consumed before the next
chunk is awaited.
"""
from collections.abc import AsyncIterable, AsyncIterator, Mapping
from pathlib import Path
from typing import Any
import logging

import httpx

from xmltv_stream.schemas import ParserOptions
from xmltv_stream.services.parse_events import ParseEvent
from xmltv_stream.services.xmltv_parser_service import XMLTVStreamParser
from xmltv_stream.utils.file_operations import read_file_chunks, stream_url_chunks


logger = logging.getLogger(__name__)


async def aiter_xmltv_events(
    chunks: AsyncIterable[str | bytes],
    options: ParserOptions | Mapping[str, Any] | None = None
) -> AsyncIterator[ParseEvent]:
    """
    Parse async chunks, yielding events as they complete

    Iteration stops after EndEvent or ErrorEvent; on error the chunk source
    is closed without being read further.
    """
    parser = XMLTVStreamParser(options)
    iterator = aiter(chunks)

    try:
        async for chunk in iterator:
            for event in parser.feed(chunk):
                yield event
            if parser.finished:
                return

        for event in parser.close():
            yield event
    finally:
        aclose = getattr(iterator, "aclose", None)
        if aclose is not None:
            await aclose()


async def aparse_xmltv_file(
    file_path: Path | str,
    options: ParserOptions | Mapping[str, Any] | None = None,
    *,
    chunk_size: int | None = None
) -> AsyncIterator[ParseEvent]:
    """
    Stream events from an XMLTV file using non-blocking reads

    Args:
        file_path: Path to XMLTV file
        options: Parser options (time format, strictness)
        chunk_size: Bytes per read, defaults to the configured read size
    """
    logger.debug(f"Parsing XMLTV file asynchronously: {file_path}")
    async for event in aiter_xmltv_events(read_file_chunks(file_path, chunk_size), options):
        yield event


async def aparse_xmltv_url(
    url: str,
    options: ParserOptions | Mapping[str, Any] | None = None,
    *,
    chunk_size: int | None = None,
    transport: httpx.AsyncBaseTransport | None = None
) -> AsyncIterator[ParseEvent]:
    """
    Stream events from an XMLTV document served over HTTP

    Raises:
        httpx.HTTPError: If the download fails after all retries
    """
    logger.debug(f"Parsing XMLTV from URL: {url}")
    chunks = stream_url_chunks(url, chunk_size=chunk_size, transport=transport)
    async for event in aiter_xmltv_events(chunks, options):
        yield event
