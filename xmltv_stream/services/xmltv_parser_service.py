"""
Streaming XMLTV parser

Feeds arbitrarily sized input chunks through a token source and the record
builder, and surfaces completed channels and programmes as events without
buffering the document.

A parser instance must be driven by a single writer. Chunks are processed
to completion before feed() returns, so a caller that waits for feed() and
drains its events gets backpressure for free.
"""
from collections.abc import Callable, Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any
import logging

from xmltv_stream.config import settings
from xmltv_stream.schemas import ParserOptions
from xmltv_stream.services.parse_events import (
    ChannelEvent,
    EndEvent,
    ErrorEvent,
    ParseEvent,
    ProgrammeEvent,
)
from xmltv_stream.services.record_builder import RecordBuilder
from xmltv_stream.services.record_types import Channel
from xmltv_stream.services.token_source import LxmlTokenSource
from xmltv_stream.services.token_types import Token, TokenizerError, TokenSource
from xmltv_stream.utils.timestamps import TimestampResolver

logger = logging.getLogger(__name__)

Listener = Callable[[ParseEvent], None]
TokenSourceFactory = Callable[[Callable[[Token], None]], TokenSource]


class ParserClosedError(RuntimeError):
    """Raised when a finished parser receives more input"""
    pass


def _coerce_options(options: ParserOptions | Mapping[str, Any] | None) -> ParserOptions:
    if options is None:
        return ParserOptions()
    if isinstance(options, ParserOptions):
        return options
    return ParserOptions.model_validate(dict(options))


class XMLTVStreamParser:
    """Single-pass XMLTV parser emitting channel, programme, end and error events."""

    def __init__(
        self,
        options: ParserOptions | Mapping[str, Any] | None = None,
        *,
        token_source_factory: TokenSourceFactory = LxmlTokenSource,
    ) -> None:
        self.options = _coerce_options(options)
        self._builder = RecordBuilder(
            TimestampResolver(self.options.time_fmt, self.options.strict_time)
        )
        self._source = token_source_factory(self._on_token)
        self._pending: list[ParseEvent] = []
        self._listeners: list[Listener] = []
        self._finished = False
        self.channels_emitted = 0
        self.programmes_emitted = 0

    @property
    def finished(self) -> bool:
        return self._finished

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callable invoked synchronously for every event

        An exception raised by a listener propagates out of feed() or close()
        and finishes the parser; events not yet returned are discarded.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def feed(self, chunk: str | bytes) -> list[ParseEvent]:
        """
        Push one chunk of input

        Args:
            chunk: Raw document text or bytes; boundaries need not align with tags

        Returns:
            Events completed by this chunk, in document order

        Raises:
            ParserClosedError: If the parser already ended or failed
        """
        self._ensure_open()
        try:
            self._source.feed(chunk)
        except TokenizerError as e:
            self._fail(e)
        return self._drain()

    def close(self) -> list[ParseEvent]:
        """
        Signal end of input

        Returns:
            Remaining events, ending with EndEvent or ErrorEvent

        Raises:
            ParserClosedError: If the parser already ended or failed
        """
        self._ensure_open()
        try:
            self._source.close()
        except TokenizerError as e:
            self._fail(e)
        else:
            self._finished = True
            self._emit(EndEvent())
            logger.info(
                f"XMLTV stream complete: {self.channels_emitted} channels, "
                f"{self.programmes_emitted} programmes"
            )
        return self._drain()

    def _ensure_open(self) -> None:
        if self._finished:
            raise ParserClosedError("Parser has already finished")

    def _on_token(self, token: Token) -> None:
        record = self._builder.apply(token)
        if record is None:
            return
        if isinstance(record, Channel):
            self.channels_emitted += 1
            self._emit(ChannelEvent(record))
        else:
            self.programmes_emitted += 1
            self._emit(ProgrammeEvent(record))

    def _fail(self, error: TokenizerError) -> None:
        logger.warning(f"XMLTV stream aborted by syntax error: {error}")
        self._finished = True
        self._emit(ErrorEvent(error))

    def _emit(self, event: ParseEvent) -> None:
        self._pending.append(event)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                logger.error(f"Listener failed on {event.kind} event, stopping parser: {e}")
                self._finished = True
                self._pending.clear()
                raise

    def _drain(self) -> list[ParseEvent]:
        events, self._pending = self._pending, []
        return events


def iter_xmltv_events(
    chunks: Iterable[str | bytes],
    options: ParserOptions | Mapping[str, Any] | None = None,
) -> Iterator[ParseEvent]:
    """
    Parse chunks lazily, yielding events as they complete

    The next chunk is only pulled once the previous chunk's events have been
    consumed. Iteration stops after EndEvent or ErrorEvent.
    """
    parser = XMLTVStreamParser(options)
    logger.debug("Starting XMLTV stream parse")

    for chunk in chunks:
        yield from parser.feed(chunk)
        if parser.finished:
            return

    yield from parser.close()


def _read_chunks(path: Path, chunk_size: int) -> Iterator[bytes]:
    with path.open("rb") as f:
        while chunk := f.read(chunk_size):
            yield chunk


def parse_xmltv_file(
    file_path: Path | str,
    options: ParserOptions | Mapping[str, Any] | None = None,
    chunk_size: int | None = None,
) -> Iterator[ParseEvent]:
    """
    Stream events from an XMLTV file on disk

    Args:
        file_path: Path to XMLTV file
        options: Parser options (time format, strictness)
        chunk_size: Bytes per read, defaults to the configured read size

    Raises:
        FileNotFoundError: If file doesn't exist
        OSError: If file can't be read
    """
    path = Path(file_path)
    logger.debug(f"Parsing XMLTV file: {path}")
    yield from iter_xmltv_events(_read_chunks(path, chunk_size or settings.read_chunk_size), options)
