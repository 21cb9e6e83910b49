"""
lxml-backed token source

Wraps lxml's incremental feed parser and turns its target callbacks into
NodeOpen / Text / NodeClose tokens. Character data is buffered until the
next tag boundary so chunk boundaries never split a text token.
"""
from collections.abc import Callable
import logging

from lxml import etree # type: ignore

from xmltv_stream.services.token_types import NodeClose, NodeOpen, Text, Token, TokenizerError


logger = logging.getLogger(__name__)


def _local_name(tag: str) -> str:
    """Lower-cased tag name with any '{namespace}' prefix dropped"""
    return etree.QName(tag).localname.lower()


class _TokenTarget:
    """lxml parser target forwarding callbacks to the token source"""

    def __init__(self, source: "LxmlTokenSource") -> None:
        self._source = source

    def start(self, tag, attrib) -> None:
        self._source._flush_text()
        self._source._sink(NodeOpen(_local_name(tag), dict(attrib)))

    def end(self, tag) -> None:
        self._source._flush_text()
        self._source._sink(NodeClose(_local_name(tag)))

    def data(self, data) -> None:
        self._source._text.append(data)

    def close(self) -> None:
        self._source._flush_text()


class LxmlTokenSource:
    """Incremental XML tokenizer delivering tokens to a sink callable."""

    def __init__(self, sink: Callable[[Token], None]) -> None:
        self._sink = sink
        self._text: list[str] = []
        self._parser: etree.XMLParser | None = None
        self._chunk_type: type | None = None

    def feed(self, chunk: str | bytes) -> None:
        """
        Push one chunk of raw input

        Raises:
            TokenizerError: If the XML is malformed
            TypeError: If str and bytes chunks are mixed
        """
        if not chunk:
            return

        if self._parser is None:
            self._parser = self._create_parser(chunk)
        elif not isinstance(chunk, self._chunk_type):
            raise TypeError(
                f"Cannot mix {self._chunk_type.__name__} and {type(chunk).__name__} chunks"
            )

        data = chunk.encode("utf-8") if isinstance(chunk, str) else chunk
        try:
            self._parser.feed(data)
        except etree.XMLSyntaxError as e:
            logger.debug(f"XML syntax error while feeding chunk: {e}")
            raise TokenizerError(str(e)) from e

    def close(self) -> None:
        """
        Signal end of input and flush remaining tokens

        Raises:
            TokenizerError: If the document is incomplete
        """
        if self._parser is None:
            return

        try:
            self._parser.close()
        except etree.XMLSyntaxError as e:
            logger.debug(f"XML syntax error at end of input: {e}")
            raise TokenizerError(str(e)) from e

    def _create_parser(self, chunk: str | bytes) -> etree.XMLParser:
        if isinstance(chunk, str):
            self._chunk_type = str
            encoding = "utf-8"
        elif isinstance(chunk, bytes):
            self._chunk_type = bytes
            encoding = None
        else:
            raise TypeError(f"Expected str or bytes chunk, got {type(chunk).__name__}")

        return etree.XMLParser(
            target=_TokenTarget(self),
            encoding=encoding,
            resolve_entities=False,
            no_network=True,
            huge_tree=True,
        )

    def _flush_text(self) -> None:
        if not self._text:
            return
        text = "".join(self._text).strip()
        self._text.clear()
        if text:
            self._sink(Text(text))
