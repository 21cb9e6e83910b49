"""
Services package for the XMLTV stream parser

This package contains the tokenizer adapter, record builder and parser drivers.
"""
from xmltv_stream.services.async_parser_service import (
    aiter_xmltv_events,
    aparse_xmltv_file,
    aparse_xmltv_url,
)
from xmltv_stream.services.xmltv_parser_service import (
    ParserClosedError,
    XMLTVStreamParser,
    iter_xmltv_events,
    parse_xmltv_file,
)

__all__ = [
    'XMLTVStreamParser',
    'ParserClosedError',
    'iter_xmltv_events',
    'parse_xmltv_file',
    'aiter_xmltv_events',
    'aparse_xmltv_file',
    'aparse_xmltv_url',
]
