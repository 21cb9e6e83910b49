"""
Streaming XMLTV parser

Turns XMLTV documents into Channel and Programme records in a single
forward pass.
"""
from xmltv_stream.schemas import ParserOptions
from xmltv_stream.services import (
    ParserClosedError,
    XMLTVStreamParser,
    aiter_xmltv_events,
    aparse_xmltv_file,
    aparse_xmltv_url,
    iter_xmltv_events,
    parse_xmltv_file,
)
from xmltv_stream.services.parse_events import (
    ChannelEvent,
    EndEvent,
    ErrorEvent,
    ParseEvent,
    ProgrammeEvent,
)
from xmltv_stream.services.record_types import (
    Channel,
    Credit,
    EpisodeNum,
    Programme,
    ProgrammeIcon,
    ProgrammeImage,
    Rating,
)
from xmltv_stream.services.token_types import TokenizerError
from xmltv_stream.utils.episodes import get_season
from xmltv_stream.utils.timestamps import TimeFormatError, TimestampResolver

__version__ = "0.1.0"

__all__ = [
    'XMLTVStreamParser',
    'ParserOptions',
    'ParserClosedError',
    'TokenizerError',
    'TimeFormatError',
    'TimestampResolver',
    'iter_xmltv_events',
    'parse_xmltv_file',
    'aiter_xmltv_events',
    'aparse_xmltv_file',
    'aparse_xmltv_url',
    'ChannelEvent',
    'ProgrammeEvent',
    'EndEvent',
    'ErrorEvent',
    'ParseEvent',
    'Channel',
    'Programme',
    'ProgrammeIcon',
    'ProgrammeImage',
    'Rating',
    'EpisodeNum',
    'Credit',
    'get_season',
]
