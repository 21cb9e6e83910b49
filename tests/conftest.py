"""Shared test fixtures for the xmltv_stream test suite.

The sample guide exercises every tag the record builder understands, plus
a DOCTYPE, entities, CDATA and non-ASCII text so chunk-splitting tests cut
through multi-byte characters.
"""

from datetime import datetime, timezone

import pytest


SAMPLE_XMLTV = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE tv SYSTEM "xmltv.dtd">
<tv generator-info-name="test">
  <channel id="bbc1">
    <display-name>BBC One</display-name>
    <icon src="http://example.com/bbc1.png"/>
  </channel>
  <channel id="arte">
    <display-name src="Arte (src)"/>
  </channel>
  <programme channel="bbc1" start="20150603020000 +0000" stop="20150603030000 +0000">
    <title>News</title>
    <title>Nachrichten</title>
    <sub-title>Late Edition</sub-title>
    <desc>Headlines &amp; weather</desc>
    <desc><![CDATA[<b>Bold</b> claims]]></desc>
    <credits>
      <director>Jane Doe</director>
      <actor role="Doctor">John Smith</actor>
      <actor>Extra Person</actor>
      <presenter>Café Presenter</presenter>
    </credits>
    <date>2015</date>
    <category>News</category>
    <category>Current Affairs</category>
    <length units="minutes">60</length>
    <icon src="http://example.com/news.png" width="100" height="50"/>
    <country>GB</country>
    <episode-num system="xmltv_ns">1.4/5.</episode-num>
    <episode-num system="onscreen">S02E05</episode-num>
    <rating system="BBFC">
      <value>PG</value>
    </rating>
    <star-rating>
      <value>4/5</value>
    </star-rating>
    <large-image-url>http://example.com/large.jpg</large-image-url>
    <small-image-url>http://example.com/small.jpg</small-image-url>
  </programme>
  <programme channel="arte" start="not-a-date">
    <title>Doku</title>
    <length units="fortnights">2</length>
  </programme>
</tv>
"""

NEWS_START = datetime(2015, 6, 3, 2, 0, tzinfo=timezone.utc)
NEWS_END = datetime(2015, 6, 3, 3, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_xmltv():
    """The sample guide as text."""
    return SAMPLE_XMLTV


@pytest.fixture
def sample_xmltv_bytes():
    """The sample guide as UTF-8 bytes."""
    return SAMPLE_XMLTV.encode("utf-8")


@pytest.fixture
def sample_file(tmp_path):
    """The sample guide written to a temporary file."""
    path = tmp_path / "guide.xml"
    path.write_bytes(SAMPLE_XMLTV.encode("utf-8"))
    return path


def split_chunks(data, size):
    """Split str or bytes into fixed-size chunks."""
    return [data[i:i + size] for i in range(0, len(data), size)]


@pytest.fixture
def chunker():
    """Helper splitting input into fixed-size chunks."""
    return split_chunks


@pytest.fixture
def news_times():
    """Expected (start, end) of the sample 'News' programme."""
    return NEWS_START, NEWS_END
