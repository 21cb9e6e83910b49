"""Unit tests for timestamp resolution.

Covers the default XMLTV format in strict mode, lenient parsing, custom
patterns and pattern compilation errors.
"""

from datetime import datetime, timedelta, timezone

import pytest

from xmltv_stream.utils.timestamps import (
    TimeFormatError,
    TimestampResolver,
    compile_time_format,
)


class TestStrictDefaultFormat:

    def test_resolves_offset_timestamp(self):
        resolved = TimestampResolver().resolve("20150603025000 +0200")
        assert resolved == datetime(2015, 6, 3, 2, 50, tzinfo=timezone(timedelta(hours=2)))
        assert resolved.tzinfo == timezone.utc
        assert resolved.hour == 0

    def test_negative_offset(self):
        resolved = TimestampResolver().resolve("20080715003000 -0600")
        assert resolved == datetime(2008, 7, 15, 6, 30, tzinfo=timezone.utc)

    def test_colon_offset_is_accepted(self):
        resolved = TimestampResolver().resolve("20150603025000 +02:00")
        assert resolved == datetime(2015, 6, 3, 0, 50, tzinfo=timezone.utc)

    @pytest.mark.parametrize("raw", [
        "not-a-date",
        "",
        None,
        "20150603025000",
        "2015060302500 +0200",
        "20150603025000 +0200 trailing",
        " 20150603025000 +0200",
        "20151303025000 +0000",
        "20150631025000 +0000",
        "٢٠١٥٠٦٠٣٠٢٥٠٠٠ +0000",
    ])
    def test_rejects_malformed(self, raw):
        assert TimestampResolver().resolve(raw) is None


class TestLenientMode:

    def test_accepts_exact_input(self):
        resolver = TimestampResolver(strict=False)
        assert resolver.resolve("20150603025000 +0200") == datetime(2015, 6, 3, 0, 50, tzinfo=timezone.utc)

    def test_missing_offset_defaults_to_utc(self):
        resolver = TimestampResolver(strict=False)
        assert resolver.resolve("20150603025000") == datetime(2015, 6, 3, 2, 50, tzinfo=timezone.utc)

    def test_partial_input(self):
        resolver = TimestampResolver(strict=False)
        assert resolver.resolve("20150603") == datetime(2015, 6, 3, tzinfo=timezone.utc)

    def test_loose_separators(self):
        resolver = TimestampResolver(strict=False)
        assert resolver.resolve("2015-06-03 02:50 -0500") == datetime(2015, 6, 3, 7, 50, tzinfo=timezone.utc)

    def test_still_needs_a_year(self):
        assert TimestampResolver(strict=False).resolve("not-a-date") is None

    def test_calendar_errors_still_fail(self):
        assert TimestampResolver(strict=False).resolve("20151303") is None


class TestCustomFormats:

    def test_iso_like_pattern(self):
        resolver = TimestampResolver("YYYY-MM-DD[T]HH:mm:ssZ")
        assert resolver.resolve("2015-06-03T02:50:00Z") == datetime(2015, 6, 3, 2, 50, tzinfo=timezone.utc)

    def test_date_only_pattern(self):
        resolver = TimestampResolver("DD/MM/YYYY")
        assert resolver.resolve("03/06/2015") == datetime(2015, 6, 3, tzinfo=timezone.utc)
        assert resolver.resolve("3/6/2015") is None

    def test_single_letter_tokens_allow_short_fields(self):
        resolver = TimestampResolver("D.M.YYYY H:mm")
        assert resolver.resolve("3.6.2015 2:50") == datetime(2015, 6, 3, 2, 50, tzinfo=timezone.utc)

    def test_two_digit_year(self):
        resolver = TimestampResolver("YYMMDD")
        assert resolver.resolve("150603").year == 2015
        assert resolver.resolve("990603").year == 1999

    def test_milliseconds(self):
        resolver = TimestampResolver("YYYYMMDDHHmmssSSS Z")
        assert resolver.resolve("20150603025000250 +0000").microsecond == 250000


class TestCompileTimeFormat:

    def test_requires_year(self):
        with pytest.raises(TimeFormatError):
            compile_time_format("HH:mm")

    def test_rejects_repeated_field(self):
        with pytest.raises(TimeFormatError):
            compile_time_format("YYYY YYYY")

    def test_resolver_construction_validates_format(self):
        with pytest.raises(TimeFormatError):
            TimestampResolver("")
