"""
XMLTV timestamp resolution

Converts raw guide timestamps such as '20150603025000 +0200' into
timezone-aware UTC datetimes using a configurable format pattern.

Format tokens: YYYY, YY, MM, M, DD, D, HH, H, mm, m, ss, s, SSS, Z, ZZ and
[literal]. Any other character in the pattern is matched literally.
"""
from datetime import datetime, timedelta, timezone
import logging
import re

from xmltv_stream.config import DEFAULT_TIME_FMT

logger = logging.getLogger(__name__)

_FORMAT_TOKEN_RE = re.compile(
    r"\[[^\]]*\]|YYYY|SSS|ZZ|YY|MM|DD|HH|mm|ss|M|D|H|m|s|Z|.",
    re.DOTALL,
)

# token -> (group name, strict min width, max width)
_NUMERIC_TOKENS = {
    "YYYY": ("year", 4, 4),
    "YY": ("year2", 2, 2),
    "MM": ("month", 2, 2),
    "M": ("month", 1, 2),
    "DD": ("day", 2, 2),
    "D": ("day", 1, 2),
    "HH": ("hour", 2, 2),
    "H": ("hour", 1, 2),
    "mm": ("minute", 2, 2),
    "m": ("minute", 1, 2),
    "ss": ("second", 2, 2),
    "s": ("second", 1, 2),
    "SSS": ("millisecond", 3, 3),
}

_DATE_FIELDS = {"year", "year2", "month", "day"}
_OFFSET_TOKENS = {"Z", "ZZ"}
_OFFSET_PATTERN = r"(?P<offset>Z|[+-]\d\d(?::?\d\d)?)"


class TimeFormatError(ValueError):
    """Raised when a time format pattern cannot be compiled"""
    pass


def compile_time_format(time_fmt: str, strict: bool = True) -> re.Pattern[str]:
    """
    Compile a time format pattern into a regular expression

    Args:
        time_fmt: Pattern such as 'YYYYMMDDHHmmss Z'
        strict: Require exact widths and literals when True

    Returns:
        Compiled pattern with named groups per date field

    Raises:
        TimeFormatError: If the pattern repeats a field or has no year
    """
    parts: list[str] = [] if strict else [r"\s*"]
    seen: set[str] = set()

    for token in _FORMAT_TOKEN_RE.findall(time_fmt):
        if token in _NUMERIC_TOKENS:
            name, min_width, max_width = _NUMERIC_TOKENS[token]
        elif token in _OFFSET_TOKENS:
            name = "offset"
        else:
            if strict:
                literal = token[1:-1] if len(token) > 1 else token
                parts.append(re.escape(literal))
            continue

        if name in seen:
            raise TimeFormatError(f"Time format '{time_fmt}' repeats the {name} field")
        seen.add(name)

        if name == "offset":
            parts.append(_OFFSET_PATTERN if strict else rf"(?:[^\d+\-Z]*?{_OFFSET_PATTERN})?")
        elif strict:
            width = f"{min_width}" if min_width == max_width else f"{min_width},{max_width}"
            parts.append(rf"(?P<{name}>\d{{{width}}})")
        else:
            # Time fields never swallow the sign of a following offset
            separator = r"\D*?" if name in _DATE_FIELDS else r"[^\d+\-]*?"
            parts.append(rf"(?:{separator}(?P<{name}>\d{{1,{max_width}}}))?")

    if "year" not in seen and "year2" not in seen:
        raise TimeFormatError(f"Time format '{time_fmt}' has no year token")

    return re.compile("".join(parts), re.ASCII)


def _parse_offset(offset: str | None) -> timezone:
    """Parse '+0200', '+02:00', '+02' or 'Z' into a fixed offset (UTC when absent)"""
    if not offset or offset == "Z":
        return timezone.utc

    sign = 1 if offset[0] == "+" else -1
    digits = offset[1:].replace(":", "")
    hours = int(digits[:2])
    minutes = int(digits[2:4] or 0)
    if minutes >= 60:
        raise ValueError(f"Invalid offset minutes: '{offset}'")

    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def _build_datetime(fields: dict[str, str | None]) -> datetime:
    year_text = fields.get("year")
    if year_text is not None:
        year = int(year_text)
    else:
        short_year = fields.get("year2")
        if short_year is None:
            raise ValueError("Missing year")
        year = int(short_year)
        year += 1900 if year > 68 else 2000

    millisecond = fields.get("millisecond")

    return datetime(
        year,
        int(fields.get("month") or 1),
        int(fields.get("day") or 1),
        int(fields.get("hour") or 0),
        int(fields.get("minute") or 0),
        int(fields.get("second") or 0),
        int(millisecond.ljust(3, "0")) * 1000 if millisecond else 0,
        tzinfo=_parse_offset(fields.get("offset")),
    )


class TimestampResolver:
    """Resolves raw XMLTV timestamps against one configured format"""

    def __init__(self, time_fmt: str = DEFAULT_TIME_FMT, strict: bool = True) -> None:
        self.time_fmt = time_fmt
        self.strict = strict
        self._pattern = compile_time_format(time_fmt, strict)

    def resolve(self, raw: str | None) -> datetime | None:
        """
        Convert a raw timestamp to a UTC datetime

        Absent values are treated as empty strings and fail the same way as
        malformed ones.

        Args:
            raw: Timestamp text like '20080715003000 -0600'

        Returns:
            Timezone-aware datetime in UTC, or None if it doesn't fit the format
        """
        text = raw or ""
        match = self._pattern.fullmatch(text) if self.strict else self._pattern.match(text)
        if match is None:
            logger.debug("Timestamp '%s' does not match format '%s'", text, self.time_fmt)
            return None

        try:
            return _build_datetime(match.groupdict()).astimezone(timezone.utc)
        except (ValueError, OverflowError) as e:
            logger.debug("Timestamp '%s' is out of range: %s", text, e)
            return None
