"""Datetime utilities."""

from datetime import datetime, timedelta, timezone

from dateutil.parser import parse as parse_date

# Timezone abbreviations for date parsing
TZINFOS = {
    "EST": timezone(timedelta(hours=-5)),
    "EDT": timezone(timedelta(hours=-4)),
    "CST": timezone(timedelta(hours=-6)),
    "CDT": timezone(timedelta(hours=-5)),
    "MST": timezone(timedelta(hours=-7)),
    "MDT": timezone(timedelta(hours=-6)),
    "PST": timezone(timedelta(hours=-8)),
    "PDT": timezone(timedelta(hours=-7)),
    "GMT": timezone.utc,
    "UTC": timezone.utc,
    "BST": timezone(timedelta(hours=1)),
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_datetime(value) -> datetime:
    """Parse a feed date string, falling back to the current UTC time.

    Accepts RFC 2822 (RSS), ISO-8601 (Atom) and datetimes. Naive values are
    treated as UTC. Missing or unparseable values never raise.
    """
    if value is None:
        return utc_now()
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        if not text:
            return utc_now()
        try:
            dt = parse_date(text, tzinfos=TZINFOS)
        except (ValueError, OverflowError):
            return utc_now()
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt
