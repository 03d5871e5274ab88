"""Date parsing and formatting for post timestamps."""

from __future__ import annotations

from datetime import date, datetime, time, timezone

# Accepted non-ISO spellings, e.g. "Jul 08 2022" or "July 8, 2022".
_TEXT_FORMATS = (
    "%b %d %Y",
    "%B %d %Y",
    "%b %d, %Y",
    "%B %d, %Y",
)


def parse_pub_date(value: object) -> datetime:
    """Coerce a front-matter date value into a timezone-aware datetime.

    YAML already turns bare dates and timestamps into ``date``/``datetime``
    objects; strings are parsed as ISO 8601 or one of the textual formats.
    Dates become midnight UTC and naive datetimes are assumed to be UTC.

    Raises:
        ValueError: If the value cannot be interpreted as a date
    """
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Not a date: {value!r}")

    raw = value.strip()
    iso = f"{raw[:-1]}+00:00" if raw.endswith("Z") else raw
    try:
        return _as_utc(datetime.fromisoformat(iso))
    except ValueError:
        pass

    for fmt in _TEXT_FORMATS:
        try:
            return datetime.strptime(raw, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    raise ValueError(f"Unrecognized date format: {value!r}")


def format_date(value: datetime, fmt: str | None = None) -> str:
    """Format a timestamp for display.

    Without ``fmt`` this produces the en-US medium form, e.g. ``Jun 13, 2025``.
    """
    if fmt:
        return value.strftime(fmt)
    return f"{value:%b} {value.day}, {value.year}"


def iso_date(value: datetime) -> str:
    return _as_utc(value).isoformat()


def rfc822_date(value: datetime) -> str:
    """Format a timestamp for RSS ``pubDate`` elements."""
    return _as_utc(value).strftime("%a, %d %b %Y %H:%M:%S +0000")


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
