"""
liftstats — Local date keys

The log store is keyed by the *local* calendar date (YYYY-MM-DD). Every
component formats and parses keys through this module; deriving a key from a
UTC ISO string shifts late-evening sessions onto the next day.
"""
import re
from datetime import date, datetime, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from liftstats.config import TIMEZONE

_KEY_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def get_zone(tz=None) -> tzinfo | None:
    """Resolve a zone name / tzinfo. None means the system local zone."""
    if isinstance(tz, tzinfo):
        return tz
    name = tz if tz is not None else TIMEZONE
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def _to_local(dt: datetime, tz=None) -> datetime:
    zone = get_zone(tz)
    if zone is None:
        return dt.astimezone()
    return dt.astimezone(zone)


def now(tz=None) -> datetime:
    """Current local time (aware)."""
    return _to_local(datetime.now(timezone.utc), tz)


def local_today(tz=None) -> date:
    return now(tz).date()


def as_timestamp(value, tz=None) -> datetime | None:
    """
    Coerce a stored timestamp into an aware UTC datetime.

    Accepts datetimes (naive ones are local wall-clock time), dates (local
    midnight), epoch milliseconds as numbers or numeric strings, and ISO 8601
    strings. Returns None for anything else.
    """
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            zone = get_zone(tz)
            value = value.astimezone() if zone is None else value.replace(tzinfo=zone)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return as_timestamp(datetime(value.year, value.month, value.day), tz)
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        try:
            return as_timestamp(float(text), tz)
        except ValueError:
            pass
        try:
            return as_timestamp(datetime.fromisoformat(text.replace("Z", "+00:00")), tz)
        except ValueError:
            return None
    return None


def to_date_key(value=None, tz=None) -> str:
    """
    Local YYYY-MM-DD key for a date, datetime or stored timestamp.

    With no value, the key of the current local day.
    """
    if value is None:
        day = local_today(tz)
    elif isinstance(value, date) and not isinstance(value, datetime):
        day = value
    else:
        ts = as_timestamp(value, tz)
        if ts is None:
            raise ValueError(f"Cannot derive a date key from {value!r}")
        day = _to_local(ts, tz).date()
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def parse_date_key(key) -> date | None:
    """YYYY-MM-DD → date, or None for malformed keys."""
    if not isinstance(key, str):
        return None
    match = _KEY_RE.match(key)
    if not match:
        return None
    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError:
        return None


def short_label(key: str) -> str:
    """Chart label for a key, e.g. "Mar 7"."""
    day = parse_date_key(key)
    if day is None:
        return key
    return f"{day:%b} {day.day}"
