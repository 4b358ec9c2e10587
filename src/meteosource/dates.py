"""Datetime helpers for the Meteosource client.

Wire dates come from the API without zone information but are always UTC
(the client requests ``timezone=utc``). These helpers parse them into
aware datetimes, convert them to the caller's zone and build the truncated
ISO keys used by the section lookup indexes.

Lookup keys:
    - hourly: ``YYYY-MM-DDTHH:00:00`` in UTC
    - minutely: ``YYYY-MM-DDTHH:MM:00`` in UTC
    - daily: ``YYYY-MM-DD`` in the zone of the queried value
"""

import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .exceptions import MeteosourceDatetimeError, MeteosourceOptionError
from .types import DEFAULT_TIMEZONE

UTC = ZoneInfo("UTC")

_KEY_LENGTH = 19
_DAY_KEY_LENGTH = 10

_OFFSET_ZONE = re.compile(r"^(?:utc|gmt)([+-])(\d{1,2})(?::?(\d{2}))?$", re.IGNORECASE)
_UTC_NAMES = {"utc", "gmt", "z"}
_LOCAL_NAMES = {"local", "system"}


def resolve_zone(tz: Optional[str]) -> tzinfo:
    """Return the tzinfo for a ``tz`` option, UTC when not given.

    Besides tz database names, ``utc``/``gmt``/``z`` (any case) mean UTC,
    ``local``/``system`` mean the current local offset of the machine and
    ``UTC+H``, ``UTC-HH:MM`` style names mean a fixed offset.

    Raises:
        MeteosourceOptionError: If the zone is not known to the tz database
            and is not one of the names above.

    Example:
        >>> resolve_zone(None)
        zoneinfo.ZoneInfo(key='UTC')
        >>> resolve_zone("Europe/Prague")
        zoneinfo.ZoneInfo(key='Europe/Prague')
        >>> resolve_zone("UTC+2")
        datetime.timezone(datetime.timedelta(seconds=7200))
    """
    name = tz or DEFAULT_TIMEZONE
    lowered = name.strip().lower()
    if lowered in _UTC_NAMES:
        return UTC
    if lowered in _LOCAL_NAMES:
        return datetime.now().astimezone().tzinfo

    match = _OFFSET_ZONE.match(name.strip())
    if match:
        sign, hours, minutes = match.groups()
        offset = timedelta(hours=int(hours), minutes=int(minutes or 0))
        if offset >= timedelta(hours=24) or int(minutes or 0) >= 60:
            raise MeteosourceOptionError(f"unknown timezone '{name}'")
        return timezone(-offset if sign == "-" else offset)

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise MeteosourceOptionError(f"unknown timezone '{name}'") from e


def to_datetime(value: Any, force_utc: bool = False) -> datetime:
    """Convert an ISO 8601 string or a datetime to a datetime.

    Strings without zone information stay naive (local time) unless
    ``force_utc`` is set, in which case they are anchored to UTC.
    Datetime objects are returned unchanged.

    Args:
        value: ISO 8601 string or datetime.
        force_utc: Interpret zone-less strings as UTC.

    Returns:
        The parsed datetime.

    Raises:
        MeteosourceDatetimeError: If the value is of another type, cannot
            be parsed or names an impossible date (e.g. February 30).

    Example:
        >>> to_datetime("2022-03-03T10:00:00", force_utc=True)
        datetime.datetime(2022, 3, 3, 10, 0, tzinfo=zoneinfo.ZoneInfo(key='UTC'))
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise MeteosourceDatetimeError(
            "either a string (ISO 8601 like YYYY-MM-DDTHH:MM:SS) or a datetime "
            f"required, got {type(value).__name__}"
        )
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise MeteosourceDatetimeError(
            f"passed datetime string is not valid: '{value}'"
        ) from e
    if force_utc and parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def to_instant(value: Any) -> datetime:
    """Convert a value to an aware datetime, reading naive values as local time."""
    moment = to_datetime(value)
    if moment.tzinfo is None:
        moment = moment.astimezone()
    return moment


def wire_to_zone(value: Any, zone: tzinfo) -> datetime:
    """Parse a UTC wire datetime and convert it to ``zone``."""
    return to_datetime(value, force_utc=True).astimezone(zone)


def day_in_zone(value: Any, zone: tzinfo) -> datetime:
    """Return midnight of a wire day (``YYYY-MM-DD``) in ``zone``.

    The day is a calendar day, not an instant, so it is placed in the
    target zone instead of being converted from UTC.
    """
    moment = to_datetime(value)
    if moment.tzinfo is not None:
        return moment.astimezone(zone)
    # Midnight may not exist on DST change days; the UTC round-trip moves
    # it forward to the first valid local time.
    midnight = datetime.combine(moment.date(), time(), tzinfo=zone)
    return midnight.astimezone(UTC).astimezone(zone)


def hour_key(value: Any) -> str:
    """Index key of the hour containing ``value``."""
    moment = to_datetime(value).astimezone(UTC)
    return moment.replace(minute=0, second=0, microsecond=0).isoformat()[:_KEY_LENGTH]


def minute_key(value: Any) -> str:
    """Index key of the minute containing ``value``."""
    moment = to_datetime(value).astimezone(UTC)
    return moment.replace(second=0, microsecond=0).isoformat()[:_KEY_LENGTH]


def day_key(value: Any) -> str:
    """Index key of the calendar day of ``value`` in its own zone."""
    return to_datetime(value).isoformat()[:_DAY_KEY_LENGTH]


def to_date_string(value: Any) -> str:
    """Normalize a date option to ``YYYY-MM-DD``.

    Accepts ISO 8601 strings, datetimes and dates.

    Example:
        >>> to_date_string("2022-03-03T12:00:00")
        '2022-03-03'
        >>> to_date_string(date(2022, 3, 3))
        '2022-03-03'
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        return value.isoformat()
    return day_key(value)


def date_range(date_from: str, date_to: str) -> list[str]:
    """Expand an inclusive day range into ``YYYY-MM-DD`` strings.

    Days are generated by stepping exactly 24 hours from midnight UTC of
    ``date_from``.

    Raises:
        MeteosourceOptionError: If ``date_from`` is after ``date_to``.

    Example:
        >>> date_range("2022-03-03", "2022-03-05")
        ['2022-03-03', '2022-03-04', '2022-03-05']
    """
    first = datetime.combine(date.fromisoformat(date_from), time(), tzinfo=UTC)
    last = datetime.combine(date.fromisoformat(date_to), time(), tzinfo=UTC)
    if first > last:
        raise MeteosourceOptionError(
            f"date_from ({date_from}) must be lower or equal to date_to ({date_to})"
        )

    days = []
    current = first
    while current <= last:
        days.append(current.date().isoformat())
        current += timedelta(hours=24)
    return days


def now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(tz=UTC)
