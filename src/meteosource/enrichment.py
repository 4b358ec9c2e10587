"""Conversion of decoded API responses into enriched models.

The API sends dates as zone-less UTC strings. Enrichment records the wire
string of every point as its lookup key, converts the date to an aware
datetime in the target zone and wraps each section into its model.
"""

import logging
from datetime import tzinfo
from typing import Any, Callable, Optional

from .dates import day_in_zone, wire_to_zone
from .exceptions import MeteosourceError
from .models import (
    Alert,
    AlertsSection,
    CurrentSection,
    DailySection,
    HourlySection,
    MinutelySection,
    PointForecast,
    TimeMachine,
)

logger = logging.getLogger(__name__)


def _convert_points(
    raw_points: list[dict[str, Any]],
    field: str,
    convert: Callable[[Any, tzinfo], Any],
    zone: tzinfo,
) -> tuple[list[str], list[dict[str, Any]]]:
    """Convert the temporal field of every point.

    Returns:
        Tuple of (wire keys, converted points), both in API order.
    """
    keys = []
    points = []
    for raw in raw_points:
        wire = raw.get(field)
        keys.append(wire)
        point = dict(raw)
        point[field] = convert(wire, zone)
        points.append(point)
    return keys, points


def _section_fields(raw: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in raw.items() if key != "data"}


def build_hourly(raw: dict[str, Any], zone: tzinfo) -> HourlySection:
    """Enrich the ``hourly`` section of a point forecast."""
    keys, points = _convert_points(raw.get("data") or [], "date", wire_to_zone, zone)
    logger.debug(f"Enriched hourly section with {len(points)} points")
    return HourlySection.indexed(points, keys, **_section_fields(raw))


def build_minutely(raw: dict[str, Any], zone: tzinfo) -> MinutelySection:
    """Enrich the ``minutely`` section of a point forecast."""
    keys, points = _convert_points(raw.get("data") or [], "date", wire_to_zone, zone)
    logger.debug(f"Enriched minutely section with {len(points)} points")
    return MinutelySection.indexed(points, keys, **_section_fields(raw))


def build_daily(raw: dict[str, Any], zone: tzinfo) -> DailySection:
    """Enrich the ``daily`` section of a point forecast.

    Days are keyed by their 10-character wire date and placed at midnight
    of the target zone.
    """
    keys, points = _convert_points(raw.get("data") or [], "day", day_in_zone, zone)
    logger.debug(f"Enriched daily section with {len(points)} points")
    return DailySection.indexed(points, keys, **_section_fields(raw))


def build_alerts(raw: dict[str, Any], zone: tzinfo) -> AlertsSection:
    """Enrich the ``alerts`` section; no index is built for alerts."""
    alerts = []
    for item in raw.get("data") or []:
        alert = dict(item)
        alert["onset"] = wire_to_zone(item.get("onset"), zone)
        alert["expires"] = wire_to_zone(item.get("expires"), zone)
        alerts.append(Alert(**alert))
    logger.debug(f"Enriched alerts section with {len(alerts)} alerts")
    return AlertsSection(data=alerts, **_section_fields(raw))


def build_current(raw: dict[str, Any], zone: tzinfo) -> CurrentSection:
    """Wrap the ``current`` section; it carries no dates to convert."""
    return CurrentSection(**raw)


SECTION_BUILDERS: dict[str, Callable[[dict[str, Any], tzinfo], Any]] = {
    "hourly": build_hourly,
    "daily": build_daily,
    "minutely": build_minutely,
    "current": build_current,
    "alerts": build_alerts,
}
"""dict: Builder of each point forecast section, by response key."""


def enrich_point_forecast(body: dict[str, Any], zone: tzinfo) -> PointForecast:
    """Convert a decoded point forecast body into a PointForecast.

    Sections missing from the body or returned as null stay None.

    Args:
        body: Decoded JSON body of the ``/point`` endpoint.
        zone: Target zone of converted dates.

    Returns:
        The enriched PointForecast.

    Raises:
        MeteosourceDatetimeError: If a wire date cannot be parsed.

    Example:
        >>> forecast = enrich_point_forecast(
        ...     {"lat": "50.0880N", "lon": "14.4208E",
        ...      "hourly": {"data": [{"date": "2022-03-03T10:00:00"}]}},
        ...     ZoneInfo("Europe/Prague"),
        ... )
        >>> forecast.hourly.data[0].date.isoformat()
        '2022-03-03T11:00:00+01:00'
    """
    fields = dict(body)
    for name, build in SECTION_BUILDERS.items():
        if body.get(name) is not None:
            fields[name] = build(body[name], zone)
    return PointForecast(**fields)


def enrich_time_machine(
    body: dict[str, Any],
    zone: tzinfo,
    failed_dates: Optional[list[str]] = None,
    failed_errors: Optional[dict[str, MeteosourceError]] = None,
) -> TimeMachine:
    """Convert a merged time machine body into a TimeMachine.

    Args:
        body: First successful ``/time_machine`` body with the ``data`` of
            all later successful bodies appended.
        zone: Target zone of converted dates.
        failed_dates: Dates skipped in non-strict mode.
        failed_errors: Error raised for each skipped date.

    Returns:
        The enriched TimeMachine.
    """
    keys, points = _convert_points(body.get("data") or [], "date", wire_to_zone, zone)
    logger.debug(f"Enriched time machine data with {len(points)} points")
    return TimeMachine.indexed(
        points,
        keys,
        failed_dates=list(failed_dates or []),
        failed_errors=dict(failed_errors or {}),
        **_section_fields(body),
    )
