"""Pydantic models for Meteosource API responses.

Responses are parsed into these models by the enrichment layer after every
wire date has been converted to an aware datetime. Data points keep every
field the API returned (``extra="allow"``); lookup helpers live on the
section models, so ``model_dump()`` only ever yields the literal data.

Key model groups:
    1. **Data points**: HourlyPoint, MinutelyPoint, DailyPoint, Alert
    2. **Sections**: HourlySection, MinutelySection, DailySection,
       CurrentSection, AlertsSection
    3. **Responses**: PointForecast, TimeMachine

Example:
    Looking up the forecast for a given hour::

        forecast = await client.get_point_forecast(
            place_id="prague", sections=["hourly"], tz="Europe/Prague"
        )
        point = forecast.hourly.get_data("2022-03-03T14:00:00Z")
        if point is not None:
            print(point.date, point.temperature)
"""

from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from .dates import day_key, hour_key, minute_key, now, to_instant
from .exceptions import MeteosourceError

_ISO_LENGTH = 19
_DAY_LENGTH = 10


class HourlyPoint(BaseModel):
    """One hour of weather data.

    Attributes:
        date: Start of the hour, converted to the requested timezone.

    All other fields (``temperature``, ``wind``, ``precipitation``, ...)
    are kept as returned by the API.
    """

    model_config = ConfigDict(extra="allow")

    date: datetime


class MinutelyPoint(BaseModel):
    """One minute of precipitation nowcast.

    Attributes:
        date: Start of the minute, converted to the requested timezone.
    """

    model_config = ConfigDict(extra="allow")

    date: datetime


class DailyPoint(BaseModel):
    """One day of weather data.

    Attributes:
        day: Midnight of the day in the requested timezone.
    """

    model_config = ConfigDict(extra="allow")

    day: datetime


class Alert(BaseModel):
    """A weather alert issued for the location.

    Attributes:
        onset: Start of the alert, converted to the requested timezone.
        expires: End of the alert, converted to the requested timezone.
    """

    model_config = ConfigDict(extra="allow")

    onset: datetime
    expires: datetime

    def is_active(self, when: datetime) -> bool:
        """Whether ``when`` lies within ``[onset, expires]``."""
        return self.onset <= when <= self.expires


class _IndexedSection(BaseModel):
    """Base for sections with a lookup index over their data points.

    The index maps a wire key to the position of the point in ``data``.
    It is built once by ``indexed()`` and never changes afterwards.
    """

    model_config = ConfigDict(extra="allow")

    _index: dict[str, int] = PrivateAttr(default_factory=dict)

    @classmethod
    def indexed(
        cls, points: list[dict[str, Any]], keys: list[str], **fields: Any
    ) -> "_IndexedSection":
        """Build the section from converted points and their wire keys.

        Args:
            points: Data points with dates already converted.
            keys: Wire key of each point, in the same order.
            **fields: Other section fields returned by the API.

        Returns:
            The section with its lookup index in place.
        """
        section = cls(data=points, **fields)
        section._index = {key: position for position, key in enumerate(keys)}
        return section

    def _lookup(self, key: str) -> Optional[Any]:
        position = self._index.get(key)
        if position is None:
            return None
        return self.data[position]


def _span(points: list[Any], field: str, length: int) -> str:
    if not points:
        return ""
    first = getattr(points[0], field).isoformat()[:length]
    last = getattr(points[-1], field).isoformat()[:length]
    return f" from {first} to {last}"


class HourlySection(_IndexedSection):
    """Hourly forecast.

    Attributes:
        data: Hourly data points in API order.

    Example:
        >>> forecast.hourly.get_data(datetime.now(tz=ZoneInfo("Europe/Athens")))
        HourlyPoint(date=datetime.datetime(...), ...)
    """

    data: list[HourlyPoint] = Field(default_factory=list)

    def get_data(self, when: Union[str, datetime]) -> Optional[HourlyPoint]:
        """Return the point for the hour containing ``when``.

        Args:
            when: ISO 8601 string or datetime. Zone-less values are read
                as local time.

        Returns:
            The matching HourlyPoint, or None when the hour is not covered.

        Raises:
            MeteosourceDatetimeError: If ``when`` is not a valid datetime.
        """
        return self._lookup(hour_key(when))

    def __str__(self) -> str:
        return (
            f"<Hourly data with {len(self.data)} timesteps"
            f"{_span(self.data, 'date', _ISO_LENGTH)}>"
        )


class MinutelySection(_IndexedSection):
    """Minutely precipitation nowcast.

    Attributes:
        data: Minutely data points in API order.
    """

    data: list[MinutelyPoint] = Field(default_factory=list)

    def get_data(self, when: Union[str, datetime]) -> Optional[MinutelyPoint]:
        """Return the point for the minute containing ``when``, or None."""
        return self._lookup(minute_key(when))

    def __str__(self) -> str:
        return (
            f"<Minutely data with {len(self.data)} timesteps"
            f"{_span(self.data, 'date', _ISO_LENGTH)}>"
        )


class DailySection(_IndexedSection):
    """Daily forecast.

    Attributes:
        data: Daily data points in API order.
    """

    data: list[DailyPoint] = Field(default_factory=list)

    def get_data(self, when: Union[str, datetime]) -> Optional[DailyPoint]:
        """Return the point for the calendar day of ``when``.

        The day is taken in the zone of ``when`` itself, so passing a
        converted ``DailyPoint.day`` always finds that point.
        """
        return self._lookup(day_key(when))

    def __str__(self) -> str:
        return (
            f"<Daily data with {len(self.data)} steps"
            f"{_span(self.data, 'day', _DAY_LENGTH)}>"
        )


class CurrentSection(BaseModel):
    """Current weather conditions, kept as returned by the API."""

    model_config = ConfigDict(extra="allow")

    def __str__(self) -> str:
        return "<Current data>"


class AlertsSection(BaseModel):
    """Weather alerts for the location.

    Attributes:
        data: All alerts returned by the API.
    """

    model_config = ConfigDict(extra="allow")

    data: list[Alert] = Field(default_factory=list)

    def get_active_alerts(
        self, when: Optional[Union[str, datetime]] = None
    ) -> list[Alert]:
        """Return the alerts active at ``when`` (defaults to now).

        Both ends of the alert period are inclusive.

        Raises:
            MeteosourceDatetimeError: If ``when`` is not a valid datetime.

        Example:
            >>> for alert in forecast.alerts.get_active_alerts():
            ...     print(alert.event, alert.expires)
        """
        moment = now() if when is None else to_instant(when)
        return [alert for alert in self.data if alert.is_active(moment)]

    def __str__(self) -> str:
        return f"<Alerts ({len(self.data)} alerts available)>"


class PointForecast(BaseModel):
    """Response of the point forecast endpoint.

    Sections that were not requested (or that the API returned as null)
    are None.

    Attributes:
        lat: Latitude of the location, as returned by the API.
        lon: Longitude of the location, as returned by the API.
        elevation: Elevation of the location in meters.
        timezone: Timezone of the wire data (always UTC).
        units: Unit system of the values.
        current: Current conditions.
        hourly: Hourly forecast.
        daily: Daily forecast.
        minutely: Minutely precipitation nowcast.
        alerts: Weather alerts.
    """

    model_config = ConfigDict(extra="allow")

    lat: Optional[Union[str, float]] = None
    lon: Optional[Union[str, float]] = None
    elevation: Optional[float] = None
    timezone: Optional[str] = None
    units: Optional[str] = None
    current: Optional[CurrentSection] = None
    hourly: Optional[HourlySection] = None
    daily: Optional[DailySection] = None
    minutely: Optional[MinutelySection] = None
    alerts: Optional[AlertsSection] = None

    def __str__(self) -> str:
        return f"<Forecast for lat: {self.lat}, lon: {self.lon}>"


class TimeMachine(_IndexedSection):
    """Historical hourly data merged over all requested dates.

    Attributes:
        lat: Latitude of the location, as returned by the API.
        lon: Longitude of the location, as returned by the API.
        elevation: Elevation of the location in meters.
        timezone: Timezone of the wire data (always UTC).
        units: Unit system of the values.
        data: Hourly points of all loaded dates, in the order the dates
            were requested.
        failed_dates: Dates whose request failed in non-strict mode.
        failed_errors: Error raised for each failed date. Not included
            in ``model_dump()``.

    Example:
        >>> history = await client.get_time_machine(
        ...     place_id="prague", date_from="2022-03-03", date_to="2022-03-05"
        ... )
        >>> len(history.data)
        72
        >>> history.get_data("2022-03-03T00:00:00Z").date
        datetime.datetime(2022, 3, 3, 0, 0, tzinfo=zoneinfo.ZoneInfo(key='UTC'))
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    lat: Optional[Union[str, float]] = None
    lon: Optional[Union[str, float]] = None
    elevation: Optional[float] = None
    timezone: Optional[str] = None
    units: Optional[str] = None
    data: list[HourlyPoint] = Field(default_factory=list)
    failed_dates: list[str] = Field(default_factory=list)
    failed_errors: dict[str, MeteosourceError] = Field(
        default_factory=dict, exclude=True
    )

    def get_data(self, when: Union[str, datetime]) -> Optional[HourlyPoint]:
        """Return the point for the hour containing ``when``, or None."""
        return self._lookup(hour_key(when))

    def describe_data(self) -> str:
        """Descriptive label of the merged data."""
        return (
            f"<TimeMachine data with {len(self.data)} steps"
            f"{_span(self.data, 'date', _ISO_LENGTH)}>"
        )

    def __str__(self) -> str:
        return f"<TimeMachine for lat: {self.lat}, lon: {self.lon}>"
