"""Meteosource API async client for weather forecasts and historical data.

This package provides an async client for the Meteosource weather API.
Responses are parsed into pydantic models whose dates are timezone-aware
datetimes, with lookup helpers attached to every section.

Key features:
    - Point forecast: current, minutely, hourly, daily and alerts sections
    - Historical hourly data ("time machine") for dates, lists and ranges
    - Dates converted to any timezone (UTC by default)
    - ``get_data`` lookups by hour, minute or day
    - ``get_active_alerts`` filtering by time
    - Optional DataFrame conversion via meteosource.dataframe module

Example:
    Fetch a forecast::

        import asyncio
        from meteosource import MeteosourceClient, Tier

        async def main():
            async with MeteosourceClient("my-api-key", Tier.FREE) as client:
                forecast = await client.get_point_forecast(
                    place_id="prague",
                    sections=["current", "hourly", "daily"],
                    tz="Europe/Prague",
                )
                print(forecast.hourly)
                print(forecast.daily.get_data("2022-03-04").day)

        asyncio.run(main())

    Fetch historical data, tolerating failed days::

        async with MeteosourceClient(api_key, "flexi") as client:
            history = await client.get_time_machine(
                place_id="prague",
                date_from="2022-03-03",
                date_to="2022-03-05",
                strict_mode=False,
            )
            print(len(history.data), history.failed_dates)

See Also:
    - Meteosource API docs: https://www.meteosource.com/documentation
"""

from .client import MeteosourceClient
from .exceptions import (
    MeteosourceAPIError,
    MeteosourceConfigError,
    MeteosourceConnectionError,
    MeteosourceDatetimeError,
    MeteosourceError,
    MeteosourceOptionError,
)
from .models import (
    Alert,
    AlertsSection,
    CurrentSection,
    DailyPoint,
    DailySection,
    HourlyPoint,
    HourlySection,
    MinutelyPoint,
    MinutelySection,
    PointForecast,
    TimeMachine,
)
from .types import DEFAULT_BASE_URL, TIERS_AVAILABLE, Tier

__version__ = "1.0.1"

__all__ = [
    "MeteosourceClient",
    "Tier",
    "PointForecast",
    "TimeMachine",
    "HourlySection",
    "HourlyPoint",
    "MinutelySection",
    "MinutelyPoint",
    "DailySection",
    "DailyPoint",
    "CurrentSection",
    "AlertsSection",
    "Alert",
    "MeteosourceError",
    "MeteosourceAPIError",
    "MeteosourceConfigError",
    "MeteosourceConnectionError",
    "MeteosourceDatetimeError",
    "MeteosourceOptionError",
    "DEFAULT_BASE_URL",
    "TIERS_AVAILABLE",
    "__version__",
]
