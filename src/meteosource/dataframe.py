"""DataFrame conversion utilities for Meteosource responses.

This module provides functions to convert enriched sections to pandas
DataFrames for easier data analysis and manipulation.

Requirements:
    pandas >= 2.0 must be installed. Install with:
        pip install pandas
    Or install meteosource with pandas extra:
        pip install meteosource[pandas]

Functions:
    to_dataframe: Convert a section or a time machine result to a DataFrame

Example:
    Basic usage::

        import asyncio
        from meteosource import MeteosourceClient
        from meteosource.dataframe import to_dataframe

        async def main():
            async with MeteosourceClient(api_key, "free") as client:
                forecast = await client.get_point_forecast(
                    place_id="prague", sections=["hourly", "daily"]
                )
                print(to_dataframe(forecast.hourly).head())

                history = await client.get_time_machine(
                    place_id="prague",
                    date_from="2022-03-03",
                    date_to="2022-03-05",
                    tz="Europe/Prague",
                )
                print(to_dataframe(history).head())

        asyncio.run(main())
"""

from typing import Union

from .models import (
    AlertsSection,
    DailySection,
    HourlySection,
    MinutelySection,
    TimeMachine,
)


def _check_pandas() -> None:
    """Check if pandas is installed and raise informative error if not."""
    try:
        import pandas  # noqa: F401
    except ImportError as e:
        raise ImportError(
            "pandas is required for DataFrame conversion. "
            "Install it with: pip install pandas"
        ) from e


def to_dataframe(
    section: Union[
        HourlySection, MinutelySection, DailySection, AlertsSection, TimeMachine
    ],
) -> "pd.DataFrame":
    """Convert an enriched section to a pandas DataFrame.

    One row is produced per data point (or per alert). Nested values such
    as the ``wind`` object of hourly points are kept as dicts. Temporal
    columns keep the timezone the section was converted to.

    Args:
        section: HourlySection, MinutelySection, DailySection or
            AlertsSection of a PointForecast, or a TimeMachine result.

    Returns:
        pandas DataFrame with one column per field.

    Raises:
        ImportError: If pandas is not installed.
        ValueError: If the section type is not recognized.

    Example:
        >>> df = to_dataframe(forecast.hourly)
        >>> df["date"].dt.tz
        zoneinfo.ZoneInfo(key='Europe/Prague')
    """
    _check_pandas()
    import pandas as pd

    if isinstance(
        section, (HourlySection, MinutelySection, DailySection, TimeMachine)
    ):
        return pd.DataFrame([point.model_dump() for point in section.data])

    if isinstance(section, AlertsSection):
        return pd.DataFrame([alert.model_dump() for alert in section.data])

    raise ValueError(
        f"Unsupported section type: {type(section).__name__}. "
        "Expected HourlySection, MinutelySection, DailySection, "
        "AlertsSection or TimeMachine."
    )


__all__ = ["to_dataframe"]
