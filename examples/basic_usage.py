"""Basic usage examples for the Meteosource client."""

import asyncio
import os

from meteosource import MeteosourceClient, MeteosourceError, Tier

API_KEY = os.environ.get("METEOSOURCE_API_KEY", "")


async def forecast_example() -> None:
    """Get a point forecast in the local timezone."""
    async with MeteosourceClient(API_KEY, Tier.FREE) as client:
        forecast = await client.get_point_forecast(
            place_id="prague",
            sections=["current", "hourly", "daily"],
            tz="Europe/Prague",
        )

        print("=== Forecast ===")
        print(forecast)
        print(forecast.hourly)
        print(forecast.daily)
        print()

        for point in forecast.hourly.data[:5]:
            print(f"{point.date:%Y-%m-%d %H:%M}: {point.temperature}°C")

        tomorrow = forecast.daily.data[1]
        print(f"Tomorrow ({tomorrow.day:%A}): {tomorrow.weather}")


async def time_machine_example() -> None:
    """Get historical data for a range of days."""
    async with MeteosourceClient(API_KEY, Tier.FLEXI) as client:
        history = await client.get_time_machine(
            place_id="prague",
            date_from="2022-03-03",
            date_to="2022-03-05",
            tz="Europe/Prague",
            strict_mode=False,
            progress_func=lambda pct: print(f"Loading... {pct}%"),
        )

        print("=== Time Machine ===")
        print(history)
        print(history.describe_data())
        if history.failed_dates:
            print(f"Failed dates: {', '.join(history.failed_dates)}")

        point = history.get_data("2022-03-04T12:00:00Z")
        if point is not None:
            print(f"{point.date}: {point.temperature}°C")


async def main() -> None:
    try:
        await forecast_example()
        print()
        await time_machine_example()
    except MeteosourceError as e:
        print(e)


if __name__ == "__main__":
    asyncio.run(main())
