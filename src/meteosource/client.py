"""Async client for the Meteosource weather API.

This module provides MeteosourceClient for fetching point forecasts and
historical ("time machine") data from the Meteosource API.

Key features:
    - Point forecast with current, minutely, hourly, daily and alerts sections
    - Historical hourly data for single dates, lists of dates and ranges
    - All dates converted to timezone-aware datetimes in any timezone
    - Lookup helpers on every section (``get_data``, ``get_active_alerts``)

Dates:
    The API is always queried in UTC. The ``tz`` option only controls the
    zone the returned dates are converted to after parsing.

Example:
    Fetch a forecast::

        import asyncio
        from meteosource import MeteosourceClient, Tier

        async def main():
            async with MeteosourceClient("my-api-key", Tier.FREE) as client:
                forecast = await client.get_point_forecast(
                    place_id="prague",
                    sections=["current", "hourly"],
                    tz="Europe/Prague",
                )
                for point in forecast.hourly.data:
                    print(f"{point.date}: {point.temperature}°C")

        asyncio.run(main())
"""

import logging
import math
from typing import Any, Optional, Union

import httpx

from .dates import date_range, resolve_zone, to_date_string
from .enrichment import enrich_point_forecast, enrich_time_machine
from .exceptions import (
    MeteosourceAPIError,
    MeteosourceConfigError,
    MeteosourceConnectionError,
    MeteosourceError,
    MeteosourceOptionError,
)
from .models import PointForecast, TimeMachine
from .options import PointForecastOptions, TimeMachineOptions, parse_options
from .types import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    POINT_ENDPOINT,
    TIERS_AVAILABLE,
    TIME_MACHINE_ENDPOINT,
    WIRE_TIMEZONE,
    Tier,
)

logger = logging.getLogger(__name__)


def _percent(done: int, total: int) -> int:
    """Completed percentage, rounded half up."""
    return math.floor(done / total * 100 + 0.5)


class MeteosourceClient:
    """Async client for the Meteosource weather API.

    The configuration (API key, tier, base URL) is fixed at construction
    and the client can be reused for any number of calls.

    Args:
        api_key: Meteosource API key.
        tier: Subscription tier, one of TIERS_AVAILABLE or a Tier member.
        base_url: API base URL. Defaults to the production endpoint.
        timeout: HTTP request timeout in seconds. Defaults to 30.0.
        transport: Optional httpx transport, e.g. httpx.MockTransport.

    Raises:
        MeteosourceConfigError: If any argument is invalid.

    Example:
        Using as async context manager (recommended)::

            async with MeteosourceClient(api_key, "free") as client:
                forecast = await client.get_point_forecast(lat=50.1, lon=14.4)

        Manual resource management::

            client = MeteosourceClient(api_key, "free")
            try:
                forecast = await client.get_point_forecast(place_id="london")
            finally:
                await client.close()
    """

    def __init__(
        self,
        api_key: str,
        tier: Union[str, Tier],
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._initialized = False
        self._client: Optional[httpx.AsyncClient] = None

        if not isinstance(api_key, str):
            raise MeteosourceConfigError(
                f"wrong type of the api_key parameter; is {type(api_key).__name__}"
            )
        if not isinstance(tier, str):
            raise MeteosourceConfigError(
                f"wrong type of the tier parameter; is {type(tier).__name__}"
            )
        if not isinstance(base_url, str):
            raise MeteosourceConfigError(
                f"wrong type of the base_url parameter; is {type(base_url).__name__}"
            )
        if api_key == "":
            raise MeteosourceConfigError("the api_key parameter is empty")
        tier = tier.value if isinstance(tier, Tier) else tier
        if tier not in TIERS_AVAILABLE:
            raise MeteosourceConfigError(
                f"tier {tier} does not exist or is not supported"
            )

        self._api_key = api_key
        self._tier = tier
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport
        self._initialized = True

    @property
    def api_key(self) -> str:
        """API key sent as the ``key`` query parameter of every request."""
        return self._api_key

    @property
    def tier(self) -> str:
        """Subscription tier, used as the first path segment of requests."""
        return self._tier

    @property
    def base_url(self) -> str:
        """API base URL the tier and endpoint are appended to."""
        return self._base_url

    async def __aenter__(self) -> "MeteosourceClient":
        """Open the HTTP client for use in ``async with``.

        Raises:
            MeteosourceError: If the client is not initialized.
        """
        self._check_initialized()
        await self._ensure_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Close the HTTP client when leaving ``async with``."""
        await self.close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Lazily create the underlying httpx.AsyncClient."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client. Safe to call multiple times."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _check_initialized(self) -> None:
        """Refuse to operate on a client whose constructor failed.

        Raises:
            MeteosourceError: If ``__init__`` did not complete.

        Example:
            >>> client = MeteosourceClient.__new__(MeteosourceClient)
            >>> client._check_initialized()
            Traceback (most recent call last):
            ...
            MeteosourceError: MeteosourceError: client is not initialized, ...
        """
        if not getattr(self, "_initialized", False):
            raise MeteosourceError(
                "client is not initialized, there was an error in the constructor"
            )

    def _compose_params(self, params: dict[str, Any]) -> dict[str, str]:
        """Build the query parameters of a request.

        The API key always comes first. None values are dropped, lists
        are joined with commas and everything is stringified.

        Example:
            >>> client._compose_params({"lat": 50.1, "sections": ["hourly", "daily"],
            ...                         "place_id": None})
            {'key': '...', 'lat': '50.1', 'sections': 'hourly,daily'}
        """
        query = {"key": self._api_key}
        for name, value in params.items():
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                value = ",".join(str(item) for item in value)
            query[name] = str(value)
        return query

    async def _fetch(self, endpoint: str, params: dict[str, Any]) -> Any:
        """Request an endpoint and return the decoded JSON body.

        Args:
            endpoint: Endpoint path relative to the tier, e.g. ``/point``.
            params: Query parameters (without the API key).

        Returns:
            The decoded JSON body of a 2xx response. A 2xx response whose
            body is not JSON is not returned; it raises MeteosourceAPIError
            with the HTTP status as code and the raw text as detail.

        Raises:
            MeteosourceConnectionError: If the HTTP request fails.
            MeteosourceAPIError: If the API answers with a non-2xx status
                or with a body that is not JSON.
        """
        client = await self._ensure_client()
        url = self._base_url + self._tier + endpoint

        logger.debug(f"Requesting {endpoint} with {params}")

        try:
            response = await client.get(url, params=self._compose_params(params))
        except httpx.RequestError as e:
            logger.warning(f"Request to {endpoint} failed: {e}")
            raise MeteosourceConnectionError(str(e) or type(e).__name__) from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_success and body is not None:
            return body

        if isinstance(body, dict) and body.get("detail") is not None:
            detail = body["detail"]
        elif response.text:
            detail = response.text
        else:
            detail = "Unknown error"

        logger.warning(
            f"Request to {endpoint} rejected with HTTP {response.status_code}: {detail}"
        )
        raise MeteosourceAPIError(detail, code=response.status_code)

    async def get_point_forecast(self, **options: Any) -> PointForecast:
        """Get the forecast for a location.

        Args:
            **options: See PointForecastOptions. Accepted keys are
                ``lat``, ``lon``, ``place_id``, ``sections``, ``tz``,
                ``lang`` and ``units``.

        Returns:
            PointForecast with dates converted to ``tz`` (UTC by default).

        Raises:
            MeteosourceError: If the client is not initialized.
            MeteosourceOptionError: If an option is unknown or invalid.
            MeteosourceConnectionError: If the HTTP request fails.
            MeteosourceAPIError: If the API rejects the request.

        Example:
            >>> async with MeteosourceClient(api_key, "flexi") as client:
            ...     forecast = await client.get_point_forecast(
            ...         place_id="prague", sections="all", tz="Europe/Prague"
            ...     )
            ...     print(forecast.daily)
            <Daily data with 30 steps from 2022-03-03 to 2022-04-01>
        """
        self._check_initialized()
        opts = parse_options(PointForecastOptions, options)
        zone = resolve_zone(opts.tz)

        params = {
            "lat": opts.lat,
            "lon": opts.lon,
            "place_id": opts.place_id,
            "sections": opts.sections,
            "timezone": WIRE_TIMEZONE,
            "language": opts.lang,
            "units": opts.units,
        }
        body = await self._fetch(POINT_ENDPOINT, params)
        return enrich_point_forecast(body, zone)

    def _resolve_dates(self, opts: TimeMachineOptions) -> list[str]:
        """Turn the date options into the ordered list of days to load.

        Raises:
            MeteosourceOptionError: If neither or both modes are given, the
                range is reversed or nothing is left to load.
            MeteosourceDatetimeError: If a date cannot be parsed.
        """
        if isinstance(opts.date, (list, tuple)):
            single = [to_date_string(d) for d in opts.date]
        elif opts.date is not None:
            single = [to_date_string(opts.date)]
        else:
            single = None
        date_from = None if opts.date_from is None else to_date_string(opts.date_from)
        date_to = None if opts.date_to is None else to_date_string(opts.date_to)

        if date_from and date_to and single is None:
            dates = date_range(date_from, date_to)
        elif not date_from and not date_to and single is not None:
            dates = single
        else:
            raise MeteosourceOptionError(
                "either date, or date_from+date_to parameters must be specified"
            )

        if not dates:
            raise MeteosourceOptionError("no dates range to load")
        return dates

    async def get_time_machine(self, **options: Any) -> TimeMachine:
        """Get historical hourly data for one or more days.

        Exactly one of ``date`` (a date or a list of dates) or the
        ``date_from``/``date_to`` pair must be given. One request is made
        per day, strictly one after another, and the hourly data of all
        successful days is merged in request order.

        Args:
            **options: See TimeMachineOptions. Accepted keys are ``date``,
                ``date_from``, ``date_to``, ``lat``, ``lon``, ``place_id``,
                ``tz``, ``units``, ``progress_func`` and ``strict_mode``.

        Returns:
            TimeMachine with dates converted to ``tz`` (UTC by default).

        Raises:
            MeteosourceError: If the client is not initialized.
            MeteosourceOptionError: If options are unknown or inconsistent.
            MeteosourceDatetimeError: If a date option is not a valid date.
            MeteosourceConnectionError: If a request fails (strict mode, or
                when every date failed).
            MeteosourceAPIError: If a request is rejected (strict mode, or
                when every date failed).

        Example:
            >>> history = await client.get_time_machine(
            ...     place_id="prague",
            ...     date_from="2022-03-03",
            ...     date_to="2022-03-05",
            ...     strict_mode=False,
            ...     progress_func=lambda pct: print(f"{pct}%"),
            ... )
            0%
            33%
            67%
            100%
            >>> len(history.data), history.failed_dates
            (72, [])
        """
        self._check_initialized()
        opts = parse_options(TimeMachineOptions, options)
        zone = resolve_zone(opts.tz)
        dates = self._resolve_dates(opts)

        merged: Optional[dict[str, Any]] = None
        failed_dates: list[str] = []
        failed_errors: dict[str, MeteosourceError] = {}
        last_error: Optional[MeteosourceError] = None

        for index, day in enumerate(dates):
            if opts.progress_func is not None:
                opts.progress_func(_percent(index, len(dates)))

            params = {
                "date": day,
                "lat": opts.lat,
                "lon": opts.lon,
                "place_id": opts.place_id,
                "timezone": WIRE_TIMEZONE,
                "units": opts.units,
            }
            try:
                body = await self._fetch(TIME_MACHINE_ENDPOINT, params)
            except MeteosourceError as e:
                if opts.strict_mode:
                    raise
                logger.warning(f"Skipping {day}: {e}")
                failed_dates.append(day)
                failed_errors[day] = e
                last_error = e
                continue

            if merged is None:
                merged = body
            else:
                merged_data = merged.get("data") or []
                merged_data.extend(body.get("data") or [])
                merged["data"] = merged_data

        if opts.progress_func is not None:
            opts.progress_func(100)

        if merged is None:
            raise last_error

        logger.info(
            f"Loaded time machine data for {len(dates) - len(failed_dates)} "
            f"of {len(dates)} dates"
        )
        return enrich_time_machine(merged, zone, failed_dates, failed_errors)
