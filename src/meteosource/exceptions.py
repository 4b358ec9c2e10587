"""Exceptions for the Meteosource API client.

Every error raised by this package is a MeteosourceError carrying a numeric
``code`` and a human-readable ``detail``. The code is -1 for local problems
(bad arguments, bad datetimes, connection failures) and the HTTP status
code when the API rejected the request.

Example:
    Catching all Meteosource errors::

        from meteosource import MeteosourceClient, MeteosourceError

        try:
            async with MeteosourceClient(api_key, "free") as client:
                forecast = await client.get_point_forecast(place_id="prague")
        except MeteosourceError as e:
            print(f"Meteosource error {e.code}: {e.detail}")

    Catching specific errors::

        from meteosource import MeteosourceAPIError, MeteosourceOptionError

        try:
            data = await client.get_time_machine(date_from=end, date_to=start)
        except MeteosourceOptionError as e:
            print(f"Invalid input: {e.detail}")
        except MeteosourceAPIError as e:
            print(f"Rejected with HTTP {e.code}: {e.detail}")
"""

from typing import Any


class MeteosourceError(Exception):
    """Base exception for all Meteosource errors.

    Args:
        detail: Human-readable description of the problem.
        code: HTTP status code of a rejected request, -1 otherwise.

    Attributes:
        detail: Human-readable description of the problem.
        code: HTTP status code of a rejected request, -1 otherwise.

    Example:
        >>> str(MeteosourceError("something broke"))
        'MeteosourceError: something broke (code -1)'
    """

    def __init__(self, detail: Any, code: int = -1) -> None:
        self.detail = detail if isinstance(detail, str) else str(detail)
        self.code = code
        super().__init__(self.detail)

    def __str__(self) -> str:
        return f"MeteosourceError: {self.detail} (code {self.code})"


class MeteosourceConfigError(MeteosourceError):
    """Raised when the client is constructed with invalid arguments.

    This occurs when the API key is empty or not a string, the tier is
    unknown, or the base URL is not a string. Raised before any I/O.
    """

    pass


class MeteosourceOptionError(MeteosourceError):
    """Raised when the options passed to an operation are invalid.

    This covers unknown option names, options of the wrong type, an
    unknown timezone and mutually exclusive/required option violations
    (e.g. both ``date`` and ``date_from`` given). Raised before any I/O.
    """

    pass


class MeteosourceDatetimeError(MeteosourceError):
    """Raised when a date/time value cannot be interpreted.

    Example:
        >>> forecast.hourly.get_data("2022-02-30T10:00:00")
        Traceback (most recent call last):
        ...
        MeteosourceDatetimeError: MeteosourceError: passed datetime string is not valid ...
    """

    pass


class MeteosourceConnectionError(MeteosourceError):
    """Raised when the HTTP request could not be completed.

    Wraps httpx transport errors (DNS failures, refused connections,
    timeouts). The code is always -1.
    """

    pass


class MeteosourceAPIError(MeteosourceError):
    """Raised when the Meteosource API answers with a non-2xx status.

    The code is the HTTP status and the detail is taken from the
    ``detail`` field of the JSON error body when present.

    Example:
        >>> raise MeteosourceAPIError("Invalid API key", code=403)
        MeteosourceAPIError: MeteosourceError: Invalid API key (code 403)
    """

    pass
