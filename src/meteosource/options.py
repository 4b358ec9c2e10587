"""Option models and validation for the client operations.

Every public operation takes its options as keyword arguments. They are
checked against the operation's allow-list and parsed into a pydantic
model before any network activity.

Example:
    >>> parse_options(PointForecastOptions, {"place_id": "prague"})
    PointForecastOptions(lat=None, lon=None, place_id='prague', ...)
    >>> parse_options(PointForecastOptions, {"place": "prague"})
    Traceback (most recent call last):
    ...
    MeteosourceOptionError: MeteosourceError: cannot use option 'place' (code -1)
"""

from typing import Any, Callable, Iterable, Mapping, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from .exceptions import MeteosourceOptionError

OptionsT = TypeVar("OptionsT", bound=BaseModel)


class PointForecastOptions(BaseModel):
    """Options of ``MeteosourceClient.get_point_forecast``.

    Attributes:
        lat: Latitude, forwarded as-is.
        lon: Longitude, forwarded as-is.
        place_id: Meteosource place identifier, used instead of lat/lon.
        sections: Sections to request, as a list or a comma separated string.
        tz: Timezone of the converted dates. Defaults to UTC.
        lang: Language of text summaries.
        units: Unit system (``auto``, ``metric``, ``us``, ``uk``, ``ca``).
    """

    model_config = ConfigDict(extra="forbid")

    lat: Optional[Union[float, str]] = None
    lon: Optional[Union[float, str]] = None
    place_id: Optional[str] = None
    sections: Optional[Union[str, list[str]]] = None
    tz: Optional[str] = None
    lang: Optional[str] = None
    units: Optional[str] = None


class TimeMachineOptions(BaseModel):
    """Options of ``MeteosourceClient.get_time_machine``.

    Attributes:
        date: A date or a list of dates to load. Exclusive with the range.
        date_from: First day of the range to load (inclusive).
        date_to: Last day of the range to load (inclusive).
        lat: Latitude, forwarded as-is.
        lon: Longitude, forwarded as-is.
        place_id: Meteosource place identifier, used instead of lat/lon.
        tz: Timezone of the converted dates. Defaults to UTC.
        units: Unit system.
        progress_func: Called with the completed percentage before every
            request and with 100 at the end.
        strict_mode: Abort on the first failed date. When False or None,
            failed dates are skipped and reported in ``failed_dates``.
    """

    model_config = ConfigDict(extra="forbid")

    date: Any = None
    date_from: Any = None
    date_to: Any = None
    lat: Optional[Union[float, str]] = None
    lon: Optional[Union[float, str]] = None
    place_id: Optional[str] = None
    tz: Optional[str] = None
    units: Optional[str] = None
    progress_func: Optional[Callable[[int], Any]] = None
    strict_mode: Optional[bool] = True


def check_options(options: Mapping[str, Any], allowed: Iterable[str]) -> None:
    """Reject any option name not in ``allowed``.

    Raises:
        MeteosourceOptionError: For the first unsupported option.
    """
    allowed = set(allowed)
    for name in options:
        if name not in allowed:
            raise MeteosourceOptionError(f"cannot use option '{name}'")


def parse_options(model: type[OptionsT], options: Mapping[str, Any]) -> OptionsT:
    """Validate ``options`` against an options model.

    Args:
        model: Options model of the operation.
        options: Keyword arguments passed by the caller.

    Returns:
        The parsed options model.

    Raises:
        MeteosourceOptionError: If an option is unknown or has a wrong type.
    """
    check_options(options, model.model_fields)
    try:
        return model(**options)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise MeteosourceOptionError(f"invalid options: {problems}") from e
