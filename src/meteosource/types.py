"""Types and constants for the Meteosource API client.

Example:
    Using the Tier enum::

        from meteosource import MeteosourceClient, Tier

        client = MeteosourceClient(api_key, Tier.FREE)
"""

from enum import Enum


class Tier(str, Enum):
    """Meteosource subscription plans.

    The tier selects the path prefix of every endpoint
    (``{base_url}{tier}/point``), so it has to match the plan the API key
    belongs to.

    Example:
        >>> Tier.FLEXI.value
        'flexi'
    """

    FREE = "free"
    STARTUP = "startup"
    STANDARD = "standard"
    FLEXI = "flexi"
    PREMIUM = "premium"


TIERS_AVAILABLE = tuple(tier.value for tier in Tier)
"""tuple[str, ...]: Names of all tiers accepted by MeteosourceClient."""

DEFAULT_BASE_URL = "https://www.meteosource.com/api/v1/"
"""str: Production endpoint of the Meteosource API.

The tier and the endpoint path are appended verbatim, so an override
must end with a slash.
"""

POINT_ENDPOINT = "/point"
"""str: Path of the point forecast endpoint, relative to the tier."""

TIME_MACHINE_ENDPOINT = "/time_machine"
"""str: Path of the historical data endpoint, relative to the tier."""

WIRE_TIMEZONE = "utc"
"""str: Timezone requested from the API for every call.

Wire dates are always fetched in UTC; the ``tz`` option only affects
local conversion of the parsed response.
"""

DEFAULT_TIMEZONE = "UTC"
"""str: Target zone for converted dates when no ``tz`` option is given."""

DEFAULT_TIMEOUT = 30.0
"""float: Default HTTP request timeout in seconds."""
