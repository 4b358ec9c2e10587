import httpx
import pytest

from meteosource import MeteosourceClient

API_KEY = "test-key-123"


def hourly_points(day, hours=24):
    return [
        {"date": f"{day}T{hour:02d}:00:00", "temperature": float(hour), "icon": 2}
        for hour in range(hours)
    ]


def time_machine_body(day, hours=24):
    return {
        "lat": "50.0880N",
        "lon": "14.4208E",
        "elevation": 197,
        "timezone": "UTC",
        "units": "metric",
        "data": hourly_points(day, hours),
    }


def point_body():
    return {
        "lat": "50.0880N",
        "lon": "14.4208E",
        "elevation": 197,
        "timezone": "UTC",
        "units": "metric",
        "current": {"icon": "sunny", "temperature": 5.2, "wind": {"speed": 3.1}},
        "minutely": {
            "summary": "No precipitation",
            "data": [
                {"date": "2022-03-03T10:00:00", "precipitation": 0.0},
                {"date": "2022-03-03T10:01:00", "precipitation": 0.1},
                {"date": "2022-03-03T10:02:00", "precipitation": 0.2},
            ],
        },
        "hourly": {"data": hourly_points("2022-03-03", hours=3)},
        "daily": {
            "data": [
                {"day": "2022-03-03", "weather": "sunny"},
                {"day": "2022-03-04", "weather": "cloudy"},
            ]
        },
        "alerts": {
            "data": [
                {
                    "event": "Strong wind",
                    "onset": "2022-03-03T10:00:00",
                    "expires": "2022-03-03T12:00:00",
                },
                {
                    "event": "Frost",
                    "onset": "2022-03-04T00:00:00",
                    "expires": "2022-03-04T06:00:00",
                },
            ]
        },
    }


class RecordingHandler:
    """httpx.MockTransport handler answering from a callable and recording requests."""

    def __init__(self, respond):
        self.respond = respond
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        return self.respond(request)

    @property
    def dates(self):
        return [request.url.params.get("date") for request in self.requests]


def json_response(body, status_code=200):
    return httpx.Response(status_code, json=body)


@pytest.fixture
def make_client():
    def factory(respond, tier="free"):
        handler = RecordingHandler(respond)
        client = MeteosourceClient(
            API_KEY, tier, transport=httpx.MockTransport(handler)
        )
        return client, handler

    return factory
