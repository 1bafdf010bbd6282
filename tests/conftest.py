"""
Shared test fixtures
Kiosk factories and fake upstream responses
"""

import json
from datetime import datetime, timedelta, timezone

import pytest
import requests

from app.models.kiosk import Kiosk

REFERENCE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def iso(moment: datetime) -> str:
    return moment.isoformat().replace("+00:00", "Z")


def ago(**delta) -> str:
    """ISO timestamp `delta` before the reference time"""
    return iso(REFERENCE_TIME - timedelta(**delta))


def make_kiosk(kiosk_id, lat=0.0, lon=0.0, timestamp="now", chargers=3, slots=5, **extra) -> Kiosk:
    if timestamp == "now":
        timestamp = iso(REFERENCE_TIME)
    record = {
        "id": kiosk_id,
        "lat": lat,
        "lon": lon,
        "locationName": f"Kiosk {kiosk_id}",
        "address": "1 Main St",
        "zip": "10001",
        "availableChargers": chargers,
        "availableSlots": slots,
        "timestamp": timestamp,
    }
    record.update(extra)
    return Kiosk.model_validate(record)


def make_response(status_code: int = 200, payload=None, body: bytes = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    if body is not None:
        response._content = body
    else:
        response._content = json.dumps(payload).encode("utf-8")
    response.headers["Content-Type"] = "application/json"
    return response


class StubSource:
    """Kiosk source returning a fixed list, or raising"""

    def __init__(self, kiosks=None, error=None):
        self.kiosks = kiosks or []
        self.error = error
        self.calls = 0

    def fetch(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.kiosks)

    async def fetch_async(self):
        return self.fetch()


@pytest.fixture
def reference_time():
    return REFERENCE_TIME
