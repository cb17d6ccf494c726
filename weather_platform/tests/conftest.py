# Ensure repo root is on sys.path for absolute imports like `weather_platform.services.*`
import datetime as dt
import os
import sys

import numpy as np
import pytest

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

# Monday; the POWER window runs 2024-01-01 .. 2024-01-08
TODAY = dt.date(2024, 1, 8)


def power_payload(t2m, ws10m, rh2m, start=dt.date(2024, 1, 1), coordinates=(49.6005, 25.3387, 12.5)):
    """Build a POWER daily body with one value per day starting at ``start``."""

    def keyed(values):
        return {
            (start + dt.timedelta(days=i)).strftime("%Y%m%d"): v for i, v in enumerate(values)
        }

    body = {
        "properties": {
            "parameter": {"T2M": keyed(t2m), "WS10M": keyed(ws10m), "RH2M": keyed(rh2m)}
        },
    }
    if coordinates is not None:
        body["geometry"] = {"type": "Point", "coordinates": list(coordinates)}
    return body


class FakePowerClient:
    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.calls = []

    def fetch_daily(self, lat, lon, start, end, parameters=("T2M", "WS10M", "RH2M")):
        self.calls.append({"lat": lat, "lon": lon, "start": start, "end": end, "parameters": parameters})
        if self.error is not None:
            raise self.error
        return self.payload


class FakeDonkiClient:
    def __init__(self, responses=None):
        # kind -> payload, or an exception instance to raise
        self.responses = responses or {}
        self.calls = []

    def fetch_events(self, kind, start, end):
        self.calls.append({"kind": kind, "start": start, "end": end})
        out = self.responses.get(kind, [])
        if isinstance(out, Exception):
            raise out
        return out


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def mild_payload():
    return power_payload(
        t2m=[14.0, 15.2, 16.1, 15.8, 17.3, 18.0, 18.4, 19.6],
        ws10m=[3.1, 2.8, 4.0, 4.4, 3.9, 2.2, 3.3, 3.6],
        rh2m=[61.0, 60.5, 58.2, 57.9, 63.1, 64.0, 62.4, 59.8],
    )
