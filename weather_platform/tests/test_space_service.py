import datetime as dt

import pytest

from nasa_engine.ingestion.errors import SchemaError, TransportError
from weather_platform.services.space_service import SpaceService

from conftest import TODAY, FakeDonkiClient

# window 2024-01-01 .. 2024-01-07, first slot is 2024-01-01
FIRST_JAN_WINDOW_END = dt.date(2024, 1, 7)


def test_gst_daily_maximum_not_first_or_average():
    gst = [
        {
            "allKpIndex": [
                {"observedTime": "2024-01-01T10:00Z", "kpIndex": 3},
                {"observedTime": "2024-01-01T22:00Z", "kpIndex": 5},
            ]
        }
    ]
    daily = SpaceService._daily_max_kp(gst)
    assert daily[dt.date(2024, 1, 1)] == 5


def test_gst_maximum_spans_storms(rng):
    gst = [
        {"allKpIndex": [{"observedTime": "2024-01-01T10:00Z", "kpIndex": 3},
                        {"observedTime": "2024-01-01T22:00Z", "kpIndex": 5}]},
        {"allKpIndex": [{"observedTime": "2024-01-01T23:00:00Z", "kpIndex": 4.67},
                        {"observedTime": "2024-01-07T03:00Z", "kpIndex": 6.33}]},
    ]
    client = FakeDonkiClient({"CME": [], "GST": gst})
    obs = SpaceService(client=client).fetch(FIRST_JAN_WINDOW_END, rng)

    assert obs.historical_kp_index[0].value == 5.0
    assert [p.value for p in obs.historical_kp_index[1:6]] == [0.0] * 5
    # current Kp is the most recent day of the window
    assert obs.kp_index == pytest.approx(6.33)
    assert 400 + 6.33 * 50 - 25 <= obs.solar_wind_speed <= 400 + 6.33 * 50 + 26


def test_cme_counts_per_day(rng):
    cme = [
        {"activityID": "a", "startTime": "2024-01-01T02:12Z"},
        {"activityID": "b", "startTime": "2024-01-01T19:48Z"},
        {"activityID": "c", "startTime": "2024-01-05T06:00Z"},
    ]
    client = FakeDonkiClient({"CME": cme, "GST": []})
    obs = SpaceService(client=client).fetch(FIRST_JAN_WINDOW_END, rng)

    assert [p.value for p in obs.historical_cme_count] == [2.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0]
    # current count reads the first slot of the window
    assert obs.cme_count == 2


def test_cme_current_count_uses_oldest_slot(rng):
    cme = [{"startTime": "2024-01-07T12:00Z"}]
    client = FakeDonkiClient({"CME": cme, "GST": []})
    obs = SpaceService(client=client).fetch(FIRST_JAN_WINDOW_END, rng)

    assert obs.historical_cme_count[-1].value == 1.0
    assert obs.cme_count == 0


def test_quiet_week_yields_zeros_not_gaps(rng):
    client = FakeDonkiClient({"CME": [], "GST": []})
    obs = SpaceService(client=client).fetch(TODAY, rng)

    assert [p.time for p in obs.historical_kp_index] == ["Tue", "Wed", "Thu", "Fri", "Sat", "Sun", "Mon"]
    assert all(p.value == 0.0 for p in obs.historical_kp_index)
    assert all(p.value == 0.0 for p in obs.historical_cme_count)
    assert obs.kp_index == 0.0
    assert obs.cme_count == 0
    assert 375 <= obs.solar_wind_speed <= 425
    for p in obs.historical_solar_wind:
        assert 375.0 <= p.value <= 425.0
    assert len(obs.forecast) == 7
    assert all(0 <= f.kp_index <= 1 for f in obs.forecast)


def test_historical_solar_wind_follows_daily_kp(rng):
    gst = [{"allKpIndex": [{"observedTime": f"2024-01-0{d}T12:00Z", "kpIndex": d - 1} for d in range(2, 9)]}]
    obs = SpaceService(client=FakeDonkiClient({"CME": [], "GST": gst})).fetch(TODAY, rng)

    for kp, wind in zip(obs.historical_kp_index, obs.historical_solar_wind):
        assert wind.time == kp.time
        assert 400 + kp.value * 50 - 25 <= wind.value <= 400 + kp.value * 50 + 25


def test_queries_cover_trailing_window(rng):
    client = FakeDonkiClient({"CME": [], "GST": []})
    SpaceService(client=client).fetch(TODAY, rng)

    assert sorted(c["kind"] for c in client.calls) == ["CME", "GST"]
    for c in client.calls:
        assert c["start"] == dt.date(2024, 1, 1)
        assert c["end"] == TODAY


@pytest.mark.parametrize(
    "responses",
    [
        {"CME": {"error": "bad"}, "GST": []},
        {"CME": [], "GST": "not a list"},
        {"CME": ["2024-01-01"], "GST": []},
        {"CME": [], "GST": [{"allKpIndex": {"kpIndex": 3}}]},
    ],
)
def test_malformed_listing_raises_schema_error(responses, rng):
    with pytest.raises(SchemaError):
        SpaceService(client=FakeDonkiClient(responses)).fetch(TODAY, rng)


def test_either_query_failing_fails_the_adapter(rng):
    client = FakeDonkiClient({"CME": [], "GST": TransportError("connection reset")})
    with pytest.raises(TransportError):
        SpaceService(client=client).fetch(TODAY, rng)
    # both queries were still issued
    assert len(client.calls) == 2
