import math

import pytest
from pydantic import ValidationError

from weather_platform.schemas.weather import ChartDataPoint, SpaceForecast, SpaceObservation


def _points(labels, value=1.0):
    return [ChartDataPoint(time=t, value=value) for t in labels]


WEEK = ["Tue", "Wed", "Thu", "Fri", "Sat", "Sun", "Mon"]


def test_chart_point_allows_gap():
    p = ChartDataPoint(time="Mon", value=None)
    assert p.value is None


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_chart_point_rejects_non_finite(bad):
    with pytest.raises(ValidationError):
        ChartDataPoint(time="Mon", value=bad)


def test_space_forecast_kp_scale():
    with pytest.raises(ValidationError):
        SpaceForecast(day="Mon", solar_wind_speed=400, kp_index=-1)
    with pytest.raises(ValidationError):
        SpaceForecast(day="Mon", solar_wind_speed=900, kp_index=10)


def _space(**overrides):
    fields = dict(
        solar_wind_speed=450,
        kp_index=3.0,
        cme_count=0,
        forecast=[SpaceForecast(day=d, solar_wind_speed=450, kp_index=3) for d in WEEK],
        historical_solar_wind=_points(WEEK, 450.0),
        historical_kp_index=_points(WEEK, 3.0),
        historical_cme_count=_points(WEEK, 0.0),
    )
    fields.update(overrides)
    return SpaceObservation(**fields)


def test_space_observation_accepts_aligned_week():
    assert _space().kp_index == 3.0


def test_history_length_enforced():
    with pytest.raises(ValidationError):
        _space(historical_cme_count=_points(WEEK[:6]))


def test_history_labels_must_align():
    with pytest.raises(ValidationError):
        _space(historical_kp_index=_points(["Mon"] + WEEK[:6]))


def test_forecast_length_enforced():
    with pytest.raises(ValidationError):
        _space(forecast=[])
