"""Synthetic fallback data.

Same shape, labels and lengths as the live observations, built from fixed
baselines plus bounded noise. Performs no I/O.
"""

from __future__ import annotations

import datetime as dt
import math

import numpy as np

from ..schemas.weather import (
    ChartDataPoint,
    CombinedWeather,
    ConditionCategory,
    EarthForecast,
    EarthObservation,
    SpaceForecast,
    SpaceObservation,
)
from .forecast import day_label, next_days, round_half_up, trailing_days

MOCK_LOCATION = "Mock Station"


def _history(today: dt.date, rng: np.random.Generator, base: float, span: float, whole: bool = False):
    points = []
    for d in trailing_days(today):
        v = base + float(rng.uniform(0.0, span))
        points.append(ChartDataPoint(time=day_label(d), value=float(math.floor(v)) if whole else v))
    return points


def generate_mock_earth(today: dt.date, rng: np.random.Generator) -> EarthObservation:
    forecast = [
        EarthForecast(
            day=day_label(d),
            temperature=round_half_up(18 + float(rng.uniform(0.0, 5.0))),
            condition=ConditionCategory.MILD.label,
            category=ConditionCategory.MILD,
        )
        for d in next_days(today)
    ]
    return EarthObservation(
        location=MOCK_LOCATION,
        temperature=23,
        wind_speed=15,
        humidity=60,
        condition=ConditionCategory.WARM.label,
        category=ConditionCategory.WARM,
        forecast=forecast,
        historical_temp=_history(today, rng, 20.0, 5.0),
        historical_wind=_history(today, rng, 12.0, 5.0),
        historical_humidity=_history(today, rng, 55.0, 10.0),
    )


def generate_mock_space(today: dt.date, rng: np.random.Generator) -> SpaceObservation:
    forecast = [
        SpaceForecast(
            day=day_label(d),
            solar_wind_speed=round_half_up(400 + float(rng.uniform(0.0, 100.0))),
            kp_index=int(math.floor(rng.uniform(0.0, 5.0))),
        )
        for d in next_days(today)
    ]
    return SpaceObservation(
        solar_wind_speed=450,
        kp_index=3.0,
        cme_count=2,
        forecast=forecast,
        historical_solar_wind=_history(today, rng, 420.0, 50.0),
        historical_kp_index=_history(today, rng, 0.0, 4.0, whole=True),
        historical_cme_count=_history(today, rng, 0.0, 3.0, whole=True),
    )


def generate_mock_weather(today: dt.date, rng: np.random.Generator) -> CombinedWeather:
    return CombinedWeather(
        earth=generate_mock_earth(today, rng),
        space=generate_mock_space(today, rng),
    )
