"""Forward forecast synthesis.

Nothing here is a model: each forecast is the last known value plus a
bounded uniform perturbation. What is guaranteed is the shape. A forecast
always has exactly ``horizon`` entries labelled with the weekday
abbreviations of the days following ``today``, Kp forecasts never leave
[0, 9], and temperature and wind forecasts are left unclamped.

All functions are pure apart from the draws taken from the injected
``numpy.random.Generator``; seed it for reproducible output.
"""

from __future__ import annotations

import datetime as dt
import math
from typing import List

import numpy as np

from ..schemas.weather import (
    FORECAST_DAYS,
    HISTORY_DAYS,
    KP_MAX,
    ConditionCategory,
    EarthForecast,
    SpaceForecast,
)

WARM_ABOVE_C = 25.0
COLD_BELOW_C = 10.0

SOLAR_WIND_BASE_KMS = 400.0
SOLAR_WIND_PER_KP_KMS = 50.0
SOLAR_WIND_SPREAD_KMS = 25.0
TEMP_SPREAD_C = 2.0
KP_SPREAD = 1.0

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def day_label(day: dt.date) -> str:
    """English three-letter weekday, independent of the process locale."""
    return _WEEKDAYS[day.weekday()]


def next_days(today: dt.date, horizon: int = FORECAST_DAYS) -> List[dt.date]:
    return [today + dt.timedelta(days=i) for i in range(1, horizon + 1)]


def trailing_days(today: dt.date, length: int = HISTORY_DAYS) -> List[dt.date]:
    """``length`` days ending with ``today``, oldest first."""
    return [today - dt.timedelta(days=i) for i in range(length - 1, -1, -1)]


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def bounded_random(rng: np.random.Generator, spread: float) -> float:
    """Uniform draw in ``[-spread, +spread]``."""
    return float(rng.uniform(-spread, spread))


def classify_condition(temp_c: float) -> ConditionCategory:
    if temp_c > WARM_ABOVE_C:
        return ConditionCategory.WARM
    if temp_c < COLD_BELOW_C:
        return ConditionCategory.COLD
    return ConditionCategory.MILD


def classify_forecast_condition(temp_c: float) -> ConditionCategory:
    # Forecast days only distinguish warm from mild, there is no cold branch.
    return ConditionCategory.WARM if temp_c > WARM_ABOVE_C else ConditionCategory.MILD


def derive_solar_wind(kp: float, rng: np.random.Generator) -> float:
    """Solar wind speed proxy in km/s derived from a Kp value."""
    return SOLAR_WIND_BASE_KMS + kp * SOLAR_WIND_PER_KP_KMS + bounded_random(rng, SOLAR_WIND_SPREAD_KMS)


def synthesize_earth_forecast(
    current_temp: float,
    today: dt.date,
    rng: np.random.Generator,
    horizon: int = FORECAST_DAYS,
) -> List[EarthForecast]:
    out: List[EarthForecast] = []
    for day in next_days(today, horizon):
        temp = current_temp + bounded_random(rng, TEMP_SPREAD_C)
        category = classify_forecast_condition(temp)
        out.append(
            EarthForecast(
                day=day_label(day),
                temperature=round_half_up(temp),
                condition=category.label,
                category=category,
            )
        )
    return out


def synthesize_space_forecast(
    current_kp: float,
    today: dt.date,
    rng: np.random.Generator,
    horizon: int = FORECAST_DAYS,
) -> List[SpaceForecast]:
    out: List[SpaceForecast] = []
    for day in next_days(today, horizon):
        kp = round_half_up(max(0.0, current_kp + bounded_random(rng, KP_SPREAD)))
        kp = min(kp, int(KP_MAX))
        out.append(
            SpaceForecast(
                day=day_label(day),
                solar_wind_speed=round_half_up(derive_solar_wind(kp, rng)),
                kp_index=kp,
            )
        )
    return out
