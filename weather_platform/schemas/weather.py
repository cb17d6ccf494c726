from __future__ import annotations

import math
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

HISTORY_DAYS = 7
FORECAST_DAYS = 7
KP_MIN = 0.0
KP_MAX = 9.0


class ConditionCategory(str, Enum):
    """Closed set of sky conditions. The view maps each one to an icon."""

    WARM = "warm"
    MILD = "mild"
    COLD = "cold"

    @property
    def label(self) -> str:
        return _CONDITION_LABELS[self]


_CONDITION_LABELS = {
    ConditionCategory.WARM: "Sunny",
    ConditionCategory.MILD: "Partly Cloudy",
    ConditionCategory.COLD: "Cloudy",
}


class ChartDataPoint(BaseModel):
    """One point of a chart series. ``value`` is None where the feed had no reading."""

    model_config = ConfigDict(frozen=True)

    time: str
    value: Optional[float] = None

    @field_validator("value")
    @classmethod
    def _finite(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and not math.isfinite(v):
            raise ValueError("value must be finite or None")
        return v


def _check_series(name: str, *series: List[ChartDataPoint]) -> None:
    labels = None
    for s in series:
        if len(s) != HISTORY_DAYS:
            raise ValueError(f"{name} history must have {HISTORY_DAYS} points, got {len(s)}")
        current = [p.time for p in s]
        if labels is not None and current != labels:
            raise ValueError(f"{name} history series have misaligned time labels")
        labels = current


class EarthForecast(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: str
    temperature: int
    condition: str
    category: ConditionCategory


class EarthObservation(BaseModel):
    model_config = ConfigDict(frozen=True)

    location: str
    temperature: int = Field(..., description="Celsius")
    wind_speed: int = Field(..., description="m/s at 10 m")
    humidity: int = Field(..., description="Relative humidity, percent")
    condition: str
    category: ConditionCategory
    forecast: List[EarthForecast]
    historical_temp: List[ChartDataPoint]
    historical_wind: List[ChartDataPoint]
    historical_humidity: List[ChartDataPoint]

    @model_validator(mode="after")
    def _check_lengths(self) -> "EarthObservation":
        _check_series("earth", self.historical_temp, self.historical_wind, self.historical_humidity)
        if len(self.forecast) != FORECAST_DAYS:
            raise ValueError(f"earth forecast must have {FORECAST_DAYS} days")
        return self


class SpaceForecast(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: str
    solar_wind_speed: int = Field(..., description="km/s")
    kp_index: int = Field(..., ge=KP_MIN, le=KP_MAX)


class SpaceObservation(BaseModel):
    model_config = ConfigDict(frozen=True)

    solar_wind_speed: int = Field(..., description="km/s")
    kp_index: float = Field(..., ge=KP_MIN, le=KP_MAX)
    cme_count: int = Field(..., ge=0, description="Coronal mass ejections")
    forecast: List[SpaceForecast]
    historical_solar_wind: List[ChartDataPoint]
    historical_kp_index: List[ChartDataPoint]
    historical_cme_count: List[ChartDataPoint]

    @model_validator(mode="after")
    def _check_lengths(self) -> "SpaceObservation":
        _check_series(
            "space",
            self.historical_solar_wind,
            self.historical_kp_index,
            self.historical_cme_count,
        )
        if len(self.forecast) != FORECAST_DAYS:
            raise ValueError(f"space forecast must have {FORECAST_DAYS} days")
        return self


class CombinedWeather(BaseModel):
    model_config = ConfigDict(frozen=True)

    earth: EarthObservation
    space: SpaceObservation
