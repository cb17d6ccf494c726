"""Response models shared by the services and the HTTP routes."""

from .health import HealthResponse
from .weather import (
    ChartDataPoint,
    CombinedWeather,
    ConditionCategory,
    EarthForecast,
    EarthObservation,
    SpaceForecast,
    SpaceObservation,
)

__all__ = [
    "HealthResponse",
    "ChartDataPoint",
    "CombinedWeather",
    "ConditionCategory",
    "EarthForecast",
    "EarthObservation",
    "SpaceForecast",
    "SpaceObservation",
]
