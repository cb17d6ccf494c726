from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
import structlog

from ..config import AppSettings
from ..schemas.weather import HISTORY_DAYS, ChartDataPoint, EarthObservation
from .forecast import (
    classify_condition,
    day_label,
    round_half_up,
    synthesize_earth_forecast,
    trailing_days,
)
from nasa_engine.ingestion.client import EarthFeed, NasaPowerClient
from nasa_engine.ingestion.errors import DataUnavailableError, SchemaError

logger = structlog.get_logger()

# NASA POWER reports days without an observation as -999
POWER_SENTINEL = -999.0

# upstream parameter -> normalized column
_PARAMETERS = {
    "T2M": "temp_c",
    "WS10M": "wind_ms",
    "RH2M": "humidity",
}


def _coordinate(c: Any) -> str:
    c = float(c)
    return str(int(c)) if c.is_integer() else repr(c)


class EarthService:
    """Surface conditions for one location from the NASA POWER daily feed.

    The request covers the eight days ending with ``today``. The last seven
    feed the charts; the whole window is searched for the current values
    because POWER usually lags a day or two behind.
    """

    def __init__(self, settings: Optional[AppSettings] = None, client: Optional[EarthFeed] = None):
        self.settings = settings or AppSettings()
        self.client = client or NasaPowerClient(
            base_url=self.settings.power_base_url,
            timeout_connect=self.settings.timeout_connect,
            timeout_read=self.settings.timeout_read,
            max_retries=self.settings.max_retries,
        )

    def fetch(self, lat: float, lon: float, today: dt.date, rng: np.random.Generator) -> EarthObservation:
        start = today - dt.timedelta(days=HISTORY_DAYS)
        payload = self.client.fetch_daily(lat, lon, start, today, parameters=tuple(_PARAMETERS))
        df = self._normalize_daily(payload)
        location = self._location(payload)

        current = {col: self._latest_valid(df, col) for col in _PARAMETERS.values()}
        category = classify_condition(current["temp_c"])

        history = df.reindex(pd.DatetimeIndex([pd.Timestamp(d) for d in trailing_days(today)]))

        logger.info(
            "earth_fetched",
            lat=lat,
            lon=lon,
            days=len(df),
            missing=int(history.isna().sum().sum()),
        )
        return EarthObservation(
            location=location,
            temperature=round_half_up(current["temp_c"]),
            wind_speed=round_half_up(current["wind_ms"]),
            humidity=round_half_up(current["humidity"]),
            condition=category.label,
            category=category,
            forecast=synthesize_earth_forecast(current["temp_c"], today, rng),
            historical_temp=self._to_points(history["temp_c"]),
            historical_wind=self._to_points(history["wind_ms"]),
            historical_humidity=self._to_points(history["humidity"]),
        )

    @staticmethod
    def _normalize_daily(payload: Any) -> pd.DataFrame:
        """Turn ``properties.parameter`` into a date-indexed frame.

        Sentinel readings become NaN. Rows are sorted oldest first.
        """
        properties = payload.get("properties") if isinstance(payload, dict) else None
        parameter = properties.get("parameter") if isinstance(properties, dict) else None
        if not isinstance(parameter, dict):
            raise SchemaError("payload.properties.parameter missing or invalid")

        columns: Dict[str, pd.Series] = {}
        for name, col in _PARAMETERS.items():
            series = parameter.get(name)
            if not isinstance(series, dict):
                raise SchemaError(f"parameter {name} missing or invalid")
            columns[col] = pd.to_numeric(pd.Series(series, dtype=object), errors="coerce")

        df = pd.DataFrame(columns)
        df.index = pd.to_datetime(df.index, format="%Y%m%d", errors="coerce")
        df = df[df.index.notna()].sort_index()
        df = df.astype(float).replace(POWER_SENTINEL, np.nan)
        return df[list(_PARAMETERS.values())]

    @staticmethod
    def _location(payload: Dict[str, Any]) -> str:
        geometry = payload.get("geometry")
        coords = geometry.get("coordinates") if isinstance(geometry, dict) else None
        if not isinstance(coords, list) or not coords:
            raise SchemaError("payload.geometry.coordinates missing or invalid")
        return ", ".join(_coordinate(c) for c in coords)

    @staticmethod
    def _latest_valid(df: pd.DataFrame, col: str) -> float:
        valid = df[col].dropna()
        if valid.empty:
            raise DataUnavailableError(f"no valid {col} reading in the requested window")
        return float(valid.iloc[-1])

    @staticmethod
    def _to_points(series: pd.Series) -> List[ChartDataPoint]:
        return [
            ChartDataPoint(time=day_label(ts.date()), value=None if pd.isna(v) else float(v))
            for ts, v in series.items()
        ]
