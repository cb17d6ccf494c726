from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
import structlog

from ..config import AppSettings
from ..schemas.weather import HISTORY_DAYS, KP_MAX, KP_MIN, ChartDataPoint, SpaceObservation
from .concurrency import join_all
from .forecast import (
    day_label,
    derive_solar_wind,
    round_half_up,
    synthesize_space_forecast,
    trailing_days,
)
from nasa_engine.ingestion.client import DonkiClient, SpaceFeed
from nasa_engine.ingestion.errors import SchemaError

logger = structlog.get_logger()


class SpaceService:
    """Space weather summary from the DONKI CME and GST listings.

    Days are UTC calendar days. A day without events counts as 0, which is
    a real observation and not a gap. Solar wind speed is not observed at
    all: it is derived from the Kp index of the same day.
    """

    def __init__(self, settings: Optional[AppSettings] = None, client: Optional[SpaceFeed] = None):
        self.settings = settings or AppSettings()
        self.client = client or DonkiClient(
            base_url=self.settings.donki_base_url,
            api_key=self.settings.nasa_api_key,
            timeout_connect=self.settings.timeout_connect,
            timeout_read=self.settings.timeout_read,
            max_retries=self.settings.max_retries,
        )

    def fetch(self, today: dt.date, rng: np.random.Generator) -> SpaceObservation:
        start = today - dt.timedelta(days=HISTORY_DAYS)
        cme, gst = join_all(
            lambda: self.client.fetch_events("CME", start, today),
            lambda: self.client.fetch_events("GST", start, today),
        )
        cme = self._check_events(cme, "CME")
        gst = self._check_events(gst, "GST")

        cme_per_day = self._daily_cme_counts(cme)
        kp_per_day = self._daily_max_kp(gst)

        days = trailing_days(today)
        historical_cme = [
            ChartDataPoint(time=day_label(d), value=float(cme_per_day.get(d, 0))) for d in days
        ]
        historical_kp = [
            ChartDataPoint(time=day_label(d), value=min(max(float(kp_per_day.get(d, 0.0)), KP_MIN), KP_MAX))
            for d in days
        ]

        current_kp = historical_kp[-1].value if historical_kp else 0.0
        # Oldest slot of the window, not the latest one.
        # TODO: confirm whether the current CME count should read the last day instead.
        current_cme = int(historical_cme[0].value) if historical_cme else 0

        logger.info("space_fetched", cme_events=len(cme), gst_events=len(gst), kp=current_kp)
        return SpaceObservation(
            solar_wind_speed=round_half_up(derive_solar_wind(current_kp, rng)),
            kp_index=current_kp,
            cme_count=current_cme,
            forecast=synthesize_space_forecast(current_kp, today, rng),
            historical_solar_wind=[
                ChartDataPoint(time=p.time, value=derive_solar_wind(p.value, rng)) for p in historical_kp
            ],
            historical_kp_index=historical_kp,
            historical_cme_count=historical_cme,
        )

    @staticmethod
    def _check_events(payload: Any, kind: str) -> List[Dict[str, Any]]:
        if not isinstance(payload, list) or not all(isinstance(e, dict) for e in payload):
            raise SchemaError(f"{kind} response is not a list of event records")
        return payload

    @staticmethod
    def _parse_times(values: pd.Series) -> pd.Series:
        return pd.to_datetime(values, utc=True, errors="coerce", format="ISO8601")

    @classmethod
    def _daily_cme_counts(cls, events: List[Dict[str, Any]]) -> pd.Series:
        """Number of CMEs per UTC day of ``startTime``."""
        starts = cls._parse_times(pd.Series([e.get("startTime") for e in events], dtype=object))
        dropped = int(starts.isna().sum())
        if dropped:
            logger.warning("cme_events_without_start_time", dropped=dropped)
        return starts.dropna().dt.date.value_counts()

    @classmethod
    def _daily_max_kp(cls, events: List[Dict[str, Any]]) -> pd.Series:
        """Highest Kp observed per UTC day across every storm's ``allKpIndex``."""
        rows = []
        for gst in events:
            readings = gst.get("allKpIndex") or []
            if not isinstance(readings, list):
                raise SchemaError("GST allKpIndex is not a list")
            for r in readings:
                if isinstance(r, dict):
                    rows.append((r.get("observedTime"), r.get("kpIndex")))

        frame = pd.DataFrame(rows, columns=["observed", "kp"], dtype=object)
        frame["observed"] = cls._parse_times(frame["observed"])
        frame["kp"] = pd.to_numeric(frame["kp"], errors="coerce")
        frame = frame.dropna()
        if frame.empty:
            return pd.Series(dtype=float)
        return frame.groupby(frame["observed"].dt.date)["kp"].max()
