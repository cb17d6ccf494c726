from __future__ import annotations

import asyncio
import datetime as dt
from typing import Callable, Optional, Tuple

import numpy as np
import structlog

from ..config import AppSettings
from ..schemas.weather import CombinedWeather
from .concurrency import join_all
from .earth_service import EarthService
from .mock import generate_mock_earth, generate_mock_space
from .space_service import SpaceService

logger = structlog.get_logger()


def _calendar_days(reference: dt.datetime) -> Tuple[dt.date, dt.date]:
    """Return (local date, UTC date) of ``reference``.

    POWER windows are built from the caller's local date, DONKI ones from
    the UTC date. A naive ``reference`` is read as system local time; an
    aware one keeps its own zone for the local date.
    """
    if reference.tzinfo is None:
        reference = reference.astimezone()
    return reference.date(), reference.astimezone(dt.timezone.utc).date()


class WeatherService:
    """Single entry point returning Earth and Space weather together.

    Both feeds are fetched concurrently. If either one fails for any reason,
    the outcome of the other is discarded too and both halves come from the
    mock generator, so callers always receive a complete `CombinedWeather`.

    ``clock`` supplies the reference instant when a call does not pass one.
    """

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        earth: Optional[EarthService] = None,
        space: Optional[SpaceService] = None,
        rng: Optional[np.random.Generator] = None,
        clock: Callable[[], dt.datetime] = dt.datetime.now,
    ):
        self.settings = settings or AppSettings()
        self.earth = earth or EarthService(self.settings)
        self.space = space or SpaceService(self.settings)
        self.rng = rng if rng is not None else np.random.default_rng()
        self.clock = clock

    def fetch(self, latitude: float, longitude: float, reference: Optional[dt.datetime] = None) -> CombinedWeather:
        local_today, utc_today = _calendar_days(reference or self.clock())
        # One generator per feed: numpy generators are not thread-safe
        earth_rng, space_rng = self.rng.spawn(2)
        try:
            earth, space = join_all(
                lambda: self.earth.fetch(latitude, longitude, local_today, earth_rng),
                lambda: self.space.fetch(utc_today, space_rng),
            )
        except Exception as e:
            logger.warning("live_fetch_failed", error_type=type(e).__name__, error=str(e))
            logger.warning("falling_back_to_mock", lat=latitude, lon=longitude)
            return CombinedWeather(
                earth=generate_mock_earth(local_today, self.rng),
                space=generate_mock_space(utc_today, self.rng),
            )
        return CombinedWeather(earth=earth, space=space)

    async def afetch(
        self, latitude: float, longitude: float, reference: Optional[dt.datetime] = None
    ) -> CombinedWeather:
        return await asyncio.to_thread(self.fetch, latitude, longitude, reference)
