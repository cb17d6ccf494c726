from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Protocol, Sequence
import datetime as dt

import requests
import structlog
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import TransportError, UpstreamError

logger = structlog.get_logger()

POWER_PARAMETERS = ("T2M", "WS10M", "RH2M")


class EarthFeed(Protocol):
    """Daily surface observations keyed by calendar day.

    Implementations return the decoded JSON body untouched. Validation and
    sentinel handling belong to the caller.
    """

    def fetch_daily(
        self,
        lat: float,
        lon: float,
        start: dt.date,
        end: dt.date,
        parameters: Sequence[str] = POWER_PARAMETERS,
    ) -> Any:
        ...


class SpaceFeed(Protocol):
    """Space weather event listings (CME, GST, ...) over a date window."""

    def fetch_events(self, kind: str, start: dt.date, end: dt.date) -> Any:
        ...


@dataclass
class _JsonClient:
    timeout_connect: float = 5.0
    timeout_read: float = 15.0
    max_retries: int = 0
    backoff_factor: float = 0.5

    def _session(self) -> requests.Session:
        s = requests.Session()
        retries = Retry(
            total=self.max_retries,
            backoff_factor=self.backoff_factor,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retries)
        s.mount("https://", adapter)
        s.mount("http://", adapter)
        return s

    def _get_json(self, url: str, params: Dict[str, Any]) -> Any:
        timeout = (self.timeout_connect, self.timeout_read)
        with self._session() as s:
            try:
                resp = s.get(url, params=params, timeout=timeout)
                resp.raise_for_status()
            except requests.HTTPError as exc:
                raise UpstreamError(f"{url} answered with an error status: {exc}") from exc
            except requests.RequestException as exc:
                raise TransportError(f"request to {url} failed: {exc}") from exc

        try:
            return resp.json()
        except ValueError as exc:
            raise UpstreamError(f"{url} returned a body that is not JSON") from exc


@dataclass
class NasaPowerClient(_JsonClient):
    """NASA POWER daily point API.

    Notes and assumptions:
    - Dates are sent as ``YYYYMMDD`` and the window is closed on both ends.
    - Each requested parameter comes back under ``properties.parameter`` as a
      mapping of ``YYYYMMDD`` to value, with ``-999`` for missing days.
    - Temperature (T2M) is in Celsius, wind speed (WS10M) in m/s and relative
      humidity (RH2M) in percent.
    """

    base_url: str = "https://power.larc.nasa.gov/api/temporal/daily/point"
    community: str = "RE"

    def fetch_daily(
        self,
        lat: float,
        lon: float,
        start: dt.date,
        end: dt.date,
        parameters: Sequence[str] = POWER_PARAMETERS,
    ) -> Any:
        params = {
            "start": start.strftime("%Y%m%d"),
            "end": end.strftime("%Y%m%d"),
            "latitude": lat,
            "longitude": lon,
            "community": self.community,
            "parameters": ",".join(parameters),
            "format": "JSON",
        }
        logger.debug("power_request", lat=lat, lon=lon, start=params["start"], end=params["end"])
        return self._get_json(self.base_url, params)


@dataclass
class DonkiClient(_JsonClient):
    """NASA DONKI (Space Weather Database Of Notifications, Knowledge,
    Information) event listings.

    ``kind`` is the DONKI endpoint name, e.g. ``CME`` or ``GST``. Every call
    carries ``api_key``; ``DEMO_KEY`` works at a low rate limit.
    """

    base_url: str = "https://api.nasa.gov/DONKI"
    api_key: str = "DEMO_KEY"

    def fetch_events(self, kind: str, start: dt.date, end: dt.date) -> Any:
        params = {
            "startDate": start.isoformat(),
            "endDate": end.isoformat(),
            "api_key": self.api_key,
        }
        logger.debug("donki_request", kind=kind, start=params["startDate"], end=params["endDate"])
        return self._get_json(f"{self.base_url.rstrip('/')}/{kind}", params)
