"""Ingestion subpackage.

Provides thin HTTP clients for the NASA POWER (Earth surface) and DONKI
(space weather) feeds, and the errors they raise.
"""

from .client import DonkiClient, NasaPowerClient
from .errors import (
    DataUnavailableError,
    FeedError,
    SchemaError,
    TransportError,
    UpstreamError,
)

__all__ = [
    "DonkiClient",
    "NasaPowerClient",
    "FeedError",
    "UpstreamError",
    "TransportError",
    "SchemaError",
    "DataUnavailableError",
]
