"""NASA feed engine for the Cosmic Forecast service.

Subpackages:
- ingestion: HTTP clients for the NASA POWER and DONKI feeds and the
  error taxonomy shared by every upstream adapter.
- tests: Unit tests for the nasa_engine package.
"""

__all__ = [
    "ingestion",
]
