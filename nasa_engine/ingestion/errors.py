from __future__ import annotations


class FeedError(RuntimeError):
    """Base class for every failure raised while reading an upstream feed."""


class UpstreamError(FeedError):
    """The upstream answered badly: non-2xx status or a body that is not JSON."""


class TransportError(UpstreamError):
    """The request never completed (DNS, connection refused, timeout, ...)."""


class SchemaError(FeedError):
    """The response parsed but does not have the expected shape."""


class DataUnavailableError(FeedError):
    """The response is well formed but holds no usable value."""
