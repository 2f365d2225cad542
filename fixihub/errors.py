class HubError(Exception):
    """Base class for broadcast hub errors."""


class EncodingError(HubError, ValueError):
    """An envelope or frame field cannot be framed safely on the wire."""


class SinkClosedError(HubError, ConnectionError):
    """The connection behind a sink is no longer usable."""


class SlowConsumerError(SinkClosedError):
    """A bounded sink queue is full."""
