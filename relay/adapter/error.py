"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class ChannelClosedError(AdapterError):
    """Raised when sending on a connection that is no longer open."""

    pass
