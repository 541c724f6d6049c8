"""Error taxonomy for bus transport failures."""


class BusError(Exception):
    """A remote call or subscription on the bus failed."""


class BusUnavailableError(BusError):
    """The bus connection itself is unusable."""


class InvalidAddressError(BusError, ValueError):
    """A bus name or object path is malformed."""


class StreamError(BusError):
    """An event on the subscription could not be decoded or delivered."""
