"""Bus transport module."""

from .errors import BusError, BusUnavailableError, InvalidAddressError, StreamError
from .transport import (
    IAccessibleHandle,
    IApplicationHandle,
    IBusConnection,
    is_valid_bus_name,
    is_valid_object_path,
)

__all__ = [
    "BusError",
    "BusUnavailableError",
    "InvalidAddressError",
    "StreamError",
    "IAccessibleHandle",
    "IApplicationHandle",
    "IBusConnection",
    "is_valid_bus_name",
    "is_valid_object_path",
]
