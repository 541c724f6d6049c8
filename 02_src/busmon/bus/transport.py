"""Transport boundary: what the monitor needs from a bus connection."""

import re
from typing import AsyncIterator, Protocol

from ..models import BusEvent
from .errors import StreamError

_ELEMENT = r"[A-Za-z_-][A-Za-z0-9_-]*"
_WELL_KNOWN_NAME = re.compile(rf"^{_ELEMENT}(\.{_ELEMENT})+$")
_UNIQUE_NAME = re.compile(r"^:[A-Za-z0-9_-]+(\.[A-Za-z0-9_-]+)+$")
_OBJECT_PATH = re.compile(r"^/$|^(/[A-Za-z0-9_]+)+$")

MAX_NAME_LENGTH = 255


def is_valid_bus_name(name: str) -> bool:
    """Check a unique (``:1.42``) or well-known (``org.a11y.Bus``) bus name."""
    if not name or len(name) > MAX_NAME_LENGTH:
        return False
    if name.startswith(":"):
        return bool(_UNIQUE_NAME.match(name))
    return bool(_WELL_KNOWN_NAME.match(name))


def is_valid_object_path(path: str) -> bool:
    """Check an object path such as ``/org/a11y/atspi/accessible/root``."""
    return bool(path) and bool(_OBJECT_PATH.match(path))


class IAccessibleHandle(Protocol):
    """Accessible aspect of a remote application's root object."""

    async def name(self) -> str | None:
        """Read the accessible name (display name, not the bus name)."""
        ...

    async def get_role(self) -> str:
        """Read the role. Cheap, used as the round-trip probe."""
        ...

    async def get_application(self) -> str:
        """Reference to the owning application; fails for non-accessible peers."""
        ...

    async def get_children(self) -> list[str]:
        """Bus names of children (meaningful on the registry)."""
        ...


class IApplicationHandle(Protocol):
    """Application aspect of a remote application's root object."""

    async def toolkit_name(self) -> str:
        """Name of the toolkit driving the application."""
        ...

    async def version(self) -> str:
        """Toolkit version."""
        ...


class IBusConnection(Protocol):
    """An open connection to the accessibility bus."""

    async def registry_children(self) -> list[str]:
        """Bus names the registry reports as accessible applications."""
        ...

    async def list_names(self) -> list[str]:
        """All names currently owned on the bus."""
        ...

    async def accessible(self, bus_name: str, path: str) -> IAccessibleHandle:
        """Accessible handle for ``path`` on ``bus_name``."""
        ...

    async def application(self, bus_name: str, path: str) -> IApplicationHandle:
        """Application handle for ``path`` on ``bus_name``."""
        ...

    def event_stream(self) -> AsyncIterator[BusEvent | StreamError]:
        """Subscribe to all accessibility events."""
        ...
