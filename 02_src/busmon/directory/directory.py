"""PeerDirectory implementation."""

from typing import Iterator, Protocol

from ..bus import BusError, BusUnavailableError, IBusConnection, InvalidAddressError
from ..config import ACCESSIBLE_ROOT_PATH, MonitorSettings
from ..logging_config import get_logger
from ..models import Peer
from ..stats import ResponseStats

logger = get_logger(__name__)


class IPeerDirectory(Protocol):
    """Discovering accessible applications on the bus."""

    async def enumerate(self) -> set[Peer]:
        """Resolve candidates into validated Peers. Partial success is normal."""
        ...

    @property
    def peers(self) -> tuple[Peer, ...]:
        """Peers retained by the last enumeration."""
        ...

    def get(self, bus_name: str) -> Peer | None:
        """Look up a peer by bus name."""
        ...


class PeerDirectory:
    """Resolves bus candidates into Peer records and keeps them."""

    def __init__(
        self,
        connection: IBusConnection,
        settings: MonitorSettings | None = None,
        path: str = ACCESSIBLE_ROOT_PATH,
    ):
        self._connection = connection
        self._settings = settings or MonitorSettings()
        self._path = path
        self._peers: dict[str, Peer] = {}

    @property
    def peers(self) -> tuple[Peer, ...]:
        """Peers retained by the last enumeration."""
        return tuple(self._peers.values())

    def get(self, bus_name: str) -> Peer | None:
        """Look up a peer by bus name."""
        return self._peers.get(bus_name)

    def __len__(self) -> int:
        return len(self._peers)

    def __iter__(self) -> Iterator[Peer]:
        return iter(self.peers)

    async def enumerate(self) -> set[Peer]:
        """Resolve candidates into validated Peers.

        Per-candidate failures skip that candidate. Only an unreachable bus
        or a malformed name/path propagates.
        """
        scanning = self._settings.discovery_mode == "scan"
        candidates = await self._candidates(scanning)

        found: dict[str, Peer] = {}
        for bus_name in candidates:
            if bus_name in found:
                continue
            peer = await self._resolve(bus_name, validate=scanning)
            if peer is not None:
                found[bus_name] = peer

        self._peers = found
        logger.info(
            "Peer enumeration finished: %d candidates, %d peers",
            len(candidates),
            len(found),
            extra={"context": {"mode": self._settings.discovery_mode}},
        )
        return set(found.values())

    async def _candidates(self, scanning: bool) -> list[str]:
        if scanning:
            names = await self._connection.list_names()
            prefix = self._settings.scan_prefix
            return [name for name in names if name.startswith(prefix)]

        # Registry considers all accessible programs on the bus its children.
        names = await self._connection.registry_children()
        return [name.strip() for name in names]

    async def _resolve(self, bus_name: str, validate: bool) -> Peer | None:
        """Build one Peer, or None when the candidate does not qualify."""
        try:
            accessible = await self._connection.accessible(bus_name, self._path)
            display_name = await accessible.name()
        except (BusUnavailableError, InvalidAddressError):
            raise
        except BusError as e:
            logger.debug("Skipping %s: name unreadable (%s)", bus_name, e)
            return None
        if display_name is None:
            logger.debug("Skipping %s: no accessible name", bus_name)
            return None

        # A scanned name may own the path without being an accessible
        # application; asking for its application tells them apart.
        if validate:
            try:
                await accessible.get_application()
            except (BusUnavailableError, InvalidAddressError):
                raise
            except BusError as e:
                logger.debug("Skipping %s: not an accessible application (%s)", bus_name, e)
                return None

        try:
            application = await self._connection.application(bus_name, self._path)
        except (BusUnavailableError, InvalidAddressError):
            raise
        except BusError as e:
            logger.debug("Skipping %s: no application interface (%s)", bus_name, e)
            return None

        return Peer(
            bus_name=bus_name,
            display_name=display_name,
            accessible=accessible,
            application=application,
            stats=ResponseStats(),
        )
