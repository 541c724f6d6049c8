"""Peer data model."""

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..stats import ResponseStats
from .snapshot import PeerSnapshot

if TYPE_CHECKING:
    from ..bus.transport import IAccessibleHandle, IApplicationHandle

BUSY_PLACEHOLDER = "(busy)"


@dataclass(eq=False)
class Peer:
    """One accessible application on the bus.

    ``stats`` belongs to the health poller visiting this peer; anyone else
    reads it through ``lock`` and must not block on it.
    """

    bus_name: str
    display_name: str
    accessible: "IAccessibleHandle"
    application: "IApplicationHandle"
    stats: ResponseStats = field(default_factory=ResponseStats)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Peer):
            return NotImplemented
        return self.bus_name == other.bus_name

    def __hash__(self) -> int:
        return hash(self.bus_name)

    async def get_role(self) -> str:
        """Role of the root accessible. Used as the round-trip probe."""
        return await self.accessible.get_role()

    async def name(self) -> str | None:
        """Re-read the accessible name (not the bus name)."""
        return await self.accessible.name()

    def try_snapshot(self) -> PeerSnapshot:
        """Snapshot without blocking; placeholder if the poller holds the lock."""
        if not self.lock.acquire(blocking=False):
            return PeerSnapshot(
                bus_name=self.bus_name,
                name=self.display_name,
                stats=BUSY_PLACEHOLDER,
                samples=None,
                available=False,
            )
        try:
            return PeerSnapshot(
                bus_name=self.bus_name,
                name=self.display_name,
                stats=str(self.stats),
                samples=self.stats.samples,
            )
        finally:
            self.lock.release()
