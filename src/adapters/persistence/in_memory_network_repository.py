from __future__ import annotations

from dataclasses import dataclass, field

from src.app.ports.output import INetworkRepository
from src.domain.models import TransitNetwork


def _empty_network() -> TransitNetwork:
    return TransitNetwork.build(stops=())


@dataclass(slots=True)
class InMemoryNetworkRepository(INetworkRepository):
    """Serves a network snapshot that was already built by the host application.

    `replace` swaps the snapshot atomically; searches already running keep
    the snapshot they started with.
    """

    network: TransitNetwork = field(default_factory=_empty_network)

    def load_network(self) -> TransitNetwork:
        return self.network

    def replace(self, network: TransitNetwork) -> None:
        self.network = network
