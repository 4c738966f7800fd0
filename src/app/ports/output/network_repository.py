from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models import TransitNetwork


class INetworkRepository(ABC):
    """Port to whatever loads stops, lines and segments into memory."""

    @abstractmethod
    def load_network(self) -> TransitNetwork:
        """Return the current (immutable) network snapshot."""
