from .in_memory_network_repository import InMemoryNetworkRepository

__all__ = [
    "InMemoryNetworkRepository",
]
