class RoutingError(Exception):
    """Base exception for itinerary planning failures."""


class InvalidSearchArgument(RoutingError, ValueError):
    """Raised when a search is called with missing or out-of-range arguments."""


class NetworkIntegrityError(RoutingError):
    """Raised when network data is malformed (e.g. segments cannot be indexed)."""


class UnknownStopError(RoutingError, KeyError):
    """Raised when a stop code is not part of the loaded network."""

    def __init__(self, code: int) -> None:
        super().__init__(code)
        self.code = code

    def __str__(self) -> str:
        return f"Unknown stop: {self.code}"
