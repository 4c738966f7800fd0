from .routing import (
    InvalidSearchArgument,
    NetworkIntegrityError,
    RoutingError,
    UnknownStopError,
)

__all__ = [
    "InvalidSearchArgument",
    "NetworkIntegrityError",
    "RoutingError",
    "UnknownStopError",
]
