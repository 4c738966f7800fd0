from .geo import GeoPoint
from .itinerary import Itinerary, Leg, TravelMode
from .network import Line, Segment, SegmentKind, TransitNetwork, segment_key
from .stop import Stop

__all__ = [
    "GeoPoint",
    "Itinerary",
    "Leg",
    "Line",
    "Segment",
    "SegmentKind",
    "Stop",
    "TransitNetwork",
    "TravelMode",
    "segment_key",
]
