from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class LatLng:
    lat: float
    lng: float


@dataclass(frozen=True)
class PolygonShape:
    """
    Freehand polygon as drawn on the map. Open ring: the first vertex is
    not repeated at the end.
    """
    vertices: Tuple[LatLng, ...]


@dataclass(frozen=True)
class RectangleShape:
    south_west: LatLng
    north_east: LatLng

    def corners(self) -> Tuple[LatLng, ...]:
        sw, ne = self.south_west, self.north_east
        return (
            sw,
            LatLng(sw.lat, ne.lng),
            ne,
            LatLng(ne.lat, sw.lng),
        )


NativeShape = Union[PolygonShape, RectangleShape]
