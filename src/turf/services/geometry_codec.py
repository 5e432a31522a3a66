import math
from typing import Any, Dict, List

from shapely.errors import ShapelyError
from shapely.geometry import Polygon, box, shape

from src.turf.domain.errors import GeometryDecodeError
from src.turf.domain.shapes import LatLng, NativeShape, PolygonShape, RectangleShape


class GeoJsonGeometryCodec:
    """
    Converts between drawing-surface shapes and GeoJSON Features.

    Shapes use (lat, lng) order like the map; GeoJSON uses [lng, lat] with
    a closed ring. Rectangles are stored as plain 4-vertex polygons and are
    recognised again on the way back when the ring equals its own bounding box.
    """

    def to_feature(self, native_shape: NativeShape) -> Dict[str, Any]:
        if isinstance(native_shape, RectangleShape):
            vertices = native_shape.corners()
        else:
            vertices = native_shape.vertices

        ring: List[List[float]] = [[float(v.lng), float(v.lat)] for v in vertices]
        if ring and ring[0] != ring[-1]:
            ring.append(list(ring[0]))

        return {
            "type": "Feature",
            "properties": {},
            "geometry": {
                "type": "Polygon",
                "coordinates": [ring],
            },
        }

    def to_native_shape(self, feature: Dict[str, Any]) -> NativeShape:
        polygon = self._parse_polygon(feature)

        coords = [(x, y) for x, y, *_ in polygon.exterior.coords][:-1]
        if len(set(coords)) < 3:
            raise GeometryDecodeError("Polygon needs at least three distinct vertices")

        if len(coords) == 4 and len(set(coords)) == 4 and polygon.equals(box(*polygon.bounds)):
            min_x, min_y, max_x, max_y = polygon.bounds
            return RectangleShape(
                south_west=LatLng(min_y, min_x),
                north_east=LatLng(max_y, max_x),
            )

        return PolygonShape(vertices=tuple(LatLng(y, x) for x, y in coords))

    def _parse_polygon(self, feature: Dict[str, Any]) -> Polygon:
        if not isinstance(feature, dict):
            raise GeometryDecodeError(f"Expected a GeoJSON object, got {type(feature).__name__}")

        geometry = feature.get("geometry") if feature.get("type") == "Feature" else feature
        if not isinstance(geometry, dict):
            raise GeometryDecodeError("Feature has no geometry")
        if geometry.get("type") != "Polygon":
            raise GeometryDecodeError(f"Unsupported geometry type: {geometry.get('type')}")

        try:
            polygon = shape(geometry)
        except (ShapelyError, ValueError, TypeError, KeyError, IndexError) as e:
            raise GeometryDecodeError(f"Malformed polygon: {e}") from e

        if polygon.is_empty:
            raise GeometryDecodeError("Polygon is empty")
        if not all(math.isfinite(c) for xy in polygon.exterior.coords for c in xy):
            raise GeometryDecodeError("Polygon has non-finite coordinates")
        return polygon
