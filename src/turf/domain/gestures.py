from dataclasses import dataclass
from typing import Union

from src.turf.domain.layer_handle import LayerHandle
from src.turf.domain.shapes import NativeShape


@dataclass(frozen=True)
class ShapeCreated:
    """Draw-polygon or draw-rectangle gesture completed."""
    handle: LayerHandle
    shape: NativeShape


@dataclass(frozen=True)
class ShapeEdited:
    handle: LayerHandle
    shape: NativeShape


@dataclass(frozen=True)
class ShapeDeleted:
    handle: LayerHandle


@dataclass(frozen=True)
class ShapeClicked:
    handle: LayerHandle


DrawGesture = Union[ShapeCreated, ShapeEdited, ShapeDeleted, ShapeClicked]
