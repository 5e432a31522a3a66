from dataclasses import dataclass
from typing import Dict, List, Optional
from uuid import uuid4

from src.turf.domain.layer_handle import LayerHandle
from src.turf.domain.shapes import NativeShape
from src.turf.domain.style import ShapeStyle
from src.turf.interfaces.drawing_surface import DrawingSurface


@dataclass
class RenderedShape:
    handle: LayerHandle
    shape: NativeShape
    style: ShapeStyle


class InMemoryDrawingSurface(DrawingSurface):
    """
    Headless drawing surface. Keeps its own layer registry, the way a
    browser vector-editing library does.
    """

    def __init__(self):
        self._layers: Dict[LayerHandle, RenderedShape] = {}

    def add_shape(self, shape: NativeShape, style: ShapeStyle) -> LayerHandle:
        handle = LayerHandle(uuid4())
        self._layers[handle] = RenderedShape(handle, shape, style)
        return handle

    def draw(self, shape: NativeShape, style: ShapeStyle) -> LayerHandle:
        """
        Simulates the operator finishing a draw gesture: the surface owns
        the new layer before the engine hears about it.
        """
        return self.add_shape(shape, style)

    def reshape(self, handle: LayerHandle, shape: NativeShape) -> None:
        """Simulates an edit gesture on an existing layer."""
        self._layers[handle].shape = shape

    def remove_shape(self, handle: LayerHandle) -> None:
        self._layers.pop(handle, None)

    def set_style(self, handle: LayerHandle, style: ShapeStyle) -> None:
        layer = self._layers.get(handle)
        if layer is not None:
            layer.style = style

    def clear(self) -> None:
        self._layers.clear()

    def handles(self) -> List[LayerHandle]:
        return list(self._layers)

    def get(self, handle: LayerHandle) -> Optional[RenderedShape]:
        return self._layers.get(handle)

    def rendered(self) -> List[RenderedShape]:
        return list(self._layers.values())
