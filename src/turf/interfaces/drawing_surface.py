from abc import ABC, abstractmethod
from typing import List

from src.turf.domain.layer_handle import LayerHandle
from src.turf.domain.shapes import NativeShape
from src.turf.domain.style import ShapeStyle


class DrawingSurface(ABC):
    """
    Vector editing surface the map draws on.
    The engine holds it as a capability and never reaches into its
    internal layer registry.
    """
    @abstractmethod
    def add_shape(self, shape: NativeShape, style: ShapeStyle) -> LayerHandle:
        pass

    @abstractmethod
    def remove_shape(self, handle: LayerHandle) -> None:
        """No-op for handles the surface already dropped."""
        pass

    @abstractmethod
    def set_style(self, handle: LayerHandle, style: ShapeStyle) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def handles(self) -> List[LayerHandle]:
        pass
