from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class LayerHandle:
    """
    Opaque reference to a shape living on the drawing surface.
    Only valid while the map is mounted.
    """
    id: UUID
