import logging
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from src.turf.domain.layer_handle import LayerHandle
from src.turf.domain.territory import Territory

logger = logging.getLogger(__name__)

RenderFn = Callable[[Territory], Optional[LayerHandle]]


class LayerBindingTable:
    """
    One-to-one association between live drawn shapes and territory ids.
    Exists only while the map is mounted; never persisted.
    """

    def __init__(self):
        self._by_handle: Dict[LayerHandle, str] = {}
        self._by_territory: Dict[str, LayerHandle] = {}

    def bind(self, handle: LayerHandle, territory_id: str) -> None:
        previous_id = self._by_handle.get(handle)
        if previous_id is not None:
            del self._by_territory[previous_id]

        previous_handle = self._by_territory.get(territory_id)
        if previous_handle is not None and previous_handle != handle:
            # Keep the table one-to-one: the id moves, the stale handle is left unbound.
            del self._by_handle[previous_handle]

        self._by_handle[handle] = territory_id
        self._by_territory[territory_id] = handle

    def resolve(self, handle: LayerHandle) -> Optional[str]:
        return self._by_handle.get(handle)

    def handle_for(self, territory_id: str) -> Optional[LayerHandle]:
        return self._by_territory.get(territory_id)

    def unbind(self, handle: LayerHandle) -> Optional[str]:
        territory_id = self._by_handle.pop(handle, None)
        if territory_id is not None:
            self._by_territory.pop(territory_id, None)
        return territory_id

    def promote(self, provisional_id: str, authoritative_id: str) -> bool:
        """
        Hands the shape bound to a provisional id over to the id the store
        assigned. Returns False when the provisional shape is gone.
        """
        handle = self._by_territory.pop(provisional_id, None)
        if handle is None:
            return False
        self.bind(handle, authoritative_id)
        return True

    def clear(self) -> None:
        self._by_handle.clear()
        self._by_territory.clear()

    def rebuild_from(self, territories: Iterable[Territory], render: RenderFn) -> int:
        """
        Drops every entry, renders one shape per territory and binds it.
        `render` returns None for territories that cannot be drawn.
        """
        self.clear()
        bound = 0
        for territory in territories:
            handle = render(territory)
            if handle is None:
                continue
            self.bind(handle, territory.id)
            bound += 1
        logger.debug(f"Binding table rebuilt with {bound} entries")
        return bound

    def entries(self) -> List[Tuple[LayerHandle, str]]:
        return list(self._by_handle.items())

    def __len__(self) -> int:
        return len(self._by_handle)

    def __contains__(self, handle: LayerHandle) -> bool:
        return handle in self._by_handle
