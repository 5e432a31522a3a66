from dataclasses import replace
from threading import Lock
from typing import Dict, List, Optional

from src.turf.domain.errors import TerritoryNotFoundError
from src.turf.domain.territory import Territory, TerritoryDraft, TerritoryPatch
from src.turf.interfaces.territory_store import TerritoryStore
from src.turf.interfaces.turf_time_source import TurfTimeSource
from src.turf.services.system_time_source import SystemTurfTimeSource


class InMemoryTerritoryStore(TerritoryStore):
    """
    Process-local Territory Store with server semantics:
    sequential numeric ids, 404 on unknown ids, immutable authorship fields.
    """

    def __init__(
            self,
            created_by: int = 1,
            time_source: Optional[TurfTimeSource] = None,
            first_id: int = 1
    ):
        self.created_by = created_by
        self.time_source = time_source or SystemTurfTimeSource()
        self._rows: Dict[str, Territory] = {}
        self._next_id = first_id
        self._lock = Lock()

    def list(self) -> List[Territory]:
        with self._lock:
            return list(self._rows.values())

    def create(self, draft: TerritoryDraft) -> Territory:
        with self._lock:
            territory_id = str(self._next_id)
            self._next_id += 1
            territory = Territory(
                id=territory_id,
                name=draft.name,
                color=draft.color,
                geometry=draft.geometry,
                description=draft.description,
                team_id=draft.team_id,
                status=draft.status,
                created_by=self.created_by,
                created_at=self.time_source.now(),
            )
            self._rows[territory_id] = territory
            return territory

    def update(self, territory_id: str, patch: TerritoryPatch) -> Territory:
        with self._lock:
            existing = self._rows.get(territory_id)
            if existing is None:
                raise TerritoryNotFoundError(404, "Turf not found", territory_id)
            updated = replace(patch.apply_to(existing), id=existing.id, provisional=False)
            self._rows[territory_id] = updated
            return updated

    def delete(self, territory_id: str) -> None:
        with self._lock:
            if self._rows.pop(territory_id, None) is None:
                raise TerritoryNotFoundError(404, "Turf not found", territory_id)

    def get(self, territory_id: str) -> Optional[Territory]:
        with self._lock:
            return self._rows.get(territory_id)
