from abc import ABC, abstractmethod
from typing import List

from src.turf.domain.territory import Territory, TerritoryDraft, TerritoryPatch


class TerritoryStore(ABC):
    """
    Durable authority for Territory records.
    Assigns ids; the map never treats its own copy as persisted.
    """
    @abstractmethod
    def list(self) -> List[Territory]:
        pass

    @abstractmethod
    def create(self, draft: TerritoryDraft) -> Territory:
        pass

    @abstractmethod
    def update(self, territory_id: str, patch: TerritoryPatch) -> Territory:
        """Raises TerritoryNotFoundError when the id is absent."""
        pass

    @abstractmethod
    def delete(self, territory_id: str) -> None:
        """Raises TerritoryNotFoundError when the id is absent."""
        pass
