from typing import List

from src.turf.adapters.territory_api_client import TerritoryApiClient
from src.turf.domain.errors import TerritoryNetworkError
from src.turf.domain.territory import (
    Territory,
    TerritoryDraft,
    TerritoryPatch,
    territory_from_payload,
)
from src.turf.interfaces.territory_store import TerritoryStore


class HttpTerritoryStore(TerritoryStore):
    """
    Territory Store reached over the REST API.
    """

    def __init__(self, client: TerritoryApiClient, path: str = "territories"):
        self.client = client
        self.path = path.strip("/")

    def list(self) -> List[Territory]:
        rows = self.client.get(self.path)
        if not isinstance(rows, list):
            raise TerritoryNetworkError(f"Expected a list from GET /{self.path}")
        return [territory_from_payload(row) for row in rows]

    def create(self, draft: TerritoryDraft) -> Territory:
        row = self.client.post(self.path, draft.to_payload())
        return self._expect_record(row, "POST")

    def update(self, territory_id: str, patch: TerritoryPatch) -> Territory:
        row = self.client.put(f"{self.path}/{territory_id}", patch.to_payload())
        return self._expect_record(row, "PUT")

    def delete(self, territory_id: str) -> None:
        self.client.delete(f"{self.path}/{territory_id}")

    def _expect_record(self, row, method: str) -> Territory:
        if not isinstance(row, dict) or "id" not in row:
            raise TerritoryNetworkError(f"Expected a territory record from {method} /{self.path}")
        return territory_from_payload(row)
