from typing import List

from src.turf.adapters.territory_api_client import TerritoryApiClient
from src.turf.domain.errors import TerritoryNetworkError
from src.turf.domain.territory import Team, team_from_payload
from src.turf.interfaces.team_directory import TeamDirectory


class HttpTeamDirectory(TeamDirectory):
    def __init__(self, client: TerritoryApiClient, path: str = "teams"):
        self.client = client
        self.path = path.strip("/")

    def list_teams(self) -> List[Team]:
        rows = self.client.get(self.path)
        if not isinstance(rows, list):
            raise TerritoryNetworkError(f"Expected a list from GET /{self.path}")
        return [team_from_payload(row) for row in rows if isinstance(row, dict) and "id" in row]
