from dataclasses import dataclass

from src.config.settings import Settings
from src.turf.adapters.http_team_directory import HttpTeamDirectory
from src.turf.adapters.http_territory_store import HttpTerritoryStore
from src.turf.adapters.territory_api_client import TerritoryApiClient


@dataclass(frozen=True)
class HttpCollaborators:
    client: TerritoryApiClient
    store: HttpTerritoryStore
    team_directory: HttpTeamDirectory


def build_http_collaborators(settings: Settings, session=None) -> HttpCollaborators:
    """
    Builds the REST-backed territory store and team directory from settings.
    `session` replaces the retrying requests session, mainly for tests.
    """
    client = TerritoryApiClient(
        base_url=settings.API_BASE_URL,
        token=settings.API_TOKEN,
        max_retries=settings.HTTP_MAX_RETRIES,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
        session=session,
    )
    return HttpCollaborators(
        client=client,
        store=HttpTerritoryStore(client, path=settings.TERRITORIES_PATH),
        team_directory=HttpTeamDirectory(client, path=settings.TEAMS_PATH),
    )
