from typing import Iterable, List

from src.turf.domain.territory import Team
from src.turf.interfaces.team_directory import TeamDirectory


class StaticTeamDirectory(TeamDirectory):
    def __init__(self, teams: Iterable[Team] = ()):
        self._teams = list(teams)

    def list_teams(self) -> List[Team]:
        return list(self._teams)
