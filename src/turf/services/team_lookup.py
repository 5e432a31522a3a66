from typing import Dict, Iterable, List, Optional

from src.turf.domain.territory import Team

UNASSIGNED_LABEL = "Unassigned"
UNKNOWN_TEAM_LABEL = "Unknown Team"


class TeamLookup:
    """
    Display-only resolution of team ids to names.
    """

    def __init__(self, teams: Iterable[Team] = ()):
        self._teams: Dict[int, Team] = {}
        self.load(teams)

    def load(self, teams: Iterable[Team]) -> None:
        self._teams = {team.id: team for team in teams}

    def teams(self) -> List[Team]:
        return list(self._teams.values())

    def name_for(self, team_id: Optional[int]) -> str:
        if not team_id:
            return UNASSIGNED_LABEL
        team = self._teams.get(team_id)
        return team.name if team else UNKNOWN_TEAM_LABEL
