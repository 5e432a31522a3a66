from abc import ABC, abstractmethod
from typing import List

from src.turf.domain.territory import Team


class TeamDirectory(ABC):
    """
    Read-only source of teams, used to label territory assignments.
    """
    @abstractmethod
    def list_teams(self) -> List[Team]:
        pass
