from abc import ABC, abstractmethod
from datetime import datetime


class TurfTimeSource(ABC):
    """
    Abstract clock. Always returns UTC-aware datetimes.
    """
    @abstractmethod
    def now(self) -> datetime:
        pass
