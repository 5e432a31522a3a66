from abc import ABC, abstractmethod


class TurfIdSource(ABC):
    """
    Source of client-side ids for provisional territories and layer handles.
    Injected so tests stay deterministic.
    """
    @abstractmethod
    def new_id(self) -> str:
        pass
