from uuid import uuid4

from src.turf.interfaces.turf_id_source import TurfIdSource


class Uuid4IdSource(TurfIdSource):
    """
    Random UUID4 ids, as the web client uses for freshly drawn shapes.
    """
    def new_id(self) -> str:
        return str(uuid4())
