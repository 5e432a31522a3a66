from datetime import datetime, timezone

from src.turf.interfaces.turf_time_source import TurfTimeSource


class SystemTurfTimeSource(TurfTimeSource):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)
