from typing import Optional


class TurfError(Exception):
    """Base class for territory mapping errors."""
    pass


class GeometryDecodeError(TurfError):
    """Feature cannot be turned into a drawable shape."""
    pass


class TerritoryStoreError(TurfError):
    """Base class for Territory Store failures."""
    pass


class TerritoryApiError(TerritoryStoreError):
    """Non-2xx response from the store."""

    def __init__(self, status_code: int, message: str, path: Optional[str] = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.path = path


class TerritoryNotFoundError(TerritoryApiError):
    """HTTP 404 on a territory id."""
    pass


class TerritoryNetworkError(TerritoryStoreError):
    """Connectivity failure, timeout or unreadable response body."""
    pass


class ProvisionalTerritoryError(TurfError):
    """A mutation queued on a provisional territory whose create never succeeded."""

    def __init__(self, provisional_id: str):
        super().__init__(f"Territory {provisional_id} was never persisted")
        self.provisional_id = provisional_id
