from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class TerritoryStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Territory:
    """
    A named, geometry-bearing territory as held by the Territory Store.
    `provisional` marks the local copy made by a draw gesture before the
    store has assigned an id.
    """
    id: str
    name: str
    color: str
    geometry: Optional[Dict[str, Any]] = None
    description: Optional[str] = None
    team_id: Optional[int] = None
    status: TerritoryStatus = TerritoryStatus.ACTIVE
    assigned_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    provisional: bool = False

    def with_geometry(self, geometry: Dict[str, Any]) -> "Territory":
        return replace(self, geometry=geometry)


@dataclass(frozen=True)
class TerritoryDraft:
    """
    Create payload. Never carries an id: the store is the id authority.
    """
    name: str
    geometry: Dict[str, Any]
    color: str
    description: Optional[str] = None
    team_id: Optional[int] = None
    status: TerritoryStatus = TerritoryStatus.ACTIVE

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "geojson": self.geometry,
            "color": self.color,
            "status": self.status.value,
        }
        if self.description is not None:
            payload["description"] = self.description
        if self.team_id is not None:
            payload["teamId"] = self.team_id
        return payload


_UNSET: Any = object()


@dataclass(frozen=True)
class TerritoryPatch:
    """
    Partial update. Only fields that were explicitly given are sent;
    passing None for an optional field clears it on the store.
    """
    name: Any = _UNSET
    description: Any = _UNSET
    geometry: Any = _UNSET
    color: Any = _UNSET
    team_id: Any = _UNSET
    status: Any = _UNSET
    assigned_date: Any = _UNSET
    completed_date: Any = _UNSET

    _WIRE_NAMES = {
        "name": "name",
        "description": "description",
        "geometry": "geojson",
        "color": "color",
        "team_id": "teamId",
        "status": "status",
        "assigned_date": "assignedDate",
        "completed_date": "completedDate",
    }

    def fields(self) -> Dict[str, Any]:
        return {
            attr: getattr(self, attr)
            for attr in self._WIRE_NAMES
            if getattr(self, attr) is not _UNSET
        }

    def is_empty(self) -> bool:
        return not self.fields()

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        for attr, value in self.fields().items():
            if isinstance(value, TerritoryStatus):
                value = value.value
            elif isinstance(value, datetime):
                value = value.isoformat()
            payload[self._WIRE_NAMES[attr]] = value
        return payload

    def apply_to(self, territory: Territory) -> Territory:
        changes = dict(self.fields())
        if "status" in changes:
            changes["status"] = parse_status(changes["status"])
        return replace(territory, **changes)


@dataclass(frozen=True)
class Team:
    id: int
    name: str
    metadata: Dict[str, Any] = field(default_factory=dict)


def parse_status(raw: Any) -> TerritoryStatus:
    if isinstance(raw, TerritoryStatus):
        return raw
    try:
        return TerritoryStatus(str(raw).lower())
    except ValueError:
        return TerritoryStatus.ACTIVE


def _parse_datetime(raw: Any) -> Optional[datetime]:
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        return raw
    text = str(raw)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _optional_int(raw: Any) -> Optional[int]:
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def territory_from_payload(payload: Dict[str, Any]) -> Territory:
    geometry = payload.get("geojson")
    if geometry is None:
        geometry = payload.get("geometry")

    return Territory(
        id=str(payload["id"]),
        name=str(payload.get("name", "")),
        color=str(payload.get("color", "")),
        geometry=geometry if isinstance(geometry, dict) else None,
        description=payload.get("description"),
        team_id=_optional_int(payload.get("teamId")),
        status=parse_status(payload.get("status", TerritoryStatus.ACTIVE.value)),
        assigned_date=_parse_datetime(payload.get("assignedDate")),
        completed_date=_parse_datetime(payload.get("completedDate")),
        created_by=_optional_int(payload.get("createdBy")),
        created_at=_parse_datetime(payload.get("createdAt")),
    )


def team_from_payload(payload: Dict[str, Any]) -> Team:
    extra = {k: v for k, v in payload.items() if k not in ("id", "name")}
    return Team(id=int(payload["id"]), name=str(payload.get("name", "")), metadata=extra)
