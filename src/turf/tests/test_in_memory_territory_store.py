from datetime import datetime, timezone

import pytest

from src.turf.adapters.in_memory_territory_store import InMemoryTerritoryStore
from src.turf.domain.errors import TerritoryNotFoundError
from src.turf.domain.territory import TerritoryDraft, TerritoryPatch
from src.turf.interfaces.turf_time_source import TurfTimeSource


class FixedTimeSource(TurfTimeSource):
    def __init__(self, fixed_time: datetime):
        self.fixed_time = fixed_time

    def now(self) -> datetime:
        return self.fixed_time


@pytest.fixture
def store():
    return InMemoryTerritoryStore(created_by=5, time_source=FixedTimeSource(datetime(2024, 1, 1, tzinfo=timezone.utc)))


def draft(name: str) -> TerritoryDraft:
    return TerritoryDraft(name=name, geometry={"type": "Feature"}, color="#FF6B6B")


def test_create_assigns_sequential_ids(store):
    first = store.create(draft("A"))
    second = store.create(draft("B"))

    assert (first.id, second.id) == ("1", "2")
    assert first.created_by == 5
    assert first.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert [t.name for t in store.list()] == ["A", "B"]


def test_update_cannot_touch_identity(store):
    created = store.create(draft("A"))

    updated = store.update(created.id, TerritoryPatch(name="A2"))

    assert updated.id == created.id
    assert updated.created_by == 5
    assert updated.created_at == created.created_at


def test_unknown_ids_raise_not_found(store):
    with pytest.raises(TerritoryNotFoundError):
        store.update("404", TerritoryPatch(name="x"))
    with pytest.raises(TerritoryNotFoundError):
        store.delete("404")
