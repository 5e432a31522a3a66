from uuid import uuid4

from src.turf.domain.layer_handle import LayerHandle
from src.turf.domain.territory import Territory
from src.turf.services.binding_table import LayerBindingTable


def new_handle() -> LayerHandle:
    return LayerHandle(uuid4())


def make_territory(territory_id: str) -> Territory:
    return Territory(id=territory_id, name=f"T{territory_id}", color="#FF6B6B")


def test_bind_and_resolve():
    table = LayerBindingTable()
    handle = new_handle()

    table.bind(handle, "1")

    assert table.resolve(handle) == "1"
    assert table.handle_for("1") == handle
    assert handle in table


def test_bind_overwrites_previous_entry_for_handle():
    table = LayerBindingTable()
    handle = new_handle()

    table.bind(handle, "1")
    table.bind(handle, "2")

    assert table.resolve(handle) == "2"
    assert table.handle_for("1") is None
    assert len(table) == 1


def test_bind_keeps_one_shape_per_territory():
    table = LayerBindingTable()
    first, second = new_handle(), new_handle()

    table.bind(first, "1")
    table.bind(second, "1")

    assert table.resolve(first) is None
    assert table.resolve(second) == "1"
    assert len(table) == 1


def test_unbind_returns_territory_id():
    table = LayerBindingTable()
    handle = new_handle()
    table.bind(handle, "1")

    assert table.unbind(handle) == "1"
    assert table.resolve(handle) is None
    assert table.handle_for("1") is None
    assert table.unbind(handle) is None


def test_promote_keeps_the_same_shape():
    table = LayerBindingTable()
    handle = new_handle()
    table.bind(handle, "prov-1")

    assert table.promote("prov-1", "42") is True
    assert table.resolve(handle) == "42"
    assert table.handle_for("prov-1") is None


def test_promote_missing_provisional_is_reported():
    table = LayerBindingTable()

    assert table.promote("prov-1", "42") is False
    assert len(table) == 0


def test_rebuild_from_replaces_all_entries_and_skips_undrawable():
    table = LayerBindingTable()
    stale = new_handle()
    table.bind(stale, "old")
    drawn = {}

    def render(territory):
        if territory.id == "2":
            return None
        handle = new_handle()
        drawn[territory.id] = handle
        return handle

    bound = table.rebuild_from([make_territory("1"), make_territory("2"), make_territory("3")], render)

    assert bound == 2
    assert table.resolve(stale) is None
    assert sorted(tid for _, tid in table.entries()) == ["1", "3"]
    assert table.handle_for("1") == drawn["1"]
    assert table.handle_for("2") is None
