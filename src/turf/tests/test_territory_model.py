from datetime import datetime, timezone

from src.turf.domain.territory import (
    Territory,
    TerritoryDraft,
    TerritoryPatch,
    TerritoryStatus,
    parse_status,
    territory_from_payload,
)


def test_draft_payload_omits_unset_optionals():
    draft = TerritoryDraft(name="Ikeja", geometry={"type": "Feature"}, color="#FF6B6B")

    assert draft.to_payload() == {
        "name": "Ikeja",
        "geojson": {"type": "Feature"},
        "color": "#FF6B6B",
        "status": "active",
    }


def test_draft_payload_includes_team_and_description():
    draft = TerritoryDraft(
        name="Ikeja",
        geometry={"type": "Feature"},
        color="#FF6B6B",
        description="Market",
        team_id=3,
        status=TerritoryStatus.INACTIVE,
    )

    payload = draft.to_payload()

    assert payload["teamId"] == 3
    assert payload["description"] == "Market"
    assert payload["status"] == "inactive"
    assert "id" not in payload


def test_patch_serializes_only_given_fields():
    when = datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc)
    patch = TerritoryPatch(status=TerritoryStatus.COMPLETED, completed_date=when, description=None)

    assert patch.to_payload() == {
        "description": None,
        "status": "completed",
        "completedDate": "2024-05-01T08:30:00+00:00",
    }
    assert TerritoryPatch().is_empty()


def test_patch_apply_keeps_untouched_fields():
    territory = Territory(id="7", name="Agege", color="#45B7D1", team_id=3, created_by=9)

    updated = TerritoryPatch(name="Agege West", status="completed").apply_to(territory)

    assert updated.name == "Agege West"
    assert updated.status == TerritoryStatus.COMPLETED
    assert updated.team_id == 3
    assert updated.created_by == 9


def test_payload_accepts_geometry_alias_and_unknown_status():
    territory = territory_from_payload({
        "id": "12",
        "name": "Oshodi",
        "geometry": {"type": "Feature"},
        "color": "#F7DC6F",
        "status": "archived",
        "teamId": "",
    })

    assert territory.geometry == {"type": "Feature"}
    assert territory.status == TerritoryStatus.ACTIVE
    assert territory.team_id is None


def test_parse_status_is_case_insensitive():
    assert parse_status("Inactive") == TerritoryStatus.INACTIVE
    assert parse_status(TerritoryStatus.COMPLETED) == TerritoryStatus.COMPLETED
