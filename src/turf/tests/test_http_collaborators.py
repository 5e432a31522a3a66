from src.config.settings import Settings
from src.turf.adapters.http_collaborators import build_http_collaborators
from src.turf.tests.test_http_territory_store import FakeResponse, FakeSession


def test_settings_reach_client_store_and_directory(monkeypatch):
    monkeypatch.setenv("TURF_API_BASE_URL", "https://ops.example.org/api/")
    monkeypatch.setenv("TURF_API_TOKEN", "field-token")
    monkeypatch.setenv("TURF_HTTP_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("TURF_TERRITORIES_PATH", "v2/turfs")
    monkeypatch.setenv("TURF_TEAMS_PATH", "v2/crews")
    session = FakeSession()
    session.queue(FakeResponse(200, []))
    session.queue(FakeResponse(200, [{"id": 3, "name": "Lagos North"}]))

    collaborators = build_http_collaborators(Settings(), session=session)
    collaborators.store.list()
    teams = collaborators.team_directory.list_teams()

    assert collaborators.client.timeout == 2.5
    assert [r["url"] for r in session.requests] == [
        "https://ops.example.org/api/v2/turfs",
        "https://ops.example.org/api/v2/crews",
    ]
    assert all(r["headers"]["Authorization"] == "Bearer field-token" for r in session.requests)
    assert all(r["timeout"] == 2.5 for r in session.requests)
    assert teams[0].name == "Lagos North"


def test_retry_budget_applies_to_reads_only(monkeypatch):
    monkeypatch.setenv("TURF_HTTP_MAX_RETRIES", "5")

    collaborators = build_http_collaborators(Settings())

    retries = collaborators.client.session.get_adapter("https://ops.example.org").max_retries
    assert retries.total == 5
    assert list(retries.allowed_methods) == ["GET"]
