from src.config.settings import Settings


def test_defaults_match_field_deployment():
    settings = Settings()

    assert settings.DEFAULT_CENTER_LAT == 6.5244
    assert settings.USE_HTTP_STORE is False
    assert len(settings.TERRITORY_PALETTE) == 8


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("TURF_API_BASE_URL", "https://ops.example.org/api")
    monkeypatch.setenv("TURF_CURRENT_USER_ID", "17")

    settings = Settings()

    assert settings.API_BASE_URL == "https://ops.example.org/api"
    assert settings.CURRENT_USER_ID == 17
