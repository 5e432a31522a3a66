from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TURF_")

    # Territory store
    API_BASE_URL: str = "http://localhost:5000/api"
    API_TOKEN: Optional[str] = None
    TERRITORIES_PATH: str = "territories"
    TEAMS_PATH: str = "teams"
    HTTP_TIMEOUT_SECONDS: float = 10.0
    HTTP_MAX_RETRIES: int = 3  # Reads only
    USE_HTTP_STORE: bool = False  # run_dev uses the in-memory store otherwise

    # Map session
    CURRENT_USER_ID: int = 1
    TERRITORY_PALETTE: List[str] = [
        "#FF6B6B",
        "#4ECDC4",
        "#45B7D1",
        "#96CEB4",
        "#FFEAA7",
        "#DDA0DD",
        "#98D8C8",
        "#F7DC6F",
    ]
    MUTATION_WORKERS: int = 4

    DEFAULT_CENTER_LAT: float = 6.5244  # Lagos
    DEFAULT_CENTER_LNG: float = 3.3792

    LOG_LEVEL: str = "INFO"


settings = Settings()
