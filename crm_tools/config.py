from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).resolve().parent.parent / ".env.local"

DEFAULT_HUBSPOT_API_BASE_URL = "https://api.hubapi.com"


class Settings(BaseSettings):
    # Environment settings
    environment: str = "development"
    debug: bool = False
    LOG_LEVEL: str = "INFO"

    # HubSpot private app settings
    HUBSPOT_PRIVATE_APP_TOKEN: str | None = None
    HUBSPOT_API_BASE_URL: str | None = None
    HUBSPOT_REQUEST_TIMEOUT: float = 30.0

    # =================================================================
    # ACTIVITY SUMMARY SETTINGS
    # =================================================================
    ACTIVITY_SAMPLE_CAP: int = 5  # detail fetches per engagement kind
    ACTIVITY_SUMMARY_TIMEOUT: float = 60.0

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def hubspot_base_url(self) -> str:
        """HubSpot API base URL with trailing slashes removed."""
        base = self.HUBSPOT_API_BASE_URL or DEFAULT_HUBSPOT_API_BASE_URL
        return base.rstrip("/")

    def has_hubspot_token(self) -> bool:
        return bool(self.HUBSPOT_PRIVATE_APP_TOKEN)


settings = Settings()
