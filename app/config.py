"""Application configuration via environment variables."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="", case_sensitive=False)

    app_port: int = Field(8000, alias="APP_PORT")
    changelog_url: str = Field(
        "https://raw.githubusercontent.com/juspay/hyperswitch/main/CHANGELOG.md",
        alias="CHANGELOG_URL",
    )
    changelog_timeout_seconds: float = Field(20.0, alias="CHANGELOG_TIMEOUT_SECONDS")
    changelog_user_agent: str = Field(
        "release-notes-bot/0.1 (local dev)", alias="CHANGELOG_USER_AGENT"
    )
    fix_keywords_raw: str = Field("fix,bug,resolves", alias="FIX_KEYWORDS")
    ai_base_url: str = Field("https://grid.ai.juspay.net", alias="AI_BASE_URL")
    ai_api_key: str = Field("", alias="AI_API_KEY")
    ai_model_id: str = Field("glm-latest", alias="AI_MODEL_ID")
    ai_fallback_model: str = Field("glm-latest", alias="AI_FALLBACK_MODEL")
    ai_temperature: float = Field(0.7, alias="AI_TEMPERATURE")
    enhance_batch_size: int = Field(5, alias="ENHANCE_BATCH_SIZE")

    @property
    def changelog_configured(self) -> bool:
        """Return True if a changelog source URL is set."""
        return bool(self.changelog_url.strip())

    @property
    def fix_keywords(self) -> list[str]:
        """Comma-separated FIX_KEYWORDS as a list of non-empty keywords."""
        return [word.strip() for word in self.fix_keywords_raw.split(",") if word.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
