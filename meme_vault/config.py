from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    app_name: str = Field(
        default="Meme Vault",
        description="Application name",
    )
    database_url: str = Field(
        default="sqlite+aiosqlite:///./meme_vault.db",
        description="Database holding the key-value storage slots",
    )
    support_path: Path = Field(
        default=Path("./.meme_vault"),
        description="Directory owned by the vault; imported images live under it",
    )
    storage_key: str = Field(
        default="memes",
        description="Name of the storage slot holding the saved memes",
    )
    host: str = Field(
        default="127.0.0.1",
        description="Interface the API server binds to",
    )
    port: int = Field(
        default=8000,
        description="Port the API server listens on",
    )
    log_level: str = Field(
        default="INFO",
        description="Root logging level",
    )
    mirror_host: str = Field(
        default="fxtwitter.com",
        description="Host serving Open Graph tags for Twitter/X posts",
    )
    mirror_user_agent: str = Field(
        default="TelegramBot (like TwitterBot)",
        description="User-Agent the mirror answers with preview metadata",
    )
    browser_user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
        ),
        description="User-Agent sent to every other host",
    )

    model_config = SettingsConfigDict(
        env_prefix="MEME_VAULT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def images_dir(self) -> Path:
        return self.support_path / "images"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
