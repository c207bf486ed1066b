from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "PvP Filter"
    debug: bool = False

    database_url: str = "postgresql+asyncpg://localhost:5432/pvpfilter"

    # Seed data for "reset to defaults"
    default_cards_path: Path = Path(__file__).parent / "data" / "default_cards.json"
    # Seed the default cards when the store is empty at startup
    seed_defaults_when_empty: bool = False

    # Download names are "<basename>-YYYY-MM-DD.<ext>"
    export_basename: str = "anime-cards"


settings = Settings()
