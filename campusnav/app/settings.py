# campusnav/app/settings.py
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Env-driven settings; CAMPUSNAV_* variables or a local .env file."""

    model_config = SettingsConfigDict(
        env_prefix="CAMPUSNAV_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: str = "data/graphs"
    log_level: str = "INFO"

    # Penalties used when a request only sends the app toggles
    outdoor_penalty: float = Field(default=200.0, ge=0.0)
    campus_boundary_penalty: float = Field(default=5000.0, ge=0.0)

    route_cache_max_entries: int = Field(default=256, ge=1)
    search_min_query_length: int = Field(default=2, ge=1)
    search_max_results: int = Field(default=5, ge=1)


settings = Settings()
