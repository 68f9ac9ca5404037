"""Coursekit application configuration using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Coursekit application settings.

    All fields can be overridden via environment variables with
    the COURSEKIT_ prefix (e.g., COURSEKIT_DEFAULT_SEED).
    """

    host: str = "0.0.0.0"
    port: int = 8000
    plugin_dir: Path = Path("plugins")
    sample_data_dir: Path = Path("data")
    cors_origins: list[str] = ["http://localhost:3000"]
    behind_proxy: bool = False  # Same-origin deployment, no CORS needed
    log_level: str = "INFO"

    # Classifier widget defaults
    default_seed: int = 42
    default_grid_steps: int = Field(100, ge=1)
    score_floor: float = 0.01
    score_ceiling: float = 0.99
    max_samples: int = Field(50_000, ge=1)

    model_config = {
        "env_prefix": "COURSEKIT_",
        "env_file": ".env",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (singleton)."""
    return Settings()
