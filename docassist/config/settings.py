from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    scheduler_backend: str = "thread"

    processing_delay_min_ms: int = 2000
    processing_delay_max_ms: int = 5000

    typing_delay_per_char_ms: int = 15
    typing_delay_max_ms: int = 3000
    typing_delay_base_ms: int = 800

    random_seed: int | None = None
    profiles_dir: Path | None = None

    @model_validator(mode="after")
    def _check_delays(self) -> "Settings":
        delays = {
            "processing_delay_min_ms": self.processing_delay_min_ms,
            "processing_delay_max_ms": self.processing_delay_max_ms,
            "typing_delay_per_char_ms": self.typing_delay_per_char_ms,
            "typing_delay_max_ms": self.typing_delay_max_ms,
            "typing_delay_base_ms": self.typing_delay_base_ms,
        }
        for name, value in delays.items():
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        if self.processing_delay_min_ms > self.processing_delay_max_ms:
            raise ValueError(
                "processing_delay_min_ms must not exceed processing_delay_max_ms"
            )
        return self
