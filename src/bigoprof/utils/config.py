from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ambiguity_tolerance: float = Field(0.05, ge=0.0)
    tie_tolerance: float = Field(1e-9, ge=0.0)
    timing_repeats: int = Field(5, ge=1)
    log_dir: str = "logs"
    log_level: str = "INFO"
    log_to_file: bool = True

    model_config = SettingsConfigDict(
        env_prefix="BIGOPROF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

@lru_cache
def get_settings() -> Settings:
    return Settings()  # env vars automatically picked up
