from datetime import timedelta
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_env: str = "dev"
    log_level: str = "INFO"

    # Infra
    database_url: str = "postgresql://app:app@db:5432/app"
    migrate_on_startup: bool = False

    # Security / policies
    hash_salt: str = "1zJT7As5HyRs9rCzbRXE"
    bcrypt_rounds: int = 10
    password_lifetime_seconds: int = 2 * 12 * 30 * 24 * 60 * 60

    # Blocker
    blocker_interval_seconds: float = Field(10.0, gt=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def password_lifetime(self) -> timedelta:
        return timedelta(seconds=self.password_lifetime_seconds)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
