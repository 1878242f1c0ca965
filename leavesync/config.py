from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).resolve().parent.parent / ".env.local"


class Settings(BaseSettings):
    # Environment settings
    environment: str = "development"
    debug: bool = False
    LOG_LEVEL: str = "INFO"
    PORT: int = 4000

    # Record store
    DATABASE_URL: str = "postgresql://localhost:5432/leavesync"

    # =================================================================
    # DATABASE POOL SETTINGS
    # =================================================================
    DB_POOL_MIN_SIZE: int = 2
    DB_POOL_MAX_SIZE: int = 10
    DB_POOL_TIMEOUT: float = 30.0
    DB_POOL_MAX_IDLE: float = 600.0  # 10 minutes
    DB_POOL_MAX_LIFETIME: float = 3600.0  # 1 hour

    # Holiday source (Calendarific)
    CALENDARIFIC_API_KEY: str | None = None
    CALENDARIFIC_BASE_URL: str = "https://calendarific.com/api/v2"
    HOLIDAY_COUNTRY: str = "MY"
    HOLIDAY_UNIVERSAL_REGION: str = "National"
    HOLIDAY_FETCH_TIMEOUT: float = 15.0
    HOLIDAY_FETCH_MAX_RETRIES: int = 3
    HOLIDAY_FETCH_BACKOFF: float = 0.5

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def holiday_source_enabled(self) -> bool:
        """External holiday fetches only run when an API key is configured."""
        return bool(self.CALENDARIFIC_API_KEY)

    def get_db_pool_config(self) -> dict:
        """
        Get database pool configuration.
        Adjust environment-specific settings based on self.environment.
        """
        config = {
            "min_size": self.DB_POOL_MIN_SIZE,
            "max_size": self.DB_POOL_MAX_SIZE,
            "timeout": self.DB_POOL_TIMEOUT,
            "max_idle": self.DB_POOL_MAX_IDLE,
            "max_lifetime": self.DB_POOL_MAX_LIFETIME,
        }

        if self.environment == "development":
            config.update(
                {
                    "min_size": 1,
                    "max_size": 5,
                    "timeout": 15.0,
                }
            )

        return config


settings = Settings()
