# app/config.py
from pydantic_settings import BaseSettings
from typing import Optional, List
from pydantic import Field

class Settings(BaseSettings):
    DATABASE_URL: str = Field("sqlite+aiosqlite:///./tasks.db")
    SQL_ECHO: bool = Field(False)

    API_PREFIX: str = Field("/api")
    LOG_LEVEL: str = Field("INFO")

    # Front-end origins: comma-separated.
    CORS_ORIGINS: str = Field(
        "http://localhost:3000,http://localhost:3001,http://localhost:3002,"
        "http://localhost:3003,http://localhost:3004"
    )

    # Schema reset on startup needs both the "reset-db" profile and the flag.
    APP_PROFILE: Optional[str] = None
    DB_RESET: bool = Field(False)

    model_config = {
        "env_file": ".env",
        "extra": "allow",
    }

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def should_reset_db(self) -> bool:
        """
        Returns:
          - True → drop and recreate every table at startup
          - False → leave existing data alone
        """
        return self.APP_PROFILE == "reset-db" and self.DB_RESET

settings = Settings()
