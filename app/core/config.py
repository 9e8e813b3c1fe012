from typing import List, Literal
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import computed_field


class Settings(BaseSettings):
    # App Config
    PROJECT_NAME: str = "ShadeMatch"
    ENVIRONMENT: Literal["dev", "prod"] = "dev"
    LOG_LEVEL: str = "INFO"
    API_PREFIX: str = "/api"

    # Server (used by run.py)
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    RELOAD: bool = True

    # Frontend dev servers allowed to call the API
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:8080",
        "http://localhost:3000",
    ]

    # Pixel sampling limits
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024
    MAX_SAMPLE_RADIUS: int = 10

    @computed_field
    @property
    def DEBUG(self) -> bool:
        """Reload and verbose error output are only for local development."""
        return self.ENVIRONMENT == "dev"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


# Globally accessible settings instance
settings = Settings()
