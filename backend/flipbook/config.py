# backend/flipbook/config.py
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./flipbook.db"  # Default if not in .env
    DATABASE_SSL: Optional[bool] = None  # None = decide from the host

    # HTTP server
    HOST: str = "0.0.0.0"
    PORT: int = 4000
    TRUST_PROXY: bool = True
    CORS_ORIGIN: Optional[str] = None  # Comma separated, unset allows any origin

    # Uploads
    PUBLIC_BASE_URL: Optional[str] = None  # Inferred from the request if unset
    MAX_UPLOAD_SIZE: int = 8 * 1024 * 1024

    # Logging
    LOG_DIR: Path = Path("logs")
    LOG_LEVEL: str = "INFO"

    # Client
    API_BASE_URL: str = "http://localhost:4000/api"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    def model_post_init(self, __context) -> None:
        """Post initialization hook to normalise paths"""
        if isinstance(self.LOG_DIR, str):
            self.LOG_DIR = Path(self.LOG_DIR)

    @property
    def cors_origins(self) -> List[str]:
        """Allowed origins for CORS, ["*"] when none are configured"""
        if not self.CORS_ORIGIN:
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGIN.split(",") if origin.strip()]


settings = Settings()
