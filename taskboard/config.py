"""Task Board Configuration Settings."""

import os
from typing import List, Optional

from pydantic_settings import BaseSettings

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(os.path.abspath(__file__)), ".."))


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    # Database
    DATABASE_URL: Optional[str] = None

    # Application
    APP_NAME: str = "Task Board"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    API_PREFIX: str = "/api"
    CORS_ORIGINS: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    # Field limits
    TASK_NAME_MAX_LENGTH: int = 200
    TASK_DESCRIPTION_MAX_LENGTH: int = 1000
    COLUMN_NAME_MAX_LENGTH: int = 100

    # Attachments
    UPLOAD_DIR: str = os.path.join(PROJECT_ROOT, "uploads")
    ATTACHMENT_MAX_BYTES: int = 5 * 1024 * 1024
    ATTACHMENT_ALLOWED_TYPES: str = "image/jpeg,image/jpg,image/png,image/gif,image/webp"

    # Board
    SEED_DEFAULT_COLUMNS: bool = True
    DEFAULT_COLUMNS: str = "To Do,In Progress,Done"
    COLUMN_LOCK_TIMEOUT: float = 10.0

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    @property
    def cors_origins_list(self) -> List[str]:
        """Return the configured CORS origins as a sanitized list."""

        if not self.CORS_ORIGINS:
            return []

        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def allowed_attachment_types(self) -> List[str]:
        return [item.strip().lower() for item in self.ATTACHMENT_ALLOWED_TYPES.split(",") if item.strip()]

    @property
    def default_column_names(self) -> List[str]:
        return [name.strip() for name in self.DEFAULT_COLUMNS.split(",") if name.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
