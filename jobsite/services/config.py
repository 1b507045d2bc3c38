from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    api_port: int = 8000
    frontend_url: str = "http://localhost:5173"
    log_level: str = "INFO"
    log_file: Optional[str] = None
    default_project_id: str = "proj-sample-123"

    # Entries shown in the dashboard activity feed
    recent_activity_limit: int = 5

    @property
    def resolved_log_file(self) -> Optional[Path]:
        if not self.log_file:
            return None
        path = Path(self.log_file)
        if path.is_absolute():
            return path
        return Path(__file__).resolve().parents[2] / path

    @property
    def allowed_origins(self) -> list[str]:
        return [self.frontend_url, "http://127.0.0.1:5173", "http://localhost:5173"]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
