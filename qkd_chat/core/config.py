from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    PROJECT_NAME: str = "QKD Chat - BB84 Key Agreement Service"
    VERSION: str = "1.0.0"

    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8080)

    DEFAULT_KEY_BITS: int = Field(default=256, ge=0)
    MAX_KEY_BITS: int = Field(default=100_000, ge=0)

    LOG_LEVEL: str = Field(default="INFO")
    CORS_ALLOW_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    # Browser client directory, mounted at /ui when present
    STATIC_DIR: Optional[Path] = Field(default=None)

settings = Settings()
