from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Job Board"
    app_env: str = "development"
    app_host: str = "0.0.0.0"
    app_port: int = 5000
    log_level: str = "INFO"

    database_url: str = "sqlite:///./data/jobboard.db"
    data_dir: Path = Path("./data")
    upload_dir: Path = Path("./data/uploads")
    max_attachment_bytes: int = 10 * 1024 * 1024

    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 7

    cors_origins: str = "*"

    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_pass: str = ""
    smtp_secure: bool = False
    smtp_from: str = ""
    smtp_timeout_sec: int = 30

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, value: str) -> str:
        allowed = {"development", "staging", "production", "test"}
        if value not in allowed:
            raise ValueError(f"app_env must be one of {sorted(allowed)}")
        return value

    @field_validator("database_url")
    @classmethod
    def normalize_database_url(cls, value: str) -> str:
        if value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql://", 1)
        return value

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def smtp_configured(self) -> bool:
        return bool(self.smtp_host and self.smtp_port and self.smtp_user and self.smtp_pass)

    @property
    def smtp_use_ssl(self) -> bool:
        return self.smtp_secure or self.smtp_port == 465

    @property
    def smtp_sender(self) -> str:
        return self.smtp_from or self.smtp_user


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
