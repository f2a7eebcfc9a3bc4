from __future__ import annotations
import os
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Base .env load first
load_dotenv()

PACKAGE_ROOT = Path(__file__).resolve().parents[1]

_ENV_OVERRIDABLE = ("api_base_url", "api_timeout_s", "company_name", "company_tagline")
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "SUCCESS", "INFO", "DEBUG", "TRACE"}


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # ignore unknown env keys to avoid crashes
    )

    # Environment
    environment: Literal["development", "staging", "production", "test"] = Field(default="development")
    log_level: str = Field(default="INFO")
    app_port: int = Field(default=8501, ge=1, le=65535)

    # Paths
    data_dir: Path = Field(default=Path(os.getenv("DATA_DIR", "data")))
    logs_dir: Path = Field(default=Path(os.getenv("LOGS_DIR", "data/output")))
    log_file: Path | None = None
    pdf_dir: Path | None = None
    reference_dir: Path = Field(default=PACKAGE_ROOT / "catalog" / "data")

    # Receipts backend
    api_base_url: str = Field(default=os.getenv("API_BASE_URL", "http://localhost:8080"))
    api_prefix: str = Field(default="/api")
    api_timeout_s: float = Field(default=15.0, gt=0)

    # Wizard behaviour
    receipt_prefix: str = Field(default="ECS")
    investor_search_limit: int = Field(default=50, ge=1)
    investor_preview_limit: int = Field(default=25, ge=1)
    pdf_debounce_ms: int = Field(default=150, ge=0)

    # Receipt branding
    company_name: str = Field(default="ECS Financial")
    company_tagline: str = Field(default="AMFI Registered Mutual Fund Distributor")
    receipt_logo_path: Path | None = None

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = str(value or "INFO").strip().upper()
        # Unknown levels fall back to INFO rather than failing at import
        return level if level in _LOG_LEVELS else "INFO"

    @field_validator("api_base_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("receipt_prefix", mode="after")
    @classmethod
    def _clean_prefix(cls, value: str) -> str:
        return value.strip().upper() or "ECS"

    @model_validator(mode="after")
    def _derive_paths_and_ensure_dirs(self) -> "AppConfig":
        # .env.<environment> overrides the base .env for the backend and branding keys
        env_file_variant = Path(f".env.{self.environment}")
        if env_file_variant.exists():
            load_dotenv(dotenv_path=env_file_variant, override=True)
            for name in _ENV_OVERRIDABLE:
                raw = os.getenv(name.upper())
                if raw:
                    setattr(self, name, type(getattr(self, name))(raw))
            self.api_base_url = self.api_base_url.rstrip("/")

        if self.log_file is None:
            self.log_file = self.logs_dir / "app.log"
        if self.pdf_dir is None:
            self.pdf_dir = self.data_dir / "receipts"

        # Ensure directories exist
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(parents=True, exist_ok=True)
        self.pdf_dir.mkdir(parents=True, exist_ok=True)
        return self


config = AppConfig()
