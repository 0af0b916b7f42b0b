from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """General settings, loaded from the environment and an optional .env file."""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[2] / ".env",
        env_file_encoding="utf-8",
        env_prefix="PDFMARK_",
        extra="ignore",
    )

    app_name: str = "pdfmark"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    default_output: Path = Path("output.pdf")
    demo_pages: int = Field(5, ge=4)
    csv_encodings: list[str] = Field(default_factory=lambda: ["utf-8-sig", "cp1252", "latin-1"], min_length=1)

    max_upload_bytes: int = Field(50 * 1024 * 1024, gt=0)
    allow_origins: list[str] = Field(default_factory=lambda: ["*"])


@lru_cache()
def get_settings() -> Settings:
    return Settings()
