"""Centralized configuration for grounding-index using Pydantic Settings."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_extensions(raw: str) -> list[str]:
    extensions: list[str] = []
    for item in raw.split(","):
        ext = item.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = f".{ext}"
        extensions.append(ext)
    return extensions


class Settings(BaseSettings):
    """Typed configuration loaded from ``GROUNDING_INDEX_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GROUNDING_INDEX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Ranking
    similarity_threshold: float = Field(
        default=0.1,
        ge=0.0,
        lt=1.0,
        description="Results must score strictly above this cosine similarity",
    )
    default_limit: int = Field(default=3, ge=1, description="Results returned when the caller gives no limit")
    analyzer: str = Field(default="identifier", description="Analyzer used for documents and queries")

    # Indexing
    snippet_length: int = Field(default=200, ge=1, description="Characters of raw content kept as the snippet")
    text_extensions: str = Field(
        default=".txt,.md",
        description="Comma-separated extensions vectorized even when the file is not categorized as code",
    )

    # Corpus loading
    code_extensions: str = Field(default=".py", description="Comma-separated extensions classified as code")
    max_file_bytes: int = Field(default=1_000_000, ge=1, description="Larger files are loaded as binary")

    # Persistence
    state_path: Path | None = Field(default=None, description="Default location of the cached index state")

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=False, description="Emit JSON log lines")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return normalized.lower()

    def get_text_extensions(self) -> list[str]:
        """Extensions whose files are always vectorized."""
        return _split_extensions(self.text_extensions)

    def get_code_extensions(self) -> list[str]:
        """Extensions classified as source code."""
        return _split_extensions(self.code_extensions)
