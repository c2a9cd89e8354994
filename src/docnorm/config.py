"""Configuration management using pydantic-settings."""

import tomllib
from enum import Enum
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_OUTPUT_DIR = "output"
DEFAULT_HISTORY_FILE = "~/.local/share/docnorm/history.yaml"
DEFAULT_ALLOWED_EXTENSIONS = [
    ".pdf", ".doc", ".docx", ".txt", ".md", ".rtf", ".odt",
    ".jpg", ".jpeg", ".png", ".bmp", ".gif", ".tiff",
]
CONFIG_PATH = Path("~/.config/docnorm/config.toml").expanduser()


class LLMProvider(str, Enum):
    """Available completion providers."""

    OLLAMA = "ollama"
    CLAUDE_CLI = "claude-cli"
    CLAUDE_API = "claude-api"


class LLMConfig(BaseSettings):
    """Completion provider configuration."""

    model_config = SettingsConfigDict(env_prefix="DOCNORM_LLM_")

    provider: LLMProvider = LLMProvider.OLLAMA
    model: str = "gemma3:4b"
    ollama_url: str = "http://localhost:11434"
    temperature: float = Field(default=0.3, ge=0.0, le=1.0)
    normalize_max_tokens: int = Field(default=4000, gt=0)
    validate_max_tokens: int = Field(default=2000, gt=0)


class ProcessingConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DOCNORM_PROCESSING_")

    max_file_size_mb: int = Field(default=50, ge=1, le=100)
    allowed_extensions: list[str] = DEFAULT_ALLOWED_EXTENSIONS
    check_content: bool = True
    processing_timeout_seconds: int = Field(default=120, ge=1, le=300)
    max_concurrent_documents: int = Field(default=3, ge=1)
    persist_failures: bool = False
    strict_placeholders: bool = False

    @field_validator("allowed_extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        return [e.lower() if e.startswith(".") else f".{e.lower()}" for e in v]

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024


class PathsConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DOCNORM_PATHS_")

    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    history_file: Path = Path(DEFAULT_HISTORY_FILE).expanduser()
    log_file: Path | None = None

    @field_validator("output_dir", "history_file", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path | None) -> Path | None:
        if v is None:
            return None
        return Path(v).expanduser()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DOCNORM_")

    llm: LLMConfig = LLMConfig()
    processing: ProcessingConfig = ProcessingConfig()
    paths: PathsConfig = PathsConfig()


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings from TOML file, falling back to defaults."""
    path = config_path or CONFIG_PATH

    if path.exists():
        with open(path, "rb") as f:
            data = tomllib.load(f)

        llm = LLMConfig(**data.get("llm", {}))
        processing = ProcessingConfig(**data.get("processing", {}))
        paths = PathsConfig(**data.get("paths", {}))
        return Settings(llm=llm, processing=processing, paths=paths)

    return Settings()
