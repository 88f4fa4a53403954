"""
Configuration management for Polaris.

Uses pydantic-settings for environment variable binding.
All settings can be overridden via environment variables with POLARIS_ prefix.
"""

import logging
import sys
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable binding."""

    model_config = SettingsConfigDict(
        env_prefix="POLARIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================
    # Data Storage
    # ==========================================
    data_dir: Path = Path.home() / ".polaris"
    """Root directory for the project and conversation databases."""

    internal_key: str = ""
    """Credential required by the message workflow. Empty means not configured."""

    # ==========================================
    # LLM Configuration
    # ==========================================
    default_llm: Literal["ollama", "openai", "anthropic"] = "ollama"

    # Ollama (OpenAI-compatible endpoint)
    ollama_base_url: str = "http://localhost:11434/v1"
    ollama_model: str = "deepseek-coder:6.7b"

    # OpenAI models
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"

    # Anthropic models
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-20250514"

    # ==========================================
    # Workflow
    # ==========================================
    db_sync_delay_seconds: float = 1.0
    """Pause before the first read so the triggering writes are visible."""

    recent_messages_limit: int = 10
    """How many earlier messages are replayed into the system prompt."""

    step_retries: int = 2
    """Extra attempts for a failing workflow step."""

    default_conversation_title: str = "New conversation"

    # ==========================================
    # Logging
    # ==========================================
    log_level: str = "INFO"
    log_file: Path | None = None

    # ==========================================
    # Computed Properties
    # ==========================================
    @property
    def files_db_path(self) -> Path:
        return self.data_dir / "files.db"

    @property
    def conversations_db_path(self) -> Path:
        return self.data_dir / "conversations.db"

    def ensure_directories(self) -> None:
        """Create the data directory if it doesn't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)


# Global settings instance
settings = Settings()


def setup_logging(level: str | None = None) -> None:
    """Configure application logging."""
    log_level = level or settings.log_level

    handlers: list[logging.Handler] = [
        logging.StreamHandler(sys.stdout),
    ]

    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file))

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        handlers=handlers,
    )

    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
    logging.getLogger("anthropic").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    return logging.getLogger(f"polaris.{name}")
