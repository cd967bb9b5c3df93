"""Simplified configuration management."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

_ROOT_DIR = Path(__file__).resolve().parent.parent

DEFAULT_APP_NAME = "MCP Chat Client"
DEFAULT_APP_VERSION = "0.1.0"
DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_HISTORY_WINDOW = 10

API_KEY_ENV_VAR = "OPENAI_API_KEY"


def read_env_file(path: Path) -> Dict[str, str]:
    """Parse ``KEY=VALUE`` lines from a dotenv-style file.

    Blank lines and ``#`` comments are skipped and only the first ``=`` splits
    the key from the value, so values may themselves contain ``=``.
    """
    values: Dict[str, str] = {}
    if not path.is_file():
        return values
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError:
        return values
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        key = key.strip()
        if key:
            values[key] = value.strip()
    return values


def _env_file_path() -> Path:
    override = os.getenv("MCP_CLIENT_ENV_FILE")
    return Path(override) if override else _ROOT_DIR / ".env"


def resolve_api_key(env_file: Optional[Path] = None) -> str:
    """Return the API key from the environment, falling back to the dotenv file."""
    key = (os.getenv(API_KEY_ENV_VAR) or "").strip()
    if key:
        return key
    return read_env_file(env_file or _env_file_path()).get(API_KEY_ENV_VAR, "")


def _env_int(name: str, fallback: int) -> int:
    try:
        return int(os.getenv(name, str(fallback)))
    except (TypeError, ValueError):
        return fallback


def _env_float(name: str, fallback: float) -> float:
    try:
        return float(os.getenv(name, str(fallback)))
    except (TypeError, ValueError):
        return fallback


def _get_port() -> int:
    port = os.getenv("PORT") or os.getenv("MCP_CLIENT_PORT")
    if port:
        try:
            return int(port)
        except ValueError:
            pass
    return 8001


def _get_data_dir() -> Path:
    override = os.getenv("MCP_CLIENT_DATA_DIR")
    return Path(override) if override else _ROOT_DIR / "data"


class Settings(BaseModel):
    """Application settings with lightweight env fallbacks."""

    # App metadata
    app_name: str = Field(default=DEFAULT_APP_NAME)
    app_version: str = Field(default=DEFAULT_APP_VERSION)

    # Server runtime
    server_host: str = Field(default_factory=lambda: os.getenv("MCP_CLIENT_HOST", "0.0.0.0"))
    server_port: int = Field(default_factory=_get_port)

    # Provider
    openai_api_key: str = Field(default_factory=resolve_api_key)
    openai_base_url: str = Field(default_factory=lambda: os.getenv("OPENAI_BASE_URL", DEFAULT_BASE_URL))
    chat_model: str = Field(default_factory=lambda: os.getenv("MCP_CLIENT_MODEL", DEFAULT_MODEL))
    temperature: float = Field(default_factory=lambda: _env_float("MCP_CLIENT_TEMPERATURE", DEFAULT_TEMPERATURE))
    request_timeout: float = Field(default_factory=lambda: _env_float("MCP_CLIENT_REQUEST_TIMEOUT", 60.0))

    # Conversation controls
    history_window: int = Field(
        default_factory=lambda: _env_int("MCP_CLIENT_HISTORY_WINDOW", DEFAULT_HISTORY_WINDOW), ge=1
    )
    max_tool_rounds: int = Field(default_factory=lambda: _env_int("MCP_CLIENT_MAX_TOOL_ROUNDS", 1), ge=1)

    # Storage / presentation
    data_dir: Path = Field(default_factory=_get_data_dir)
    timezone: str = Field(default_factory=lambda: os.getenv("MCP_CLIENT_TIMEZONE", "UTC"))

    # HTTP behaviour
    cors_allow_origins_raw: str = Field(default_factory=lambda: os.getenv("MCP_CLIENT_CORS_ALLOW_ORIGINS", "*"))
    enable_docs: bool = Field(default_factory=lambda: os.getenv("MCP_CLIENT_ENABLE_DOCS", "1") != "0")

    @property
    def cors_allow_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        if self.cors_allow_origins_raw.strip() in {"", "*"}:
            return ["*"]
        return [origin.strip() for origin in self.cors_allow_origins_raw.split(",") if origin.strip()]

    @property
    def resolved_docs_url(self) -> Optional[str]:
        return "/docs" if self.enable_docs else None

    @property
    def memory_file(self) -> Path:
        return self.data_dir / "memories" / "memory_data.json"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
