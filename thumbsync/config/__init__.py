"""Simplified configuration management using environment variables."""
import logging
import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from .validation import CacheSettings

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_EXTENSIONS = "png,jpg,jpeg,webp,gif,bmp,svg"


def _parse_bool(value: str | bool | None) -> bool:
    """Parse boolean value from various formats."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, str):
        return value.lower() in ("true", "1", "yes", "on", "enabled")
    return bool(value)


def _parse_list(value: str | List[str] | None, delimiter: str = ",") -> List[str]:
    """Parse list value from string or return as-is if already a list."""
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        return [item.strip() for item in value.split(delimiter) if item.strip()]
    return [] if value is None else [value]


def _getenv(key: str, default: str = "") -> str:
    """Get environment variable with default."""
    return os.getenv(key, default)


def _getenv_float(key: str, default: float) -> float:
    """Get float environment variable with validation.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Parsed float value

    Raises:
        ValueError: If value cannot be parsed as float
    """
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as e:
        raise ValueError(
            f"Invalid float value for {key}='{value}'. "
            f"Expected float, got: {value}"
        ) from e


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # ========== Transcoder ==========
    ffmpeg_path: str = field(default_factory=lambda: _getenv("FFMPEG_PATH", "ffmpeg"))
    transcode_timeout: float = field(default_factory=lambda: _getenv_float("TRANSCODE_TIMEOUT", 60.0))

    # ========== Cache ==========
    # Relative paths are resolved against the content store's base path.
    cache_dir: Path = field(default_factory=lambda: Path(_getenv("THUMBSYNC_CACHE_DIR", ".thumbsync/cache")))
    image_extensions: List[str] = field(
        default_factory=lambda: _parse_list(_getenv("IMAGE_EXTENSIONS", DEFAULT_IMAGE_EXTENSIONS))
    )

    # ========== Logging ==========
    log_level: str = field(default_factory=lambda: _getenv("LOG_LEVEL", "INFO").upper())
    log_format: str = field(
        default_factory=lambda: _getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    log_file: Optional[str] = field(default_factory=lambda: _getenv("LOG_FILE") or None)

    # ========== UI Settings ==========
    verbose: bool = field(default_factory=lambda: _parse_bool(_getenv("VERBOSE", "false")))
    json_output: bool = field(default_factory=lambda: _parse_bool(_getenv("JSON_OUTPUT", "false")))

    def __post_init__(self):
        self.image_extensions = [ext.strip().lstrip(".").lower() for ext in self.image_extensions if ext.strip()]

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "ffmpeg_path": self.ffmpeg_path,
            "transcode_timeout": self.transcode_timeout,
            "cache_dir": str(self.cache_dir),
            "image_extensions": list(self.image_extensions),
            "log_level": self.log_level,
            "log_file": self.log_file,
            "verbose": self.verbose,
            "json_output": self.json_output,
        }

    def validate(self) -> CacheSettings:
        """Validate the cache-relevant settings.

        Returns:
            The validated settings model

        Raises:
            ValueError: If a setting is invalid (pydantic ``ValidationError``)
        """
        return CacheSettings(
            ffmpeg_path=self.ffmpeg_path,
            transcode_timeout=self.transcode_timeout,
            image_extensions=self.image_extensions,
        )

    def resolve_cache_dir(self, base_path: Path) -> Path:
        """Return the absolute cache directory for a store rooted at ``base_path``."""
        if self.cache_dir.is_absolute():
            return self.cache_dir
        return Path(base_path) / self.cache_dir


# Singleton instance with thread-safe initialization
_config_instance: Optional[Config] = None
_config_lock = threading.Lock()


def _load_environment() -> None:
    """Load a .env file from the working directory if one exists."""
    env_path = Path(".env")
    if env_path.exists():
        load_dotenv(env_path, override=False)
        logger.debug(f"Loaded environment from {env_path}")


def get_config() -> Config:
    """Get global config instance (singleton pattern, thread-safe)."""
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            # Double-check pattern to prevent race conditions
            if _config_instance is None:
                _load_environment()
                _config_instance = Config()
    return _config_instance


def reset_config() -> None:
    """Drop the cached singleton so the next ``get_config()`` re-reads the environment."""
    global _config_instance
    with _config_lock:
        _config_instance = None


__all__ = ["CacheSettings", "Config", "get_config", "reset_config"]
