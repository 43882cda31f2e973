"""
pipefile Configuration.

Centralized configuration for File I/O defaults.

Usage:
    from pipefile.config import PipeFileConfig, get_config, set_config

    # For testing (tiny chunks exercise multi-chunk paths)
    set_config(PipeFileConfig.for_testing())

    # Refuse to overwrite existing destinations by default
    set_config(PipeFileConfig.for_safe_writes())

    # From environment
    config = PipeFileConfig.from_env()
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional


DEFAULT_CHUNK_SIZE = 65536  # 64KB


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class PipeFileConfig:
    """
    I/O defaults applied to every File built without explicit overrides.

    Attributes:
        chunk_size: Bytes per read when draining a lazy file read
        default_force: Overwrite existing destinations when persist() gets
            no ``force`` option. True keeps pipeline re-runs idempotent at
            the cost of silently replacing files.
        create_dirs: Create missing parent directories on persist()
        log_level: Level used by configure_logging()
    """
    chunk_size: int = DEFAULT_CHUNK_SIZE
    default_force: bool = True
    create_dirs: bool = True
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate values."""
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive: {self.chunk_size}")

    @classmethod
    def from_env(cls) -> "PipeFileConfig":
        """
        Create config from environment variables.

        Environment Variables:
            PIPEFILE_CHUNK_SIZE: Read chunk size in bytes (default: 65536)
            PIPEFILE_DEFAULT_FORCE: Overwrite by default (default: "true")
            PIPEFILE_CREATE_DIRS: Create parent directories (default: "true")
            PIPEFILE_LOG_LEVEL: Logging level (default: "INFO")

        Returns:
            PipeFileConfig instance
        """
        return cls(
            chunk_size=int(os.getenv("PIPEFILE_CHUNK_SIZE", str(DEFAULT_CHUNK_SIZE))),
            default_force=_env_bool("PIPEFILE_DEFAULT_FORCE", True),
            create_dirs=_env_bool("PIPEFILE_CREATE_DIRS", True),
            log_level=os.getenv("PIPEFILE_LOG_LEVEL", "INFO"),
        )

    @classmethod
    def for_testing(cls) -> "PipeFileConfig":
        """Config for unit tests."""
        return cls(
            chunk_size=4,
            default_force=True,
            create_dirs=True,
            log_level="DEBUG",
        )

    @classmethod
    def for_safe_writes(cls) -> "PipeFileConfig":
        """Config that never overwrites unless persist() asks for force."""
        return cls(
            default_force=False,
            create_dirs=True,
            log_level="INFO",
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "chunk_size": self.chunk_size,
            "default_force": self.default_force,
            "create_dirs": self.create_dirs,
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PipeFileConfig":
        """Deserialize from dictionary."""
        return cls(
            chunk_size=data.get("chunk_size", DEFAULT_CHUNK_SIZE),
            default_force=data.get("default_force", True),
            create_dirs=data.get("create_dirs", True),
            log_level=data.get("log_level", "INFO"),
        )


def configure_logging(config: Optional[PipeFileConfig] = None) -> None:
    """
    Apply the configured log level to the root logger.

    Libraries normally leave this to the application; scripts and the
    test suite call it explicitly.
    """
    resolved = config or get_config()
    logging.basicConfig(
        level=getattr(logging, resolved.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


# Global config instance (lazily initialized)
_global_config: Optional[PipeFileConfig] = None


def get_config() -> PipeFileConfig:
    """
    Get global pipefile configuration.

    Initializes from environment on first call.
    """
    global _global_config
    if _global_config is None:
        _global_config = PipeFileConfig.from_env()
    return _global_config


def set_config(config: PipeFileConfig) -> None:
    """
    Set global pipefile configuration.

    Useful for tests to override configuration.
    """
    global _global_config
    _global_config = config


def reset_config() -> None:
    """
    Reset global configuration to None.

    Next call to get_config() will reinitialize from environment.
    """
    global _global_config
    _global_config = None
