"""Application configuration loader.

Loads centralized configuration from data/config/app_config_v1.yaml
with fallback to built-in defaults. Environment variables override the
token secret (JWT_SECRET) and the listening port (PORT).

Usage:
    from training.config.app_config import load_app_config

    config = load_app_config()
    secret = config.auth.get_secret()
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/app_config_v1.yaml")

DEV_SECRET = "dev-secret-change-in-production"


@dataclass
class AuthConfig:
    """Password hashing and bearer token settings."""

    secret_key: str = DEV_SECRET
    secret_env: str | None = "JWT_SECRET"
    algorithm: str = "HS256"
    token_ttl_hours: int = 24
    bcrypt_rounds: int = 10
    min_password_length: int = 6

    def get_secret(self) -> str:
        """Get signing secret, preferring the environment variable."""
        if self.secret_env:
            from_env = os.environ.get(self.secret_env)
            if from_env:
                return from_env
        return self.secret_key


@dataclass
class ServerConfig:
    """HTTP server settings."""

    host: str = "127.0.0.1"
    port: int = 5000
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class StorageConfig:
    """Backing store for users and progress records."""

    backend: str = "memory"  # memory | sqlite
    sqlite_path: str = "db/training.db"


@dataclass
class MediaConfig:
    """Settings for the simulated media endpoints."""

    video_base_url: str = "https://example.com/videos"


@dataclass
class AppConfig:
    """Application-wide configuration."""

    auth: AuthConfig = field(default_factory=AuthConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    media: MediaConfig = field(default_factory=MediaConfig)
    paths: dict[str, str] = field(default_factory=dict)

    @property
    def courses_file(self) -> Path:
        return Path(self.paths.get("courses_file", "data/config/courses_v1.yaml"))


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "auth": {
            "secret_key": DEV_SECRET,
            "secret_env": "JWT_SECRET",
            "algorithm": "HS256",
            "token_ttl_hours": 24,
            "bcrypt_rounds": 10,
            "min_password_length": 6,
        },
        "server": {
            "host": "127.0.0.1",
            "port": 5000,
            "cors_origins": ["*"],
        },
        "storage": {
            "backend": "memory",
            "sqlite_path": "db/training.db",
        },
        "media": {
            "video_base_url": "https://example.com/videos",
        },
        "paths": {
            "courses_file": "data/config/courses_v1.yaml",
        },
    }


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    auth_data = data.get("auth", {})
    auth = AuthConfig(
        secret_key=auth_data.get("secret_key", DEV_SECRET),
        secret_env=auth_data.get("secret_env", "JWT_SECRET"),
        algorithm=auth_data.get("algorithm", "HS256"),
        token_ttl_hours=auth_data.get("token_ttl_hours", 24),
        bcrypt_rounds=auth_data.get("bcrypt_rounds", 10),
        min_password_length=auth_data.get("min_password_length", 6),
    )

    server_data = data.get("server", {})
    port = server_data.get("port", 5000)
    if os.environ.get("PORT"):
        port = int(os.environ["PORT"])
    server = ServerConfig(
        host=server_data.get("host", "127.0.0.1"),
        port=port,
        cors_origins=server_data.get("cors_origins", ["*"]),
    )

    storage_data = data.get("storage", {})
    storage = StorageConfig(
        backend=storage_data.get("backend", "memory"),
        sqlite_path=storage_data.get("sqlite_path", "db/training.db"),
    )

    media_data = data.get("media", {})
    media = MediaConfig(
        video_base_url=media_data.get("video_base_url", "https://example.com/videos"),
    )

    paths = data.get("paths", {})

    return AppConfig(auth=auth, server=server, storage=storage, media=media, paths=paths)


def load_app_config(force_reload: bool = False, config_file: Path | None = None) -> AppConfig:
    """Load application config, falling back to defaults.

    Args:
        force_reload: If True, ignore cached config and reload from file.
        config_file: Alternative YAML file (bypasses the cache).

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if config_file is None and _cached_config is not None and not force_reload:
        return _cached_config

    path = config_file or CONFIG_FILE
    data: dict[str, Any]

    if path.exists():
        logger.debug("loading_app_config", source=str(path))
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    else:
        logger.info("using_default_config")
        data = _get_defaults()

    config = _parse_config(data)
    if config.auth.get_secret() == DEV_SECRET:
        logger.warning("using_development_secret", secret_env=config.auth.secret_env)

    if config_file is None:
        _cached_config = config
    return config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
