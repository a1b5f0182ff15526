"""Wiring of the domain services.

TrainingPlatform bundles the identity store, token issuer, progress
store/engine and module catalog built from one AppConfig, and offers the
account-level operations that touch several of them.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import structlog

from training.config.app_config import AppConfig
from training.config.courses import CourseData, load_course_data
from training.core.catalog import ModuleCatalog
from training.core.identity import IdentityStore, User
from training.core.progress import ProgressEngine, ProgressStore
from training.core.tokens import TokenIssuer
from training.db.stores import KeyValueStore, create_store

logger = structlog.get_logger(__name__)


@dataclass
class TrainingPlatform:
    """Domain services shared by the HTTP layer."""

    config: AppConfig
    identity: IdentityStore
    tokens: TokenIssuer
    progress: ProgressStore
    engine: ProgressEngine
    catalog: ModuleCatalog

    def register(self, email: str, password: str, name: str) -> tuple[User, str]:
        """Create an account and its progress record.

        Returns:
            tuple of (user, bearer token)
        """
        user = self.identity.register(email, password, name)
        self.progress.create(user.id)
        return user, self.tokens.issue(user.id, user.email)

    def login(self, email: str, password: str) -> tuple[User, str]:
        """Check credentials and issue a fresh token.

        Returns:
            tuple of (user, bearer token)
        """
        user = self.identity.authenticate(email, password)
        return user, self.tokens.issue(user.id, user.email)

    def video_descriptor(self, filename: str) -> dict[str, str]:
        """Describe a video without serving it."""
        base = self.config.media.video_base_url.rstrip("/")
        return {
            "message": "Video streaming endpoint",
            "filename": filename,
            "url": f"{base}/{filename}",
        }


def build_platform(
    config: AppConfig,
    course_data: CourseData | None = None,
    backend: KeyValueStore | None = None,
) -> TrainingPlatform:
    """Build all services from configuration.

    Args:
        config: Application config
        course_data: Course template and catalog (loaded from config paths if None)
        backend: Storage backend (built from config.storage if None)
    """
    if course_data is None:
        course_data = load_course_data(config.courses_file)
    if backend is None:
        backend = create_store(config.storage.backend, Path(config.storage.sqlite_path))

    progress = ProgressStore(backend, course_data.template)
    platform = TrainingPlatform(
        config=config,
        identity=IdentityStore(
            backend,
            bcrypt_rounds=config.auth.bcrypt_rounds,
            min_password_length=config.auth.min_password_length,
        ),
        tokens=TokenIssuer(
            config.auth.get_secret(),
            ttl_hours=config.auth.token_ttl_hours,
            algorithm=config.auth.algorithm,
        ),
        progress=progress,
        engine=ProgressEngine(progress),
        catalog=ModuleCatalog(course_data.modules),
    )
    logger.info(
        "platform_built",
        storage=type(backend).__name__,
        courses=[c.id for c in course_data.template],
    )
    return platform
