"""User accounts: registration, login and lookup.

Users get sequential integer ids starting at 1. Emails are stored
lower-cased and are unique. Passwords are kept only as bcrypt hashes.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import bcrypt
import structlog

from training.core.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from training.db.stores import KeyValueStore
from training.utils.validators import normalize_email, validate_registration

logger = structlog.get_logger(__name__)

USERS_NAMESPACE = "users"
EMAILS_NAMESPACE = "user_emails"


@dataclass
class User:
    """A registered account."""

    id: int
    email: str
    name: str
    password_hash: str
    created_at: str = ""

    def __post_init__(self):
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc).isoformat()

    def summary(self) -> dict[str, Any]:
        """Public fields returned by the API."""
        return {"id": self.id, "email": self.email, "name": self.name}

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "password_hash": self.password_hash,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> User:
        return cls(
            id=int(data["id"]),
            email=data["email"],
            name=data["name"],
            password_hash=data["password_hash"],
            created_at=data.get("created_at", ""),
        )


def hash_password(password: str, rounds: int = 10) -> str:
    """Salted bcrypt hash. CPU-bound; call off the event loop."""
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("ascii")


def check_password(password: str, password_hash: str) -> bool:
    """Compare a password with a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("ascii"))
    except ValueError:
        # over-long password or corrupt hash
        return False


class IdentityStore:
    """Holds user records on top of a KeyValueStore.

    Records are keyed by id; an email index namespace enforces uniqueness.
    """

    def __init__(
        self,
        backend: KeyValueStore,
        bcrypt_rounds: int = 10,
        min_password_length: int = 6,
    ):
        self._backend = backend
        self._bcrypt_rounds = bcrypt_rounds
        self._min_password_length = min_password_length
        self._lock = threading.Lock()

    def register(self, email: str, password: str, name: str) -> User:
        """Validate input and create a user.

        Blocks while hashing the password.

        Raises:
            ValidationError: Bad email, short password or empty name
            DuplicateEmailError: Email already registered
        """
        fields = validate_registration(
            email, password, name, min_password_length=self._min_password_length
        )
        if self._find_id(fields["email"]) is not None:
            raise DuplicateEmailError(fields["email"])

        password_hash = hash_password(fields["password"], rounds=self._bcrypt_rounds)

        with self._lock:
            user_id = self._backend.count(USERS_NAMESPACE) + 1
            if not self._backend.insert(
                EMAILS_NAMESPACE, fields["email"], {"user_id": user_id}
            ):
                raise DuplicateEmailError(fields["email"])
            user = User(
                id=user_id,
                email=fields["email"],
                name=fields["name"],
                password_hash=password_hash,
            )
            self._backend.put(USERS_NAMESPACE, str(user_id), user.to_dict())

        logger.info("user_registered", user_id=user.id)
        return user

    def authenticate(self, email: str, password: str) -> User:
        """Check credentials. Blocks while verifying the hash.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
        """
        user_id = self._find_id(normalize_email(email))
        user = self._load(user_id) if user_id is not None else None

        if user is None or not check_password(password, user.password_hash):
            logger.info("login_failed", known_email=user is not None)
            raise InvalidCredentialsError()

        logger.info("user_logged_in", user_id=user.id)
        return user

    def get(self, user_id: int) -> User:
        """Get a user by id.

        Raises:
            UserNotFoundError: No such user
        """
        user = self._load(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def _find_id(self, email: str) -> int | None:
        entry = self._backend.get(EMAILS_NAMESPACE, email)
        return entry["user_id"] if entry else None

    def _load(self, user_id: int) -> User | None:
        data = self._backend.get(USERS_NAMESPACE, str(user_id))
        return User.from_dict(data) if data else None
