"""Bearer token issuing and verification (HS256 JWT)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
import structlog

from training.core.errors import InvalidTokenError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified token."""

    user_id: int
    email: str


class TokenIssuer:
    """Signs and verifies time-limited tokens with a shared secret."""

    def __init__(self, secret: str, ttl_hours: int = 24, algorithm: str = "HS256"):
        self._secret = secret
        self._ttl = timedelta(hours=ttl_hours)
        self._algorithm = algorithm

    def issue(self, user_id: int, email: str, now: datetime | None = None) -> str:
        """Create a signed token for a user."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "user_id": user_id,
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Check signature and expiry.

        Raises:
            InvalidTokenError: If the token is malformed, forged or expired
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as e:
            logger.info("token_rejected", reason="expired")
            raise InvalidTokenError() from e
        except jwt.InvalidTokenError as e:
            logger.info("token_rejected", reason=type(e).__name__)
            raise InvalidTokenError() from e

        user_id = payload.get("user_id")
        email = payload.get("email")
        if not isinstance(user_id, int) or not isinstance(email, str):
            logger.info("token_rejected", reason="missing_claims")
            raise InvalidTokenError()

        return TokenClaims(user_id=user_id, email=email)
