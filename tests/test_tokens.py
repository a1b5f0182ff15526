"""Tests for TokenIssuer."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from training.core.errors import InvalidTokenError
from training.core.tokens import TokenClaims, TokenIssuer


@pytest.fixture
def issuer() -> TokenIssuer:
    return TokenIssuer("test-secret", ttl_hours=24)


class TestIssueAndVerify:
    def test_roundtrip_claims(self, issuer):
        token = issuer.issue(3, "ana@example.com")
        assert issuer.verify(token) == TokenClaims(user_id=3, email="ana@example.com")

    def test_token_expires_after_ttl(self, issuer):
        token = issuer.issue(3, "ana@example.com")
        payload = jwt.decode(token, "test-secret", algorithms=["HS256"])
        assert payload["exp"] - payload["iat"] == 24 * 3600

    def test_expired_token_rejected(self, issuer):
        two_days_ago = datetime.now(timezone.utc) - timedelta(days=2)
        token = issuer.issue(3, "ana@example.com", now=two_days_ago)
        with pytest.raises(InvalidTokenError):
            issuer.verify(token)

    def test_wrong_secret_rejected(self, issuer):
        token = TokenIssuer("other-secret").issue(3, "ana@example.com")
        with pytest.raises(InvalidTokenError):
            issuer.verify(token)

    def test_garbage_rejected(self, issuer):
        with pytest.raises(InvalidTokenError):
            issuer.verify("not.a.token")

    def test_missing_claims_rejected(self, issuer):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": "3", "iat": now, "exp": now + timedelta(hours=1)},
            "test-secret",
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            issuer.verify(token)
