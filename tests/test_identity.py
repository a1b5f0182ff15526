"""Tests for IdentityStore and password hashing."""

import pytest

from training.core.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    UserNotFoundError,
    ValidationError,
)
from training.core.identity import IdentityStore, check_password, hash_password
from training.db.stores import MemoryStore


@pytest.fixture
def identity() -> IdentityStore:
    return IdentityStore(MemoryStore(), bcrypt_rounds=4)


class TestPasswordHashing:
    def test_hash_is_not_plaintext(self):
        hashed = hash_password("secret123", rounds=4)
        assert "secret123" not in hashed
        assert hashed.startswith("$2")

    def test_hash_is_salted(self):
        assert hash_password("secret123", rounds=4) != hash_password("secret123", rounds=4)

    def test_check_password(self):
        hashed = hash_password("secret123", rounds=4)
        assert check_password("secret123", hashed) is True
        assert check_password("wrong-one", hashed) is False

    def test_check_password_corrupt_hash(self):
        assert check_password("secret123", "not-a-bcrypt-hash") is False


class TestRegister:
    """Tests for IdentityStore.register."""

    def test_register_assigns_sequential_ids(self, identity):
        first = identity.register("a@example.com", "secret123", "A")
        second = identity.register("b@example.com", "secret123", "B")
        assert (first.id, second.id) == (1, 2)

    def test_register_normalizes_fields(self, identity):
        user = identity.register("  Ana@Example.COM ", "secret123", "  Ana ")
        assert user.email == "ana@example.com"
        assert user.name == "Ana"
        assert user.created_at

    def test_register_stores_hash(self, identity):
        user = identity.register("ana@example.com", "secret123", "Ana")
        assert user.password_hash != "secret123"
        assert check_password("secret123", user.password_hash)

    def test_duplicate_email_rejected(self, identity):
        """Second registration fails and the first account is untouched."""
        first = identity.register("ana@example.com", "secret123", "Ana")

        with pytest.raises(DuplicateEmailError):
            identity.register("ANA@example.com", "other-pass", "Impostor")

        stored = identity.get(first.id)
        assert stored.name == "Ana"
        assert check_password("secret123", stored.password_hash)

    def test_duplicate_does_not_consume_id(self, identity):
        identity.register("ana@example.com", "secret123", "Ana")
        with pytest.raises(DuplicateEmailError):
            identity.register("ana@example.com", "secret123", "Ana")
        assert identity.register("bob@example.com", "secret123", "Bob").id == 2

    def test_validation_reports_every_field(self, identity):
        with pytest.raises(ValidationError) as exc_info:
            identity.register("not-an-email", "123", "   ")

        fields = {e["field"] for e in exc_info.value.errors}
        assert fields == {"email", "password", "name"}

    def test_password_over_bcrypt_limit(self, identity):
        with pytest.raises(ValidationError) as exc_info:
            identity.register("ana@example.com", "x" * 73, "Ana")
        assert exc_info.value.errors[0]["field"] == "password"

    def test_custom_min_password_length(self):
        identity = IdentityStore(MemoryStore(), bcrypt_rounds=4, min_password_length=10)
        with pytest.raises(ValidationError):
            identity.register("ana@example.com", "secret123", "Ana")


class TestAuthenticate:
    """Tests for IdentityStore.authenticate."""

    def test_authenticate_ok(self, identity):
        user = identity.register("ana@example.com", "secret123", "Ana")
        assert identity.authenticate("ANA@example.com ", "secret123").id == user.id

    def test_wrong_password(self, identity):
        identity.register("ana@example.com", "secret123", "Ana")
        with pytest.raises(InvalidCredentialsError):
            identity.authenticate("ana@example.com", "wrong-pass")

    def test_unknown_email(self, identity):
        with pytest.raises(InvalidCredentialsError):
            identity.authenticate("nobody@example.com", "secret123")


class TestGet:
    def test_get_unknown(self, identity):
        with pytest.raises(UserNotFoundError):
            identity.get(5)
