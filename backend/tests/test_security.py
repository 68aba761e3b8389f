"""Tests for password hashing, access tokens and database URL handling."""

from datetime import timedelta

from smartconnect.core.security import (
    create_access_token,
    get_password_hash,
    verify_password,
    verify_token,
)
from smartconnect.db.database import database_url_and_connect_args


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = get_password_hash("password123")
        assert hashed != "password123"
        assert verify_password("password123", hashed)
        assert not verify_password("password124", hashed)


class TestAccessTokens:
    def test_payload_names_user_and_role(self):
        token = create_access_token("user-1", "provider", additional_claims={"name": "Pat"})
        payload = verify_token(token)
        assert payload["sub"] == "user-1"
        assert payload["role"] == "provider"
        assert payload["name"] == "Pat"

    def test_extra_claims_cannot_replace_identity(self):
        token = create_access_token("user-1", "seeker", additional_claims={"sub": "user-2", "role": "provider"})
        payload = verify_token(token)
        assert (payload["sub"], payload["role"]) == ("user-1", "seeker")

    def test_expired_token_rejected(self):
        token = create_access_token("user-1", "seeker", expires_delta=timedelta(minutes=-1))
        assert verify_token(token) is None

    def test_wrong_type_rejected(self):
        token = create_access_token("user-1", "seeker")
        assert verify_token(token, token_type="refresh") is None

    def test_garbage_rejected(self):
        assert verify_token("not-a-token") is None


class TestDatabaseUrl:
    def test_non_asyncpg_url_untouched(self):
        url = "sqlite+aiosqlite:///:memory:"
        assert database_url_and_connect_args(url) == (url, {})

    def test_asyncpg_ssl_params_moved_to_connect_args(self):
        url, connect_args = database_url_and_connect_args(
            "postgresql+asyncpg://u:p@db.example.com/booking?sslmode=require&channel_binding=require"
        )
        assert url == "postgresql+asyncpg://u:p@db.example.com/booking"
        assert connect_args["ssl"] is True
        assert connect_args["timeout"] == 15

    def test_asyncpg_without_ssl(self):
        url, connect_args = database_url_and_connect_args("postgresql+asyncpg://u:p@localhost/booking")
        assert url == "postgresql+asyncpg://u:p@localhost/booking"
        assert "ssl" not in connect_args
