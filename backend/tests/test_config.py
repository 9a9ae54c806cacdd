"""Tests for cms.core.config.Settings."""

from typing import Any

import pytest
from pydantic import ValidationError

from cms.core.config import PLACEHOLDER_JWT_SECRET, Settings

# Shared kwargs that satisfy required fields
_BASE: dict[str, Any] = {
    "jwt_secret_key": "a-valid-secret-key-that-is-long-enough-for-testing",
    "database_url": "postgresql+asyncpg://u:p@localhost/db",
}


class TestJwtSecretValidation:
    """Reject the known placeholder secret outside development."""

    def test_placeholder_secret_rejected_in_production(self):
        with pytest.raises(ValidationError, match="jwt_secret_key must be changed"):
            Settings(
                jwt_secret_key=PLACEHOLDER_JWT_SECRET,
                database_url="postgresql+asyncpg://u:p@localhost/db",
                environment="production",
            )

    def test_placeholder_secret_allowed_in_development(self):
        s = Settings(
            jwt_secret_key=PLACEHOLDER_JWT_SECRET,
            database_url="postgresql+asyncpg://u:p@localhost/db",
            environment="development",
        )
        assert s.jwt_secret_key == PLACEHOLDER_JWT_SECRET

    def test_short_secret_rejected(self):
        with pytest.raises(ValidationError):
            Settings(**{**_BASE, "jwt_secret_key": "too-short"})

    def test_valid_secret_accepted(self):
        s = Settings(**_BASE, environment="production")
        assert len(s.jwt_secret_key) >= 32


class TestCorsOrigins:
    """cors_origins parses comma-separated string."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("http://a,http://b", ["http://a", "http://b"]),
            ("http://a , http://b ", ["http://a", "http://b"]),
            ("http://only", ["http://only"]),
            ("", []),
        ],
        ids=["basic", "whitespace", "single", "empty"],
    )
    def test_cors_parsing(self, raw: str, expected: list[str]):
        s = Settings(**_BASE, CORS_ORIGINS=raw)
        assert s.cors_origins == expected


class TestProcessedDatabaseUrl:
    """processed_database_url rewrites libpq SSL parameters for asyncpg."""

    @pytest.mark.parametrize(
        "input_url, expected",
        [
            (
                "postgresql+asyncpg://u:p@host/db?sslmode=require",
                "postgresql+asyncpg://u:p@host/db?ssl=require",
            ),
            (
                "postgresql+asyncpg://u:p@host/db?sslmode=verify-full",
                "postgresql+asyncpg://u:p@host/db?ssl=verify-full",
            ),
            (
                "postgresql+asyncpg://u:p@host/db",
                "postgresql+asyncpg://u:p@host/db",
            ),
        ],
        ids=["sslmode-require", "sslmode-verify-full", "untouched"],
    )
    def test_url_transformation(self, input_url: str, expected: str):
        s = Settings(**{**_BASE, "database_url": input_url})
        assert s.processed_database_url == expected


class TestRedisAvailable:
    """redis_available flag based on credentials."""

    def test_redis_available_when_both_set(self):
        s = Settings(
            **_BASE,
            upstash_redis_rest_url="https://redis.example.com",
            upstash_redis_rest_token="tok",
        )
        assert s.redis_available is True

    @pytest.mark.parametrize(
        "url, token",
        [("", "tok"), ("https://r.io", ""), ("", "")],
        ids=["url-missing", "token-missing", "both-empty"],
    )
    def test_redis_unavailable(self, url: str, token: str):
        s = Settings(**_BASE, upstash_redis_rest_url=url, upstash_redis_rest_token=token)
        assert s.redis_available is False


class TestSlugSettings:

    def test_max_attempts_default(self):
        assert Settings(**_BASE).slug_max_attempts == 100

    def test_max_attempts_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(**_BASE, slug_max_attempts=0)


class TestDefaults:
    """Sensible default values."""

    def test_app_name(self):
        assert Settings(**_BASE).app_name == "Content Site API"

    def test_cache_default_ttl(self):
        assert Settings(**_BASE).cache_default_ttl == 30

    def test_jwt_defaults(self):
        s = Settings(**_BASE)
        assert s.jwt_algorithm == "HS256"
        assert s.jwt_audience == "authenticated"

    def test_editor_role_default(self):
        assert Settings(**_BASE).content_editor_role == "editor"
