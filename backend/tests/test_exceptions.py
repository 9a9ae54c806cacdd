"""Tests for cms.core.exceptions: error classes and handlers."""

from unittest.mock import MagicMock, patch

import orjson
import pytest
from fastapi import HTTPException
from sqlalchemy.exc import OperationalError

from cms.core.exceptions import (
    AppException,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    SlugExhaustedError,
    ValidationError,
    app_exception_handler,
    database_exception_handler,
    http_exception_handler,
    unhandled_exception_handler,
)


def _make_request(origin: str = "") -> MagicMock:
    """Build a minimal mock Starlette Request."""
    req = MagicMock()
    req.headers = {"origin": origin} if origin else {}
    req.url = "http://test/path"
    return req


@pytest.fixture(autouse=True)
def _patch_settings():
    """Patch get_settings so the CORS origin check is deterministic."""
    mock_settings = MagicMock()
    mock_settings.cors_origins = ["http://allowed.example.com"]
    with patch("cms.core.config.get_settings", return_value=mock_settings):
        yield


# =============================================================================
# Error classes
# =============================================================================

class TestAppException:

    def test_carries_status_and_message(self):
        err = AppException("boom", status_code=418)
        assert err.status_code == 418
        assert err.message == "boom"
        assert err.details == {}

    def test_default_status_is_500(self):
        assert AppException("x").status_code == 500

    def test_subclass_status_codes(self):
        assert AuthenticationError().status_code == 401
        assert AuthorizationError().status_code == 403
        assert NotFoundError("Item").status_code == 404
        assert ConflictError().status_code == 409
        assert ValidationError("bad").status_code == 422

    def test_not_found_message(self):
        assert NotFoundError("Project").message == "Project not found"


class TestSlugExhaustedError:

    def test_is_a_conflict(self):
        err = SlugExhaustedError("my-post", 100)
        assert isinstance(err, ConflictError)
        assert err.status_code == 409

    def test_carries_context(self):
        err = SlugExhaustedError("my-post", 100)
        assert err.base_slug == "my-post"
        assert err.attempts == 100
        assert err.details == {"slug": "my-post", "attempts": 100}
        assert "my-post" in err.message


# =============================================================================
# app_exception_handler
# =============================================================================

class TestAppExceptionHandler:

    async def test_returns_status_and_error_envelope(self):
        resp = await app_exception_handler(
            _make_request(),
            ValidationError("Invalid slug", {"errors": ["Slug is required"]}),
        )
        assert resp.status_code == 422
        assert orjson.loads(resp.body) == {
            "error": {"message": "Invalid slug", "details": {"errors": ["Slug is required"]}},
        }

    async def test_slug_exhausted_maps_to_409(self):
        resp = await app_exception_handler(_make_request(), SlugExhaustedError("post", 5))
        assert resp.status_code == 409
        assert orjson.loads(resp.body)["error"]["details"]["attempts"] == 5

    async def test_cors_headers_for_allowed_origin(self):
        resp = await app_exception_handler(
            _make_request(origin="http://allowed.example.com"),
            NotFoundError(),
        )
        assert resp.headers.get("Access-Control-Allow-Origin") == "http://allowed.example.com"


# =============================================================================
# http_exception_handler
# =============================================================================

class TestHttpExceptionHandler:

    async def test_returns_status_and_body(self):
        exc = HTTPException(status_code=403, detail="forbidden")
        resp = await http_exception_handler(_make_request(), exc)
        assert resp.status_code == 403
        assert orjson.loads(resp.body) == {"error": {"message": "forbidden"}}

    async def test_keeps_exception_headers(self):
        exc = HTTPException(
            status_code=401,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
        resp = await http_exception_handler(_make_request(), exc)
        assert resp.headers.get("WWW-Authenticate") == "Bearer"

    async def test_no_cors_for_unknown_origin(self):
        exc = HTTPException(status_code=400, detail="bad")
        resp = await http_exception_handler(_make_request(origin="http://evil.example.com"), exc)
        assert "Access-Control-Allow-Origin" not in resp.headers


# =============================================================================
# unhandled_exception_handler
# =============================================================================

class TestUnhandledExceptionHandler:

    async def test_returns_generic_500(self):
        resp = await unhandled_exception_handler(_make_request(), RuntimeError("db password in here"))
        assert resp.status_code == 500
        assert b"db password" not in resp.body
        assert b"internal error" in resp.body


# =============================================================================
# Authentication / database errors
# =============================================================================

class TestAuthenticationErrorResponse:

    async def test_carries_bearer_challenge(self):
        resp = await app_exception_handler(_make_request(), AuthenticationError("Authentication required"))
        assert resp.status_code == 401
        assert resp.headers.get("WWW-Authenticate") == "Bearer"

    async def test_other_errors_have_no_challenge(self):
        resp = await app_exception_handler(_make_request(), AuthorizationError())
        assert "WWW-Authenticate" not in resp.headers


class TestDatabaseExceptionHandler:

    async def test_connection_loss_is_503(self):
        exc = OperationalError("SELECT 1", {}, ConnectionRefusedError("refused"))
        resp = await database_exception_handler(_make_request(), exc)
        assert resp.status_code == 503
        assert orjson.loads(resp.body)["error"]["message"] == "Database temporarily unavailable"
        assert b"SELECT" not in resp.body
