"""Tests for the structlog processors in cms.core.logging."""

from cms.core.logging import REDACTED, add_app_context, get_logger, redact_sensitive


def test_redacts_credentials():
    event = {"event": "Cache ready", "token": "secret", "authorization": "Bearer abc", "key": "k"}
    result = redact_sensitive(None, "info", event)  # type: ignore[arg-type]
    assert result["token"] == REDACTED
    assert result["authorization"] == REDACTED
    assert result["key"] == "k"


def test_app_context_added():
    result = add_app_context(None, "info", {"event": "x"})  # type: ignore[arg-type]
    assert result["app"] == "Content Site API"
    assert "version" in result
    assert "env" in result


def test_app_context_keeps_explicit_values():
    result = add_app_context(None, "info", {"event": "x", "env": "override"})  # type: ignore[arg-type]
    assert result["env"] == "override"


def test_get_logger_returns_bound_logger():
    logger = get_logger("tests")
    assert hasattr(logger, "info")
