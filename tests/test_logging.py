"""Logging configuration and request id tests."""

import logging

import structlog
from fastapi.testclient import TestClient

from lumadocs.logging import QUIET_LOGGERS, configure_logging


def test_configure_logging_levels() -> None:
    """Debug mode lowers the root level and quiets third-party loggers."""
    configure_logging(debug=True)
    try:
        assert logging.getLogger().level == logging.DEBUG
        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING
        assert logging.getLogger("uvicorn.access").propagate is True
    finally:
        structlog.reset_defaults()


def test_request_id_is_generated(client: TestClient) -> None:
    """Responses carry a request id even when the client sent none."""
    response = client.get("/api/v1/content/manifest")
    assert len(response.headers["X-Request-ID"]) == 32


def test_request_id_is_echoed(client: TestClient) -> None:
    """A client-supplied request id is returned unchanged."""
    response = client.get("/api/v1/content/manifest", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


def test_health_probes_skip_request_id(client: TestClient) -> None:
    """Health probes bypass request logging."""
    response = client.get("/api/v1/health/live")
    assert "X-Request-ID" not in response.headers
