import logging

import pytest
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.testclient import TestClient

from clipshare.domain.exceptions import ResourceNotFoundException
from clipshare.shared.middleware import AsyncExceptionMiddleware, AsyncRequestLoggingMiddleware

LOGGER = "clipshare.shared.middleware.logging_middleware"


@pytest.fixture
def client():
    app = FastAPI()
    app.add_middleware(AsyncExceptionMiddleware)
    app.add_middleware(AsyncRequestLoggingMiddleware)

    @app.get("/missing")
    async def missing():
        raise ResourceNotFoundException("Clip not found")

    @app.get("/broken")
    async def broken():
        return JSONResponse({"detail": "down"}, status_code=503)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    with TestClient(app) as client:
        yield client


def response_records(caplog):
    return [r for r in caplog.records if r.name == LOGGER and r.getMessage().startswith("Response:")]


def test_domain_errors_are_logged_with_their_status(client, caplog):
    with caplog.at_level(logging.INFO, logger=LOGGER):
        assert client.get("/missing").status_code == 404

    [record] = response_records(caplog)
    assert record.levelno == logging.INFO
    assert record.getMessage().startswith("Response: 404 for GET /missing")


def test_server_errors_are_logged_at_error(client, caplog):
    with caplog.at_level(logging.INFO, logger=LOGGER):
        client.get("/broken")

    [record] = response_records(caplog)
    assert record.levelno == logging.ERROR


def test_password_header_value_is_not_logged(client, caplog):
    with caplog.at_level(logging.INFO, logger=LOGGER):
        client.get("/missing", headers={"X-Clip-Password": "s3cr3t-value"})

    assert "s3cr3t-value" not in caplog.text


def test_health_checks_are_not_logged(client, caplog):
    with caplog.at_level(logging.INFO, logger=LOGGER):
        client.get("/health")

    assert not [r for r in caplog.records if r.name == LOGGER]
