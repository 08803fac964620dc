"""
Tailors Backend - Request Correlation & Access Log Tests
========================================================

What we test:
    ✅ X-Request-ID reused when well-formed, replaced otherwise
    ✅ Log records carry the request ID through the log filter
    ✅ Access log names the caller, or why the token was refused
    ✅ Probes stay out of the access log
"""

import logging

import pytest

from tailors.middleware.logging import level_for_status
from tailors.middleware.request_id import (
    NO_REQUEST_ID,
    RequestIDLogFilter,
    request_id_var,
    resolve_request_id,
)
from tailors.security import issue_token

ACCESS_LOGGER = "tailors.access"


def _access_lines(caplog):
    return [r.getMessage() for r in caplog.records if r.name == ACCESS_LOGGER]


class TestRequestID:

    @pytest.mark.asyncio
    async def test_client_id_is_echoed(self, client):
        response = await client.get("/", headers={"X-Request-ID": "abc12345"})
        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_unsafe_client_id_is_replaced(self, client):
        response = await client.get("/", headers={"X-Request-ID": "bad id; rm -rf"})

        rid = response.headers["X-Request-ID"]
        assert rid != "bad id; rm -rf"
        assert len(rid) == 12

    def test_resolve(self):
        assert resolve_request_id("order-42.retry_1") == "order-42.retry_1"
        assert resolve_request_id("x" * 65) != "x" * 65
        assert resolve_request_id(None) != resolve_request_id(None)

    @pytest.mark.asyncio
    async def test_error_body_carries_same_id(self, client):
        response = await client.get("/customers", headers={"X-Request-ID": "trace-401"})

        assert response.status_code == 401
        assert response.json()["request_id"] == "trace-401"


class TestLogFilter:

    def _record(self):
        return logging.LogRecord("tailors.test", logging.INFO, __file__, 1, "hello", None, None)

    def test_tags_record_with_current_id(self):
        token = request_id_var.set("rid-123")
        try:
            record = self._record()
            assert RequestIDLogFilter().filter(record) is True
        finally:
            request_id_var.reset(token)

        assert record.request_id == "rid-123"

    def test_outside_request(self):
        record = self._record()
        RequestIDLogFilter().filter(record)
        assert record.request_id == NO_REQUEST_ID


class TestAccessLog:

    @pytest.mark.asyncio
    async def test_authenticated_request_names_user(self, client, auth_headers, caplog):
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)

        await client.get("/customers", headers=auth_headers)

        [line] = _access_lines(caplog)
        assert line.startswith("GET /customers -> 200 in ")
        assert "user=karan" in line

    @pytest.mark.asyncio
    async def test_missing_token_reason(self, client, caplog):
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)

        await client.get("/orders")

        [record] = [r for r in caplog.records if r.name == ACCESS_LOGGER]
        assert record.levelno == logging.WARNING
        assert "-> 401" in record.getMessage()
        assert "auth=missing" in record.getMessage()

    @pytest.mark.asyncio
    async def test_expired_token_reason(self, client, settings, caplog):
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)
        expired = issue_token("karan", settings.jwt_secret, expires_minutes=-5)

        await client.get("/orders", headers={"Authorization": f"Bearer {expired}"})

        [line] = _access_lines(caplog)
        assert "auth=expired" in line

    @pytest.mark.asyncio
    async def test_wrong_secret_reason(self, client, caplog):
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)
        forged = issue_token("karan", "some-other-secret", expires_minutes=5)

        await client.get("/measurements", headers={"Authorization": f"Bearer {forged}"})

        [line] = _access_lines(caplog)
        assert "auth=invalid" in line

    @pytest.mark.asyncio
    async def test_probes_not_logged(self, client, caplog):
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)

        await client.get("/")
        await client.get("/health")

        assert _access_lines(caplog) == []

    def test_level_by_status_class(self):
        assert level_for_status(201) == logging.INFO
        assert level_for_status(404) == logging.WARNING
        assert level_for_status(503) == logging.ERROR
