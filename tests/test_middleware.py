"""
Noteful API — Middleware Tests
===============================

What:  Access-log levels and the log line emitted per request.
"""

import logging

import pytest

from noteful.middleware.logging import level_for_status


@pytest.mark.parametrize(
    "status_code, level",
    [(200, logging.INFO), (204, logging.INFO), (404, logging.WARNING), (500, logging.ERROR)],
)
def test_level_for_status(status_code, level):
    assert level_for_status(status_code) == level


@pytest.mark.asyncio
async def test_access_log_carries_route_template(test_client, seeded, caplog):
    with caplog.at_level(logging.INFO, logger="noteful.access"):
        await test_client.get("/api/notes/1000", headers={"X-Request-ID": "log-1"})

    records = [r for r in caplog.records if r.name == "noteful.access"]
    assert len(records) == 1
    assert records[0].route == "/api/notes/{note_id}"
    assert records[0].status == 200
    assert "GET /api/notes/1000 200" in records[0].getMessage()
    assert "[log-1]" in records[0].getMessage()


@pytest.mark.asyncio
async def test_health_not_logged(test_client, caplog):
    with caplog.at_level(logging.INFO, logger="noteful.access"):
        await test_client.get("/health")

    assert not [r for r in caplog.records if r.name == "noteful.access"]
