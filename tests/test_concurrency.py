import asyncio
import logging

import httpx
import pytest

from app.core.logging import ContextFilter, LogContext, current_log_context, get_logger

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 92


def registration(name, email, picture):
    return {
        "data": {"name": name, "email": email},
        "files": [("profilePic", (picture, PNG_BYTES, "image/png"))],
    }


@pytest.mark.asyncio
async def test_overlapping_registrations_both_succeed(app, users_collection):
    # Each insert yields long enough for the other request to run its handler
    users_collection.insert_delay = 0.2
    transport = httpx.ASGITransport(app=app)

    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        responses = await asyncio.gather(
            client.post("/register", **registration("Ada Lovelace", "ada@example.com", "ada.png")),
            client.post("/register", **registration("Grace Hopper", "grace@example.com", "grace.png")),
        )

        assert [r.status_code for r in responses] == [302, 302]
        assert all(r.headers["location"] == "/list" for r in responses)

        listing = await client.get("/list")

    saved = sorted((d["name"], d["email"]) for d in users_collection.documents)
    assert saved == [("Ada Lovelace", "ada@example.com"), ("Grace Hopper", "grace@example.com")]
    assert "Ada Lovelace" in listing.text
    assert "Grace Hopper" in listing.text
    assert current_log_context() == {}


@pytest.mark.asyncio
async def test_log_context_is_isolated_per_task():
    factory = logging.getLogRecordFactory()
    seen = {}

    async def worker(email, delay):
        with LogContext(email=email):
            await asyncio.sleep(delay)
            seen[email] = current_log_context()

    await asyncio.gather(worker("a@example.com", 0.05), worker("b@example.com", 0.01))

    assert seen["a@example.com"] == {"email": "a@example.com"}
    assert seen["b@example.com"] == {"email": "b@example.com"}
    assert current_log_context() == {}
    assert logging.getLogRecordFactory() is factory


def test_nested_log_context_restores_outer_fields():
    with LogContext(email="ada@example.com"):
        with LogContext(upload_name="ada.png"):
            assert current_log_context() == {"email": "ada@example.com", "upload_name": "ada.png"}
        assert current_log_context() == {"email": "ada@example.com"}
    assert current_log_context() == {}


def test_context_filter_keeps_explicit_extra():
    logger = get_logger("tests")
    context_filter = ContextFilter()

    with LogContext(email="context@example.com", upload_name="ada.png"):
        record = logger.makeRecord(
            logger.name, logging.INFO, __file__, 1, "msg", (), None,
            extra={"email": "explicit@example.com"}
        )
        assert context_filter.filter(record)

    assert record.email == "explicit@example.com"
    assert record.upload_name == "ada.png"
