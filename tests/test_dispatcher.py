"""Tests for OrderDispatcher."""

import asyncio

import pytest

pytest.importorskip("apscheduler")

from littletreat.dispatcher import OrderDispatcher  # noqa: E402


def test_not_running_initially():
    dispatcher = OrderDispatcher()
    assert dispatcher.running is False
    assert dispatcher.inflight == 0


def test_dispatch_before_start_is_queued():
    """Jobs added before start wait in the scheduler."""
    dispatcher = OrderDispatcher()

    async def job():
        return True

    job_id = dispatcher.dispatch(job, name="queued job")
    assert [j["id"] for j in dispatcher.pending()] == [job_id]
    assert dispatcher.pending()[0]["name"] == "queued job"
    assert dispatcher.inflight == 1


@pytest.mark.asyncio
async def test_runs_job_in_background():
    dispatcher = OrderDispatcher()
    dispatcher.start()
    seen = []

    async def job(value):
        seen.append(value)
        return True

    try:
        dispatcher.dispatch(job, "order-1", name="log order")
        # Nothing has run yet: dispatch does not wait for the job
        assert seen == []
        assert await dispatcher.join(timeout=5) is True
    finally:
        dispatcher.stop()

    assert seen == ["order-1"]
    assert dispatcher.inflight == 0
    assert dispatcher.running is False


@pytest.mark.asyncio
async def test_failure_is_logged_not_raised(caplog):
    dispatcher = OrderDispatcher()
    dispatcher.start()

    async def boom():
        raise RuntimeError("sheet unavailable")

    try:
        dispatcher.dispatch(boom, name="failing job")
        assert await dispatcher.join(timeout=5) is True
    finally:
        dispatcher.stop()

    assert "Background job failing job raised" in caplog.text
    assert "sheet unavailable" in caplog.text


@pytest.mark.asyncio
async def test_false_result_is_logged(caplog):
    dispatcher = OrderDispatcher()
    dispatcher.start()

    async def rejected():
        return False

    try:
        dispatcher.dispatch(rejected, name="rejected job")
        await dispatcher.join(timeout=5)
    finally:
        dispatcher.stop()

    assert "reported failure" in caplog.text


@pytest.mark.asyncio
async def test_join_times_out():
    dispatcher = OrderDispatcher()
    dispatcher.start()
    release = asyncio.Event()

    async def slow():
        await release.wait()

    try:
        dispatcher.dispatch(slow, name="slow job")
        assert await dispatcher.join(timeout=0.05) is False
        release.set()
        assert await dispatcher.join(timeout=5) is True
    finally:
        dispatcher.stop()
