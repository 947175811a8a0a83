import asyncio
import random
from decimal import Decimal

import pytest

from app.core.exceptions import AlreadyRunningException, NotRunningException
from app.core.websocket import (
    REFRESH_BALANCE,
    REFRESH_WALLET,
    TEST_COMPLETE,
    TEST_MONTH_UPDATE,
    TEST_STOPPED,
    TRIGGER_AI_ROAST,
)
from app.models import SimulationState
from app.services.simulation import SimulationConfig, SimulationEngine


def make_engine(ledger, broadcaster, interval=0.0):
    return SimulationEngine(
        ledger,
        broadcaster,
        SimulationConfig(interval_seconds=interval),
        rng=random.Random(42),
    )


async def wait_until_done(engine, user_id, limit=1000):
    for _ in range(limit):
        if not engine.is_running(user_id):
            return
        await asyncio.sleep(0)
    raise AssertionError("simulation did not finish")


def event_names(broadcaster):
    return [e["event"] for e in broadcaster.recent()]


def test_duration_label():
    assert SimulationConfig().duration_label == "48 seconds"
    assert SimulationConfig(interval_seconds=0.5).duration_label == "6 seconds"


@pytest.mark.asyncio
async def test_full_run_completes(ledger, broadcaster):
    engine = make_engine(ledger, broadcaster)
    ledger.record_transaction("user", 100, "before the test")

    result = await engine.start("user")
    assert result == {
        "success": True,
        "message": "Test simulation started",
        "duration": "0 seconds",
        "transactionsPerMonth": 10,
    }
    await wait_until_done(engine, "user")

    run = engine.get_run("user")
    assert run.state == SimulationState.COMPLETED
    assert run.month_index == 12

    transactions = ledger.list_transactions("user")
    assert len(transactions) == 120
    assert all(t.description != "before the test" for t in transactions)
    assert [t.date for t in transactions] == sorted((t.date for t in transactions), reverse=True)

    credits = sum((t.credits for t in transactions), Decimal("0"))
    assert ledger.get_balance("user") == Decimal("56.75") + credits
    assert ledger.audit("user")

    names = event_names(broadcaster)
    assert names.count(TEST_MONTH_UPDATE) == 12
    assert names.count(REFRESH_WALLET) == 12
    assert names.count(REFRESH_BALANCE) == 12
    assert names.count(TEST_COMPLETE) == 1
    assert TEST_STOPPED not in names
    assert names[-1] == TEST_COMPLETE


@pytest.mark.asyncio
async def test_month_events_in_order(ledger, broadcaster):
    engine = make_engine(ledger, broadcaster)
    await engine.start("user")
    await wait_until_done(engine, "user")

    months = [e["data"] for e in broadcaster.recent(event=TEST_MONTH_UPDATE)]
    assert [m["monthIndex"] for m in months] == list(range(1, 13))
    assert months[0] == {"userId": "user", "month": "January 2025", "monthIndex": 1, "totalMonths": 12}
    assert months[-1]["month"] == "December 2025"

    # Per month: update, wallet refresh, balance refresh
    names = event_names(broadcaster)
    first = names.index(TEST_MONTH_UPDATE)
    assert names[first:first + 3] == [TEST_MONTH_UPDATE, REFRESH_WALLET, REFRESH_BALANCE]


@pytest.mark.asyncio
async def test_roast_triggers(ledger, broadcaster):
    engine = make_engine(ledger, broadcaster)
    await engine.start("user")
    await wait_until_done(engine, "user")

    roasts = [e["data"] for e in broadcaster.recent(event=TRIGGER_AI_ROAST)]
    assert len(roasts) == 9
    assert roasts[0] == {
        "userId": "user",
        "month": "April 2025",
        "monthlySpending": 1300,
        "thresholdType": "regular",
        "threshold": 1300,
    }
    assert roasts[1]["month"] == "May 2025"
    assert roasts[1]["thresholdType"] == "emergency"
    assert roasts[1]["monthlySpending"] == 1500
    assert all(r["thresholdType"] == "emergency" for r in roasts[1:])
    assert all(1500 <= r["monthlySpending"] < 2000 for r in roasts[1:])
    assert sum(1 for r in roasts if r["thresholdType"] == "regular") == 1


@pytest.mark.asyncio
async def test_start_twice_rejected(ledger, broadcaster):
    engine = make_engine(ledger, broadcaster, interval=60)
    await engine.start("user")
    before = ledger.list_transactions("user")
    assert len(before) == 10

    with pytest.raises(AlreadyRunningException) as exc:
        await engine.start("user")
    assert exc.value.extra == {"isRunning": True}
    assert ledger.list_transactions("user") == before

    engine.stop("user")


@pytest.mark.asyncio
async def test_stop_between_ticks(ledger, broadcaster):
    engine = make_engine(ledger, broadcaster, interval=60)
    await engine.start("user")
    run = engine.get_run("user")
    task = run.task

    result = engine.stop("user")
    assert result == {"success": True, "message": "Test simulation stopped successfully", "isRunning": False}
    assert run.state == SimulationState.STOPPED
    assert run.cancel_requested

    await asyncio.gather(task, return_exceptions=True)
    assert task.cancelled()

    # Only month 0 ran
    assert len(ledger.list_transactions("user")) == 10
    assert event_names(broadcaster).count(TEST_MONTH_UPDATE) == 1
    assert event_names(broadcaster).count(TEST_STOPPED) == 1


@pytest.mark.asyncio
async def test_stop_when_idle(ledger, broadcaster):
    engine = make_engine(ledger, broadcaster)
    with pytest.raises(NotRunningException) as exc:
        engine.stop("user")
    assert exc.value.status_code == 400
    assert exc.value.extra["isRunning"] is False


@pytest.mark.asyncio
async def test_restart_after_completion(ledger, broadcaster):
    engine = make_engine(ledger, broadcaster)
    await engine.start("user")
    await wait_until_done(engine, "user")

    await engine.start("user")
    await wait_until_done(engine, "user")
    assert len(ledger.list_transactions("user")) == 120
    assert event_names(broadcaster).count(TEST_COMPLETE) == 2


@pytest.mark.asyncio
async def test_failed_tick_stops_run(ledger, broadcaster, monkeypatch):
    engine = make_engine(ledger, broadcaster, interval=60)

    def boom(*args, **kwargs):
        raise RuntimeError("generator broke")

    monkeypatch.setattr("app.services.simulation.generate_month", boom)
    await engine.start("user")

    run = engine.get_run("user")
    assert run.state == SimulationState.STOPPED
    assert run.task is None
    assert TEST_STOPPED in event_names(broadcaster)
    assert ledger.audit("user")


@pytest.mark.asyncio
async def test_status(ledger, broadcaster):
    engine = make_engine(ledger, broadcaster, interval=60)
    assert engine.status("user")["state"] == "idle"

    await engine.start("user")
    status = engine.status("user")
    assert status["isRunning"] is True
    assert status["monthIndex"] == 1
    assert status["totalMonths"] == 12

    engine.stop("user")
    assert engine.status("user")["state"] == "stopped"


@pytest.mark.asyncio
async def test_shutdown_cancels_runs(ledger, broadcaster):
    engine = make_engine(ledger, broadcaster, interval=60)
    await engine.start("user")
    await engine.shutdown()
    assert not engine.is_running("user")
    assert engine.get_run("user").task is None
