"""
Year-in-a-minute spending simulation.

Each user can run one simulation at a time. A run resets the user's wallet,
then synthesizes one month of payments per tick, emitting progress events
and roast triggers when a month's target spend crosses a threshold.

States: idle -> running(month 0..11) -> completed | stopped
"""

from typing import Any, Dict, List, Optional
from dataclasses import dataclass
import asyncio
import random
import logging

from app.core.config import Settings
from app.core.exceptions import AlreadyRunningException, NotRunningException
from app.core.locks import user_key
from app.core.websocket import (
    EventBroadcaster,
    REFRESH_BALANCE,
    REFRESH_WALLET,
    TEST_COMPLETE,
    TEST_MONTH_UPDATE,
    TEST_STOPPED,
    TRIGGER_AI_ROAST,
)
from app.models import SimulationRun, SimulationState, utcnow
from app.services.ledger import Ledger, new_transaction_id
from app.services.spend_generator import generate_month, month_label, monthly_spending_target

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class SimulationConfig:
    interval_seconds: float = 4.0
    months: int = 12
    year: int = 2025
    transactions_per_month: int = 10
    rent_amount: int = 450
    rent_day: int = 15
    roast_threshold: int = 1300
    emergency_roast_threshold: int = 1500

    @classmethod
    def from_settings(cls, settings: Settings) -> "SimulationConfig":
        return cls(
            interval_seconds=settings.SIMULATION_INTERVAL_SECONDS,
            months=settings.SIMULATION_MONTHS,
            year=settings.SIMULATION_YEAR,
            transactions_per_month=settings.TRANSACTIONS_PER_MONTH,
            rent_amount=settings.RENT_AMOUNT,
            rent_day=settings.RENT_DAY,
            roast_threshold=settings.ROAST_THRESHOLD,
            emergency_roast_threshold=settings.EMERGENCY_ROAST_THRESHOLD,
        )

    @property
    def duration_label(self) -> str:
        seconds = self.months * self.interval_seconds
        return f"{seconds:g} seconds"

class SimulationEngine:
    """Owns every user's simulation run"""

    def __init__(
        self,
        ledger: Ledger,
        broadcaster: EventBroadcaster,
        config: Optional[SimulationConfig] = None,
        rng: Optional[random.Random] = None
    ):
        self.ledger = ledger
        self.broadcaster = broadcaster
        self.config = config or SimulationConfig()
        self.rng = rng or random.Random()
        self._runs: Dict[str, SimulationRun] = {}

    def get_run(self, user_id: str) -> Optional[SimulationRun]:
        return self._runs.get(user_id)

    def runs(self) -> List[SimulationRun]:
        return list(self._runs.values())

    def is_running(self, user_id: str) -> bool:
        run = self._runs.get(user_id)
        return run is not None and run.is_running

    async def start(self, user_id: str) -> Dict[str, Any]:
        """Reset the wallet, run month 0 now and schedule the rest"""
        with self.ledger.locks.hold(user_key(user_id)):
            if self.is_running(user_id):
                raise AlreadyRunningException()
            self.ledger.reset_account(user_id)
            run = SimulationRun(user_id=user_id, state=SimulationState.RUNNING)
            self._runs[user_id] = run

        logger.info(f"Test simulation started for {user_id}")
        self.run_month(run)

        if run.is_running:
            run.task = asyncio.create_task(self._drive(run), name=f"simulation:{user_id}")

        return {
            "success": True,
            "message": "Test simulation started",
            "duration": self.config.duration_label,
            "transactionsPerMonth": self.config.transactions_per_month,
        }

    def stop(self, user_id: str) -> Dict[str, Any]:
        """Cancel the pending tick and mark the run stopped"""
        with self.ledger.locks.hold(user_key(user_id)):
            run = self._runs.get(user_id)
            if run is None or not run.is_running:
                raise NotRunningException()
            run.cancel_requested = True
            task, run.task = run.task, None
            self._finish(run, SimulationState.STOPPED)

        if task is not None and task is not asyncio.current_task():
            task.cancel()

        return {
            "success": True,
            "message": "Test simulation stopped successfully",
            "isRunning": False,
        }

    def status(self, user_id: str) -> Dict[str, Any]:
        run = self._runs.get(user_id)
        if run is None:
            return {
                "userId": user_id,
                "state": SimulationState.IDLE.value,
                "isRunning": False,
                "monthIndex": 0,
                "totalMonths": self.config.months,
            }
        return run.to_status(self.config.months)

    async def shutdown(self) -> None:
        """Cancel every pending tick"""
        tasks = []
        for run in self._runs.values():
            if run.task is not None:
                run.task.cancel()
                tasks.append(run.task)
                run.task = None
            if run.is_running:
                run.cancel_requested = True
                run.state = SimulationState.STOPPED
                run.finished_at = utcnow()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _drive(self, run: SimulationRun) -> None:
        # Only ever cancelled while parked in sleep, never mid-month
        while run.is_running:
            await asyncio.sleep(self.config.interval_seconds)
            self.run_month(run)

    def run_month(self, run: SimulationRun) -> None:
        """One tick. A failure stops this run only."""
        try:
            with self.ledger.locks.hold(user_key(run.user_id)):
                self._tick(run)
        except Exception:
            logger.exception(f"Test simulation failed for {run.user_id} at month {run.month_index}")
            run.cancel_requested = True
            run.task = None
            self._finish(run, SimulationState.STOPPED)

    def _tick(self, run: SimulationRun) -> None:
        cfg = self.config
        user_id = run.user_id

        if run.cancel_requested:
            self._finish(run, SimulationState.STOPPED)
            return

        if run.month_index >= cfg.months:
            self._finish(run, SimulationState.COMPLETED)
            return

        month_index = run.month_index
        label = month_label(cfg.year, month_index)
        target = monthly_spending_target(
            month_index, cfg.roast_threshold, cfg.emergency_roast_threshold, self.rng
        )
        logger.info(f"Running test for {label} (month {month_index + 1}/{cfg.months}), target {target}")

        self.broadcaster.publish(TEST_MONTH_UPDATE, {
            "userId": user_id,
            "month": label,
            "monthIndex": month_index + 1,
            "totalMonths": cfg.months,
        })

        items = generate_month(
            cfg.year,
            month_index,
            target,
            cfg.rent_amount,
            rent_day=cfg.rent_day,
            count=cfg.transactions_per_month,
            rng=self.rng,
        )
        transactions = [
            self.ledger.make_transaction(
                user_id,
                amount=item["amount"],
                description=item["description"],
                type=item["type"],
                date=item["date"],
                transaction_id=new_transaction_id(user_id, item["date"], item["suffix"]),
            )
            for item in items
        ]
        balance = self.ledger.apply_batch(user_id, transactions)

        self.broadcaster.publish(REFRESH_WALLET, {"userId": user_id})
        self.broadcaster.publish(REFRESH_BALANCE, {"userId": user_id})

        total = sum(t.amount for t in transactions)
        logger.info(
            f"Added {len(transactions)} transactions for {label}: spent {total}, "
            f"target {target}, balance {balance}"
        )

        threshold_type = None
        if target >= cfg.emergency_roast_threshold:
            threshold_type, threshold = "emergency", cfg.emergency_roast_threshold
        elif target >= cfg.roast_threshold:
            threshold_type, threshold = "regular", cfg.roast_threshold
        if threshold_type:
            logger.info(f"{threshold_type.capitalize()} roast threshold reached for {label}: {target}")
            self.broadcaster.publish(TRIGGER_AI_ROAST, {
                "userId": user_id,
                "month": label,
                "monthlySpending": target,
                "thresholdType": threshold_type,
                "threshold": threshold,
            })

        run.month_index += 1
        if run.month_index >= cfg.months:
            self._finish(run, SimulationState.COMPLETED)

    def _finish(self, run: SimulationRun, state: SimulationState) -> None:
        if run.state != SimulationState.RUNNING:
            return
        run.state = state
        run.finished_at = utcnow()
        if state == SimulationState.COMPLETED:
            self.broadcaster.publish(TEST_COMPLETE, {"userId": run.user_id})
            logger.info(f"Test simulation complete for {run.user_id}")
        else:
            self.broadcaster.publish(TEST_STOPPED, {"userId": run.user_id})
            logger.info(f"Test simulation stopped for {run.user_id}")
