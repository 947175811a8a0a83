"""Test simulation run state"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
import asyncio
import enum

from .base import utcnow

class SimulationState(str, enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    STOPPED = "stopped"

@dataclass
class SimulationRun:
    """
    One user's simulation. `task` is the scheduled handle for the next
    tick; `cancel_requested` is checked at the top of every tick.
    """

    user_id: str
    state: SimulationState = SimulationState.IDLE
    month_index: int = 0
    cancel_requested: bool = False
    task: Optional[asyncio.Task] = None
    started_at: datetime = field(default_factory=utcnow)
    finished_at: Optional[datetime] = None

    @property
    def is_running(self) -> bool:
        return self.state == SimulationState.RUNNING

    def to_status(self, total_months: int) -> dict:
        return {
            "userId": self.user_id,
            "state": self.state.value,
            "isRunning": self.is_running,
            "monthIndex": self.month_index,
            "totalMonths": total_months,
            "startedAt": self.started_at.isoformat(),
            "finishedAt": self.finished_at.isoformat() if self.finished_at else None,
        }
