"""Models package initialization"""

from .base import CamelModel, Money, utcnow, ensure_aware
from .transaction import Transaction, TransactionType
from .perk import GeneralPerk, Deal, Partner
from .session import Session, SessionKind, UserIdentity, DashboardIdentity
from .simulation import SimulationRun, SimulationState

__all__ = [
    "CamelModel",
    "Money",
    "utcnow",
    "ensure_aware",
    "Transaction",
    "TransactionType",
    "GeneralPerk",
    "Deal",
    "Partner",
    "Session",
    "SessionKind",
    "UserIdentity",
    "DashboardIdentity",
    "SimulationRun",
    "SimulationState",
]
