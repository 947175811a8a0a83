"""Services package"""

from .session_store import SessionStore
from .ledger import Ledger
from .catalog import PerkCatalog
from .redemption import RedemptionService
from .simulation import SimulationEngine, SimulationConfig
from .ai_proxy import GeminiClient

__all__ = [
    "SessionStore",
    "Ledger",
    "PerkCatalog",
    "RedemptionService",
    "SimulationEngine",
    "SimulationConfig",
    "GeminiClient"
]
