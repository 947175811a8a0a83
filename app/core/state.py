"""
Application state container
Builds every in-memory service once per app instance
"""

from dataclasses import dataclass
from typing import Optional
import random
import logging

from fastapi import Request, WebSocket

from app.data import USERS, DASHBOARD_USERS, GENERAL_PERKS, PARTNERS
from app.services.ai_proxy import GeminiClient
from app.services.catalog import PerkCatalog
from app.services.ledger import Ledger
from app.services.redemption import RedemptionService
from app.services.session_store import SessionStore
from app.services.simulation import SimulationConfig, SimulationEngine

from .config import Settings
from .locks import KeyedLock
from .websocket import ConnectionManager, EventBroadcaster

logger = logging.getLogger(__name__)

@dataclass
class AppState:
    settings: Settings
    sessions: SessionStore
    ledger: Ledger
    catalog: PerkCatalog
    redemptions: RedemptionService
    simulation: SimulationEngine
    ai: GeminiClient
    manager: ConnectionManager
    broadcaster: EventBroadcaster

def build_state(settings: Settings, rng: Optional[random.Random] = None) -> AppState:
    """Wire services together from settings"""
    rng = rng or random.Random()
    locks = KeyedLock()
    manager = ConnectionManager()
    broadcaster = EventBroadcaster(manager, history_limit=settings.RECENT_EVENTS_LIMIT)

    sessions = SessionStore(
        USERS,
        DASHBOARD_USERS,
        ttl_seconds=settings.SESSION_TTL_SECONDS,
        strict_errors=settings.STRICT_AUTH_ERRORS
    )
    ledger = Ledger(
        starting_balances={
            uid: user.starting_balance
            for uid, user in USERS.items()
            if user.starting_balance is not None
        },
        default_starting_balance=settings.DEFAULT_STARTING_BALANCE,
        cashback_rate=settings.CASHBACK_RATE,
        seed_history=settings.SEED_TRANSACTION_HISTORY,
        seed_count=settings.SEED_TRANSACTION_COUNT,
        locks=locks,
        rng=rng
    )
    catalog = PerkCatalog(
        GENERAL_PERKS,
        PARTNERS,
        fixed_total_views=settings.FIXED_TOTAL_VIEWS,
        locks=locks,
        rng=rng,
        broadcaster=broadcaster
    )

    state = AppState(
        settings=settings,
        sessions=sessions,
        ledger=ledger,
        catalog=catalog,
        redemptions=RedemptionService(ledger, catalog, broadcaster),
        simulation=SimulationEngine(ledger, broadcaster, SimulationConfig.from_settings(settings), rng),
        ai=GeminiClient(settings),
        manager=manager,
        broadcaster=broadcaster
    )
    logger.info(f"Application state ready: {len(USERS)} users, {len(PARTNERS)} partners")
    return state

def get_state(request: Request) -> AppState:
    return request.app.state.services

def get_ws_state(websocket: WebSocket) -> AppState:
    return websocket.app.state.services
