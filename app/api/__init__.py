"""API routes aggregation"""

from fastapi import APIRouter

from .auth.router import router as auth_router
from .wallet.router import router as wallet_router
from .perks.router import router as perks_router
from .simulation.router import router as simulation_router
from .ai.router import router as ai_router
from .dashboard.router import router as dashboard_router
from .health import router as health_router
from .websocket_routes import router as websocket_router

# Create API router
api_router = APIRouter()

# Include all routers
api_router.include_router(auth_router, tags=["Authentication"])
api_router.include_router(wallet_router, prefix="/user", tags=["Wallet"])
api_router.include_router(simulation_router, prefix="/user", tags=["Test Simulation"])
api_router.include_router(ai_router, prefix="/user", tags=["AI"])
api_router.include_router(perks_router, prefix="/user", tags=["Perks"])
api_router.include_router(dashboard_router, prefix="/dash", tags=["Partner Dashboard"])
api_router.include_router(health_router, tags=["Health"])

__all__ = ["api_router", "health_router", "websocket_router"]
