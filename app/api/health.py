"""Health check and monitoring endpoints"""

from fastapi import APIRouter, Depends
from typing import Dict, Any
from datetime import datetime, timezone
import psutil

from app.core.state import AppState, get_state

router = APIRouter()

@router.get("/health")
async def health_check():
    """Basic health check"""
    return {"status": "ok"}

@router.get("/health/detailed")
async def detailed_health_check(
    state: AppState = Depends(get_state)
) -> Dict[str, Any]:
    """Detailed health check with component status"""
    running = sum(1 for run in state.simulation.runs() if run.is_running)

    health_status = {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": state.settings.APP_VERSION,
        "environment": state.settings.ENVIRONMENT,
        "components": {
            "sessions": {"status": "ok", "active": len(state.sessions)},
            "websocket": {"status": "ok", "connections": len(state.manager.active_connections)},
            "simulation": {"status": "ok", "running": running},
            "ai": {
                "status": "ok" if state.settings.GEMINI_API_KEY else "unconfigured",
                "model": state.settings.GEMINI_MODEL
            },
        }
    }

    # System metrics
    health_status["metrics"] = {
        "cpu_percent": psutil.cpu_percent(),
        "memory_percent": psutil.virtual_memory().percent
    }

    return health_status
