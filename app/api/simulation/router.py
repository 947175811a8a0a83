"""
Test simulation routes
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from app.api.dependencies import get_current_user_id
from app.core.state import AppState, get_state

router = APIRouter()

@router.get("/start-test", response_model=Dict[str, Any])
async def start_test(
    user_id: str = Depends(get_current_user_id),
    state: AppState = Depends(get_state)
):
    """
    Reset the wallet and replay a year of spending, one month per tick.
    Progress arrives over the WebSocket channel.
    """
    return await state.simulation.start(user_id)

@router.get("/end-test", response_model=Dict[str, Any])
async def end_test(
    user_id: str = Depends(get_current_user_id),
    state: AppState = Depends(get_state)
):
    return state.simulation.stop(user_id)

@router.get("/test-status", response_model=Dict[str, Any])
async def test_status(
    user_id: str = Depends(get_current_user_id),
    state: AppState = Depends(get_state)
):
    return state.simulation.status(user_id)
