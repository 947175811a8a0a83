"""
AI roast and wellbeing routes
Public, no session required
"""

from fastapi import APIRouter, Depends
import logging

from app.core.state import AppState, get_state
from .schemas import RoastRequest, RoastResponse, WellbeingRequest, WellbeingResponse

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/generate-roast", response_model=RoastResponse)
async def generate_roast(
    request: RoastRequest,
    state: AppState = Depends(get_state)
):
    """Sarcastic spending commentary"""
    logger.info(
        f"Generating roast: balance {request.balance}, "
        f"{len(request.recent_payments)} recent payments"
    )
    roast = await state.ai.generate_roast(
        request.balance,
        request.monthly_earned,
        request.recent_payments
    )
    return RoastResponse(roast=roast)

@router.post("/analyze-wellbeing", response_model=WellbeingResponse)
async def analyze_wellbeing(
    request: WellbeingRequest,
    state: AppState = Depends(get_state)
):
    """Spending pattern check with support resources. Always answers."""
    logger.info(f"Analyzing wellbeing for {len(request.transactions)} transactions")
    analysis = await state.ai.analyze_wellbeing(request.transactions)
    return WellbeingResponse(**analysis)
