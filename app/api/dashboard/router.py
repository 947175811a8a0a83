"""
Partner dashboard routes
Every route is scoped to the partner the dashboard login maps to
"""

from fastapi import APIRouter, Depends
import logging

from app.api.dependencies import get_current_partner_slug
from app.core.state import AppState, get_state
from app.models import utcnow
from .schemas import (
    AddPerkRequest,
    DashboardDeal,
    PartnerStats,
    RedeemsResponse,
    PartnerResponse,
    DealsResponse,
    StatsResponse,
    AddPerkResponse
)

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/redeems", response_model=RedeemsResponse)
async def get_redeems(
    slug: str = Depends(get_current_partner_slug),
    state: AppState = Depends(get_state)
):
    """Redemption count per deal id"""
    counts = state.catalog.redemption_counts(slug)
    logger.debug(f"Dashboard redeems requested for {slug}: {counts}")
    return RedeemsResponse(
        partner=slug.lower(),
        redemptions={str(deal_id): count for deal_id, count in counts.items()}
    )

@router.get("/partner", response_model=PartnerResponse)
async def get_partner(
    slug: str = Depends(get_current_partner_slug),
    state: AppState = Depends(get_state)
):
    partner = state.catalog.get_partner(slug)
    return PartnerResponse(partner={
        "id": partner.id,
        "name": partner.name,
        "slug": partner.slug,
        "logo": partner.logo,
    })

@router.get("/deals", response_model=DealsResponse)
async def get_deals(
    slug: str = Depends(get_current_partner_slug),
    state: AppState = Depends(get_state)
):
    """All deals with view and redemption counters"""
    today = utcnow().date().isoformat()
    deals = [
        DashboardDeal(
            id=str(row["deal"].id),
            title=row["deal"].title,
            description=row["deal"].description,
            fullDescription=row["deal"].full_description or row["deal"].description,
            icon=row["deal"].icon or "gift",
            valid_from=today,
            views=row["views"],
            redemptions=row["redemptions"]
        )
        for row in state.catalog.deal_analytics(slug)
    ]
    return DealsResponse(deals=deals)

@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    slug: str = Depends(get_current_partner_slug),
    state: AppState = Depends(get_state)
):
    return StatsResponse(stats=PartnerStats(**state.catalog.partner_stats(slug)))

@router.post("/add-perk", response_model=AddPerkResponse)
async def add_perk(
    request: AddPerkRequest,
    slug: str = Depends(get_current_partner_slug),
    state: AppState = Depends(get_state)
):
    """Add a deal for this partner and notify connected clients"""
    deal = state.catalog.add_partner_deal(
        slug,
        title=request.title,
        description=request.description,
        full_description=request.full_description,
        icon=request.icon
    )
    return AddPerkResponse(deal=deal.to_response())
