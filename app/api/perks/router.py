"""
Perk catalog and redemption routes
"""

from fastapi import APIRouter, Depends, Request

from app.api.dependencies import get_current_user_id
from app.core.state import AppState, get_state
from app.models import Partner
from .schemas import (
    RedeemPerkRequest,
    RedeemPartnerPerkRequest,
    PerksResponse,
    PartnersResponse,
    PartnerPerksResponse,
    RedeemPerkResponse,
    RedeemPartnerPerkResponse
)

router = APIRouter()

def logo_url(request: Request, partner: Partner) -> str:
    """Absolute logo URL on this host"""
    return f"{str(request.base_url).rstrip('/')}{partner.logo}"

@router.get("/perks", response_model=PerksResponse)
async def list_perks(
    user_id: str = Depends(get_current_user_id),
    state: AppState = Depends(get_state)
):
    """General perks bought with rewards balance"""
    return PerksResponse(perks=[p.to_response() for p in state.catalog.list_general_perks()])

@router.get("/partners", response_model=PartnersResponse)
async def list_partners(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    state: AppState = Depends(get_state)
):
    """Partners with their deals, including ones added from the dashboard"""
    partners = []
    for partner in state.catalog.list_partners():
        data = partner.to_response()
        data["logoUrl"] = logo_url(request, partner)
        data["deals"] = [d.to_response() for d in state.catalog.list_partner_perks(partner.slug)]
        partners.append(data)
    return PartnersResponse(partners=partners)

@router.get("/partners/{slug}/perks", response_model=PartnerPerksResponse)
async def list_partner_perks(
    slug: str,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    state: AppState = Depends(get_state)
):
    partner = state.catalog.get_partner(slug)
    deals = state.catalog.list_partner_perks(partner.slug)
    return PartnerPerksResponse(
        partner={
            "id": partner.id,
            "name": partner.name,
            "slug": partner.slug,
            "logoUrl": logo_url(request, partner),
            "route": partner.route,
        },
        perks=[d.to_response() for d in deals]
    )

@router.post("/redeem-perk", response_model=RedeemPerkResponse)
async def redeem_perk(
    request: RedeemPerkRequest,
    user_id: str = Depends(get_current_user_id),
    state: AppState = Depends(get_state)
):
    """Spend balance on a general perk"""
    result = state.redemptions.redeem_generic_perk(
        user_id,
        perk_id=request.perk_id,
        perk_name=request.perk_name,
        cost=request.cost
    )
    return RedeemPerkResponse(**result)

@router.post("/{partner}/redeem-perks", response_model=RedeemPartnerPerkResponse)
async def redeem_partner_perk(
    partner: str,
    request: RedeemPartnerPerkRequest,
    user_id: str = Depends(get_current_user_id),
    state: AppState = Depends(get_state)
):
    """Count a partner deal redemption. Free, balance untouched."""
    result = state.redemptions.redeem_partner_perk(partner, request.perk_id)
    return RedeemPartnerPerkResponse(**result)
