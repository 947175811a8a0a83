"""
Perk and redemption schemas
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from app.models import CamelModel, Money

class RedeemPerkRequest(CamelModel):
    """Spend balance on a general perk"""
    perk_id: Optional[Union[int, str]] = Field(None, examples=[5])
    perk_name: Optional[str] = Field(None, examples=["Premium Perks Box"])
    cost: Optional[Decimal] = Field(None, examples=[50])

class RedeemPartnerPerkRequest(CamelModel):
    perk_id: Optional[int] = Field(None, examples=[1])

class PerksResponse(BaseModel):
    perks: List[Dict[str, Any]]

class PartnersResponse(BaseModel):
    partners: List[Dict[str, Any]]

class PartnerPerksResponse(BaseModel):
    partner: Dict[str, Any]
    perks: List[Dict[str, Any]]

class RedeemPerkResponse(BaseModel):
    success: bool = True
    perkName: str
    cost: Money
    previousBalance: Money
    newBalance: Money

class RedeemPartnerPerkResponse(BaseModel):
    success: bool = True
    partner: str
    perkId: int
    redemptionCount: int
