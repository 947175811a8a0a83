"""
Partner dashboard schemas
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from app.models import CamelModel

class AddPerkRequest(CamelModel):
    """New partner deal"""
    title: Optional[str] = Field(None, examples=["Weekend Bakery Deal"])
    description: Optional[str] = Field(None, examples=["20% off bakery items"])
    full_description: Optional[str] = None
    icon: Optional[str] = Field(None, examples=["gift"])

class DashboardDeal(BaseModel):
    """Deal row as the dashboard tables expect it"""
    id: str
    title: str
    description: str
    fullDescription: str
    icon: str
    discount_percentage: int = 0
    discount_amount: Optional[float] = None
    status: str = "active"
    valid_from: str
    valid_to: Optional[str] = None
    category: Optional[str] = None
    views: int
    redemptions: int

class PartnerStats(BaseModel):
    totalDeals: int
    activeDeals: int
    totalViews: int
    totalRedemptions: int

class RedeemsResponse(BaseModel):
    success: bool = True
    partner: str
    redemptions: Dict[str, int]

class PartnerResponse(BaseModel):
    success: bool = True
    partner: Dict[str, Any]

class DealsResponse(BaseModel):
    success: bool = True
    deals: List[DashboardDeal]

class StatsResponse(BaseModel):
    success: bool = True
    stats: PartnerStats

class AddPerkResponse(BaseModel):
    success: bool = True
    deal: Dict[str, Any]
