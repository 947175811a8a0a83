"""
AI proxy schemas
"""

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field

from app.models import CamelModel

class RoastRequest(CamelModel):
    balance: float = 0
    monthly_earned: float = 0
    recent_payments: List[Dict[str, Any]] = Field(default_factory=list)

class RoastResponse(BaseModel):
    roast: str

class WellbeingRequest(CamelModel):
    transactions: List[Dict[str, Any]] = Field(default_factory=list)

class WellbeingResource(BaseModel):
    title: str
    description: str = ""
    url: str = ""

class WellbeingResponse(BaseModel):
    summary: str
    concerns: List[str]
    resources: List[WellbeingResource]
    riskLevel: Literal["low", "moderate", "high"]
