"""
Wallet schemas
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from app.models import CamelModel, Money

class TransactionCreate(CamelModel):
    """
    New payment. Amount and description are checked by the ledger so a
    missing value gets the same message as a zero one.
    """
    amount: Optional[Decimal] = Field(None, examples=[100])
    description: Optional[str] = Field(None, examples=["Shopping"])
    type: Optional[str] = Field(None, examples=["payment"])
    date: Optional[datetime] = None
    merchant: Optional[str] = None

class BalanceResponse(BaseModel):
    success: bool = True
    balance: Money

class WalletResponse(BaseModel):
    success: bool = True
    transactions: List[Dict[str, Any]]

class TransactionCreatedResponse(BaseModel):
    success: bool = True
    transaction: Dict[str, Any]
