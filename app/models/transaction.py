"""Wallet transaction model"""

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel
from datetime import datetime
import enum

from .base import CamelModel, Money

class TransactionType(str, enum.Enum):
    RENT = "rent"
    UTILITIES = "utilities"
    BILLS = "bills"
    PAYMENT = "payment"

class Transaction(CamelModel):
    """A recorded payment. Credits are frozen at creation time."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str
    user_id: str
    amount: Money
    description: str
    type: TransactionType = TransactionType.PAYMENT
    credits: Money
    date: datetime
    merchant: str
