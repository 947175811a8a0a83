"""Perk, deal and partner models"""

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel
from typing import List, Optional

from .base import CamelModel, Money

class GeneralPerk(CamelModel):
    """Perk bought with rewards balance"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: int
    name: str
    cost: Money
    icon: str
    category: str
    description: str

class Deal(CamelModel):
    """Partner deal. Redeeming it is free and only bumps a counter."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: int
    title: str
    description: str
    full_description: Optional[str] = None
    icon: str = "gift"

class Partner(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: int
    name: str
    slug: str
    logo: str
    route: str
    deals: List[Deal] = []
