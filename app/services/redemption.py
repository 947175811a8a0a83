"""Perk redemption flows"""

from typing import Any, Dict, Optional
import logging

from app.core.exceptions import InvalidInputException
from app.core.websocket import EventBroadcaster, PERK_REDEEMED, REFRESH_BALANCE
from app.services.catalog import PerkCatalog
from app.services.ledger import Ledger, Amount

logger = logging.getLogger(__name__)

class RedemptionService:
    """
    Two independent flows: spending balance on a general perk, and marking
    a partner deal as redeemed (free, only bumps the partner's counter).
    """

    def __init__(self, ledger: Ledger, catalog: PerkCatalog, broadcaster: EventBroadcaster):
        self.ledger = ledger
        self.catalog = catalog
        self.broadcaster = broadcaster

    def redeem_generic_perk(
        self,
        user_id: str,
        perk_id: Any,
        perk_name: Optional[str],
        cost: Amount
    ) -> Dict[str, Any]:
        """Debit cost from the user's balance, all or nothing"""
        if not perk_id or cost is None or not perk_name:
            raise InvalidInputException("perkId, perkName, and cost are required")

        previous, new = self.ledger.debit(user_id, cost)

        logger.info(
            f"Perk redeemed by {user_id}: {perk_name} ({perk_id}) cost {cost}, "
            f"balance {previous} -> {new}"
        )
        self.broadcaster.publish(REFRESH_BALANCE, {"userId": user_id})

        return {
            "success": True,
            "perkName": perk_name,
            "cost": float(previous - new),
            "previousBalance": float(previous),
            "newBalance": float(new),
        }

    def redeem_partner_perk(self, slug: str, deal_id: Optional[int]) -> Dict[str, Any]:
        """Count one redemption of a partner deal. Never touches balances."""
        partner = self.catalog.get_partner(slug)
        if not deal_id:
            raise InvalidInputException("perkId is required")

        count = self.catalog.increment_redemption(partner.slug, deal_id)
        logger.info(f"Partner perk redeemed: {partner.slug} deal {deal_id}, count {count}")

        payload = {"partner": partner.slug, "perkId": deal_id, "redemptionCount": count}
        self.broadcaster.publish(PERK_REDEEMED, payload)
        return {"success": True, **payload}
