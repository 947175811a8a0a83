"""Perk catalog with per-partner view and redemption counters"""

from typing import Any, Dict, List, Mapping, Optional, Sequence
import random
import logging

from app.core.exceptions import InvalidInputException, PartnerNotFoundException
from app.core.locks import KeyedLock, partner_key
from app.core.websocket import EventBroadcaster, NEW_DEAL_ADDED
from app.models import Deal, GeneralPerk, Partner

logger = logging.getLogger(__name__)

DEFAULT_DEAL_ICON = "gift"
DEFAULT_VIEWS = 100
SEED_REDEMPTIONS_MIN = 10
SEED_REDEMPTIONS_MAX = 500

def seeded_views(partner_id: int, deal_id: int) -> int:
    """Stable pseudo view count in [100, 1000)"""
    return (partner_id * 1000 + deal_id) % 900 + 100

def distribute_views(total: int, deal_ids: Sequence[int]) -> Dict[int, int]:
    """Split total evenly; the first total % n deals get one extra"""
    if not deal_ids:
        return {}
    base, remainder = divmod(total, len(deal_ids))
    return {deal_id: base + (1 if index < remainder else 0) for index, deal_id in enumerate(deal_ids)}

class PerkCatalog:
    """
    Static perks and partner deals plus deals added from the dashboard.

    Counters are keyed by lower-case partner slug, then deal id.
    """

    def __init__(
        self,
        general_perks: Sequence[GeneralPerk],
        partners: Sequence[Partner],
        fixed_total_views: Optional[Mapping[str, int]] = None,
        locks: Optional[KeyedLock] = None,
        rng: Optional[random.Random] = None,
        broadcaster: Optional[EventBroadcaster] = None
    ):
        self.general_perks = list(general_perks)
        self.partners = {p.slug.lower(): p for p in partners}
        self.fixed_total_views = {k.lower(): v for k, v in (fixed_total_views or {}).items()}
        self.locks = locks or KeyedLock()
        self.rng = rng or random.Random()
        self.broadcaster = broadcaster
        self.dynamic_deals: Dict[str, List[Deal]] = {}
        self.views: Dict[str, Dict[int, int]] = {}
        self.redemptions: Dict[str, Dict[int, int]] = {}
        self.seed_counters()

    def seed_counters(self) -> None:
        """Random redemption counts and stable view counts for static deals"""
        for slug, partner in self.partners.items():
            self.redemptions[slug] = {
                deal.id: self.rng.randint(SEED_REDEMPTIONS_MIN, SEED_REDEMPTIONS_MAX)
                for deal in partner.deals
            }
            self._recompute_views(slug)
        logger.info(f"Initialized perk counters for {len(self.partners)} partners")

    def _recompute_views(self, slug: str) -> None:
        partner = self.partners[slug]
        deals = self._all_deals(slug)
        if slug in self.fixed_total_views:
            self.views[slug] = distribute_views(self.fixed_total_views[slug], [d.id for d in deals])
        else:
            views = self.views.setdefault(slug, {})
            for deal in deals:
                views.setdefault(deal.id, seeded_views(partner.id, deal.id))

    def _all_deals(self, slug: str) -> List[Deal]:
        return list(self.partners[slug].deals) + list(self.dynamic_deals.get(slug, []))

    def list_general_perks(self) -> List[GeneralPerk]:
        return list(self.general_perks)

    def list_partners(self) -> List[Partner]:
        return list(self.partners.values())

    def get_partner(self, slug: str) -> Partner:
        partner = self.partners.get((slug or "").lower())
        if partner is None:
            raise PartnerNotFoundException(slug)
        return partner

    def list_partner_perks(self, slug: str) -> List[Deal]:
        """Static deals followed by dashboard-added ones"""
        partner = self.get_partner(slug)
        with self.locks.hold(partner_key(partner.slug)):
            return self._all_deals(partner.slug.lower())

    def add_partner_deal(
        self,
        slug: str,
        title: str,
        description: str,
        full_description: Optional[str] = None,
        icon: Optional[str] = None
    ) -> Deal:
        """Append a deal with the next free id and fresh counters"""
        if not title or not description:
            raise InvalidInputException("title and description are required")
        partner = self.get_partner(slug)
        key = partner.slug.lower()

        with self.locks.hold(partner_key(key)):
            existing = self._all_deals(key)
            new_id = max((d.id for d in existing), default=0) + 1
            deal = Deal(
                id=new_id,
                title=title,
                description=description,
                full_description=full_description or description,
                icon=icon or DEFAULT_DEAL_ICON
            )
            self.dynamic_deals.setdefault(key, []).append(deal)
            self.redemptions.setdefault(key, {})[new_id] = 0
            self._recompute_views(key)

        logger.info(
            f"New perk added for {key}: id {new_id} '{title}', "
            f"{len(self.dynamic_deals[key])} dynamic deals"
        )
        if self.broadcaster is not None:
            self.broadcaster.publish(NEW_DEAL_ADDED, {"partner": key, "deal": deal.to_response()})
        return deal

    def increment_redemption(self, slug: str, deal_id: int) -> int:
        partner = self.get_partner(slug)
        key = partner.slug.lower()
        with self.locks.hold(partner_key(key)):
            counts = self.redemptions.setdefault(key, {})
            counts[deal_id] = counts.get(deal_id, 0) + 1
            return counts[deal_id]

    def redemption_counts(self, slug: str) -> Dict[int, int]:
        partner = self.get_partner(slug)
        with self.locks.hold(partner_key(partner.slug)):
            return dict(self.redemptions.get(partner.slug.lower(), {}))

    def deal_analytics(self, slug: str) -> List[Dict[str, Any]]:
        """Every deal with its view and redemption counts"""
        partner = self.get_partner(slug)
        key = partner.slug.lower()
        with self.locks.hold(partner_key(key)):
            views = self.views.get(key, {})
            redemptions = self.redemptions.get(key, {})
            return [
                {
                    "deal": deal,
                    "views": views.get(deal.id, DEFAULT_VIEWS),
                    "redemptions": redemptions.get(deal.id, 0),
                }
                for deal in self._all_deals(key)
            ]

    def partner_stats(self, slug: str) -> Dict[str, int]:
        rows = self.deal_analytics(slug)
        return {
            "totalDeals": len(rows),
            "activeDeals": len(rows),
            "totalViews": sum(r["views"] for r in rows),
            "totalRedemptions": sum(r["redemptions"] for r in rows),
        }
