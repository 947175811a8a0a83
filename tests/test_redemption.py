from decimal import Decimal

import pytest

from app.core.exceptions import (
    InsufficientFundsException,
    InvalidInputException,
    PartnerNotFoundException,
)
from app.core.websocket import PERK_REDEEMED, REFRESH_BALANCE
from app.services.redemption import RedemptionService


@pytest.fixture
def service(ledger, catalog, broadcaster):
    return RedemptionService(ledger, catalog, broadcaster)


def test_generic_perk_debits_balance(service, ledger, broadcaster):
    result = service.redeem_generic_perk("user", 3, "Shopping Discount", 10)

    assert result == {
        "success": True,
        "perkName": "Shopping Discount",
        "cost": 10.0,
        "previousBalance": 56.75,
        "newBalance": 46.75,
    }
    assert ledger.get_balance("user") == Decimal("46.75")
    assert broadcaster.recent(event=REFRESH_BALANCE)[-1]["data"] == {"userId": "user"}


def test_generic_perk_insufficient_funds(service, ledger, catalog):
    counts_before = catalog.redemption_counts("aldi")

    with pytest.raises(InsufficientFundsException):
        service.redeem_generic_perk("user", 5, "Premium Perks Box", 100)

    assert ledger.get_balance("user") == Decimal("56.75")
    assert catalog.redemption_counts("aldi") == counts_before


@pytest.mark.parametrize("perk_id,perk_name,cost", [
    (None, "Gym Pass", 15),
    (2, None, 15),
    (2, "Gym Pass", None),
    ("", "Gym Pass", 15),
    (0, "Gym Pass", 15),
])
def test_generic_perk_requires_fields(service, perk_id, perk_name, cost):
    with pytest.raises(InvalidInputException):
        service.redeem_generic_perk("user", perk_id, perk_name, cost)


def test_partner_perk_counts_without_touching_balance(service, ledger, catalog, broadcaster):
    before = catalog.redemption_counts("lidl")[2]

    result = service.redeem_partner_perk("Lidl", 2)

    assert result == {"success": True, "partner": "lidl", "perkId": 2, "redemptionCount": before + 1}
    assert ledger.get_balance("user") == Decimal("56.75")
    event = broadcaster.recent(event=PERK_REDEEMED)[-1]
    assert event["data"] == {"partner": "lidl", "perkId": 2, "redemptionCount": before + 1}


def test_partner_perk_unknown_partner(service):
    with pytest.raises(PartnerNotFoundException):
        service.redeem_partner_perk("tesco", 1)


def test_partner_perk_requires_id(service):
    with pytest.raises(InvalidInputException):
        service.redeem_partner_perk("aldi", None)


def test_partner_perk_rejects_zero_id(service, catalog):
    counts_before = catalog.redemption_counts("aldi")
    with pytest.raises(InvalidInputException):
        service.redeem_partner_perk("aldi", 0)
    assert catalog.redemption_counts("aldi") == counts_before
