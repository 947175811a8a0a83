"""Static seed data consumed by the in-memory services"""

from .accounts import USERS, DASHBOARD_USERS
from .perks import GENERAL_PERKS, PARTNERS

__all__ = ["USERS", "DASHBOARD_USERS", "GENERAL_PERKS", "PARTNERS"]
