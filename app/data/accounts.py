"""Hard-coded login directories"""

from decimal import Decimal

from app.models import UserIdentity, DashboardIdentity

# Passwords are plain text on purpose: demo accounts only
USERS = {
    "user": UserIdentity(
        user_id="user",
        name="Jack",
        password="password",
        starting_balance=Decimal("56.75"),
    ),
}

DASHBOARD_USERS = {
    "admin": DashboardIdentity(
        dash_id="admin",
        name="aldi",
        password="admin",
        partner_slug="aldi",
    ),
}
