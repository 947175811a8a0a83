"""Identity and session models"""

from pydantic import BaseModel, ConfigDict
from datetime import datetime
from decimal import Decimal
from typing import Optional, Union
import enum

class SessionKind(str, enum.Enum):
    USER = "user"
    DASHBOARD = "dashboard"

class UserIdentity(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str
    name: str
    password: str
    starting_balance: Optional[Decimal] = None

class DashboardIdentity(BaseModel):
    """Partner dashboard login, mapped 1:1 to a partner slug"""

    model_config = ConfigDict(frozen=True)

    dash_id: str
    name: str
    password: str
    partner_slug: str

class Session(BaseModel):
    model_config = ConfigDict(frozen=True)

    token: str
    kind: SessionKind
    identity: Union[UserIdentity, DashboardIdentity]
    created_at: datetime

    @property
    def subject_id(self) -> str:
        if isinstance(self.identity, UserIdentity):
            return self.identity.user_id
        return self.identity.dash_id
