"""
Authentication schemas for request/response validation
"""

from pydantic import AliasChoices, BaseModel, Field
from typing import Optional

class UserLoginRequest(BaseModel):
    """Wallet app login"""
    user_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("userid", "userId", "id"),
        examples=["user"]
    )
    password: str = Field(..., min_length=1, examples=["password"])

    model_config = {
        "json_schema_extra": {
            "example": {
                "userid": "user",
                "password": "password"
            }
        }
    }

class DashboardLoginRequest(BaseModel):
    """Partner dashboard login"""
    dash_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("dashid", "dashId", "id"),
        examples=["admin"]
    )
    password: str = Field(..., min_length=1, examples=["admin"])

    model_config = {
        "json_schema_extra": {
            "example": {
                "dashid": "admin",
                "password": "admin"
            }
        }
    }

class SessionUser(BaseModel):
    id: str
    name: str
    userId: Optional[str] = None
    dashId: Optional[str] = None

class LoginResponse(BaseModel):
    success: bool = True
    cookie: str
    user: SessionUser

class LogoutResponse(BaseModel):
    success: bool = True
