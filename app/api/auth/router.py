"""
Authentication API routes
Wallet users log in under /user, partner dashboards under /dash
"""

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_dashboard_session, get_user_session
from app.core.state import AppState, get_state
from app.models import Session
from .schemas import (
    UserLoginRequest,
    DashboardLoginRequest,
    SessionUser,
    LoginResponse,
    LogoutResponse
)

router = APIRouter()

@router.post(
    "/user/login",
    response_model=LoginResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Login wallet user",
    description="Exchange user id and password for a session token"
)
async def login_user(
    request: UserLoginRequest,
    state: AppState = Depends(get_state)
):
    """Login and open the user's rewards account"""
    session = state.sessions.login_user(request.user_id, request.password)
    state.ledger.open_account(session.identity.user_id)

    return LoginResponse(
        cookie=session.token,
        user=SessionUser(
            id=session.identity.user_id,
            userId=session.identity.user_id,
            name=session.identity.name
        )
    )

@router.post(
    "/user/logout",
    response_model=LogoutResponse,
    summary="Logout wallet user"
)
async def logout_user(
    session: Session = Depends(get_user_session),
    state: AppState = Depends(get_state)
):
    """Revoke the current user session"""
    state.sessions.logout(session.token)
    return LogoutResponse()

@router.post(
    "/dash/login",
    response_model=LoginResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Login partner dashboard",
    description="Exchange dashboard id and password for a session token"
)
async def login_dashboard(
    request: DashboardLoginRequest,
    state: AppState = Depends(get_state)
):
    session = state.sessions.login_dashboard(request.dash_id, request.password)

    return LoginResponse(
        cookie=session.token,
        user=SessionUser(
            id=session.identity.dash_id,
            dashId=session.identity.dash_id,
            name=session.identity.name
        )
    )

@router.post(
    "/dash/logout",
    response_model=LogoutResponse,
    summary="Logout partner dashboard"
)
async def logout_dashboard(
    session: Session = Depends(get_dashboard_session),
    state: AppState = Depends(get_state)
):
    state.sessions.logout(session.token)
    return LogoutResponse()
