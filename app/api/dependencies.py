"""
Session dependencies shared by the API routers
"""

from fastapi import Depends, Request

from app.core.security import extract_session_token
from app.core.state import AppState, get_state
from app.models import Session, SessionKind

async def get_session_token(request: Request) -> str:
    """Raw token from header, body or query (may be empty)"""
    return await extract_session_token(request) or ""

async def get_user_session(
    token: str = Depends(get_session_token),
    state: AppState = Depends(get_state)
) -> Session:
    """
    Resolve a user session
    Raises SessionNotFound (404, or 401 in strict mode)
    """
    return state.sessions.resolve(token, SessionKind.USER)

async def get_dashboard_session(
    token: str = Depends(get_session_token),
    state: AppState = Depends(get_state)
) -> Session:
    """Resolve a partner dashboard session"""
    return state.sessions.resolve(token, SessionKind.DASHBOARD)

async def get_current_user_id(session: Session = Depends(get_user_session)) -> str:
    return session.identity.user_id

async def get_current_partner_slug(session: Session = Depends(get_dashboard_session)) -> str:
    return session.identity.partner_slug
