"""
Security utilities for session tokens
Handles token generation and extraction from incoming requests
"""

from typing import Optional
from fastapi import Request
import json
import logging
import secrets

logger = logging.getLogger(__name__)

SESSION_HEADER = "x-auth-cookie"
SESSION_FIELD = "cookie"

class SecurityUtils:
    """Security utility functions"""

    @staticmethod
    def generate_session_token() -> str:
        """Generate an unguessable session token (256 bits)"""
        return secrets.token_hex(32)

    @staticmethod
    def verify_secret(provided: str, expected: str) -> bool:
        """Constant-time secret comparison"""
        return secrets.compare_digest(provided.encode(), expected.encode())

def _bearer_token(request: Request) -> Optional[str]:
    auth_header = request.headers.get("authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[len("Bearer "):].strip() or None
    return None

async def _body_token(request: Request) -> Optional[str]:
    if request.method in ("GET", "HEAD", "OPTIONS"):
        return None
    body = await request.body()
    if not body:
        return None
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError):
        return None
    if isinstance(data, dict):
        value = data.get(SESSION_FIELD)
        if isinstance(value, str):
            return value
    return None

async def extract_session_token(request: Request) -> Optional[str]:
    """
    Find the session token on a request.

    Precedence: bearer header, X-Auth-Cookie header, JSON body "cookie",
    query "cookie". First non-empty value wins.
    """
    candidates = [
        _bearer_token(request),
        request.headers.get(SESSION_HEADER),
        await _body_token(request),
        request.query_params.get(SESSION_FIELD),
    ]
    for candidate in candidates:
        if candidate and candidate.strip():
            return candidate.strip()
    return None
