"""In-memory session store for user and partner dashboard logins"""

from typing import Dict, Mapping, Optional, Union
from datetime import timedelta
import threading
import logging

from app.core.exceptions import InvalidCredentialsException, SessionNotFoundException
from app.core.logging import mask_token
from app.core.security import SecurityUtils
from app.models import Session, SessionKind, UserIdentity, DashboardIdentity, utcnow

logger = logging.getLogger(__name__)

class SessionStore:
    """Maps opaque tokens to identities"""

    def __init__(
        self,
        users: Mapping[str, UserIdentity],
        dashboard_users: Mapping[str, DashboardIdentity],
        ttl_seconds: Optional[int] = None,
        strict_errors: bool = False
    ):
        self.users = dict(users)
        self.dashboard_users = dict(dashboard_users)
        self.ttl_seconds = ttl_seconds
        self.strict_errors = strict_errors
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def login_user(self, user_id: str, password: str) -> Session:
        """Check user credentials and issue a new session"""
        identity = self.users.get(user_id)
        return self._login(identity, password, SessionKind.USER)

    def login_dashboard(self, dash_id: str, password: str) -> Session:
        """Check dashboard credentials and issue a new session"""
        identity = self.dashboard_users.get(dash_id)
        return self._login(identity, password, SessionKind.DASHBOARD)

    def _login(
        self,
        identity: Optional[Union[UserIdentity, DashboardIdentity]],
        password: str,
        kind: SessionKind
    ) -> Session:
        if identity is None or not SecurityUtils.verify_secret(password or "", identity.password):
            raise InvalidCredentialsException()

        session = Session(
            token=SecurityUtils.generate_session_token(),
            kind=kind,
            identity=identity,
            created_at=utcnow()
        )
        with self._lock:
            self._sessions[session.token] = session
            total = len(self._sessions)

        logger.info(
            f"Login successful ({kind.value}): {session.subject_id}, "
            f"token {mask_token(session.token)}, {total} sessions"
        )
        return session

    def resolve(self, token: Optional[str], kind: SessionKind = SessionKind.USER) -> Session:
        """Look up a live session of the given kind"""
        if not token or not token.strip():
            raise SessionNotFoundException(strict=self.strict_errors)

        token = token.strip()
        with self._lock:
            session = self._sessions.get(token)
            if session is not None and self._is_expired(session):
                del self._sessions[token]
                logger.info(f"Session expired for {session.subject_id}")
                session = None

        if session is None or session.kind != kind:
            logger.debug(f"Session not found for token {mask_token(token)}")
            raise SessionNotFoundException(strict=self.strict_errors)
        return session

    def logout(self, token: str) -> bool:
        """Revoke a token. Returns False if it was not live."""
        with self._lock:
            session = self._sessions.pop(token.strip(), None) if token else None
        if session is not None:
            logger.info(f"Logged out {session.subject_id}")
        return session is not None

    def _is_expired(self, session: Session) -> bool:
        if self.ttl_seconds is None:
            return False
        return utcnow() - session.created_at > timedelta(seconds=self.ttl_seconds)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
