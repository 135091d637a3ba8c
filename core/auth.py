"""Session-cookie authentication.

The identity provider issues a session token and stores it in the
``user_sessions`` table; every API request presents it as a cookie and is
resolved to the owning ``user_id`` here.
"""

import secrets
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from core.config import SESSION_COOKIE_NAME, SESSION_TTL_HOURS
from core.exceptions import AuthenticationError
from core.logger import get_logger
from core.repository import save
from database.deps import get_db_read
from database import models

logger = get_logger("core.auth")


def create_session(db: Session, user_id: str, ttl_hours: int = SESSION_TTL_HOURS) -> str:
    """Persist a new session for `user_id` and return its token."""
    token = secrets.token_urlsafe(32)
    save(db, models.UserSession(
        token=token,
        user_id=user_id,
        expires_at=datetime.utcnow() + timedelta(hours=ttl_hours),
    ))
    logger.info("Session created for user %s", user_id)
    return token


def resolve_session(db: Session, token: Optional[str]) -> Optional[str]:
    """Return the user id for a live session token, else None."""
    if not token:
        return None
    session = db.query(models.UserSession).filter(models.UserSession.token == token).first()
    if session is None or session.expires_at < datetime.utcnow():
        return None
    return session.user_id


def get_current_user_id(request: Request, db: Session = Depends(get_db_read)) -> str:
    """FastAPI dependency: the authenticated user's id.

    Raises:
        AuthenticationError: If the cookie is missing, unknown or expired.
    """
    user_id = resolve_session(db, request.cookies.get(SESSION_COOKIE_NAME))
    if user_id is None:
        raise AuthenticationError()
    return user_id
