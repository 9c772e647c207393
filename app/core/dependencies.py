"""
FastAPI dependencies used across routers.
Only auth and DB dependencies go here.
Business logic belongs in services/.
"""
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import APIKeyCookie
from sqlalchemy.orm import Session
from jwt.exceptions import InvalidTokenError

from app.config import settings
from app.database import get_db
from app.core.security import decode_session_token
from app.core.exceptions import CredentialsException
from app.models.user import AdminUser, AdminSession

session_cookie = APIKeyCookie(name=settings.session_cookie_name, auto_error=False)


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes even for timezone-aware columns."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def get_current_session(
    token: Optional[str] = Depends(session_cookie),
    db: Session = Depends(get_db),
) -> AdminSession:
    """
    Resolves the session cookie to a live AdminSession row.

    Checks performed (in order):
    1. Cookie is present and is a valid JWT signed with our secret key
    2. The 'sid' claim maps to a row in user_sessions
    3. That row has not expired
    """
    if not token:
        raise CredentialsException()
    try:
        payload = decode_session_token(token)
    except InvalidTokenError:
        raise CredentialsException()

    session = db.query(AdminSession).filter(AdminSession.id == payload["sid"]).first()
    if session is None:
        raise CredentialsException()
    if as_utc(session.expires_at) <= datetime.now(timezone.utc):
        db.delete(session)
        db.commit()
        raise CredentialsException()
    return session


def get_current_admin(
    session: AdminSession = Depends(get_current_session),
    db: Session = Depends(get_db),
) -> AdminUser:
    """Requires a logged-in admin. Returns the AdminUser."""
    user = db.query(AdminUser).filter(AdminUser.id == session.user_id).first()
    if user is None:
        raise CredentialsException()
    return user
