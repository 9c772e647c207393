"""
Auth service: admin login, logout and account creation.
Keeps routers thin: routers only handle HTTP and cookies, services handle logic.
"""
import logging
import secrets
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from app.models.user import AdminUser, AdminSession
from app.core.security import (
    hash_password, verify_password, pwd_context, session_expiry, create_session_token
)
from app.core.exceptions import CredentialsException

logger = logging.getLogger(__name__)

# Pre-computed bcrypt hash used ONLY for constant-time comparison when the user
# does not exist, so response time does not reveal valid usernames.
_DUMMY_HASH: str = pwd_context.hash("__dummy_timing_prevention__")


def login(db: Session, username: str, password: str) -> tuple[AdminUser, str, datetime]:
    """
    Check credentials and open a session.
    Returns (user, cookie_token, expires_at).
    """
    user = db.query(AdminUser).filter(AdminUser.username == username).first()
    if user is None:
        verify_password(password, _DUMMY_HASH)
        raise CredentialsException("Invalid credentials")
    if not verify_password(password, user.hashed_password):
        logger.warning(f"Failed admin login for {username}")
        raise CredentialsException("Invalid credentials")

    expires_at = session_expiry()
    session = AdminSession(
        id=secrets.token_urlsafe(32),
        user_id=user.id,
        username=user.username,
        expires_at=expires_at,
    )
    db.add(session)
    # Opportunistic cleanup of stale sessions
    db.query(AdminSession).filter(
        AdminSession.expires_at < datetime.now(timezone.utc)
    ).delete(synchronize_session=False)
    db.commit()

    token = create_session_token(session.id, user.id, expires_at)
    logger.info(f"Admin {username} logged in")
    return user, token, expires_at


def logout(db: Session, session: AdminSession) -> None:
    username = session.username
    db.delete(session)
    db.commit()
    logger.info(f"Admin {username} logged out")


def create_or_reset_admin(db: Session, username: str, password: str) -> tuple[AdminUser, bool]:
    """Returns (user, created). An existing user gets the new password."""
    if len(password) < 8:
        raise ValueError("Password must be at least 8 characters")
    user = db.query(AdminUser).filter(AdminUser.username == username).first()
    created = user is None
    if created:
        user = AdminUser(username=username, hashed_password=hash_password(password))
        db.add(user)
    else:
        user.hashed_password = hash_password(password)
        # Existing sessions die with the old password
        db.query(AdminSession).filter(AdminSession.user_id == user.id).delete(
            synchronize_session=False
        )
    db.commit()
    db.refresh(user)
    return user, created
