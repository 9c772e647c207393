"""
Security utilities: password hashing and the signed admin session cookie.

The cookie carries a short JWT whose 'sid' claim points at a row in
user_sessions. The row is the source of truth: logout deletes it, so a
stolen cookie stops working even before its exp claim.
"""
import jwt
from jwt.exceptions import InvalidTokenError
from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from app.config import settings

# ── Password Hashing ──────────────────────────────────────────────────────────
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


# ── Session Token ─────────────────────────────────────────────────────────────

def session_expiry() -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=settings.session_max_age_days)


def create_session_token(session_id: str, user_id: str, expires_at: datetime) -> str:
    """
    Sign the session cookie value.
    Always use timezone-aware datetimes to avoid PyJWT deprecation warnings.
    """
    payload = {
        "sid": session_id,
        "sub": user_id,
        "type": "session",
        "iat": datetime.now(timezone.utc),
        "exp": expires_at,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_session_token(token: str) -> dict:
    """
    Decodes and validates a session cookie value.
    Raises jwt.exceptions.InvalidTokenError (or subclass) on any failure.
    """
    payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    if payload.get("type") != "session" or not payload.get("sid"):
        raise InvalidTokenError("Not a session token")
    return payload
