"""
Auth router: admin login, logout and session check.

The session lives in the user_sessions table. The browser holds an
httpOnly cookie with a signed pointer to that row (see core/security.py).
"""
from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.core.dependencies import get_current_session
from app.core.rate_limiter import limiter
from app.models.user import AdminSession
from app.schemas.auth import LoginRequest, SessionResponse, SessionUser
from app.schemas.common import MessageResponse
from app.services import auth_service

router = APIRouter()


@router.post("/login", response_model=SessionResponse)
@limiter.limit("10/minute")
def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    db: Session = Depends(get_db),
):
    """Check credentials and set the session cookie."""
    user, token, expires_at = auth_service.login(db, body.username, body.password)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    return SessionResponse(user=SessionUser.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    session: AdminSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    auth_service.logout(db, session)
    response.delete_cookie(settings.session_cookie_name)
    return MessageResponse(message="Logged out successfully")


@router.get("/session", response_model=SessionResponse)
def get_session(session: AdminSession = Depends(get_current_session)):
    """200 with the admin's identity, or 401 when not logged in."""
    return SessionResponse(user=SessionUser(id=session.user_id, username=session.username))
