import uuid
from sqlalchemy import Column, String, TIMESTAMP, ForeignKey
from sqlalchemy.sql import func
from app.database import Base


def new_id() -> str:
    return str(uuid.uuid4())


class AdminUser(Base):
    """Back-office account. Created from the CLI, never through the API."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id, nullable=False)
    username = Column(String(50), unique=True, nullable=False, index=True)
    hashed_password = Column(String, nullable=False)
    created_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


class AdminSession(Base):
    """
    Server-side half of the admin session.
    The cookie only points at a row here; deleting the row logs the admin out.
    """
    __tablename__ = "user_sessions"

    id = Column(String(64), primary_key=True, nullable=False)
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    username = Column(String(50), nullable=False)
    expires_at = Column(TIMESTAMP(timezone=True), nullable=False, index=True)
    created_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
