from sqlalchemy import Column, String, Text, TIMESTAMP
from sqlalchemy.sql import func
from app.database import Base
from app.models.user import new_id


class Blog(Base):
    __tablename__ = "blogs"

    id = Column(String(36), primary_key=True, default=new_id, nullable=False)
    title = Column(String(300), nullable=False)
    excerpt = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    author = Column(String(200), nullable=False)
    image_url = Column(String(500), nullable=True)
    created_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
