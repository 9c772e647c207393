from sqlalchemy import Column, Integer, String, Text, TIMESTAMP
from sqlalchemy.sql import func
from app.database import Base
from app.models.user import new_id


class Testimonial(Base):
    __tablename__ = "testimonials"

    id = Column(String(36), primary_key=True, default=new_id, nullable=False)
    name = Column(String(200), nullable=False)
    role = Column(String(200), nullable=True)
    content = Column(Text, nullable=False)
    rating = Column(Integer, nullable=False, comment="1 to 5 stars")
    # "healing" or "career": the site section that shows it
    category = Column(String(50), nullable=False, default="healing", server_default="healing")
    image_url = Column(String(500), nullable=True)
    created_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
