from sqlalchemy import Column, Integer, Boolean, String, Text, TIMESTAMP, JSON
from sqlalchemy.sql import func
from app.database import Base
from app.models.user import new_id


class Package(Base):
    """
    Service package managed from the admin panel.

    Prices stored as integers (whole rupees). No floats.
    Example: price=15000 means ₹15,000.
    """
    __tablename__ = "packages"

    id = Column(String(36), primary_key=True, default=new_id, nullable=False)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Integer, nullable=False, comment="Price in Indian Rupees (integer)")
    duration = Column(String(100), nullable=False, comment='e.g. "60 mins" or "3 Months"')
    # Ordered list of feature strings, rendered as bullet points
    features = Column(JSON, nullable=False, default=list)
    is_popular = Column(Boolean, nullable=False, default=False, server_default="false",
                        comment="Shows a 'Popular' badge on the package in UI")
    created_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
