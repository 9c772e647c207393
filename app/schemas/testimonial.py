from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Literal, Optional
from datetime import datetime

from app.schemas.common import strip_required


class TestimonialIn(BaseModel):
    """Create and PUT body. PUT replaces every field."""
    name: str = Field(max_length=200)
    role: Optional[str] = Field(default=None, max_length=200)
    content: str
    rating: int
    category: Literal["healing", "career"] = "healing"
    image_url: Optional[str] = Field(default=None, max_length=500)

    @field_validator("name", "content")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("rating")
    @classmethod
    def rating_range(cls, v: int) -> int:
        if v < 1 or v > 5:
            raise ValueError("rating must be between 1 and 5")
        return v


class TestimonialOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    role: Optional[str] = None
    content: str
    rating: int
    category: str
    image_url: Optional[str] = None
    created_at: datetime
