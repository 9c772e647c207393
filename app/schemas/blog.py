from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Optional
from datetime import datetime

from app.schemas.common import strip_required


class BlogIn(BaseModel):
    title: str = Field(max_length=300)
    excerpt: str
    content: str
    author: str = Field(max_length=200)
    image_url: Optional[str] = Field(default=None, max_length=500)

    @field_validator("title", "excerpt", "content", "author")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return strip_required(v)


class BlogOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    excerpt: str
    content: str
    author: str
    image_url: Optional[str] = None
    created_at: datetime
