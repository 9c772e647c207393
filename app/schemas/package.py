from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import List
from datetime import datetime

from app.schemas.common import strip_required


class PackageIn(BaseModel):
    """Admin: create or fully replace a package."""
    name: str = Field(max_length=200)
    description: str
    price: int
    duration: str = Field(max_length=100)
    features: List[str] = []
    is_popular: bool = False

    @field_validator("name", "description", "duration")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("price")
    @classmethod
    def price_not_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("price must not be negative")
        return v

    @field_validator("features")
    @classmethod
    def drop_blank_features(cls, v: List[str]) -> List[str]:
        return [f.strip() for f in v if f.strip()]


class PackageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    price: int
    duration: str
    features: List[str]
    is_popular: bool
    created_at: datetime
