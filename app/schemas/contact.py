from pydantic import BaseModel, EmailStr, Field, field_validator, ConfigDict
from typing import Optional
from datetime import datetime

from app.schemas.common import strip_required


class ContactCreateRequest(BaseModel):
    """Full contact form. Every field is required."""
    name: str = Field(max_length=200)
    email: EmailStr
    phone: str = Field(max_length=30)
    purpose: str = Field(max_length=200)
    message: str

    @field_validator("name", "purpose", "message")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("phone")
    @classmethod
    def phone_valid(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 10:
            raise ValueError("Please enter a valid 10-digit mobile number")
        return v


class LeadRequest(BaseModel):
    """Lead capture: only name and email are required."""
    name: str = Field(max_length=200)
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=30)
    message: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("phone", "message")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class ContactSubmissionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    phone: Optional[str] = None
    purpose: str
    message: Optional[str] = None
    source: str
    created_at: datetime


class ContactCreatedResponse(BaseModel):
    success: bool = True
    message: str
    id: str
