from pydantic import BaseModel
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope used by every JSON endpoint: {success, data | message}."""
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None


class MessageResponse(BaseModel):
    success: bool = True
    message: str


def strip_required(v: str) -> str:
    """Shared validator body: trim and refuse blank strings."""
    v = v.strip()
    if not v:
        raise ValueError("must not be empty")
    return v
