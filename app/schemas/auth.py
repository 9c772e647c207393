"""
Auth schemas: admin login request and session responses.
"""
from pydantic import BaseModel, ConfigDict, field_validator


class LoginRequest(BaseModel):
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def username_trimmed(cls, v: str) -> str:
        return v.strip()


class SessionUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str


class SessionResponse(BaseModel):
    success: bool = True
    user: SessionUser
