from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class Identity(BaseModel):
    """A signed-in identity as issued by the IdentityProvider."""

    id: str
    email: str
    created_at: Optional[datetime] = None


class LoginRequest(BaseModel):
    """POST /auth/login. Passwords are taken exactly as typed."""

    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v):
        return v.strip() if isinstance(v, str) else v


class SignUpRequest(BaseModel):
    """POST /auth/sign-up"""

    fullname: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)

    @field_validator("fullname", "email", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: dict
