from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from posadmin.rbac.roles import Role, parse_role
from posadmin.utils.logger import Logger

logger = Logger("accounts")


class Profile(BaseModel):
    """One row of the profile store."""

    id: str
    fullname: str = ""
    role: Optional[Role] = None
    created_by: Optional[str] = None
    created_at: datetime
    is_active: bool = True

    @field_validator("role", mode="before")
    @classmethod
    def read_role(cls, v):
        role = parse_role(v)
        if role is None and v is not None:
            logger.warning(f"Unrecognised role value in profile store: {v!r}")
        return role


class CreateCashierRequest(BaseModel):
    """
    POST /dashboard/admin/cashiers

    Only fullname and email are trimmed; passwords are kept as typed.
    """

    fullname: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)

    @field_validator("fullname", "email", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class CreateAccountRequest(CreateCashierRequest):
    """POST /dashboard/superadmin/accounts"""

    role: Role = Role.CASHIER


class UpdateAccountRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    fullname: Optional[str] = Field(None, min_length=1, max_length=100)
    role: Optional[Role] = None


class UpdateCashierRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    fullname: str = Field(..., min_length=1, max_length=100)
