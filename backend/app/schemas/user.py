"""
Pydantic schemas for user-related request/response validation.
"""

from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field

Role = Literal["admin", "user"]


class UserCreate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    role: Role = "user"
    username: str = Field(..., min_length=3, max_length=100, pattern=r"^[a-zA-Z0-9_.]+$")
    password: str = Field(..., min_length=8, max_length=128)
    institution_id: Optional[str] = Field(None, max_length=32)


class UserUpdate(BaseModel):
    """Whole-record update. Omit password to keep the current one."""

    name: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    role: Role = "user"
    username: str = Field(..., min_length=3, max_length=100, pattern=r"^[a-zA-Z0-9_.]+$")
    password: Optional[str] = Field(None, min_length=8, max_length=128)
    institution_id: Optional[str] = Field(None, max_length=32)


class UserLogin(BaseModel):
    username: str
    password: str


class UserResponse(BaseModel):
    """Public view of a user: credentials are never included."""

    id: str
    name: Optional[str]
    email: Optional[str]
    phone: Optional[str]
    role: str
    institution_id: Optional[str]

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    user_id: str
    name: Optional[str]
    institution_id: Optional[str]
    user_role: str
    access_token: str
    token_type: str = "bearer"
    expires_in: int
