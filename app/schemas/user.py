"""
User and Auth Schemas
"""
from typing import Optional, Literal
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.models.enums import UserRole


class UserBase(BaseModel):
    u_email: EmailStr
    u_first_name: str = Field(..., min_length=1, max_length=100)
    u_last_name: str = Field(..., min_length=1, max_length=100)
    u_roll_number: Optional[str] = Field(None, max_length=50)
    u_department: Optional[str] = Field(None, max_length=100)


class UserRegister(UserBase):
    """Self registration - only students and organizers"""
    u_password: str = Field(..., min_length=6, max_length=128)
    u_role: Literal["STUDENT", "ORGANIZER"] = "STUDENT"


class UserInDB(UserBase):
    model_config = ConfigDict(from_attributes=True)

    u_id: str
    u_role: UserRole
    u_created_at: Optional[datetime] = None


class User(UserInDB):
    pass


class UserSummary(BaseModel):
    """Short user info embedded in other responses"""
    model_config = ConfigDict(from_attributes=True)

    u_id: str
    u_first_name: str
    u_last_name: str
    u_email: Optional[str] = None
    u_roll_number: Optional[str] = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class AuthResponse(BaseModel):
    user: User
    tokens: TokenPair
