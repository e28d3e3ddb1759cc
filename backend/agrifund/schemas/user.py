# backend/agrifund/schemas/user.py
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from .base import BaseSchema, TimestampMixin


class UserBase(BaseSchema):
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    occupation: Optional[str] = None


class UserCreate(UserBase):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)


class UserLogin(BaseModel):
    email: str
    password: str


class User(UserBase, TimestampMixin):
    id: str


class UserLoginResponse(BaseModel):
    message: str
    user: User
    access_token: str
    token_type: str = "bearer"
