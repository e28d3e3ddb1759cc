# backend/agrifund/schemas/contact.py
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from .base import check_id
from ..models.contact import QueryType


class ContactCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    query_type: QueryType
    message: str = Field(..., min_length=1)
    user_id: Optional[str] = None

    @field_validator("user_id")
    @classmethod
    def valid_user_reference(cls, value: Optional[str]) -> Optional[str]:
        return check_id(value)
