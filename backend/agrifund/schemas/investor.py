# backend/agrifund/schemas/investor.py
from pydantic import BaseModel, EmailStr, Field

from .base import BaseSchema


class InvestorCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)
    occupation: str = Field(..., min_length=1)


class InvestorLogin(BaseModel):
    email: str
    password: str


class InvestorPublic(BaseSchema):
    id: str
    email: str
    role: str = "investor"


class InvestorLoginResponse(BaseModel):
    message: str
    user: InvestorPublic
    access_token: str
    token_type: str = "bearer"
