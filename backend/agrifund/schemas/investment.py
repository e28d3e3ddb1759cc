# backend/agrifund/schemas/investment.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .base import BaseSchema, TimestampMixin, check_id
from .project import ProjectSummary
from ..models.investment import InvestmentStatus


class BankDetails(BaseModel):
    account_number: str = Field(..., min_length=1)
    bank_name: str = Field(..., min_length=1)
    bank_branch: Optional[str] = None
    ifsc_code: str = Field(..., min_length=1)
    account_holder_name: str = Field(..., min_length=1)


class PersonalDetails(BaseModel):
    pan_number: str = Field(..., min_length=1)
    aadhar_number: str = Field(..., min_length=1)


class InvestmentCreate(BaseModel):
    project_id: str
    investor_id: str
    amount: float = Field(..., ge=1)
    bank_details: BankDetails
    personal_details: PersonalDetails
    investment_reason: Optional[str] = None

    @field_validator("project_id", "investor_id")
    @classmethod
    def valid_reference(cls, value: str) -> str:
        return check_id(value)


class InvestmentAction(BaseModel):
    action: str
    rejection_reason: Optional[str] = None


class InvestorSummary(BaseSchema):
    id: str
    name: Optional[str] = None
    email: str


class Investment(BaseSchema, TimestampMixin):
    id: str
    project_id: Optional[str] = None
    investor_id: str
    amount: float
    bank_details: BankDetails
    personal_details: PersonalDetails
    investment_reason: Optional[str] = None
    status: InvestmentStatus
    rejection_reason: Optional[str] = None
    admin_approved_at: Optional[datetime] = None
    admin_approved_by: Optional[str] = None


class InvestmentDetail(Investment):
    project: Optional[ProjectSummary] = None
    investor: Optional[InvestorSummary] = None


class InvestmentResponse(BaseModel):
    success: bool = True
    message: str
    investment: Investment
