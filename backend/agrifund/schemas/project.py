# backend/agrifund/schemas/project.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .base import BaseSchema, TimestampMixin
from ..models.project import FundingStatus, AdminStatus, Priority


class FundUtilizationDetailIn(BaseModel):
    amount: float = Field(..., ge=0, strict=True)
    description: str = Field(..., strict=True)
    date: Optional[datetime] = None

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Each fund utilization entry must have a non-empty description")
        return value.strip()


class FundUtilizationDetail(BaseSchema):
    amount: float
    description: str
    date: datetime


class FundDetailsUpdate(BaseModel):
    fund_utilization_details: List[FundUtilizationDetailIn]


class NotesUpdate(BaseModel):
    fund_utilization_notes: str = ""


class ProjectReviewAction(BaseModel):
    action: str
    rejection_reason: Optional[str] = None


class ProjectStatusUpdate(BaseModel):
    status: FundingStatus


class ProjectSummary(BaseSchema):
    id: str
    title: str
    amount: float
    location: str
    amount_funded: float
    status: FundingStatus


class Project(BaseSchema, TimestampMixin):
    id: str
    title: str
    description: str
    amount: float
    amount_funded: float
    location: str
    deadline: datetime
    status: FundingStatus
    priority: Priority
    engineer: Optional[str] = None
    document: Optional[str] = None
    owner_id: str
    admin_status: AdminStatus
    rejection_reason: Optional[str] = None
    admin_reviewed_at: Optional[datetime] = None
    admin_reviewed_by: Optional[str] = None
    fund_utilization_notes: str = ""
    fund_utilization_details: List[FundUtilizationDetail] = []
    updated_at: Optional[datetime] = None


class ProjectResponse(BaseModel):
    success: bool = True
    message: str
    project: Project
