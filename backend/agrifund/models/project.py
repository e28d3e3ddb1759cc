# backend/agrifund/models/project.py
import enum

from sqlalchemy import Column, Integer, String, Text, Float, ForeignKey, Enum
from sqlalchemy.orm import relationship

from ..database import Base, UTCDateTime
from ..utils.ids import new_id, utcnow


class FundingStatus(str, enum.Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    APPROVED = "Approved"
    COMPLETED = "Completed"


class AdminStatus(str, enum.Enum):
    PENDING = "Pending"
    UNDER_REVIEW = "Under Review"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class Priority(str, enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class FundUtilizationDetail(Base):
    __tablename__ = "fund_utilization_details"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(String(32), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)
    amount = Column(Float, nullable=False)
    description = Column(Text, nullable=False)
    date = Column(UTCDateTime, nullable=False, default=utcnow)

    project = relationship("Project", back_populates="fund_utilization_details")


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(32), primary_key=True, default=new_id)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    amount = Column(Float, nullable=False)
    amount_funded = Column(Float, nullable=False, default=0)
    location = Column(String(255), nullable=False)
    deadline = Column(UTCDateTime, nullable=False)
    status = Column(Enum(FundingStatus), nullable=False, default=FundingStatus.PENDING)
    priority = Column(Enum(Priority), nullable=False, default=Priority.MEDIUM)
    engineer = Column(String(255), nullable=True)
    document = Column(String(255), nullable=True)  # relative to STORAGE_PATH
    owner_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)

    # Admin review, tracked separately from funding progress
    admin_status = Column(Enum(AdminStatus), nullable=False, default=AdminStatus.PENDING)
    rejection_reason = Column(Text, nullable=True)
    admin_reviewed_at = Column(UTCDateTime, nullable=True)
    admin_reviewed_by = Column(String(255), nullable=True)

    fund_utilization_notes = Column(Text, nullable=False, default="")

    created_at = Column(UTCDateTime, default=utcnow)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow)

    owner = relationship("User", back_populates="projects")
    investments = relationship("Investment", back_populates="project")
    fund_utilization_details = relationship(
        "FundUtilizationDetail",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="FundUtilizationDetail.position"
    )

    @property
    def is_fully_funded(self) -> bool:
        return (self.amount_funded or 0) >= self.amount
