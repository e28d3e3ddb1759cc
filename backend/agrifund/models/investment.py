# backend/agrifund/models/investment.py
import enum

from sqlalchemy import Column, String, Text, Float, ForeignKey, Enum, JSON
from sqlalchemy.orm import relationship

from ..database import Base, UTCDateTime
from ..utils.ids import new_id, utcnow


class InvestmentStatus(str, enum.Enum):
    PENDING = "Pending"
    UNDER_REVIEW = "Under Review"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class Investment(Base):
    __tablename__ = "investments"

    id = Column(String(32), primary_key=True, default=new_id)
    project_id = Column(String(32), ForeignKey("projects.id", ondelete="SET NULL"), nullable=True, index=True)
    # Either a users.id or an investors.id; both account kinds may invest
    investor_id = Column(String(32), nullable=False, index=True)
    amount = Column(Float, nullable=False)
    bank_details = Column(JSON, nullable=False)  # account_number, bank_name, bank_branch, ifsc_code, account_holder_name
    personal_details = Column(JSON, nullable=False)  # pan_number, aadhar_number
    investment_reason = Column(Text, nullable=True)
    status = Column(Enum(InvestmentStatus), nullable=False, default=InvestmentStatus.PENDING)
    rejection_reason = Column(Text, nullable=True)
    admin_approved_at = Column(UTCDateTime, nullable=True)
    admin_approved_by = Column(String(255), nullable=True)
    created_at = Column(UTCDateTime, default=utcnow)

    project = relationship("Project", back_populates="investments")
    investor_user = relationship(
        "User",
        primaryjoin="foreign(Investment.investor_id) == User.id",
        viewonly=True
    )
    investor_account = relationship(
        "Investor",
        primaryjoin="foreign(Investment.investor_id) == Investor.id",
        viewonly=True
    )

    @property
    def investor(self):
        return self.investor_user or self.investor_account
