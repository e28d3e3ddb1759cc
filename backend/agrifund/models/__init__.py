# backend/agrifund/models/__init__.py
from ..database import Base
from .user import User
from .investor import Investor
from .project import Project, FundUtilizationDetail, FundingStatus, AdminStatus, Priority
from .investment import Investment, InvestmentStatus
from .contact import Contact, QueryType, ContactStatus

__all__ = [
    "Base",
    "User",
    "Investor",
    "Project",
    "FundUtilizationDetail",
    "FundingStatus",
    "AdminStatus",
    "Priority",
    "Investment",
    "InvestmentStatus",
    "Contact",
    "QueryType",
    "ContactStatus"
]
