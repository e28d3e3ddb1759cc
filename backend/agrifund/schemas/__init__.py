# backend/agrifund/schemas/__init__.py
from .base import MessageResponse
from .project import (
    Project, ProjectSummary, ProjectResponse, ProjectReviewAction, ProjectStatusUpdate,
    FundUtilizationDetail, FundUtilizationDetailIn, FundDetailsUpdate, NotesUpdate
)
from .investment import Investment, InvestmentCreate, InvestmentDetail, InvestmentAction, InvestmentResponse
from .user import User, UserCreate, UserLogin, UserLoginResponse
from .investor import InvestorCreate, InvestorLogin, InvestorPublic, InvestorLoginResponse
from .contact import ContactCreate
from .auth import AdminLogin, Token, TokenPayload

__all__ = [
    "MessageResponse",
    "Project", "ProjectSummary", "ProjectResponse", "ProjectReviewAction", "ProjectStatusUpdate",
    "FundUtilizationDetail", "FundUtilizationDetailIn", "FundDetailsUpdate", "NotesUpdate",
    "Investment", "InvestmentCreate", "InvestmentDetail", "InvestmentAction", "InvestmentResponse",
    "User", "UserCreate", "UserLogin", "UserLoginResponse",
    "InvestorCreate", "InvestorLogin", "InvestorPublic", "InvestorLoginResponse",
    "ContactCreate",
    "AdminLogin", "Token", "TokenPayload"
]
