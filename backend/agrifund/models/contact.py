# backend/agrifund/models/contact.py
import enum

from sqlalchemy import Column, String, Text, ForeignKey, Enum

from ..database import Base, UTCDateTime
from ..utils.ids import new_id, utcnow


class QueryType(str, enum.Enum):
    GENERAL = "general"
    TECHNICAL = "technical"
    PROJECT = "project"
    PAYMENT = "payment"
    FEEDBACK = "feedback"
    OTHER = "other"


class ContactStatus(str, enum.Enum):
    NEW = "new"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"


class Contact(Base):
    __tablename__ = "contacts"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    query_type = Column(Enum(QueryType), nullable=False, default=QueryType.GENERAL)
    message = Column(Text, nullable=False)
    status = Column(Enum(ContactStatus), nullable=False, default=ContactStatus.NEW)
    user_id = Column(String(32), ForeignKey("users.id"), nullable=True)
    created_at = Column(UTCDateTime, default=utcnow)
    resolved_at = Column(UTCDateTime, nullable=True)
