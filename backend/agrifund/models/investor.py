# backend/agrifund/models/investor.py
from sqlalchemy import Column, String

from ..database import Base, UTCDateTime
from ..utils.ids import new_id, utcnow


class Investor(Base):
    __tablename__ = "investors"

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)  # bcrypt hash
    occupation = Column(String(255), nullable=False)
    created_at = Column(UTCDateTime, default=utcnow)
