# backend/agrifund/models/user.py
from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship

from ..database import Base, UTCDateTime
from ..utils.ids import new_id, utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)  # bcrypt hash
    phone = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)
    occupation = Column(String(255), nullable=True)
    created_at = Column(UTCDateTime, default=utcnow)

    projects = relationship("Project", back_populates="owner", passive_deletes="all")
