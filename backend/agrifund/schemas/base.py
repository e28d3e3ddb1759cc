# backend/agrifund/schemas/base.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict

from ..utils.ids import is_valid_id

class BaseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

class TimestampMixin(BaseModel):
    created_at: datetime

class MessageResponse(BaseModel):
    message: str


def check_id(value: str | None) -> str | None:
    """Field validator helper for record references"""
    if value is not None and not is_valid_id(value):
        raise ValueError("Invalid ID format")
    return value
