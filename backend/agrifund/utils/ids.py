# backend/agrifund/utils/ids.py
import re
from datetime import datetime, timezone
from uuid import uuid4

from fastapi import HTTPException

ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def new_id() -> str:
    return uuid4().hex


def is_valid_id(value) -> bool:
    return isinstance(value, str) and bool(ID_PATTERN.match(value))


def validate_id(value: str, label: str = "record") -> str:
    """Reject identifiers that are not 32 lowercase hex characters"""
    if not is_valid_id(value):
        raise HTTPException(status_code=400, detail=f"Invalid {label} ID format")
    return value


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
