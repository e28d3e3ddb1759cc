# backend/agrifund/api/admin.py
import hmac

from fastapi import APIRouter, HTTPException

from ..config import settings
from ..schemas.auth import AdminLogin, Token
from ..security import create_access_token, ROLE_ADMIN
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.post("/login", response_model=Token)
async def login_admin(credentials: AdminLogin):
    """Check the configured admin credentials and issue an admin token"""
    username_ok = hmac.compare_digest(credentials.username.encode(), settings.ADMIN_USERNAME.encode())
    password_ok = hmac.compare_digest(credentials.password.encode(), settings.ADMIN_PASSWORD.encode())
    if not (username_ok and password_ok):
        api_logger.warning("Invalid admin login", extra={"username": credentials.username})
        raise HTTPException(status_code=401, detail="Invalid admin credentials")

    api_logger.info("Admin logged in")
    return {"access_token": create_access_token(credentials.username, ROLE_ADMIN)}
