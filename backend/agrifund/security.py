# backend/agrifund/security.py
from datetime import timedelta
from typing import Optional

import bcrypt
import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from .config import settings
from .schemas.auth import TokenPayload
from .utils.ids import utcnow
from .utils.logging import api_logger

ROLE_ADMIN = "admin"
ROLE_OWNER = "owner"
ROLE_INVESTOR = "investor"

bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed hash or over-long password
        return False


def create_access_token(subject: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    expire = utcnow() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {"sub": subject, "role": role, "exp": expire}
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> TokenPayload:
    """Decode a bearer token, raising 401 when it is invalid or expired"""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        return TokenPayload(sub=payload["sub"], role=payload["role"])
    except (jwt.PyJWTError, KeyError) as e:
        api_logger.warning("Rejected bearer token", extra={"error": str(e)})
        raise HTTPException(status_code=401, detail="Token is not valid")


def _authorize(credentials: Optional[HTTPAuthorizationCredentials], role: str) -> Optional[TokenPayload]:
    if not settings.ENFORCE_AUTH:
        return None

    # HTTPBearer yields None for a missing header or a non-Bearer scheme
    if credentials is None:
        raise HTTPException(status_code=401, detail="No token, authorization denied")

    payload = decode_access_token(credentials.credentials)
    if payload.role != role:
        raise HTTPException(status_code=403, detail=f"Access denied: Not an {role}")
    return payload


def require_admin(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> Optional[TokenPayload]:
    """Admin gate; a no-op unless ENFORCE_AUTH is set"""
    return _authorize(credentials, ROLE_ADMIN)


def require_owner(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> Optional[TokenPayload]:
    """Project owner gate; a no-op unless ENFORCE_AUTH is set"""
    return _authorize(credentials, ROLE_OWNER)
