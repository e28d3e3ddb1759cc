# backend/agrifund/api/users.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.user import User
from ..schemas.base import MessageResponse
from ..schemas.user import User as UserSchema, UserCreate, UserLogin, UserLoginResponse
from ..security import hash_password, verify_password, create_access_token, ROLE_OWNER
from ..utils.ids import validate_id
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/create", response_model=MessageResponse, status_code=201)
async def create_user(user: UserCreate, db: Session = Depends(get_db)):
    """Register a project owner account"""
    email = str(user.email)
    api_logger.info("Creating new user", extra={"email": email})

    if db.query(User).filter(User.email == email).first():
        api_logger.warning("User already exists", extra={"email": email})
        raise HTTPException(status_code=409, detail="User already exists with this email")

    try:
        db_user = User(
            name=user.name,
            email=email,
            password=hash_password(user.password),
            phone=user.phone or None,
            address=user.address or None,
            occupation=user.occupation or None
        )
        db.add(db_user)
        db.commit()
    except Exception as e:
        api_logger.error("Failed to create user", extra={"email": email, "error": str(e)})
        db.rollback()
        raise HTTPException(status_code=500, detail="Server error. Please try again later.")

    return {"message": "Account created successfully!"}


@router.post("/login", response_model=UserLoginResponse)
async def login_user(credentials: UserLogin, db: Session = Depends(get_db)):
    api_logger.info("Login attempt", extra={"email": credentials.email})

    user = db.query(User).filter(User.email == credentials.email).first()
    if not user:
        api_logger.warning("User not found for login", extra={"email": credentials.email})
        raise HTTPException(status_code=404, detail="User not found")

    if not verify_password(credentials.password, user.password):
        api_logger.warning("Invalid password for login", extra={"email": credentials.email})
        raise HTTPException(status_code=401, detail="Invalid credentials")

    api_logger.info("Login successful", extra={"user_id": user.id})
    return {
        "message": "Login successful",
        "user": UserSchema.model_validate(user),
        "access_token": create_access_token(user.id, ROLE_OWNER)
    }


@router.get("/{user_id}", response_model=UserSchema)
async def get_user(user_id: str, db: Session = Depends(get_db)):
    validate_id(user_id, "user")
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        api_logger.warning("User not found", extra={"user_id": user_id})
        raise HTTPException(status_code=404, detail="User not found")
    return user
