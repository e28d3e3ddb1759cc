# backend/agrifund/api/investors.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.investor import Investor
from ..schemas.base import MessageResponse
from ..schemas.investor import InvestorCreate, InvestorLogin, InvestorLoginResponse
from ..security import hash_password, verify_password, create_access_token, ROLE_INVESTOR
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/investors", tags=["investors"])


@router.post("/create", response_model=MessageResponse, status_code=201)
async def create_investor(investor: InvestorCreate, db: Session = Depends(get_db)):
    email = str(investor.email)
    api_logger.info("Creating new investor", extra={"email": email})

    if db.query(Investor).filter(Investor.email == email).first():
        raise HTTPException(status_code=400, detail="Email already exists")

    try:
        db.add(Investor(
            email=email,
            password=hash_password(investor.password),
            occupation=investor.occupation
        ))
        db.commit()
    except Exception as e:
        api_logger.error("Failed to create investor", extra={"email": email, "error": str(e)})
        db.rollback()
        raise HTTPException(status_code=500, detail="Internal Server Error")

    return {"message": "Investor created successfully"}


@router.post("/login", response_model=InvestorLoginResponse)
async def login_investor(credentials: InvestorLogin, db: Session = Depends(get_db)):
    investor = db.query(Investor).filter(Investor.email == credentials.email).first()
    if not investor or not verify_password(credentials.password, investor.password):
        api_logger.warning("Invalid investor login", extra={"email": credentials.email})
        raise HTTPException(status_code=401, detail="Invalid email or password")

    return {
        "message": "Login successful",
        "user": {"id": investor.id, "email": investor.email, "role": ROLE_INVESTOR},
        "access_token": create_access_token(investor.id, ROLE_INVESTOR)
    }
