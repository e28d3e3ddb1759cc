# backend/agrifund/api/contact.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.contact import Contact
from ..schemas.base import MessageResponse
from ..schemas.contact import ContactCreate
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/contact", tags=["contact"])


@router.post("", response_model=MessageResponse, status_code=201)
async def submit_contact(contact: ContactCreate, db: Session = Depends(get_db)):
    """Store a contact form inquiry"""
    api_logger.info("Contact form received", extra={
        "email": str(contact.email),
        "query_type": contact.query_type.value
    })
    try:
        data = contact.model_dump()
        data["email"] = str(contact.email)
        db.add(Contact(**data))
        db.commit()
    except Exception as e:
        api_logger.error("Failed to submit contact form", extra={"error": str(e)})
        db.rollback()
        raise HTTPException(status_code=500, detail="Server error. Please try again later.")

    return {"message": "Contact form submitted successfully!"}
