# backend/agrifund/api/investments.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.investment import Investment
from ..models.project import Project
from ..models.user import User
from ..models.investor import Investor
from ..schemas.investment import (
    Investment as InvestmentSchema, InvestmentCreate, InvestmentDetail, InvestmentAction, InvestmentResponse
)
from ..security import require_admin
from ..services.funding import funding_service, FundingError
from ..utils.ids import validate_id
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/investments", tags=["investments"])


def _investor_exists(db: Session, investor_id: str) -> bool:
    """Owners and dedicated investor accounts can both invest"""
    if db.query(User).filter(User.id == investor_id).first():
        return True
    return db.query(Investor).filter(Investor.id == investor_id).first() is not None


@router.get("/admin/all", response_model=List[InvestmentDetail])
async def list_all_investments(db: Session = Depends(get_db), _admin=Depends(require_admin)):
    try:
        investments = await funding_service.list_all(db)
        api_logger.info(f"Fetched {len(investments)} investments for admin")
        return investments
    except Exception as e:
        api_logger.error("Failed to fetch investments", extra={"error": str(e)}, exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error fetching investments: {str(e)}")


@router.put("/admin/{investment_id}", response_model=InvestmentResponse)
async def update_investment_status(
        investment_id: str,
        request: InvestmentAction,
        db: Session = Depends(get_db),
        _admin=Depends(require_admin)
):
    """Approve, reject or put an investment under review"""
    api_logger.info("Updating investment status", extra={
        "investment_id": investment_id,
        "action": request.action
    })

    validate_id(investment_id, "investment")
    investment = db.query(Investment).filter(Investment.id == investment_id).first()
    if not investment:
        api_logger.warning("Investment not found", extra={"investment_id": investment_id})
        raise HTTPException(status_code=404, detail="Investment not found")

    try:
        investment = await funding_service.apply_action(db, investment, request.action, request.rejection_reason)
    except FundingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception as e:
        api_logger.error("Failed to update investment", extra={
            "investment_id": investment_id,
            "error": str(e)
        })
        raise HTTPException(status_code=500, detail=f"Error updating investment: {str(e)}")

    return {
        "success": True,
        "message": "Investment updated successfully",
        "investment": InvestmentSchema.model_validate(investment)
    }


@router.post("/create", response_model=InvestmentResponse, status_code=201)
async def create_investment(investment: InvestmentCreate, db: Session = Depends(get_db)):
    api_logger.info("Creating new investment", extra={
        "project_id": investment.project_id,
        "investor_id": investment.investor_id,
        "amount": investment.amount
    })

    if not db.query(Project).filter(Project.id == investment.project_id).first():
        raise HTTPException(status_code=404, detail="Project not found")
    if not _investor_exists(db, investment.investor_id):
        raise HTTPException(status_code=404, detail="Investor not found")

    try:
        db_investment = Investment(**investment.model_dump())
        db.add(db_investment)
        db.commit()
        db.refresh(db_investment)
    except Exception as e:
        api_logger.error("Failed to create investment", extra={
            "project_id": investment.project_id,
            "error": str(e)
        })
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Error creating investment: {str(e)}")

    api_logger.info("Investment created successfully", extra={"investment_id": db_investment.id})
    return {
        "success": True,
        "message": "Investment created successfully",
        "investment": InvestmentSchema.model_validate(db_investment)
    }


@router.get("/investor/{investor_id}", response_model=List[InvestmentDetail])
async def list_investor_investments(investor_id: str, db: Session = Depends(get_db)):
    validate_id(investor_id, "investor")
    try:
        investments = await funding_service.list_by_investor(db, investor_id)
        api_logger.info(f"Fetched {len(investments)} investments for investor", extra={"investor_id": investor_id})
        return investments
    except Exception as e:
        api_logger.error("Failed to fetch investor investments", extra={
            "investor_id": investor_id,
            "error": str(e)
        }, exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error fetching investments: {str(e)}")


@router.get("/project/{project_id}", response_model=List[InvestmentDetail])
async def list_project_investments(project_id: str, db: Session = Depends(get_db)):
    validate_id(project_id, "project")
    try:
        investments = await funding_service.list_by_project(db, project_id)
        api_logger.info(f"Fetched {len(investments)} investments for project", extra={"project_id": project_id})
        return investments
    except Exception as e:
        api_logger.error("Failed to fetch project investments", extra={
            "project_id": project_id,
            "error": str(e)
        }, exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error fetching investments for project: {str(e)}")
