# backend/agrifund/api/projects.py
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..models.project import Project, FundUtilizationDetail, FundingStatus, AdminStatus, Priority
from ..models.user import User
from ..schemas.auth import TokenPayload
from ..schemas.base import MessageResponse
from ..schemas.project import (
    Project as ProjectSchema, ProjectResponse, ProjectReviewAction, ProjectStatusUpdate,
    NotesUpdate, FundDetailsUpdate
)
from ..security import require_admin, require_owner
from ..services.cleanup import cleanup_service
from ..services.review import review_service, ReviewError
from ..utils.files import save_upload_file, get_relative_path, UploadTooLargeError
from ..utils.ids import validate_id, utcnow, as_utc
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/projects", tags=["projects"])

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 2000
REVIEW_OUTCOMES = {"approve": "approved", "reject": "rejected"}


def _get_project_or_404(db: Session, project_id: str) -> Project:
    validate_id(project_id, "project")
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        api_logger.warning("Project not found", extra={"project_id": project_id})
        raise HTTPException(status_code=404, detail="Project not found")
    return project


def _ensure_owner(project: Project, principal: Optional[TokenPayload]) -> None:
    if principal is not None and principal.sub != project.owner_id:
        api_logger.warning("Rejected non-owner project update", extra={
            "project_id": project.id,
            "principal": principal.sub
        })
        raise HTTPException(status_code=403, detail="Access denied: Not the project owner")


def _clean_text(value: str, field: str, max_length: Optional[int] = None) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise HTTPException(status_code=400, detail=f"Project {field} is required")
    if max_length is not None and len(cleaned) > max_length:
        raise HTTPException(status_code=400, detail=f"Project {field} cannot exceed {max_length} characters")
    return cleaned


def _check_amount(amount: float) -> float:
    if not amount > 0:
        raise HTTPException(status_code=400, detail="Amount must be a positive number")
    return amount


def _check_deadline(deadline: datetime) -> datetime:
    if as_utc(deadline) <= utcnow():
        raise HTTPException(status_code=400, detail="Deadline must be in the future")
    return deadline


async def _store_document(document: UploadFile) -> str:
    try:
        saved_path = await save_upload_file(document, settings.UPLOADS_PATH, settings.MAX_UPLOAD_BYTES)
    except UploadTooLargeError as e:
        api_logger.warning("Rejected oversized upload", extra={
            "upload_name": document.filename,
            "limit": e.limit
        })
        raise HTTPException(status_code=413, detail=str(e))
    return get_relative_path(saved_path, settings.STORAGE_PATH)


@router.get("/admin/all", response_model=List[ProjectSchema])
async def list_all_projects(db: Session = Depends(get_db), _admin=Depends(require_admin)):
    """List every project for the admin dashboard"""
    try:
        projects = db.query(Project).order_by(Project.created_at.desc()).all()
        api_logger.info(f"Fetched {len(projects)} projects for admin")
        return projects
    except Exception as e:
        api_logger.error("Failed to fetch admin projects", extra={"error": str(e)}, exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error fetching projects: {str(e)}")


@router.put("/admin/{project_id}", response_model=ProjectResponse)
async def review_project(
        project_id: str,
        review: ProjectReviewAction,
        db: Session = Depends(get_db),
        _admin=Depends(require_admin)
):
    """Approve or reject a project for investor visibility"""
    api_logger.info("Reviewing project", extra={"project_id": project_id, "action": review.action})

    project = _get_project_or_404(db, project_id)
    try:
        project = await review_service.review(db, project, review.action, review.rejection_reason)
    except ReviewError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        api_logger.error("Failed to review project", extra={
            "project_id": project_id,
            "error": str(e)
        })
        raise HTTPException(status_code=500, detail=f"Error updating project status: {str(e)}")

    return {
        "success": True,
        "message": f"Project {REVIEW_OUTCOMES[review.action]} successfully",
        "project": ProjectSchema.model_validate(project)
    }


@router.get("", response_model=List[ProjectSchema])
async def list_public_projects(db: Session = Depends(get_db)):
    """Approved projects that still need funding"""
    try:
        projects = db.query(Project) \
            .filter(Project.admin_status == AdminStatus.APPROVED) \
            .filter(Project.amount_funded < Project.amount) \
            .order_by(Project.created_at.desc()) \
            .all()
        api_logger.info(f"Fetched {len(projects)} public projects")
        return projects
    except Exception as e:
        api_logger.error("Failed to fetch public projects", extra={"error": str(e)}, exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error fetching projects: {str(e)}")


@router.get("/project/{project_id}", response_model=ProjectSchema)
async def get_project(project_id: str, db: Session = Depends(get_db)):
    project = _get_project_or_404(db, project_id)
    api_logger.info("Project retrieved successfully", extra={"project_id": project_id})
    return project


@router.get("/investor/approved", response_model=List[ProjectSchema])
async def list_approved_projects(db: Session = Depends(get_db)):
    """Projects visible to investors, whatever their funding status"""
    try:
        projects = db.query(Project) \
            .filter(Project.admin_status == AdminStatus.APPROVED) \
            .order_by(Project.created_at.desc()) \
            .all()
        api_logger.info(f"Fetched {len(projects)} approved projects for investor")
        return projects
    except Exception as e:
        api_logger.error("Failed to fetch approved projects", extra={"error": str(e)}, exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error fetching approved projects: {str(e)}")


@router.get("/owner/{owner_id}", response_model=List[ProjectSchema])
async def list_owner_projects(owner_id: str, db: Session = Depends(get_db)):
    validate_id(owner_id, "owner")
    try:
        projects = db.query(Project) \
            .filter(Project.owner_id == owner_id) \
            .order_by(Project.created_at.desc()) \
            .all()
        api_logger.info(f"Found {len(projects)} projects for owner", extra={"owner_id": owner_id})
        return projects
    except Exception as e:
        api_logger.error("Failed to fetch owner projects", extra={
            "owner_id": owner_id,
            "error": str(e)
        }, exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error fetching owner projects: {str(e)}")


@router.post("/create", response_model=ProjectResponse, status_code=201)
async def create_project(
        title: str = Form(...),
        description: str = Form(...),
        amount: float = Form(...),
        location: str = Form(...),
        deadline: datetime = Form(...),
        owner_id: str = Form(...),
        status: FundingStatus = Form(FundingStatus.PENDING),
        priority: Priority = Form(Priority.MEDIUM),
        engineer: Optional[str] = Form(None),
        document: Optional[UploadFile] = File(None),
        db: Session = Depends(get_db)
):
    api_logger.info("Creating new project", extra={
        "project_title": title,
        "owner_id": owner_id,
        "upload_name": document.filename if document else None
    })

    validate_id(owner_id, "owner")
    project_data = {
        "title": _clean_text(title, "title", TITLE_MAX_LENGTH),
        "description": _clean_text(description, "description", DESCRIPTION_MAX_LENGTH),
        "amount": _check_amount(amount),
        "location": _clean_text(location, "location"),
        "deadline": _check_deadline(deadline),
        "status": status,
        "priority": priority,
        "engineer": engineer.strip() if engineer else None,
        "owner_id": owner_id,
        "amount_funded": 0,
        "admin_status": AdminStatus.PENDING
    }

    if not db.query(User).filter(User.id == owner_id).first():
        api_logger.warning("Owner not found for new project", extra={"owner_id": owner_id})
        raise HTTPException(status_code=404, detail="Owner not found")

    if document is not None and document.filename:
        project_data["document"] = await _store_document(document)

    try:
        db_project = Project(**project_data)
        db.add(db_project)
        db.commit()
        db.refresh(db_project)
    except Exception as e:
        api_logger.error("Failed to create project", extra={
            "project_title": title,
            "error": str(e)
        })
        db.rollback()
        await cleanup_service.delete_document(project_data.get("document"))
        raise HTTPException(status_code=500, detail=f"Error creating project: {str(e)}")

    api_logger.info("Project created successfully", extra={
        "project_id": db_project.id,
        "project_title": db_project.title
    })
    return {
        "success": True,
        "message": "Project created successfully",
        "project": ProjectSchema.model_validate(db_project)
    }


@router.patch("/status/{project_id}", response_model=ProjectResponse)
async def update_project_status(
        project_id: str,
        update: ProjectStatusUpdate,
        db: Session = Depends(get_db)
):
    """Set the funding status directly"""
    project = _get_project_or_404(db, project_id)
    try:
        project.status = update.status
        db.commit()
        db.refresh(project)
    except Exception as e:
        api_logger.error("Failed to update project status", extra={
            "project_id": project_id,
            "error": str(e)
        })
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Error updating project status: {str(e)}")

    api_logger.info("Project status updated", extra={"project_id": project_id, "status": update.status.value})
    return {
        "success": True,
        "message": "Project status updated successfully",
        "project": ProjectSchema.model_validate(project)
    }


@router.patch("/notes/{project_id}", response_model=ProjectResponse)
async def update_fund_utilization_notes(
        project_id: str,
        update: NotesUpdate,
        db: Session = Depends(get_db),
        principal: Optional[TokenPayload] = Depends(require_owner)
):
    project = _get_project_or_404(db, project_id)
    _ensure_owner(project, principal)

    try:
        project.fund_utilization_notes = update.fund_utilization_notes
        db.commit()
        db.refresh(project)
    except Exception as e:
        api_logger.error("Failed to update fund utilization notes", extra={
            "project_id": project_id,
            "error": str(e)
        })
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Error updating fund utilization notes: {str(e)}")

    api_logger.info("Fund utilization notes updated", extra={"project_id": project_id})
    return {
        "success": True,
        "message": "Fund utilization notes updated successfully",
        "project": ProjectSchema.model_validate(project)
    }


@router.patch("/fund-details/{project_id}", response_model=ProjectResponse)
async def update_fund_utilization_details(
        project_id: str,
        update: FundDetailsUpdate,
        db: Session = Depends(get_db),
        principal: Optional[TokenPayload] = Depends(require_owner)
):
    """Replace the whole fund utilization list"""
    project = _get_project_or_404(db, project_id)
    _ensure_owner(project, principal)

    api_logger.info("Replacing fund utilization details", extra={
        "project_id": project_id,
        "entry_count": len(update.fund_utilization_details)
    })

    try:
        project.fund_utilization_details = [
            FundUtilizationDetail(
                position=position,
                amount=entry.amount,
                description=entry.description,
                date=entry.date or utcnow()
            )
            for position, entry in enumerate(update.fund_utilization_details)
        ]
        db.commit()
        db.refresh(project)
    except Exception as e:
        api_logger.error("Failed to update fund utilization details", extra={
            "project_id": project_id,
            "error": str(e)
        })
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Error updating fund utilization details: {str(e)}")

    return {
        "success": True,
        "message": "Fund utilization details updated successfully",
        "project": ProjectSchema.model_validate(project)
    }


@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(project_id: str, db: Session = Depends(get_db)):
    api_logger.info("Deleting project", extra={"project_id": project_id})

    project = _get_project_or_404(db, project_id)
    try:
        await cleanup_service.delete_project(project, db)
    except Exception as e:
        api_logger.error(f"Failed to delete project: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error deleting project: {str(e)}")

    api_logger.info(f"Successfully deleted project {project_id}")
    return {"message": "Project deleted successfully"}


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
        project_id: str,
        title: Optional[str] = Form(None),
        description: Optional[str] = Form(None),
        amount: Optional[float] = Form(None),
        location: Optional[str] = Form(None),
        deadline: Optional[datetime] = Form(None),
        status: Optional[FundingStatus] = Form(None),
        priority: Optional[Priority] = Form(None),
        engineer: Optional[str] = Form(None),
        document: Optional[UploadFile] = File(None),
        db: Session = Depends(get_db)
):
    project = _get_project_or_404(db, project_id)

    updates = {}
    if title is not None:
        updates["title"] = _clean_text(title, "title", TITLE_MAX_LENGTH)
    if description is not None:
        updates["description"] = _clean_text(description, "description", DESCRIPTION_MAX_LENGTH)
    if amount is not None:
        updates["amount"] = _check_amount(amount)
    if location is not None:
        updates["location"] = _clean_text(location, "location")
    if deadline is not None:
        updates["deadline"] = _check_deadline(deadline)
    if status is not None:
        updates["status"] = status
    if priority is not None:
        updates["priority"] = priority
    if engineer is not None:
        updates["engineer"] = engineer.strip()

    api_logger.info("Updating project", extra={
        "project_id": project_id,
        "update_fields": list(updates.keys()),
        "upload_name": document.filename if document else None
    })

    previous_document = project.document
    if document is not None and document.filename:
        updates["document"] = await _store_document(document)

    try:
        for field, value in updates.items():
            setattr(project, field, value)
        db.commit()
        db.refresh(project)
    except Exception as e:
        api_logger.error("Failed to update project", extra={
            "project_id": project_id,
            "error": str(e)
        })
        db.rollback()
        await cleanup_service.delete_document(updates.get("document"))
        raise HTTPException(status_code=500, detail=f"Error updating project: {str(e)}")

    if "document" in updates and previous_document:
        await cleanup_service.delete_document(previous_document)

    api_logger.info("Project updated successfully", extra={"project_id": project_id})
    return {
        "success": True,
        "message": "Project updated successfully",
        "project": ProjectSchema.model_validate(project)
    }
