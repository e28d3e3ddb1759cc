# backend/agrifund/services/review.py
from typing import Optional

from sqlalchemy.orm import Session

from ..config import settings
from ..models.project import Project, AdminStatus
from ..utils.ids import utcnow
from ..utils.logging import service_logger


class ReviewError(Exception):
    """Raised for an admin review request that cannot be applied"""


class ReviewService:
    """Admin gate on project visibility; leaves the funding status alone"""

    async def review(
            self,
            db: Session,
            project: Project,
            action: str,
            rejection_reason: Optional[str] = None,
            reviewer: Optional[str] = None
    ) -> Project:
        if action == "approve":
            project.admin_status = AdminStatus.APPROVED
            project.rejection_reason = None
        elif action == "reject":
            if not rejection_reason or not rejection_reason.strip():
                raise ReviewError("Rejection reason is required for rejection.")
            project.admin_status = AdminStatus.REJECTED
            project.rejection_reason = rejection_reason.strip()
        else:
            raise ReviewError('Invalid action. Must be "approve" or "reject".')

        project.admin_reviewed_at = utcnow()
        project.admin_reviewed_by = reviewer or settings.ADMIN_REVIEWER_NAME

        try:
            db.commit()
        except Exception:
            db.rollback()
            service_logger.error("Failed to persist project review", extra={"project_id": project.id}, exc_info=True)
            raise
        db.refresh(project)

        service_logger.info("Project reviewed", extra={
            "project_id": project.id,
            "admin_status": project.admin_status.value
        })
        return project


review_service = ReviewService()
