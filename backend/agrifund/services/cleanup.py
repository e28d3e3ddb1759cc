# backend/agrifund/services/cleanup.py
from sqlalchemy.orm import Session

from ..config import settings
from ..models import Project
from ..utils.logging import service_logger


class CleanupService:
    """Service to handle removal of uploaded artifacts"""

    @staticmethod
    async def delete_document(relative_path: str | None) -> None:
        """Delete an uploaded document stored relative to STORAGE_PATH"""
        if not relative_path:
            return
        try:
            document_path = settings.STORAGE_PATH / relative_path
            if document_path.exists():
                document_path.unlink()
                service_logger.info(f"Deleted project document: {document_path}")
        except OSError as e:
            service_logger.error(f"Error deleting project document: {str(e)}", extra={
                "document": relative_path
            })
            raise

    @staticmethod
    async def delete_project(project: Project, db: Session) -> None:
        """Delete a project row, then its uploaded document.

        Fund utilization entries go with the row; investments keep their
        history with the project link cleared. The file is only removed
        once the delete is committed.
        """
        project_id, document = project.id, project.document
        try:
            db.delete(project)
            db.commit()
        except Exception as e:
            db.rollback()
            service_logger.error(f"Error deleting project: {str(e)}", extra={"project_id": project_id})
            raise

        try:
            await CleanupService.delete_document(document)
        except OSError:
            service_logger.warning("Project deleted but its document could not be removed", extra={
                "project_id": project_id,
                "document": document
            })

        service_logger.info(f"Deleted project {project_id} and its artifacts")


cleanup_service = CleanupService()
