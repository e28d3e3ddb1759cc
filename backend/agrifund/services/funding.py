# backend/agrifund/services/funding.py
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from ..config import settings
from ..models.investment import Investment, InvestmentStatus
from ..models.project import Project, FundingStatus
from ..utils.ids import utcnow
from ..utils.logging import service_logger


class FundingError(Exception):
    """Base class for investment workflow failures"""
    status_code = 400


class InvestmentAlreadyApprovedError(FundingError):
    def __init__(self):
        super().__init__("Investment is already approved.")


class RejectionReasonRequiredError(FundingError):
    def __init__(self):
        super().__init__("Rejection reason is required for rejection.")


class InvalidInvestmentActionError(FundingError):
    def __init__(self, action):
        self.action = action
        super().__init__('Invalid action. Must be "approve", "reject", or "under review".')


class AssociatedProjectNotFoundError(FundingError):
    status_code = 404

    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__("Associated project not found.")


class FundingService:
    """Investment approval and reconciliation of project funded totals.

    Approve and reject touch two rows (the investment and its project);
    both changes go out in a single commit so a failure leaves neither.
    """

    ACTIONS = ("approve", "reject", "under review")

    async def apply_action(
            self,
            db: Session,
            investment: Investment,
            action: str,
            rejection_reason: Optional[str] = None
    ) -> Investment:
        """Dispatch an admin action string to the matching transition"""
        if action == "approve":
            return await self.approve(db, investment)
        if action == "reject":
            return await self.reject(db, investment, rejection_reason)
        if action == "under review":
            return await self.mark_under_review(db, investment)
        raise InvalidInvestmentActionError(action)

    async def approve(self, db: Session, investment: Investment, approved_by: Optional[str] = None) -> Investment:
        if investment.status == InvestmentStatus.APPROVED:
            service_logger.warning("Investment already approved", extra={"investment_id": investment.id})
            raise InvestmentAlreadyApprovedError()

        project = db.query(Project).filter(Project.id == investment.project_id).first()
        if not project:
            service_logger.warning("Project for investment not found", extra={
                "investment_id": investment.id,
                "project_id": investment.project_id
            })
            raise AssociatedProjectNotFoundError(investment.project_id)

        project.amount_funded = (project.amount_funded or 0) + investment.amount
        if project.is_fully_funded:
            project.status = FundingStatus.COMPLETED

        investment.status = InvestmentStatus.APPROVED
        investment.admin_approved_at = utcnow()
        investment.admin_approved_by = approved_by or settings.ADMIN_REVIEWER_NAME
        investment.rejection_reason = None

        self._commit(db, investment, project)
        service_logger.info("Investment approved", extra={
            "investment_id": investment.id,
            "project_id": project.id,
            "amount": investment.amount,
            "amount_funded": project.amount_funded,
            "project_status": project.status.value
        })
        return investment

    async def reject(self, db: Session, investment: Investment, reason: Optional[str]) -> Investment:
        if not reason or not reason.strip():
            raise RejectionReasonRequiredError()

        was_approved = investment.status == InvestmentStatus.APPROVED

        investment.status = InvestmentStatus.REJECTED
        investment.rejection_reason = reason.strip()
        investment.admin_approved_at = None
        investment.admin_approved_by = None

        project = None
        if was_approved:
            project = db.query(Project).filter(Project.id == investment.project_id).first()
            if project:
                self._reverse_funding(project, investment.amount)

        self._commit(db, investment, project)
        service_logger.info("Investment rejected", extra={
            "investment_id": investment.id,
            "was_approved": was_approved,
            "amount_funded": project.amount_funded if project else None
        })
        return investment

    async def mark_under_review(self, db: Session, investment: Investment) -> Investment:
        investment.status = InvestmentStatus.UNDER_REVIEW
        investment.rejection_reason = None
        investment.admin_approved_at = None
        investment.admin_approved_by = None

        self._commit(db, investment)
        service_logger.info("Investment marked under review", extra={"investment_id": investment.id})
        return investment

    @staticmethod
    def _reverse_funding(project: Project, amount: float) -> None:
        project.amount_funded = max((project.amount_funded or 0) - amount, 0)
        if project.status == FundingStatus.COMPLETED and not project.is_fully_funded:
            project.status = FundingStatus.IN_PROGRESS

    @staticmethod
    def _commit(db: Session, *records) -> None:
        try:
            db.commit()
        except Exception:
            db.rollback()
            service_logger.error("Failed to persist funding change", exc_info=True)
            raise
        for record in records:
            if record is not None:
                db.refresh(record)

    @staticmethod
    def _expanded_query(db: Session):
        return db.query(Investment).options(
            joinedload(Investment.project),
            joinedload(Investment.investor_user),
            joinedload(Investment.investor_account)
        )

    async def list_all(self, db: Session) -> List[Investment]:
        return self._expanded_query(db).order_by(Investment.created_at.desc()).all()

    async def list_by_investor(self, db: Session, investor_id: str) -> List[Investment]:
        return self._expanded_query(db) \
            .filter(Investment.investor_id == investor_id) \
            .order_by(Investment.created_at.desc()) \
            .all()

    async def list_by_project(self, db: Session, project_id: str) -> List[Investment]:
        return self._expanded_query(db) \
            .filter(Investment.project_id == project_id) \
            .order_by(Investment.created_at.desc()) \
            .all()


funding_service = FundingService()
