# tests/services/test_funding.py
import pytest

from agrifund.models import FundingStatus, InvestmentStatus
from agrifund.services.funding import (
    FundingService,
    InvestmentAlreadyApprovedError,
    RejectionReasonRequiredError,
    InvalidInvestmentActionError,
    AssociatedProjectNotFoundError
)


@pytest.fixture
def service():
    return FundingService()


@pytest.mark.asyncio
async def test_approve_adds_amount_and_stamps_investment(service, db_session, sample_project, make_investment):
    investment = make_investment(60000, rejection_reason="stale")

    await service.approve(db_session, investment)

    db_session.refresh(sample_project)
    assert investment.status == InvestmentStatus.APPROVED
    assert investment.admin_approved_at is not None
    assert investment.admin_approved_by == "Admin"
    assert investment.rejection_reason is None
    assert sample_project.amount_funded == 60000
    assert sample_project.status == FundingStatus.IN_PROGRESS


@pytest.mark.asyncio
async def test_approve_twice_conflicts_and_adds_once(service, db_session, sample_project, make_investment):
    investment = make_investment(25000)

    await service.approve(db_session, investment)
    with pytest.raises(InvestmentAlreadyApprovedError):
        await service.approve(db_session, investment)

    db_session.refresh(sample_project)
    assert sample_project.amount_funded == 25000


@pytest.mark.asyncio
async def test_funding_walkthrough(service, db_session, sample_project, make_investment):
    """100,000 requested: approve 60k, approve 40k, then reject the 60k"""
    first = make_investment(60000)
    second = make_investment(40000)

    await service.approve(db_session, first)
    db_session.refresh(sample_project)
    assert sample_project.amount_funded == 60000
    assert sample_project.status == FundingStatus.IN_PROGRESS

    await service.approve(db_session, second)
    db_session.refresh(sample_project)
    assert sample_project.amount_funded == 100000
    assert sample_project.status == FundingStatus.COMPLETED

    await service.reject(db_session, first, "Bank details could not be verified")
    db_session.refresh(sample_project)
    assert sample_project.amount_funded == 40000
    assert sample_project.status == FundingStatus.IN_PROGRESS
    assert first.status == InvestmentStatus.REJECTED
    assert first.admin_approved_at is None
    assert first.admin_approved_by is None


@pytest.mark.asyncio
async def test_reject_floors_funded_total_at_zero(service, db_session, make_project, make_investment):
    project = make_project(amount_funded=10000)
    investment = make_investment(30000, project=project, status=InvestmentStatus.APPROVED)

    await service.reject(db_session, investment, "Duplicate pledge")

    db_session.refresh(project)
    assert project.amount_funded == 0


@pytest.mark.asyncio
async def test_reject_keeps_completed_when_still_fully_funded(service, db_session, make_project, make_investment):
    project = make_project(amount=50000, amount_funded=80000, status=FundingStatus.COMPLETED)
    investment = make_investment(20000, project=project, status=InvestmentStatus.APPROVED)

    await service.reject(db_session, investment, "Withdrawn by investor")

    db_session.refresh(project)
    assert project.amount_funded == 60000
    assert project.status == FundingStatus.COMPLETED


@pytest.mark.asyncio
async def test_reject_pending_investment_leaves_project_alone(service, db_session, make_project, make_investment):
    project = make_project(amount_funded=30000)
    investment = make_investment(15000, project=project)

    await service.reject(db_session, investment, "Incomplete KYC")

    db_session.refresh(project)
    assert project.amount_funded == 30000
    assert investment.rejection_reason == "Incomplete KYC"


@pytest.mark.asyncio
@pytest.mark.parametrize("reason", [None, "", "   "])
async def test_reject_requires_reason(service, db_session, sample_project, make_investment, reason):
    investment = make_investment(60000, status=InvestmentStatus.APPROVED)
    sample_project.amount_funded = 60000
    db_session.commit()

    with pytest.raises(RejectionReasonRequiredError):
        await service.reject(db_session, investment, reason)

    db_session.refresh(investment)
    db_session.refresh(sample_project)
    assert investment.status == InvestmentStatus.APPROVED
    assert sample_project.amount_funded == 60000


@pytest.mark.asyncio
async def test_mark_under_review_clears_fields_without_touching_project(
        service, db_session, sample_project, make_investment
):
    investment = make_investment(20000, status=InvestmentStatus.REJECTED, rejection_reason="Typo in IFSC")

    await service.mark_under_review(db_session, investment)

    db_session.refresh(sample_project)
    assert investment.status == InvestmentStatus.UNDER_REVIEW
    assert investment.rejection_reason is None
    assert investment.admin_approved_at is None
    assert sample_project.amount_funded == 0


@pytest.mark.asyncio
async def test_approve_with_missing_project_changes_nothing(service, db_session, make_investment):
    investment = make_investment(5000)
    investment.project_id = "f" * 32
    db_session.commit()

    with pytest.raises(AssociatedProjectNotFoundError):
        await service.approve(db_session, investment)

    db_session.refresh(investment)
    assert investment.status == InvestmentStatus.PENDING


@pytest.mark.asyncio
async def test_apply_action_rejects_unknown_action(service, db_session, make_investment):
    investment = make_investment(5000)
    with pytest.raises(InvalidInvestmentActionError):
        await service.apply_action(db_session, investment, "escalate")


@pytest.mark.asyncio
async def test_list_by_project_newest_first(service, db_session, sample_project, make_investment):
    older = make_investment(1000)
    newer = make_investment(2000)

    investments = await service.list_by_project(db_session, sample_project.id)

    assert [i.id for i in investments] == [newer.id, older.id]
    assert investments[0].project.title == sample_project.title
    assert investments[0].investor.name == "Meera Kulkarni"
