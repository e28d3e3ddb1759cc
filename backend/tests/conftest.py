# tests/conftest.py
from datetime import datetime, timedelta, timezone
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from pathlib import Path
import shutil
import tempfile
import os

from agrifund.main import app
from agrifund.database import Base, get_db
from agrifund.models import User, Project, Investment, AdminStatus, FundingStatus
from agrifund.config import settings
from agrifund.security import hash_password

# Create test database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

TEST_PASSWORD = "s3cret-pass"

def _stamp(offset):
    """Distinct creation times so newest-first ordering is deterministic"""
    return datetime(2025, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=offset)

BANK_DETAILS = {
    "account_number": "001234567890",
    "bank_name": "State Bank of India",
    "bank_branch": "Nashik Road",
    "ifsc_code": "SBIN0001234",
    "account_holder_name": "Meera Kulkarni"
}

PERSONAL_DETAILS = {
    "pan_number": "ABCDE1234F",
    "aadhar_number": "123412341234"
}

@pytest.fixture(scope="session")
def engine():
    """Create test database engine"""
    engine = create_engine(
        SQLALCHEMY_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool  # Needed for SQLite in-memory database
    )
    return engine

@pytest.fixture(scope="session")
def tables(engine):
    """Create all tables in the test database"""
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)

@pytest.fixture
def db_session(engine, tables):
    """Creates a new database session for a test"""
    connection = engine.connect()
    transaction = connection.begin()
    session = sessionmaker(bind=connection)()

    yield session

    session.close()
    transaction.rollback()
    connection.close()

@pytest.fixture(scope="session")
def temp_storage_dir():
    """Create temporary storage directory for test files"""
    temp_dir = tempfile.mkdtemp()
    Path(temp_dir, "uploads").mkdir(parents=True, exist_ok=True)
    yield Path(temp_dir)
    shutil.rmtree(temp_dir)

@pytest.fixture(autouse=True)
def override_settings(temp_storage_dir):
    """Override settings for testing"""
    original_storage = settings.STORAGE_PATH
    original_uploads = settings.UPLOADS_PATH
    original_rounds = settings.BCRYPT_ROUNDS
    original_enforce = settings.ENFORCE_AUTH

    settings.STORAGE_PATH = temp_storage_dir
    settings.UPLOADS_PATH = temp_storage_dir / "uploads"
    settings.BCRYPT_ROUNDS = 4
    settings.ENFORCE_AUTH = False

    yield

    settings.STORAGE_PATH = original_storage
    settings.UPLOADS_PATH = original_uploads
    settings.BCRYPT_ROUNDS = original_rounds
    settings.ENFORCE_AUTH = original_enforce

@pytest.fixture
def client(db_session):
    """Test client using the test database"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

@pytest.fixture
def future_deadline():
    return datetime.now(timezone.utc) + timedelta(days=90)

@pytest.fixture
def sample_owner(db_session):
    """Create a project owner account"""
    owner = User(
        name="Ravi Patil",
        email="ravi.patil@gramfarm.in",
        password=hash_password(TEST_PASSWORD),
        phone="9876543210",
        occupation="Farmer"
    )
    db_session.add(owner)
    db_session.commit()
    db_session.refresh(owner)
    return owner

@pytest.fixture
def sample_investor(db_session):
    """Create an investing user"""
    investor = User(
        name="Meera Kulkarni",
        email="meera.kulkarni@capital.in",
        password=hash_password(TEST_PASSWORD),
        occupation="Engineer"
    )
    db_session.add(investor)
    db_session.commit()
    db_session.refresh(investor)
    return investor

@pytest.fixture
def make_project(db_session, sample_owner, future_deadline):
    """Factory for projects owned by the sample owner"""
    created = iter(range(1, 1000))

    def _make_project(**overrides):
        data = {
            "title": "Drip Irrigation for Village Farms",
            "description": "Install drip irrigation across 40 acres of shared farmland",
            "amount": 100000,
            "amount_funded": 0,
            "location": "Nashik, Maharashtra",
            "deadline": future_deadline,
            "status": FundingStatus.IN_PROGRESS,
            "owner_id": sample_owner.id,
            "admin_status": AdminStatus.APPROVED,
            "created_at": _stamp(next(created))
        }
        data.update(overrides)
        project = Project(**data)
        db_session.add(project)
        db_session.commit()
        db_session.refresh(project)
        return project
    return _make_project

@pytest.fixture
def sample_project(make_project):
    """Create an approved project requesting 100,000"""
    return make_project()

@pytest.fixture
def make_investment(db_session, sample_project, sample_investor):
    """Factory for investments by the sample investor"""
    created = iter(range(1, 1000))

    def _make_investment(amount, project=None, **overrides):
        investment = Investment(
            project_id=(project or sample_project).id,
            investor_id=sample_investor.id,
            amount=amount,
            bank_details=dict(BANK_DETAILS),
            personal_details=dict(PERSONAL_DETAILS),
            investment_reason="Support local agriculture",
            created_at=overrides.pop("created_at", _stamp(next(created))),
            **overrides
        )
        db_session.add(investment)
        db_session.commit()
        db_session.refresh(investment)
        return investment
    return _make_investment

@pytest.fixture(scope="session", autouse=True)
def cleanup_test_files():
    """Clean up test files after all tests are done"""
    yield
    test_files = [
        "test.db",
        "agrifund.db",
        "test-agrifund.db"
    ]
    for file in test_files:
        if os.path.exists(file):
            os.remove(file)

@pytest.fixture
def bank_details():
    return dict(BANK_DETAILS)

@pytest.fixture
def personal_details():
    return dict(PERSONAL_DETAILS)
