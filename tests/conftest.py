"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timedelta, timezone
from typing import Generator, List, Optional
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from medfin_dashboard.api.dependencies import get_now, get_records_client
from medfin_dashboard.api.main import create_app
from medfin_dashboard.infrastructure.database.models import Base
from medfin_dashboard.infrastructure.database.session import get_db
from medfin_dashboard.domain.models import (
    AccountRecords,
    LoanAccount,
    MedicineRequest,
    SavingsGoal,
    SavingsTransaction,
)


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Mid-month, mid-year so month and week windows have room on both sides
FIXED_NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


class StubRecordsClient:
    """In-memory stand-in for the records service"""

    def __init__(self, records: Optional[AccountRecords] = None, error: Optional[Exception] = None):
        self.records = records or AccountRecords()
        self.error = error
        self.calls: List[str] = []

    async def fetch_account_records(self, user_id: str) -> AccountRecords:
        self.calls.append(user_id)
        if self.error:
            raise self.error
        return self.records


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def second_db(db: Session) -> Generator[Session, None, None]:
    """Independent session on the same test database, for overlapping writers"""
    other = TestingSessionLocal()
    try:
        yield other
    finally:
        other.close()


@pytest.fixture
def records_client() -> StubRecordsClient:
    return StubRecordsClient()


@pytest.fixture
def client(db: Session, records_client: StubRecordsClient, now: datetime) -> TestClient:
    """Create FastAPI test client with test database, stub records and a fixed clock"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_records_client] = lambda: records_client
    app.dependency_overrides[get_now] = lambda: now
    return TestClient(app)


@pytest.fixture
def sample_records(now: datetime) -> AccountRecords:
    """A member with one active loan, three goals, recent deposits and medicine requests"""
    return AccountRecords(
        loans=[
            LoanAccount(
                id="loan_1",
                amount=300000,
                status="active",
                purpose="Surgery",
                outstanding_balance=200000,
                total_paid=100000,
                total_payable=330000,
                monthly_payment=55000,
                interest_rate=0.1,
                term_months=6,
                maturity_date=now + timedelta(days=2, hours=6),
                created_at=now - timedelta(days=5),
            ),
        ],
        savings_goals=[
            SavingsGoal(
                id="goal_emergency",
                name="Emergency Fund",
                target_amount=500000,
                current_amount=450000,
                priority="high",
                category="emergency",
                target_date=now + timedelta(days=20),
                created_at=now - timedelta(days=120),
                updated_at=now - timedelta(days=2),
            ),
            SavingsGoal(
                id="goal_dental",
                name="Dental Care",
                target_amount=200000,
                current_amount=50000,
                priority="medium",
                category="dental",
                target_date=now + timedelta(days=90),
                created_at=now - timedelta(days=60),
                updated_at=now - timedelta(days=30),
            ),
            SavingsGoal(
                id="goal_glasses",
                name="Glasses",
                target_amount=150000,
                current_amount=150000,
                priority="low",
                category="vision",
                is_completed=True,
                created_at=now - timedelta(days=200),
                updated_at=now - timedelta(days=40),
            ),
        ],
        savings_transactions=[
            SavingsTransaction(
                id="txn_1",
                amount=50000,
                transaction_type="deposit",
                description="Monthly deposit",
                created_at=now - timedelta(days=3),
            ),
        ],
        medicine_requests=[
            MedicineRequest(
                id="med_1",
                generic_name="Insulin",
                urgency_level="Emergency",
                status="pending",
                medical_condition="Diabetes",
                total_amount=45000,
                created_at=now - timedelta(days=1),
            ),
            MedicineRequest(
                id="med_2",
                generic_name="Amoxicillin",
                urgency_level="Routine",
                status="fulfilled",
                medical_condition="Infection",
                total_amount=12000,
                created_at=now - timedelta(days=20),
            ),
        ],
    )
