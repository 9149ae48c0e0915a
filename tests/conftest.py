"""Pytest fixtures for testing"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import httpx
import pytest
from datetime import date
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from housing_calculator.api.main import create_app
from housing_calculator.api.dependencies import (
    get_user_client,
    get_housing_client,
    get_loan_client,
    get_profile_client,
)
from housing_calculator.infrastructure.clients.user import UserClient
from housing_calculator.infrastructure.clients.housing import HousingClient
from housing_calculator.infrastructure.clients.loan import LoanProductClient
from housing_calculator.infrastructure.clients.profile import ProfileClient
from housing_calculator.infrastructure.database.models import Base
from housing_calculator.infrastructure.database.session import get_db
from housing_calculator.domain.models import (
    FinancialProfile,
    HousingListing,
    HousingType,
    LoanItem,
    LoanProduct,
    MoneyItem,
    RepaymentType,
)
from mock_services.upstream.main import app as mock_upstream_app


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


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
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def upstream_transport() -> httpx.ASGITransport:
    """Route upstream HTTP calls to the in-process mock services"""
    return httpx.ASGITransport(app=mock_upstream_app)


@pytest.fixture
def upstream_client(db: Session, upstream_transport: httpx.ASGITransport) -> TestClient:
    """Test client whose upstream clients talk to the mock services"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_profile_client] = lambda: ProfileClient(
        "http://mock-asset", transport=upstream_transport
    )
    app.dependency_overrides[get_housing_client] = lambda: HousingClient(
        "http://mock-housing", transport=upstream_transport
    )
    app.dependency_overrides[get_loan_client] = lambda: LoanProductClient(
        "http://mock-loan", transport=upstream_transport
    )
    app.dependency_overrides[get_user_client] = lambda: UserClient(
        "http://mock-user", transport=upstream_transport
    )
    return TestClient(app)


@pytest.fixture
def as_of() -> date:
    """Fixed calculation date so remaining loan terms are stable"""
    return date(2026, 1, 1)


@pytest.fixture
def housing() -> HousingListing:
    """Apartment from the reference scenario"""
    return HousingListing(
        id="1",
        name="Riverside Apartment 84m2",
        price=850_000_000,
        housing_type=HousingType.APARTMENT,
        move_in_date="2027-03",
    )


@pytest.fixture
def loan_product() -> LoanProduct:
    """Product applying all three ratios"""
    return LoanProduct(
        id="10",
        name="First Home Mortgage",
        loan_limit=300_000_000,
        interest_rate=2.5,
        ltv_limit=70,
        dti_limit=60,
        dsr_limit=40,
        apply_ltv=True,
        apply_dti=True,
        apply_dsr=True,
    )


@pytest.fixture
def requester_profile() -> FinancialProfile:
    """Single earner with 4,000,000 monthly income and no loans"""
    return FinancialProfile(
        user_id="kim",
        assets=[MoneyItem(id="a1", name="Savings account", amount=500_000_000)],
        monthly_incomes=[MoneyItem(id="i1", name="Salary", amount=4_000_000)],
        monthly_expenses=[MoneyItem(id="e1", name="Living expenses", amount=1_700_000)],
    )


@pytest.fixture
def spouse_profile() -> FinancialProfile:
    """Spouse with a car loan and an excluded deposit loan"""
    return FinancialProfile(
        user_id="lee",
        assets=[MoneyItem(id="a3", name="Stocks", amount=100_000_000)],
        loans=[
            LoanItem(
                id="l1",
                name="Car loan",
                amount=24_000_000,
                interest_rate=6.0,
                repayment_type=RepaymentType.EQUAL_PRINCIPAL_INTEREST,
                expiration_date=date(2028, 1, 1),
            ),
            LoanItem(
                id="l2",
                name="Jeonse deposit loan",
                amount=150_000_000,
                interest_rate=3.2,
                repayment_type=RepaymentType.MATURITY_LUMP_SUM,
                is_excluded_from_calculation=True,
            ),
        ],
        monthly_incomes=[MoneyItem(id="i2", name="Salary", amount=3_000_000)],
        monthly_expenses=[MoneyItem(id="e3", name="Car loan repayment", amount=700_000)],
        withholding_tax_salary=42_000_000,
    )
