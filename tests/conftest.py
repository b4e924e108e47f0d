"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from kreditomat.api.main import create_app
from kreditomat.infrastructure.database.models import Base
from kreditomat.infrastructure.database.session import get_db
from kreditomat.domain.models import BankOffer, BorrowerProfile, LoanTerms


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
def default_terms() -> LoanTerms:
    """Loan form defaults: 5,000,000 over 12 months at 28%"""
    return LoanTerms(amount=5_000_000, term_months=12, annual_rate=0.28)


@pytest.fixture
def default_profile() -> BorrowerProfile:
    """Loan form defaults: 10,000,000 income, 3,000,000 expenses, no other loans"""
    return BorrowerProfile(
        monthly_income=10_000_000,
        monthly_expenses=3_000_000,
        existing_monthly_obligations=0,
    )


@pytest.fixture
def sample_offers() -> list[BankOffer]:
    """Two offers with different PDN ceilings and ranges"""
    return [
        BankOffer(
            id="offer_strict",
            bank_name="Strict Bank",
            min_amount=1_000_000,
            max_amount=20_000_000,
            min_term_months=6,
            max_term_months=24,
            annual_rate=0.24,
            max_pdn=50,
            consider_credit_history=True,
        ),
        BankOffer(
            id="offer_easy",
            bank_name="Easy Microfinance",
            min_amount=500_000,
            max_amount=10_000_000,
            min_term_months=3,
            max_term_months=36,
            annual_rate=0.36,
            max_pdn=65,
            consider_credit_history=False,
        ),
    ]
