"""SQLAlchemy ORM models for cached loan form data"""

from sqlalchemy import Column, Float, Integer, DateTime, Text, JSON
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class LoanSnapshot(Base):
    """Last loan form inputs and calculation for a client session.

    A cache for session continuity only; it is never the record of authority.
    """

    __tablename__ = "loan_snapshot"

    session_key = Column(Text, primary_key=True)
    amount = Column(Float, nullable=False)
    term_months = Column(Integer, nullable=False)
    annual_rate = Column(Float, nullable=False)
    monthly_income = Column(Float, nullable=False)
    monthly_expenses = Column(Float, nullable=False, default=0.0)
    existing_payments = Column(Float, nullable=False, default=0.0)
    calculation = Column(JSON, nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, index=True)
