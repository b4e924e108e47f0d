"""GET/DELETE /v1/loan-data/{session_key} - cached loan form state"""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from kreditomat.api.v1.schemas import LoanDataResponse
from kreditomat.api.dependencies import get_settings
from kreditomat.config import Settings
from kreditomat.infrastructure.database.session import get_db
from kreditomat.infrastructure.database.repositories import LoanSnapshotRepository
from kreditomat.utils.formatting import loan_summary

router = APIRouter()


@router.get("/loan-data/{session_key}", response_model=LoanDataResponse)
def get_loan_data(
    session_key: str,
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings),
):
    """
    Restore the last loan form inputs and calculation for a session.

    Snapshots older than the configured TTL are dropped and reported as 404.
    """
    repo = LoanSnapshotRepository(db)
    snapshot = repo.get(session_key, ttl_hours=config.loan_data_ttl_hours)
    db.commit()  # persist deletion of an expired snapshot

    if not snapshot:
        raise HTTPException(status_code=404, detail="Loan data not found or expired")

    return LoanDataResponse(
        session_key=snapshot.session_key,
        amount=snapshot.amount,
        term_months=snapshot.term_months,
        annual_rate=snapshot.annual_rate,
        monthly_income=snapshot.monthly_income,
        monthly_expenses=snapshot.monthly_expenses,
        existing_payments=snapshot.existing_payments,
        calculation=snapshot.calculation,
        summary=loan_summary(snapshot.amount, snapshot.term_months, config.currency_label),
        updated_at=snapshot.updated_at,
    )


@router.delete("/loan-data/{session_key}", status_code=204)
def clear_loan_data(session_key: str, db: Session = Depends(get_db)):
    """Forget the cached loan form state. Idempotent."""
    LoanSnapshotRepository(db).delete(session_key)
    db.commit()
    return Response(status_code=204)
