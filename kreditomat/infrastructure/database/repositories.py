"""Data access layer for cached loan form data"""

from dataclasses import asdict
from datetime import datetime, timedelta
from typing import Optional
from sqlalchemy.orm import Session
from kreditomat.infrastructure.database.models import LoanSnapshot
from kreditomat.domain.models import BorrowerProfile, LoanCalculationResult, LoanTerms
from kreditomat.utils.date_utils import is_expired, utc_now


class LoanSnapshotRepository:
    """TTL-bounded store of the last loan form state per client session"""

    def __init__(self, db: Session):
        self.db = db

    def save(
        self,
        session_key: str,
        terms: LoanTerms,
        profile: BorrowerProfile,
        result: Optional[LoanCalculationResult] = None,
        now: Optional[datetime] = None,
    ) -> LoanSnapshot:
        """Insert or replace the snapshot and restart its TTL"""
        snapshot = self.db.get(LoanSnapshot, session_key)
        if snapshot is None:
            snapshot = LoanSnapshot(session_key=session_key)
            self.db.add(snapshot)

        snapshot.amount = terms.amount
        snapshot.term_months = terms.term_months
        snapshot.annual_rate = terms.annual_rate
        snapshot.monthly_income = profile.monthly_income
        snapshot.monthly_expenses = profile.monthly_expenses
        snapshot.existing_payments = profile.existing_monthly_obligations
        snapshot.calculation = _serialize_result(result) if result is not None else None
        snapshot.updated_at = now or utc_now()

        self.db.flush()
        return snapshot

    def get(self, session_key: str, ttl_hours: float, now: Optional[datetime] = None) -> Optional[LoanSnapshot]:
        """
        Fetch a live snapshot.

        Returns None when the snapshot is missing, older than ttl_hours, or
        lacks the fields a loan form needs (amount, term, income). Expired
        snapshots are deleted.
        """
        snapshot = self.db.get(LoanSnapshot, session_key)
        if snapshot is None:
            return None

        if is_expired(snapshot.updated_at, ttl_hours, now):
            self.db.delete(snapshot)
            self.db.flush()
            return None

        if not snapshot.amount or not snapshot.term_months or not snapshot.monthly_income:
            return None

        return snapshot

    def delete(self, session_key: str) -> bool:
        """Remove a snapshot; False when there was nothing to remove"""
        snapshot = self.db.get(LoanSnapshot, session_key)
        if snapshot is None:
            return False
        self.db.delete(snapshot)
        self.db.flush()
        return True

    def purge_expired(self, ttl_hours: float, now: Optional[datetime] = None) -> int:
        """Delete all snapshots older than ttl_hours, returning how many were removed"""
        cutoff = (now or utc_now()) - timedelta(hours=ttl_hours)
        removed = (
            self.db.query(LoanSnapshot)
            .filter(LoanSnapshot.updated_at < cutoff)
            .delete(synchronize_session=False)
        )
        return removed


def _serialize_result(result: LoanCalculationResult) -> dict:
    data = asdict(result)
    data["risk_level"] = result.risk_level.value
    return data
