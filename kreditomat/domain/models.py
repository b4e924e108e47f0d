"""Domain models - pure Python dataclasses representing loan calculation entities"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class RiskLevel(str, Enum):
    """Debt-burden (PDN) risk tier, ordered from safest to most burdened"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(frozen=True)
class LoanTerms:
    """Requested loan parameters"""

    amount: float
    term_months: int
    annual_rate: float  # fraction: 0.28 == 28% per year


@dataclass(frozen=True)
class BorrowerProfile:
    """Borrower's monthly income and outgoings"""

    monthly_income: float
    monthly_expenses: float = 0.0
    existing_monthly_obligations: float = 0.0


@dataclass(frozen=True)
class LoanTotals:
    """Aggregate repayment figures for a loan"""

    total_payment: float
    total_interest: float  # overpayment
    effective_rate: float  # simple markup ratio, not an APR


@dataclass(frozen=True)
class DebtBurden:
    """Debt-to-income (PDN) assessment"""

    pdn_ratio: float
    risk_level: RiskLevel
    net_available_income: float
    total_monthly_obligations: float
    income_exhausted: bool  # net income <= 0, ratio saturated


@dataclass(frozen=True)
class LoanCalculationResult:
    """Output of the affordability calculator. Recomputed on every input change."""

    monthly_payment: float
    total_payment: float
    total_interest: float
    effective_rate: float
    pdn_ratio: float
    risk_level: RiskLevel
    net_available_income: float
    income_exhausted: bool


@dataclass(frozen=True)
class ScheduleEntry:
    """Single month of an amortization schedule"""

    month: int
    payment: float
    principal: float
    interest: float
    balance: float


@dataclass(frozen=True)
class BankOffer:
    """Bank loan product as published by the offers backend"""

    id: str
    bank_name: str
    min_amount: float
    max_amount: float
    min_term_months: int
    max_term_months: int
    annual_rate: float
    max_pdn: float  # percent, e.g. 50 == 50%
    consider_credit_history: bool = False


@dataclass
class OfferEligibility:
    """Client-side eligibility preview for a single offer.

    Each ``*_ok`` flag is ``None`` when the corresponding user input was not
    provided and the criterion was not checked.
    """

    offer_id: str
    eligible: bool
    score_ok: Optional[bool] = None
    pdn_ok: Optional[bool] = None
    amount_ok: Optional[bool] = None
    term_ok: Optional[bool] = None
    monthly_payment: Optional[float] = None
    reasons: List[str] = field(default_factory=list)
