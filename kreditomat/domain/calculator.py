"""Loan affordability calculator - annuity payment, repayment totals and debt burden (PDN)"""

import math
from kreditomat.domain.models import (
    BorrowerProfile,
    DebtBurden,
    LoanCalculationResult,
    LoanTerms,
    LoanTotals,
    RiskLevel,
)
from kreditomat.domain.exceptions import InvalidArgumentError

# PDN tier thresholds as ratios; lower bound is inclusive for the upper tier
PDN_MEDIUM_THRESHOLD = 0.30
PDN_HIGH_THRESHOLD = 0.50
PDN_CRITICAL_THRESHOLD = 0.65

# Ratio reported when net income is zero or negative
PDN_SATURATION_RATIO = 1.0

# Relative float error tolerated when payment x term falls short of the principal
ROUNDING_TOLERANCE = 1e-9


def _require_finite(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgumentError(name, f"must be a number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise InvalidArgumentError(name, "must be finite")


def _require_positive(name: str, value: float) -> None:
    _require_finite(name, value)
    if value <= 0:
        raise InvalidArgumentError(name, f"must be positive, got {value}")


def _require_non_negative(name: str, value: float) -> None:
    _require_finite(name, value)
    if value < 0:
        raise InvalidArgumentError(name, f"must not be negative, got {value}")


def _require_term(term_months: int) -> None:
    if isinstance(term_months, bool) or not isinstance(term_months, int):
        raise InvalidArgumentError("term_months", "must be a whole number of months")
    if term_months < 1:
        raise InvalidArgumentError("term_months", f"must be at least 1, got {term_months}")


def compute_monthly_payment(amount: float, term_months: int, annual_rate: float) -> float:
    """
    Annuity (equal installment) monthly payment.

    With monthly rate r = annual_rate / 12 and n = term_months:
        payment = amount * r * (1+r)^n / ((1+r)^n - 1)

    evaluated in the equivalent form amount * r / (1 - (1+r)^-n), with
    (1+r)^-n - 1 computed through expm1/log1p so near-zero rates keep their
    precision instead of cancelling to a zero denominator.

    A zero rate makes the denominator zero, so it is handled separately as a
    straight-line split: amount / n.

    The result keeps full float precision; rounding to the currency's minor
    unit is done once, when the value is displayed.

    Raises:
        InvalidArgumentError: non-positive amount or term, negative rate, or a
            rate so large the payment overflows
    """
    _require_positive("amount", amount)
    _require_term(term_months)
    _require_non_negative("annual_rate", annual_rate)

    monthly_rate = annual_rate / 12
    if monthly_rate == 0:
        return amount / term_months

    discount = -math.expm1(-term_months * math.log1p(monthly_rate))  # 1 - (1+r)^-n
    payment = amount * monthly_rate / discount
    if not math.isfinite(payment):
        raise InvalidArgumentError("annual_rate", f"too large to compute a payment, got {annual_rate}")
    return payment


def aggregate(amount: float, term_months: int, monthly_payment: float) -> LoanTotals:
    """
    Total repayment, overpayment and simple markup ratio for a loan.

    A payment that cannot repay the principal (negative interest) is rejected.
    Shortfalls within float rounding of amount / term_months are the
    zero-rate case and are snapped to exactly the principal.
    """
    _require_positive("amount", amount)
    _require_term(term_months)
    _require_positive("monthly_payment", monthly_payment)

    total_payment = monthly_payment * term_months
    if total_payment < amount:
        if amount - total_payment > amount * ROUNDING_TOLERANCE:
            raise InvalidArgumentError(
                "monthly_payment", f"{monthly_payment} x {term_months} does not repay {amount}"
            )
        total_payment = float(amount)
    total_interest = total_payment - amount

    return LoanTotals(
        total_payment=total_payment,
        total_interest=total_interest,
        effective_rate=total_interest / amount,
    )


def classify_pdn_risk(pdn_ratio: float) -> RiskLevel:
    """
    Map a PDN ratio to its risk tier.

    Tiers (closed-lower / open-upper, boundaries belong to the upper tier):
    - [0.00, 0.30): low
    - [0.30, 0.50): medium
    - [0.50, 0.65): high
    - [0.65, ...):  critical
    """
    _require_non_negative("pdn_ratio", pdn_ratio)

    if pdn_ratio < PDN_MEDIUM_THRESHOLD:
        return RiskLevel.LOW
    elif pdn_ratio < PDN_HIGH_THRESHOLD:
        return RiskLevel.MEDIUM
    elif pdn_ratio < PDN_CRITICAL_THRESHOLD:
        return RiskLevel.HIGH
    else:
        return RiskLevel.CRITICAL


def compute_debt_burden(
    monthly_payment: float,
    existing_monthly_obligations: float,
    monthly_income: float,
    monthly_expenses: float,
) -> DebtBurden:
    """
    Debt-to-income ratio (PDN) against income left after living expenses.

    When expenses consume all income the ratio is pinned to
    PDN_SATURATION_RATIO (1.0, "fully burdened"). This is a policy value, not a
    derived one: it avoids dividing by zero or reporting a negative ratio, and
    callers should treat it as a valid critical result.
    """
    _require_non_negative("monthly_payment", monthly_payment)
    _require_non_negative("existing_monthly_obligations", existing_monthly_obligations)
    _require_non_negative("monthly_income", monthly_income)
    _require_non_negative("monthly_expenses", monthly_expenses)

    net_available_income = monthly_income - monthly_expenses
    total_monthly_obligations = monthly_payment + existing_monthly_obligations

    income_exhausted = net_available_income <= 0
    if income_exhausted:
        pdn_ratio = PDN_SATURATION_RATIO
    else:
        pdn_ratio = total_monthly_obligations / net_available_income

    return DebtBurden(
        pdn_ratio=pdn_ratio,
        risk_level=classify_pdn_risk(pdn_ratio),
        net_available_income=net_available_income,
        total_monthly_obligations=total_monthly_obligations,
        income_exhausted=income_exhausted,
    )


def calculate_loan(terms: LoanTerms, profile: BorrowerProfile) -> LoanCalculationResult:
    """
    Main entry point: full affordability estimate for a loan request.

    Non-authoritative preview; the lender's own scoring decides eligibility.
    """
    monthly_payment = compute_monthly_payment(terms.amount, terms.term_months, terms.annual_rate)
    totals = aggregate(terms.amount, terms.term_months, monthly_payment)
    burden = compute_debt_burden(
        monthly_payment,
        profile.existing_monthly_obligations,
        profile.monthly_income,
        profile.monthly_expenses,
    )

    return LoanCalculationResult(
        monthly_payment=monthly_payment,
        total_payment=totals.total_payment,
        total_interest=totals.total_interest,
        effective_rate=totals.effective_rate,
        pdn_ratio=burden.pdn_ratio,
        risk_level=burden.risk_level,
        net_available_income=burden.net_available_income,
        income_exhausted=burden.income_exhausted,
    )
