"""POST /v1/calculate - loan affordability and debt-burden estimate"""

import time
import logging
from typing import Dict
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from kreditomat.api.v1.schemas import (
    CalculationDisplay,
    CalculationRequest,
    CalculationResponse,
    ScheduleEntrySchema,
    ValidationErrorResponse,
)
from kreditomat.api.dependencies import get_request_id, get_settings
from kreditomat.config import Settings
from kreditomat.infrastructure.database.session import get_db
from kreditomat.infrastructure.database.repositories import LoanSnapshotRepository
from kreditomat.domain.calculator import calculate_loan
from kreditomat.domain.schedule import build_payment_schedule
from kreditomat.domain.models import BorrowerProfile, LoanCalculationResult, LoanTerms
from kreditomat.domain.exceptions import InvalidArgumentError
from kreditomat.infrastructure.observability.metrics import record_calculation, record_invalid_input
from kreditomat.infrastructure.observability.logging import log_calculation, log_invalid_input
from kreditomat.utils.formatting import describe_risk, format_amount, format_percent, loan_summary

router = APIRouter()


def validate_loan_form(body: CalculationRequest, config: Settings) -> Dict[str, str]:
    """
    Check loan form input against the slider ranges and sign rules.

    Expenses above income are allowed; the calculator reports them as an
    exhausted income (critical PDN) rather than an input error.
    """
    errors: Dict[str, str] = {}

    if not config.min_amount <= body.amount <= config.max_amount:
        errors["amount"] = (
            f"Amount must be between {format_amount(config.min_amount)} "
            f"and {format_amount(config.max_amount)}"
        )
    if not config.min_term_months <= body.term_months <= config.max_term_months:
        errors["term_months"] = (
            f"Term must be between {config.min_term_months} and {config.max_term_months} months"
        )
    if body.annual_rate is not None and body.annual_rate < 0:
        errors["annual_rate"] = "Rate cannot be negative"
    if body.monthly_income <= 0:
        errors["monthly_income"] = "Monthly income is required"
    if body.monthly_expenses < 0:
        errors["monthly_expenses"] = "Expenses cannot be negative"
    if body.existing_payments < 0:
        errors["existing_payments"] = "Payments cannot be negative"

    return errors


def build_display(
    result: LoanCalculationResult, terms: LoanTerms, config: Settings
) -> CalculationDisplay:
    """Round once, at the output boundary"""
    currency = config.currency_label
    risk_title, risk_advice = describe_risk(result.risk_level)
    return CalculationDisplay(
        monthly_payment=f"{format_amount(result.monthly_payment)} {currency}",
        total_payment=f"{format_amount(result.total_payment)} {currency}",
        total_interest=f"{format_amount(result.total_interest)} {currency}",
        effective_rate=format_percent(result.effective_rate),
        annual_rate=format_percent(terms.annual_rate),
        pdn=format_percent(result.pdn_ratio),
        risk_title=risk_title,
        risk_advice=risk_advice,
        summary=loan_summary(terms.amount, terms.term_months, currency),
    )


@router.post(
    "/calculate",
    response_model=CalculationResponse,
    responses={422: {"model": ValidationErrorResponse}},
)
def calculate(
    body: CalculationRequest,
    request: Request,
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings),
):
    """
    Estimate monthly payment, repayment totals and debt burden.

    Flow:
    1. Validate form input against configured ranges
    2. Run the affordability calculator
    3. Optionally build the amortization schedule
    4. Cache inputs + result for the client session, when a session key is given
    5. Return raw figures with display strings
    """
    start_time = time.time()
    request_id = get_request_id(request)

    # 1. Validate form input
    errors = validate_loan_form(body, config)
    if errors:
        record_invalid_input(errors)
        log_invalid_input(request_id, errors)
        return JSONResponse(
            status_code=422,
            content=ValidationErrorResponse(errors=errors).model_dump(),
        )

    terms = LoanTerms(
        amount=body.amount,
        term_months=body.term_months,
        annual_rate=body.annual_rate if body.annual_rate is not None else config.default_annual_rate,
    )
    profile = BorrowerProfile(
        monthly_income=body.monthly_income,
        monthly_expenses=body.monthly_expenses,
        existing_monthly_obligations=body.existing_payments,
    )

    try:
        # 2. Calculate
        result = calculate_loan(terms, profile)

        # 3. Schedule
        schedule = None
        if body.include_schedule:
            schedule = [
                ScheduleEntrySchema(
                    month=entry.month,
                    payment=entry.payment,
                    principal=entry.principal,
                    interest=entry.interest,
                    balance=entry.balance,
                )
                for entry in build_payment_schedule(terms.amount, terms.term_months, terms.annual_rate)
            ]

        # 4. Cache for session continuity
        if body.session_key:
            LoanSnapshotRepository(db).save(body.session_key, terms, profile, result)
            db.commit()

    except InvalidArgumentError as e:
        db.rollback()
        record_invalid_input([e.field])
        log_invalid_input(request_id, {e.field: e.message})
        return JSONResponse(
            status_code=422,
            content=ValidationErrorResponse(errors={e.field: e.message}).model_dump(),
        )

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    # Record metrics and logs
    duration_ms = (time.time() - start_time) * 1000
    record_calculation(result.risk_level.value, result.pdn_ratio)
    log_calculation(request_id, result.risk_level.value, result.pdn_ratio, result.income_exhausted, duration_ms)

    return CalculationResponse(
        monthly_payment=result.monthly_payment,
        total_payment=result.total_payment,
        total_interest=result.total_interest,
        effective_rate=result.effective_rate,
        pdn_ratio=result.pdn_ratio,
        risk_level=result.risk_level.value,
        net_available_income=result.net_available_income,
        income_exhausted=result.income_exhausted,
        annual_rate=terms.annual_rate,
        display=build_display(result, terms, config),
        schedule=schedule,
    )
