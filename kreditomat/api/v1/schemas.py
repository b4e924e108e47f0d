"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from pydantic import BaseModel, Field
from typing import Dict, List, Optional


class CalculationRequest(BaseModel):
    """Request body for POST /v1/calculate"""

    amount: float = Field(..., allow_inf_nan=False, description="Requested principal")
    term_months: int = Field(..., description="Number of monthly installments")
    annual_rate: Optional[float] = Field(None, allow_inf_nan=False, description="Yearly rate as a fraction; service default when omitted")
    monthly_income: float = Field(..., allow_inf_nan=False, description="Monthly income")
    monthly_expenses: float = Field(0.0, allow_inf_nan=False, description="Monthly living expenses")
    existing_payments: float = Field(0.0, allow_inf_nan=False, description="Monthly payments on other active loans")
    session_key: Optional[str] = Field(None, min_length=1, description="Store the result for this client session")
    include_schedule: bool = Field(False, description="Return the amortization schedule")


class ScheduleEntrySchema(BaseModel):
    """Single month of an amortization schedule"""

    month: int
    payment: float
    principal: float
    interest: float
    balance: float


class CalculationDisplay(BaseModel):
    """Rounded, human-readable values for the results panel"""

    monthly_payment: str
    total_payment: str
    total_interest: str
    effective_rate: str
    annual_rate: str
    pdn: str
    risk_title: str
    risk_advice: str
    summary: str


class CalculationResponse(BaseModel):
    """Response for POST /v1/calculate"""

    monthly_payment: float
    total_payment: float
    total_interest: float
    effective_rate: float
    pdn_ratio: float
    risk_level: str
    net_available_income: float
    income_exhausted: bool
    annual_rate: float
    display: CalculationDisplay
    schedule: Optional[List[ScheduleEntrySchema]] = None


class ValidationErrorResponse(BaseModel):
    """422 body for rejected loan form input"""

    detail: str = "Invalid loan parameters"
    errors: Dict[str, str]


class BankOfferSchema(BaseModel):
    """Bank offer as supplied by the offers backend"""

    id: str
    bank_name: str
    min_amount: float = Field(..., ge=0, allow_inf_nan=False)
    max_amount: float = Field(..., ge=0, allow_inf_nan=False)
    min_term_months: int = Field(..., ge=1)
    max_term_months: int = Field(..., ge=1)
    annual_rate: float = Field(..., ge=0, allow_inf_nan=False)
    max_pdn: float = Field(..., ge=0, allow_inf_nan=False, description="Maximum allowed PDN, percent")
    consider_credit_history: bool = False


class EligibilityRequest(BaseModel):
    """Request body for POST /v1/offers/eligibility"""

    offers: List[BankOfferSchema]
    pdn_ratio: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    score: Optional[int] = None
    amount: Optional[float] = Field(None, gt=0, allow_inf_nan=False)
    term_months: Optional[int] = Field(None, ge=1)
    eligible_only: bool = False


class OfferEligibilitySchema(BaseModel):
    """Eligibility preview for a single offer"""

    offer_id: str
    eligible: bool
    score_ok: Optional[bool] = None
    pdn_ok: Optional[bool] = None
    amount_ok: Optional[bool] = None
    term_ok: Optional[bool] = None
    monthly_payment: Optional[float] = None
    reasons: List[str] = []


class EligibilityResponse(BaseModel):
    """Response for POST /v1/offers/eligibility"""

    results: List[OfferEligibilitySchema]
    eligible_count: int


class LoanDataResponse(BaseModel):
    """Response for GET /v1/loan-data/{session_key}"""

    session_key: str
    amount: float
    term_months: int
    annual_rate: float
    monthly_income: float
    monthly_expenses: float
    existing_payments: float
    calculation: Optional[dict] = None
    summary: str
    updated_at: datetime
