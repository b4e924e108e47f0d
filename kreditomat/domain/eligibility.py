"""Client-side offer eligibility preview.

Mirrors what a bank card shows before the user applies: whether the user's
score, debt burden, requested amount and term fit the offer, and the monthly
payment at the offer's rate. The lender's backend remains authoritative.
"""

from typing import Iterable, List, Optional
from kreditomat.domain.models import BankOffer, OfferEligibility
from kreditomat.domain.calculator import compute_monthly_payment

# Minimum credit score; offers that look at credit history ask for more
MIN_SCORE_WITH_HISTORY = 600
MIN_SCORE_DEFAULT = 500


def min_score_for(offer: BankOffer) -> int:
    return MIN_SCORE_WITH_HISTORY if offer.consider_credit_history else MIN_SCORE_DEFAULT


def check_offer_eligibility(
    offer: BankOffer,
    pdn_ratio: Optional[float] = None,
    score: Optional[int] = None,
    amount: Optional[float] = None,
    term_months: Optional[int] = None,
) -> OfferEligibility:
    """
    Check user data against a single offer.

    A criterion is only evaluated when its input is provided; unchecked
    criteria are reported as None and never make an offer ineligible.
    PDN is compared as pdn_ratio <= max_pdn / 100 (max_pdn is a percent).
    """
    result = OfferEligibility(offer_id=offer.id, eligible=True)

    if score is not None:
        required = min_score_for(offer)
        result.score_ok = score >= required
        if not result.score_ok:
            result.reasons.append(f"Score {score} is below the required {required}")

    if pdn_ratio is not None:
        result.pdn_ok = pdn_ratio <= offer.max_pdn / 100
        if not result.pdn_ok:
            result.reasons.append(f"PDN {pdn_ratio * 100:.1f}% exceeds the maximum {offer.max_pdn:g}%")

    if amount is not None:
        result.amount_ok = offer.min_amount <= amount <= offer.max_amount
        if not result.amount_ok:
            result.reasons.append(
                f"Amount must be between {offer.min_amount:,.0f} and {offer.max_amount:,.0f}"
            )

    if term_months is not None:
        result.term_ok = offer.min_term_months <= term_months <= offer.max_term_months
        if not result.term_ok:
            result.reasons.append(
                f"Term must be between {offer.min_term_months} and {offer.max_term_months} months"
            )

    result.eligible = all(
        flag is not False
        for flag in (result.score_ok, result.pdn_ok, result.amount_ok, result.term_ok)
    )

    if amount is not None and term_months is not None:
        result.monthly_payment = compute_monthly_payment(amount, term_months, offer.annual_rate)

    return result


def filter_eligible_offers(
    offers: Iterable[BankOffer],
    pdn_ratio: Optional[float] = None,
    score: Optional[int] = None,
    amount: Optional[float] = None,
    term_months: Optional[int] = None,
) -> List[OfferEligibility]:
    """Eligibility previews for the offers that pass, in input order"""
    checks = (
        check_offer_eligibility(offer, pdn_ratio, score, amount, term_months)
        for offer in offers
    )
    return [check for check in checks if check.eligible]
