"""POST /v1/offers/eligibility - preview which bank offers fit the user"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from kreditomat.api.dependencies import get_request_id
from kreditomat.api.v1.schemas import (
    EligibilityRequest,
    EligibilityResponse,
    OfferEligibilitySchema,
    ValidationErrorResponse,
)
from kreditomat.domain.eligibility import check_offer_eligibility, filter_eligible_offers
from kreditomat.domain.exceptions import InvalidArgumentError
from kreditomat.domain.models import BankOffer
from kreditomat.infrastructure.observability.logging import log_invalid_input
from kreditomat.infrastructure.observability.metrics import record_invalid_input, record_offer_eligibility

router = APIRouter()


@router.post(
    "/offers/eligibility",
    response_model=EligibilityResponse,
    responses={422: {"model": ValidationErrorResponse}},
)
def preview_offer_eligibility(body: EligibilityRequest, request: Request):
    """
    Check the user's PDN, score, amount and term against each offer.

    Returns:
        Per-offer eligibility with the monthly payment at the offer's rate.
        Only eligible offers when eligible_only is set.
    """
    offers = [BankOffer(**offer_schema.model_dump()) for offer_schema in body.offers]
    criteria = dict(
        pdn_ratio=body.pdn_ratio,
        score=body.score,
        amount=body.amount,
        term_months=body.term_months,
    )

    try:
        if body.eligible_only:
            checks = filter_eligible_offers(offers, **criteria)
            for _ in range(len(offers) - len(checks)):
                record_offer_eligibility(False)
        else:
            checks = [check_offer_eligibility(offer, **criteria) for offer in offers]
    except InvalidArgumentError as e:
        record_invalid_input([e.field])
        log_invalid_input(get_request_id(request), {e.field: e.message})
        return JSONResponse(
            status_code=422,
            content=ValidationErrorResponse(errors={e.field: e.message}).model_dump(),
        )

    for check in checks:
        record_offer_eligibility(check.eligible)

    results = [
        OfferEligibilitySchema(
            offer_id=check.offer_id,
            eligible=check.eligible,
            score_ok=check.score_ok,
            pdn_ok=check.pdn_ok,
            amount_ok=check.amount_ok,
            term_ok=check.term_ok,
            monthly_payment=check.monthly_payment,
            reasons=check.reasons,
        )
        for check in checks
    ]

    return EligibilityResponse(
        results=results,
        eligible_count=sum(1 for r in results if r.eligible),
    )
