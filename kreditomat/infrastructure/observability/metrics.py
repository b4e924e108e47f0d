"""Prometheus metrics for monitoring debt-burden distribution and input quality"""

from prometheus_client import Counter, Histogram

from kreditomat.domain.calculator import (
    PDN_CRITICAL_THRESHOLD,
    PDN_HIGH_THRESHOLD,
    PDN_MEDIUM_THRESHOLD,
    PDN_SATURATION_RATIO,
)

# Calculation metrics
calculation_counter = Counter(
    "kreditomat_calculation_total",
    "Total loan calculations performed",
    ["risk_level"],  # low | medium | high | critical
)

pdn_ratio_histogram = Histogram(
    "kreditomat_pdn_ratio",
    "Debt-to-income ratio of calculated loans",
    buckets=[0.1, 0.2, PDN_MEDIUM_THRESHOLD, 0.4, PDN_HIGH_THRESHOLD, PDN_CRITICAL_THRESHOLD, 0.8, PDN_SATURATION_RATIO],
)

invalid_input_counter = Counter(
    "kreditomat_invalid_input_total",
    "Rejected calculator inputs",
    ["field"],
)

# Offer metrics
offer_eligibility_counter = Counter(
    "kreditomat_offer_eligibility_total",
    "Offer eligibility previews",
    ["outcome"],  # eligible | ineligible
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_calculation(risk_level: str, pdn_ratio: float) -> None:
    """Record calculation metrics for monitoring the debt-burden distribution"""
    calculation_counter.labels(risk_level=risk_level).inc()
    pdn_ratio_histogram.observe(pdn_ratio)


def record_invalid_input(fields) -> None:
    for name in fields:
        invalid_input_counter.labels(field=name).inc()


def record_offer_eligibility(eligible: bool) -> None:
    outcome = "eligible" if eligible else "ineligible"
    offer_eligibility_counter.labels(outcome=outcome).inc()
