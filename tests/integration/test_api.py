"""Integration tests for API endpoints"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def loan_form():
    """Loan form defaults as posted by the UI"""
    return {
        "amount": 5_000_000,
        "term_months": 12,
        "monthly_income": 10_000_000,
        "monthly_expenses": 3_000_000,
        "existing_payments": 0,
    }


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_request_id_header(client: TestClient):
    """Test request ID is assigned, or echoed when supplied"""
    response = client.get("/health")
    assert response.headers["X-Request-ID"]

    response = client.get("/health", headers={"X-Request-ID": "trace-123"})
    assert response.headers["X-Request-ID"] == "trace-123"


def test_metrics_endpoint(client: TestClient, loan_form: dict):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/calculate", json=loan_form)

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "kreditomat_calculation_total" in response.text
    assert "kreditomat_pdn_ratio" in response.text


def test_calculate_endpoint_defaults(client: TestClient, loan_form: dict):
    """Test POST /v1/calculate with the default 28% rate"""
    response = client.post("/v1/calculate", json=loan_form)

    assert response.status_code == 200
    data = response.json()
    assert data["annual_rate"] == 0.28
    assert data["monthly_payment"] == pytest.approx(482_529.94, abs=1e-2)
    assert data["total_payment"] == pytest.approx(data["monthly_payment"] * 12)
    assert data["total_interest"] == pytest.approx(data["total_payment"] - 5_000_000)
    assert data["pdn_ratio"] == pytest.approx(0.0689, abs=1e-4)
    assert data["risk_level"] == "low"
    assert data["income_exhausted"] is False
    assert data["schedule"] is None

    display = data["display"]
    assert display["monthly_payment"] == "482 530 сум"
    assert display["annual_rate"] == "28.0%"
    assert display["pdn"] == "6.9%"
    assert display["risk_title"] == "Низкая долговая нагрузка"
    assert display["risk_advice"]
    assert display["summary"] == "5 000 000 сум на 12 мес."


def test_calculate_endpoint_zero_rate_with_schedule(client: TestClient, loan_form: dict):
    """Test explicit zero rate and schedule output"""
    loan_form.update(amount=1_200_000, annual_rate=0, include_schedule=True)

    response = client.post("/v1/calculate", json=loan_form)

    assert response.status_code == 200
    data = response.json()
    assert data["monthly_payment"] == 100_000
    assert data["total_interest"] == 0
    assert len(data["schedule"]) == 12
    assert data["schedule"][-1]["balance"] == 0


@pytest.mark.parametrize(
    "amount, term, rate",
    [
        (5_000_000, 19, 0),
        (1_000_000, 29, 0),
        (5_000_000, 12, 1e-9),
        (5_000_000, 12, 1e-17),
    ],
)
def test_calculate_endpoint_near_zero_rate(client: TestClient, loan_form: dict, amount, term, rate):
    """Test zero and near-zero rates give non-negative interest and clean display values"""
    loan_form.update(amount=amount, term_months=term, annual_rate=rate)

    response = client.post("/v1/calculate", json=loan_form)

    assert response.status_code == 200
    data = response.json()
    assert data["total_interest"] >= 0
    assert data["total_payment"] >= amount
    for value in data["display"].values():
        assert not value.startswith("-")
    assert data["display"]["total_interest"] == "0 сум"


def test_calculate_endpoint_expenses_exceed_income(client: TestClient, loan_form: dict):
    """Test exhausted income is a valid critical result, not an error"""
    loan_form.update(monthly_income=1_000_000, monthly_expenses=1_200_000)

    response = client.post("/v1/calculate", json=loan_form)

    assert response.status_code == 200
    data = response.json()
    assert data["pdn_ratio"] == 1.0
    assert data["risk_level"] == "critical"
    assert data["income_exhausted"] is True


@pytest.mark.parametrize(
    "changes, field",
    [
        ({"amount": 100_000}, "amount"),
        ({"amount": 60_000_000}, "amount"),
        ({"term_months": 2}, "term_months"),
        ({"term_months": 48}, "term_months"),
        ({"annual_rate": -0.1}, "annual_rate"),
        ({"monthly_income": 0}, "monthly_income"),
        ({"monthly_expenses": -1}, "monthly_expenses"),
        ({"existing_payments": -1}, "existing_payments"),
    ],
)
def test_calculate_endpoint_rejects_out_of_range(client: TestClient, loan_form: dict, changes, field):
    """Test form validation returns per-field errors"""
    loan_form.update(changes)

    response = client.post("/v1/calculate", json=loan_form)

    assert response.status_code == 422
    assert field in response.json()["errors"]


def test_calculate_endpoint_rejects_malformed_body(client: TestClient):
    """Test schema validation for missing fields"""
    response = client.post("/v1/calculate", json={"amount": 5_000_000})
    assert response.status_code == 422


def test_offer_eligibility_endpoint(client: TestClient):
    """Test POST /v1/offers/eligibility"""
    offers = [
        {
            "id": "strict",
            "bank_name": "Strict Bank",
            "min_amount": 1_000_000,
            "max_amount": 20_000_000,
            "min_term_months": 6,
            "max_term_months": 24,
            "annual_rate": 0.24,
            "max_pdn": 50,
            "consider_credit_history": True,
        },
        {
            "id": "easy",
            "bank_name": "Easy Microfinance",
            "min_amount": 500_000,
            "max_amount": 10_000_000,
            "min_term_months": 3,
            "max_term_months": 36,
            "annual_rate": 0.36,
            "max_pdn": 65,
        },
    ]

    response = client.post(
        "/v1/offers/eligibility",
        json={"offers": offers, "pdn_ratio": 0.6, "amount": 5_000_000, "term_months": 12},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["eligible_count"] == 1
    by_id = {r["offer_id"]: r for r in data["results"]}
    assert by_id["strict"]["eligible"] is False
    assert by_id["strict"]["pdn_ok"] is False
    assert by_id["easy"]["eligible"] is True
    assert by_id["easy"]["score_ok"] is None
    assert by_id["easy"]["monthly_payment"] > 5_000_000 / 12

    response = client.post(
        "/v1/offers/eligibility",
        json={"offers": offers, "pdn_ratio": 0.6, "eligible_only": True},
    )
    assert [r["offer_id"] for r in response.json()["results"]] == ["easy"]
    assert response.json()["eligible_count"] == 1


def test_offer_eligibility_rejects_non_finite_rate(client: TestClient):
    """Test an Infinity offer rate is a validation error"""
    body = (
        '{"offers": [{"id": "inf", "bank_name": "Inf Bank", "min_amount": 0, "max_amount": 1e7,'
        ' "min_term_months": 1, "max_term_months": 36, "annual_rate": Infinity, "max_pdn": 50}],'
        ' "amount": 5000000, "term_months": 12}'
    )

    response = client.post(
        "/v1/offers/eligibility",
        content=body,
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 422


def test_offer_eligibility_rejects_overflowing_rate(client: TestClient):
    """Test an offer rate too large for a finite payment maps to a field error"""
    offer = {
        "id": "huge",
        "bank_name": "Huge Rate Bank",
        "min_amount": 0,
        "max_amount": 10_000_000,
        "min_term_months": 1,
        "max_term_months": 36,
        "annual_rate": 1e308,
        "max_pdn": 50,
    }

    response = client.post(
        "/v1/offers/eligibility",
        json={"offers": [offer], "amount": 5_000_000, "term_months": 12},
    )

    assert response.status_code == 422
    assert "annual_rate" in response.json()["errors"]
