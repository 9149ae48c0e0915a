"""Integration tests for API endpoints"""

import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient
from housing_calculator.domain.exceptions import UpstreamUnavailableError

PROFILE = "housing_calculator.infrastructure.clients.profile.ProfileClient.get_financial_profile"
HOUSING = "housing_calculator.infrastructure.clients.housing.HousingClient.get_housing"
LOAN = "housing_calculator.infrastructure.clients.loan.LoanProductClient.get_loan_product"
SALARY = "housing_calculator.infrastructure.clients.user.UserClient.get_withholding_tax_salary"

KIM = {"X-User-Id": "kim"}
BODY = {
    "housingId": "1",
    "loanProductId": "10",
    "loanAmount": 300_000_000,
    "loanTerm": 360,
    "householdMemberIds": [],
}


@pytest.fixture
def upstream(housing, loan_product, requester_profile):
    """Patch the upstream clients with the reference scenario"""
    with patch(PROFILE, new_callable=AsyncMock) as mock_profile, patch(
        HOUSING, new_callable=AsyncMock
    ) as mock_housing, patch(LOAN, new_callable=AsyncMock) as mock_loan, patch(
        SALARY, new_callable=AsyncMock, return_value=None
    ):
        mock_profile.return_value = requester_profile
        mock_housing.return_value = housing
        mock_loan.return_value = loan_product
        yield mock_profile, mock_housing, mock_loan


def _calculate(client: TestClient, headers=KIM, **overrides) -> dict:
    response = client.post("/calculator/housing-expenses", json={**BODY, **overrides}, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "housing_calculation_total" in response.text


def test_request_id_header_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_calculate_eligible(client: TestClient, upstream):
    """Test POST /calculator/housing-expenses for the reference scenario"""
    data = _calculate(client)

    assert data["status"] == "ELIGIBLE"
    assert data["userId"] == "kim"
    assert data["housingName"] == "Riverside Apartment 84m2"
    assert data["moveInDate"] == "2027-03"
    assert data["loanTerm"] == 360

    analysis = data["loanAnalysis"]
    assert analysis["isEligible"] is True
    assert analysis["ineligibilityReasons"] == []
    assert analysis["ltv"] == pytest.approx(35.29, abs=0.01)
    assert analysis["dsr"] == pytest.approx(29.64, abs=0.05)
    assert analysis["monthlyPayment"] == 1_185_363
    assert (analysis["ltvLimit"], analysis["dtiLimit"], analysis["dsrLimit"]) == (70, 60, 40)

    assert data["financialStatus"]["loanRequired"] == 350_000_000
    after = data["afterMoveIn"]
    assert after["assets"] == -50_000_000
    assert after["monthlyAvailableFunds"] == after["monthlyIncome"] - after["monthlyExpenses"]
    assert data["householdMembers"] == [{"userId": "kim", "name": "kim", "role": "OWNER"}]


def test_calculate_requires_user_header(client: TestClient):
    response = client.post("/calculator/housing-expenses", json=BODY)
    assert response.status_code == 401


@pytest.mark.parametrize(
    "overrides",
    [{"loanAmount": 0}, {"loanTerm": -12}, {"housingId": ""}, {"loanAmount": "lots"}],
)
def test_calculate_rejects_invalid_body(client: TestClient, overrides):
    response = client.post("/calculator/housing-expenses", json={**BODY, **overrides}, headers=KIM)
    assert response.status_code == 422


def test_calculate_amount_over_product_limit(client: TestClient, upstream):
    response = client.post(
        "/calculator/housing-expenses", json={**BODY, "loanAmount": 650_000_000}, headers=KIM
    )
    assert response.status_code == 422
    assert "loan limit" in response.json()["detail"]


def test_calculate_unknown_housing(client: TestClient, upstream):
    _, mock_housing, _ = upstream
    mock_housing.return_value = None

    response = client.post("/calculator/housing-expenses", json=BODY, headers=KIM)
    assert response.status_code == 404


def test_calculate_requester_without_profile(client: TestClient, upstream):
    mock_profile, _, _ = upstream
    mock_profile.return_value = None

    response = client.post("/calculator/housing-expenses", json=BODY, headers=KIM)
    assert response.status_code == 404


def test_calculate_upstream_unavailable(client: TestClient, upstream):
    mock_profile, _, _ = upstream
    mock_profile.side_effect = UpstreamUnavailableError("asset", "asset API timeout after 5.0s")

    response = client.post("/calculator/housing-expenses", json=BODY, headers=KIM)
    assert response.status_code == 503
    assert response.json()["detail"] == "asset service unavailable"

    # Nothing stored on failure
    listing = client.get("/calculator/results", headers=KIM).json()
    assert listing["total"] == 0


def test_get_result(client: TestClient, upstream):
    """Test GET /calculator/results/{id}"""
    created = _calculate(client)

    response = client.get(f"/calculator/results/{created['id']}", headers=KIM)

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == created["id"]
    assert data["loanAnalysis"] == created["loanAnalysis"]
    assert data["afterMoveIn"] == created["afterMoveIn"]


def test_get_result_not_found(client: TestClient):
    fake_uuid = "00000000-0000-0000-0000-000000000000"
    assert client.get(f"/calculator/results/{fake_uuid}", headers=KIM).status_code == 404
    assert client.get("/calculator/results/not-a-uuid", headers=KIM).status_code == 404


def test_get_result_of_another_user(client: TestClient, upstream):
    created = _calculate(client)

    response = client.get(f"/calculator/results/{created['id']}", headers={"X-User-Id": "lee"})
    assert response.status_code == 403


def test_list_results(client: TestClient, upstream):
    """Test GET /calculator/results with paging, sorting and filters"""
    for amount in (100_000_000, 300_000_000, 200_000_000):
        _calculate(client, loanAmount=amount)
    _calculate(client, headers={"X-User-Id": "lee"})

    response = client.get(
        "/calculator/results", params={"sortBy": "loanAmount", "sortOrder": "asc", "size": 2}, headers=KIM
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    assert data["page"] == 0
    assert data["size"] == 2
    assert len(data["results"]) == 2
    first = data["results"][0]
    assert set(first) == {
        "id",
        "housingName",
        "loanProductName",
        "calculatedAt",
        "status",
        "monthlyAvailableFunds",
    }
    # Smaller loan means smaller payment and more funds left
    assert first["monthlyAvailableFunds"] > data["results"][1]["monthlyAvailableFunds"]

    eligible = client.get("/calculator/results", params={"status": "ELIGIBLE"}, headers=KIM).json()
    assert eligible["total"] == 3
    ineligible = client.get("/calculator/results", params={"status": "INELIGIBLE"}, headers=KIM).json()
    assert ineligible["total"] == 0
    other_housing = client.get("/calculator/results", params={"housingId": "2"}, headers=KIM).json()
    assert other_housing["total"] == 0


@pytest.mark.parametrize(
    "params", [{"page": -1}, {"size": 0}, {"size": 101}, {"sortBy": "dsr"}, {"sortOrder": "up"}]
)
def test_list_results_rejects_bad_query(client: TestClient, params):
    response = client.get("/calculator/results", params=params, headers=KIM)
    assert response.status_code == 422


def test_delete_result(client: TestClient, upstream):
    """Test DELETE /calculator/results/{id} by owner and by another user"""
    created = _calculate(client)
    url = f"/calculator/results/{created['id']}"

    assert client.delete(url, headers={"X-User-Id": "lee"}).status_code == 403
    assert client.get(url, headers=KIM).status_code == 200

    response = client.delete(url, headers=KIM)
    assert response.status_code == 200
    assert response.json()["success"] is True

    assert client.get(url, headers=KIM).status_code == 404
    assert client.delete(url, headers=KIM).status_code == 404
