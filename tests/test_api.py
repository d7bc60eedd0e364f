"""
Tests for the HTTP API.

Covers:
- Health endpoints
- /api/commissions/calculate JSON contract and error mapping
- Contract scheduling, ledger listing and settlement
- Catalog listing and offer creation
"""

import pytest


def _calculate_body(**kwargs):
    body = {
        "contractId": "contract-1",
        "agentId": "user-3",
        "agentCommissionRate": 0.7,
        "baseCommission": 100,
        "offerCommissionFormula": "Standard",
        "provider": "Enel",
        "startDate": "2024-01-15",
    }
    body.update(kwargs)
    return body


def _schedule_body(**kwargs):
    body = {
        "contractId": "contract-20",
        "agentId": "user-4",
        "offerId": "edison-inborsa",
        "agentCommissionRate": 1.0,
        "baseCommission": 0,
        "annualConsumption": 3000,
        "startDate": "2024-01-31",
    }
    body.update(kwargs)
    return body


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready(self, client):
        response = client.get("/api/health/ready")
        data = response.json()
        assert data["status"] == "ready"
        assert data["database"] == "connected"
        assert data["active_offers"] == 10


class TestCalculateEndpoint:
    def test_standard_example(self, client):
        response = client.post("/api/commissions/calculate", json=_calculate_body())
        assert response.status_code == 200

        payments = response.json()["payments"]
        assert len(payments) == 1
        assert payments[0]["amount"] == pytest.approx(70)
        assert payments[0]["type"] == "OneTime"
        assert payments[0]["paymentDate"] == "2024-01-15"
        assert payments[0]["agentId"] == "user-3"
        assert payments[0]["contractId"] == "contract-1"

    def test_inborsa_example(self, client):
        response = client.post(
            "/api/commissions/calculate",
            json=_calculate_body(
                provider="Edison",
                offerCommissionFormula="INBORSA",
                annualConsumption=3000,
                agentCommissionRate=1.0,
                startDate="2024-01-31",
            ),
        )
        assert response.status_code == 200

        payments = response.json()["payments"]
        assert len(payments) == 13
        assert payments[0]["amount"] == pytest.approx(58.5)
        assert payments[1]["paymentDate"] == "2024-02-29"
        assert payments[2]["paymentDate"] == "2024-03-31"
        assert payments[-1]["paymentDate"] == "2025-01-31"
        assert all(p["type"] == "Recurring" for p in payments[1:])

    def test_missing_consumption_is_422(self, client):
        response = client.post(
            "/api/commissions/calculate",
            json=_calculate_body(provider="edison", offerCommissionFormula="TOP50"),
        )
        assert response.status_code == 422
        assert "Annual consumption" in response.json()["detail"]

    def test_rate_out_of_range_rejected(self, client):
        response = client.post(
            "/api/commissions/calculate",
            json=_calculate_body(agentCommissionRate=1.5),
        )
        assert response.status_code == 422

    def test_unknown_formula_rejected(self, client):
        response = client.post(
            "/api/commissions/calculate",
            json=_calculate_body(offerCommissionFormula="TOP100"),
        )
        assert response.status_code == 422

    def test_empty_schedule(self, client):
        response = client.post(
            "/api/commissions/calculate",
            json=_calculate_body(baseCommission=0),
        )
        assert response.status_code == 200
        assert response.json() == {"payments": []}


class TestScheduleAndLedger:
    def test_schedule_then_list(self, client):
        response = client.post("/api/commissions/schedule", json=_schedule_body())
        assert response.status_code == 201
        assert len(response.json()["payments"]) == 13

        response = client.get("/api/commissions", params={"contractId": "contract-20"})
        assert response.status_code == 200

        data = response.json()
        assert data["total"] == 13
        assert data["items"][0]["paymentType"] == "OneTime"
        assert float(data["items"][0]["amount"]) == pytest.approx(58.5)
        assert all(item["status"] == "Unpaid" for item in data["items"])
        assert float(data["totals"]["Paid"]) == 0

    def test_settle_entry(self, client):
        client.post("/api/commissions/schedule", json=_schedule_body())
        items = client.get("/api/commissions", params={"agentId": "user-4"}).json()["items"]

        response = client.patch(
            f"/api/commissions/{items[0]['id']}",
            json={"status": "Paid"},
        )
        assert response.status_code == 200
        assert response.json()["status"] == "Paid"

        paid = client.get("/api/commissions", params={"status": "Paid"}).json()
        assert paid["total"] == 1
        assert float(paid["totals"]["Paid"]) == pytest.approx(58.5)

    def test_settle_missing_entry(self, client):
        response = client.patch("/api/commissions/9999", json={"status": "Paid"})
        assert response.status_code == 404

    def test_unknown_offer(self, client):
        response = client.post(
            "/api/commissions/schedule",
            json=_schedule_body(offerId="does-not-exist"),
        )
        assert response.status_code == 404

    def test_missing_consumption_stores_nothing(self, client):
        response = client.post(
            "/api/commissions/schedule",
            json=_schedule_body(contractId="contract-21", annualConsumption=None),
        )
        assert response.status_code == 422

        listed = client.get("/api/commissions", params={"contractId": "contract-21"})
        assert listed.json()["total"] == 0

    def test_inactive_offer_conflict(self, client):
        created = client.post(
            "/api/catalog/offers",
            json={
                "id": "eni-old",
                "name": "Old",
                "providerId": "eni",
                "department": "energia",
                "active": False,
            },
        )
        assert created.status_code == 201

        response = client.post(
            "/api/commissions/schedule",
            json=_schedule_body(offerId="eni-old"),
        )
        assert response.status_code == 409


class TestCatalogEndpoints:
    def test_seeded_providers(self, client):
        response = client.get("/api/catalog/providers", params={"department": "noleggio"})
        assert response.status_code == 200
        assert {p["id"] for p in response.json()} == {"leaseplan", "ald"}

    def test_offers_of_provider(self, client):
        response = client.get("/api/catalog/offers", params={"providerId": "edison"})
        formulas = {o["formula"] for o in response.json()}
        assert formulas == {"TOP50", "INBORSA"}

    def test_get_offer(self, client):
        response = client.get("/api/catalog/offers/enel-flex")
        assert response.status_code == 200
        assert response.json()["providerId"] == "enel"

        assert client.get("/api/catalog/offers/nope").status_code == 404

    def test_create_offer_forces_standard(self, client):
        response = client.post(
            "/api/catalog/offers",
            json={
                "id": "vodafone-special",
                "name": "Special",
                "providerId": "vodafone",
                "department": "telefonia",
                "formula": "INBORSA",
            },
        )
        assert response.status_code == 201
        assert response.json()["formula"] == "Standard"
        assert response.json()["recurringFactor"] is None

    def test_create_offer_unknown_provider(self, client):
        response = client.post(
            "/api/catalog/offers",
            json={
                "id": "acme-basic",
                "name": "Basic",
                "providerId": "acme",
                "department": "energia",
            },
        )
        assert response.status_code == 400

    def test_create_offer_department_mismatch(self, client):
        response = client.post(
            "/api/catalog/offers",
            json={
                "id": "edison-mobile",
                "name": "Edison Mobile",
                "providerId": "edison",
                "department": "telefonia",
            },
        )
        assert response.status_code == 400
        assert "department" in response.json()["detail"]
        assert client.get("/api/catalog/offers/edison-mobile").status_code == 404


class TestScheduleRounding:
    def test_response_lists_only_stored_payments(self, client):
        response = client.post(
            "/api/commissions/schedule",
            json=_schedule_body(
                contractId="contract-30",
                offerId="edison-top50",
                agentCommissionRate=0.5,
                baseCommission=100,
                annualConsumption=1.0,
            ),
        )
        assert response.status_code == 201

        payments = response.json()["payments"]
        assert len(payments) == 1
        assert payments[0]["type"] == "OneTime"
        assert payments[0]["amount"] == pytest.approx(50.0)

        listed = client.get("/api/commissions", params={"contractId": "contract-30"})
        assert listed.json()["total"] == len(payments)
