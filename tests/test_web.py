import pytest

from payoff_calc_web.app import app

MORTGAGE = {
    "balance": 300000,
    "interest_rate": 4,
    "original_term": 30,
    "monthly_payment": 1432.25,
    "start_date": "2024-03-15",
}


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


class TestStatsEndpoint:
    def test_stats(self, client):
        response = client.post("/api/stats", json={"mortgage": MORTGAGE, "extra_payment": 50})
        assert response.status_code == 200
        data = response.get_json()
        stats = data["stats"]
        assert data["extra_payment"] == 50.0
        assert stats["total_payments"] < 360
        assert stats["interest_saved"] > 0
        assert stats["original_payoff_date"] == "2054-03-15"
        assert stats["display"]["original_payoff_date"] == "March 15, 2054"
        assert 0 < stats["progress"]["time_reduction_pct"] < 100

    def test_flat_body(self, client):
        response = client.post("/api/stats", json=dict(MORTGAGE, extra_payment=0))
        assert response.status_code == 200
        assert response.get_json()["stats"]["total_payments"] == 360

    def test_out_of_range(self, client):
        response = client.post("/api/stats", json={"mortgage": dict(MORTGAGE, interest_rate=25)})
        assert response.status_code == 400
        assert response.get_json()["errors"] == ["Interest rate cannot exceed 20%"]

    def test_missing_field(self, client):
        body = {k: v for k, v in MORTGAGE.items() if k != "balance"}
        response = client.post("/api/stats", json=body)
        assert response.status_code == 400
        assert response.get_json()["errors"] == ["Missing field: balance"]

    def test_non_numeric(self, client):
        response = client.post("/api/stats", json=dict(MORTGAGE, monthly_payment="lots"))
        assert response.status_code == 400

    def test_negative_extra(self, client):
        response = client.post("/api/stats", json={"mortgage": MORTGAGE, "extra_payment": -10})
        assert response.status_code == 400
        assert response.get_json()["errors"] == ["Extra payment cannot be negative"]

    def test_not_json(self, client):
        response = client.post("/api/stats", data="balance=1")
        assert response.status_code == 400


class TestScheduleEndpoint:
    def test_preview_is_truncated(self, client):
        response = client.post("/api/schedule", json={"mortgage": MORTGAGE})
        data = response.get_json()
        assert data["total_entries"] == 360
        assert len(data["schedule"]) == 120
        assert data["truncated"] == 240
        assert data["schedule"][0]["interest"] == pytest.approx(1000.0)

    def test_full_schedule(self, client):
        response = client.post("/api/schedule", json={"mortgage": MORTGAGE, "full": True})
        data = response.get_json()
        assert len(data["schedule"]) == 360
        assert "truncated" not in data
        assert data["schedule"][-1]["balance"] == 0.0


class TestScenariosEndpoint:
    def test_presets(self, client):
        response = client.post("/api/scenarios", json={"mortgage": MORTGAGE})
        labels = [s["label"] for s in response.get_json()["scenarios"]]
        assert labels == ["Conservative", "Moderate", "Aggressive", "Maximum"]

    def test_custom_amounts(self, client):
        response = client.post("/api/scenarios", json={"mortgage": MORTGAGE, "amounts": [25, 200]})
        scenarios = response.get_json()["scenarios"]
        assert [s["label"] for s in scenarios] == ["Custom", "Aggressive"]
        assert scenarios[0]["stats"]["interest_saved"] < scenarios[1]["stats"]["interest_saved"]

    def test_bad_amounts(self, client):
        response = client.post("/api/scenarios", json={"mortgage": MORTGAGE, "amounts": "100"})
        assert response.status_code == 400


class TestRoundUpsEndpoint:
    def test_total(self, client):
        body = {"transactions": [{"amount": 4.20}, {"amount": 9.99}, {"amount": 15.00}]}
        response = client.post("/api/round-ups", json=body)
        assert response.status_code == 200
        assert response.get_json() == {"round_up_total": 0.81, "display": "$1"}

    def test_malformed_transaction(self, client):
        response = client.post("/api/round-ups", json={"transactions": [{"value": 1}]})
        assert response.status_code == 422
        assert response.get_json()["error"] == "Failed to calculate round-up savings"


def test_default_mortgage(client):
    data = client.get("/api/default-mortgage").get_json()
    assert data["mortgage"]["balance"] == 350000.0
    assert data["mortgage"]["monthly_payment"] == 1850.0
