"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from laptop_saw.api.app import create_app


NEW_LAPTOP = {
    "name": "Zenbook 14 OLED",
    "brand": "ASUS",
    "price": 15000000,
    "ram": 16,
    "processor_score": 9500,
    "storage": 1024,
    "screen_size": 14.0,
}


@pytest.fixture
def client(service):
    with TestClient(create_app(service)) as test_client:
        yield test_client


class TestLaptopEndpoints:
    """Test cases for /laptops."""

    def test_list_laptops(self, client):
        """Test the catalog is listed most recent first."""
        response = client.get("/laptops")

        assert response.status_code == 200
        assert [laptop["id"] for laptop in response.json()] == ["l3", "l2", "l1"]

    def test_create_laptop(self, client):
        """Test creating a laptop returns 201 and the stored record."""
        response = client.post("/laptops", json=NEW_LAPTOP)

        assert response.status_code == 201
        body = response.json()
        assert body["id"]
        assert body["brand"] == "ASUS"
        assert body["extra_attributes"] == {}
        assert client.get(f"/laptops/{body['id']}").json()["name"] == "Zenbook 14 OLED"

    @pytest.mark.parametrize("payload", [
        dict(NEW_LAPTOP, price=-1),
        dict(NEW_LAPTOP, name=""),
        {key: value for key, value in NEW_LAPTOP.items() if key != "ram"},
        dict(NEW_LAPTOP, ram="lots"),
    ])
    def test_create_invalid_laptop(self, client, payload):
        """Test malformed laptops are rejected by request validation."""
        response = client.post("/laptops", json=payload)

        assert response.status_code == 422

    def test_get_unknown_laptop(self, client):
        """Test unknown ids return 404 with an error body."""
        response = client.get("/laptops/missing")

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "NOT_FOUND_RECORDNOTFOUNDERROR"
        assert body["category"] == "not_found"
        assert body["details"]["record_id"] == "missing"
        assert "traceback" not in body["details"]

    def test_update_laptop(self, client):
        """Test partial updates keep omitted fields."""
        response = client.put("/laptops/l1", json={"price": 11999000})

        assert response.status_code == 200
        assert response.json()["price"] == 11999000
        assert response.json()["ram"] == 16

    @pytest.mark.parametrize("payload", [
        {"price": None},
        {"name": None},
        {"ram": 32, "extra_attributes": None},
    ])
    def test_update_with_null_is_rejected(self, client, payload):
        """Test explicit nulls are rejected and leave the laptop scorable."""
        response = client.put("/laptops/l1", json=payload)

        assert response.status_code == 422
        assert client.get("/laptops/l1").json()["ram"] == 16
        assert client.get("/laptops").status_code == 200
        assert client.get("/ranking").status_code == 200

    def test_delete_laptop(self, client):
        """Test deleting returns 204 and removes the laptop."""
        response = client.delete("/laptops/l1")

        assert response.status_code == 204
        assert client.get("/laptops/l1").status_code == 404
        assert client.delete("/laptops/l1").status_code == 404


class TestCriteriaEndpoints:
    """Test cases for /criteria."""

    def test_list_criteria(self, client):
        """Test criteria are listed by attribute key."""
        response = client.get("/criteria")

        assert response.status_code == 200
        body = response.json()
        assert [criterion["attribute"] for criterion in body] == [
            "price", "processor_score", "ram", "screen_size", "storage"
        ]
        assert body[0]["type"] == "cost"

    def test_update_weights(self, client):
        """Test a valid bulk update."""
        response = client.put("/criteria/weights", json={"weights": [
            {"id": "c-price", "weight": 0.25},
            {"id": "c-cpu", "weight": 0.30},
        ]})

        assert response.status_code == 200
        weights = {criterion["id"]: criterion["weight"] for criterion in response.json()}
        assert weights["c-price"] == 0.25
        assert weights["c-cpu"] == 0.30

    def test_update_weights_invalid_total(self, client):
        """Test updates that break the weight total return 400."""
        response = client.put("/criteria/weights", json={"weights": [{"id": "c-price", "weight": 0.9}]})

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_WEIGHTVALIDATIONERROR"
        assert body["details"]["total"] == pytest.approx(1.6)
        assert client.get("/criteria").json()[0]["weight"] == 0.30

    def test_update_weights_unknown_criterion(self, client):
        """Test unknown criterion ids return 404."""
        response = client.put("/criteria/weights", json={"weights": [{"id": "c-missing", "weight": 0.1}]})

        assert response.status_code == 404

    def test_update_weights_empty(self, client):
        """Test an empty update is rejected by request validation."""
        response = client.put("/criteria/weights", json={"weights": []})

        assert response.status_code == 422

    def test_validate_weights(self, client):
        """Test proposed weights are validated without being saved."""
        response = client.post("/criteria/validate", json={"weights": [{"id": "c-screen", "weight": 0.2}]})

        assert response.status_code == 200
        body = response.json()
        assert body["is_valid"] is False
        assert body["total"] == pytest.approx(1.1)
        assert body["difference"] == pytest.approx(0.1)
        assert client.get("/criteria").json()[3]["weight"] == 0.10


class TestRankingEndpoint:
    """Test cases for /ranking."""

    def test_ranking(self, client):
        """Test the ranking lists laptops with scores, ranks and normalized values."""
        response = client.get("/ranking")

        assert response.status_code == 200
        body = response.json()
        assert [item["id"] for item in body] == ["l3", "l1", "l2"]
        assert [item["rank"] for item in body] == [1, 2, 3]
        assert body[0]["brand"] == "Acer"
        assert body[0]["normalized_values"]["storage"] == 1.0
        assert body[0]["score"] > body[1]["score"] > body[2]["score"]

    def test_ranking_after_catalog_change(self, client):
        """Test new laptops are ranked immediately."""
        client.post("/laptops", json=dict(NEW_LAPTOP, price=5000000, processor_score=12000, ram=32))

        body = client.get("/ranking").json()

        assert body[0]["name"] == "Zenbook 14 OLED"
        assert len(body) == 4

    def test_ranking_unscorable_catalog(self, client):
        """Test data that cannot be scored returns 422 and no partial ranking."""
        client.put("/laptops/l2", json={"price": 0})

        response = client.get("/ranking")

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "SCORING_DEGENERATECRITERIONERROR"
        assert body["details"]["alternative_id"] == "l2"
        assert body["suggestions"]


class TestApplicationStartup:
    """Test cases for the application factory."""

    def test_lifespan_builds_seeded_service(self):
        """Test the app builds and seeds the configured stores when no service is given."""
        with TestClient(create_app()) as client:
            assert len(client.get("/criteria").json()) == 5
            assert len(client.get("/laptops").json()) == 4

    def test_service_unavailable_before_startup(self):
        """Test requests without a service get 503."""
        client = TestClient(create_app())

        assert client.get("/laptops").status_code == 503
