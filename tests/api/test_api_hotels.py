"""
酒店与楼栋 API 测试
"""
from fastapi.testclient import TestClient

from housekeeping.models.ontology import Building, Hotel


class TestHotels:

    def test_create_hotel(self, client: TestClient, admin_headers):
        response = client.post("/api/hotels", headers=admin_headers, json={
            "name": "Hotel Playa",
            "address": "Av. del Mar 1",
            "phone": "555-0200"
        })

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Hotel Playa"
        assert data["is_active"] is True

    def test_create_hotel_blank_name(self, client: TestClient, admin_headers):
        response = client.post("/api/hotels", headers=admin_headers, json={"name": "  "})
        assert response.status_code == 400

    def test_list_and_get_hotel(self, client: TestClient, admin_headers, sample_hotel):
        response = client.get("/api/hotels", headers=admin_headers)
        assert response.status_code == 200
        assert [h["name"] for h in response.json()] == ["Hotel Example"]

        response = client.get(f"/api/hotels/{sample_hotel.id}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["address"] == "123 Main St"

    def test_get_missing_hotel(self, client: TestClient, admin_headers):
        assert client.get("/api/hotels/999", headers=admin_headers).status_code == 404

    def test_update_hotel_rejects_null_active_flag(self, client: TestClient, admin_headers,
                                                   db_session, sample_hotel):
        response = client.put(f"/api/hotels/{sample_hotel.id}", headers=admin_headers, json={
            "is_active": None
        })

        assert response.status_code == 400
        db_session.expire_all()
        assert db_session.get(Hotel, sample_hotel.id).is_active is True
        assert client.get("/api/hotels", headers=admin_headers).status_code == 200

    def test_update_hotel(self, client: TestClient, admin_headers, sample_hotel):
        response = client.put(f"/api/hotels/{sample_hotel.id}", headers=admin_headers, json={
            "phone": "555-9999"
        })

        assert response.status_code == 200
        data = response.json()
        assert data["phone"] == "555-9999"
        assert data["name"] == "Hotel Example"

    def test_delete_hotel_is_soft(self, client: TestClient, admin_headers, db_session, sample_hotel):
        response = client.delete(f"/api/hotels/{sample_hotel.id}", headers=admin_headers)

        assert response.status_code == 200
        db_session.expire_all()
        hotel = db_session.get(Hotel, sample_hotel.id)
        assert hotel is not None
        assert hotel.is_active is False

        active = client.get("/api/hotels?is_active=true", headers=admin_headers).json()
        assert active == []


class TestBuildings:

    def test_create_building(self, client: TestClient, admin_headers, sample_hotel):
        response = client.post("/api/buildings", headers=admin_headers, json={
            "name": "Torre B",
            "floors": 8,
            "hotel_id": sample_hotel.id
        })

        assert response.status_code == 200
        data = response.json()
        assert data["floors"] == 8
        assert data["hotel_id"] == sample_hotel.id

    def test_create_building_missing_hotel(self, client: TestClient, admin_headers, db_session):
        response = client.post("/api/buildings", headers=admin_headers, json={
            "name": "Torre B",
            "hotel_id": 999
        })

        assert response.status_code == 404
        assert db_session.query(Building).count() == 0

    def test_list_by_hotel(self, client: TestClient, admin_headers, sample_building, sample_hotel):
        response = client.get(f"/api/buildings/hotel/{sample_hotel.id}", headers=admin_headers)
        assert response.status_code == 200
        assert [b["id"] for b in response.json()] == [sample_building.id]

        assert client.get("/api/buildings/hotel/999", headers=admin_headers).json() == []

    def test_update_building(self, client: TestClient, admin_headers, sample_building):
        response = client.put(f"/api/buildings/{sample_building.id}", headers=admin_headers, json={
            "name": "Edificio Principal"
        })
        assert response.status_code == 200
        assert response.json()["name"] == "Edificio Principal"

    def test_update_building_rejects_null_active_flag(self, client: TestClient, admin_headers,
                                                      db_session, sample_building):
        response = client.put(f"/api/buildings/{sample_building.id}", headers=admin_headers, json={
            "is_active": None
        })

        assert response.status_code == 400
        db_session.expire_all()
        assert db_session.get(Building, sample_building.id).is_active is True
        assert client.get("/api/buildings", headers=admin_headers).status_code == 200

    def test_update_building_missing_hotel(self, client: TestClient, admin_headers, sample_building):
        response = client.put(f"/api/buildings/{sample_building.id}", headers=admin_headers, json={
            "hotel_id": 999
        })
        assert response.status_code == 404

    def test_delete_building_is_soft(self, client: TestClient, admin_headers, db_session, sample_building):
        response = client.delete(f"/api/buildings/{sample_building.id}", headers=admin_headers)

        assert response.status_code == 200
        db_session.expire_all()
        assert db_session.get(Building, sample_building.id).is_active is False

    def test_get_missing_building(self, client: TestClient, admin_headers):
        assert client.get("/api/buildings/999", headers=admin_headers).status_code == 404
        assert client.delete("/api/buildings/999", headers=admin_headers).status_code == 404
