"""
用户管理 API 测试
"""
from fastapi.testclient import TestClient

from housekeeping.models.ontology import Incident, IncidentStatus, Room, RoomStatus, User, UserRole
from housekeeping.security.auth import verify_password


class TestCreateUser:

    def test_create_user(self, client: TestClient, admin_headers, db_session, sample_hotel):
        response = client.post("/api/users", headers=admin_headers, json={
            "username": "front2",
            "password": "abcd",
            "name": "Recepción 2",
            "role": "RECEPTION",
            "hotel_id": sample_hotel.id
        })

        assert response.status_code == 200
        data = response.json()
        assert data["role"] == "RECEPTION"
        assert data["is_active"] is True
        assert "password_hash" not in data

        user = db_session.get(User, data["id"])
        assert verify_password("abcd", user.password_hash)

    def test_duplicate_username(self, client: TestClient, admin_headers, maid_user):
        response = client.post("/api/users", headers=admin_headers, json={
            "username": "mucama1", "password": "abcd", "name": "X", "role": "MAID"
        })
        assert response.status_code == 400
        assert "已存在" in response.json()["detail"]

    def test_password_too_short(self, client: TestClient, admin_headers, db_session):
        response = client.post("/api/users", headers=admin_headers, json={
            "username": "nuevo", "password": "abc", "name": "Nuevo", "role": "MAID"
        })
        assert response.status_code == 400
        assert db_session.query(User).filter(User.username == "nuevo").first() is None

    def test_missing_password(self, client: TestClient, admin_headers):
        response = client.post("/api/users", headers=admin_headers, json={
            "username": "nuevo", "name": "Nuevo", "role": "MAID"
        })
        assert response.status_code == 400

    def test_missing_role(self, client: TestClient, admin_headers):
        response = client.post("/api/users", headers=admin_headers, json={
            "username": "nuevo", "password": "abcd", "name": "Nuevo"
        })
        assert response.status_code == 400

    def test_blank_username(self, client: TestClient, admin_headers):
        response = client.post("/api/users", headers=admin_headers, json={
            "username": " ", "password": "abcd", "name": "Nuevo", "role": "MAID"
        })
        assert response.status_code == 400

    def test_unknown_hotel(self, client: TestClient, admin_headers):
        response = client.post("/api/users", headers=admin_headers, json={
            "username": "nuevo", "password": "abcd", "name": "Nuevo", "role": "MAID", "hotel_id": 999
        })
        assert response.status_code == 404


class TestUpdateUser:

    def test_partial_update_keeps_password(self, client: TestClient, admin_headers, db_session, maid_user):
        old_hash = maid_user.password_hash

        response = client.put(f"/api/users/{maid_user.id}", headers=admin_headers, json={
            "name": "Ana Pérez",
            "password": ""
        })

        assert response.status_code == 200
        assert response.json()["name"] == "Ana Pérez"
        assert response.json()["username"] == "mucama1"
        db_session.expire_all()
        assert db_session.get(User, maid_user.id).password_hash == old_hash

    def test_update_password(self, client: TestClient, admin_headers, db_session, maid_user):
        response = client.put(f"/api/users/{maid_user.id}", headers=admin_headers, json={
            "password": "nueva-clave"
        })

        assert response.status_code == 200
        db_session.expire_all()
        assert verify_password("nueva-clave", db_session.get(User, maid_user.id).password_hash)

    def test_cannot_demote_admin(self, client: TestClient, admin_headers, db_session, admin_user):
        response = client.put(f"/api/users/{admin_user.id}", headers=admin_headers, json={
            "role": "MAID"
        })

        assert response.status_code == 400
        db_session.expire_all()
        assert db_session.get(User, admin_user.id).role == UserRole.ADMIN

        # 角色未变，删除仍被拒绝
        response = client.delete(f"/api/users/{admin_user.id}/hard", headers=admin_headers)
        assert response.status_code == 400
        assert db_session.get(User, admin_user.id) is not None

    def test_admin_keeps_role_on_update(self, client: TestClient, admin_headers, admin_user):
        response = client.put(f"/api/users/{admin_user.id}", headers=admin_headers, json={
            "role": "ADMIN",
            "name": "Administrador"
        })

        assert response.status_code == 200
        assert response.json()["role"] == "ADMIN"
        assert response.json()["name"] == "Administrador"

    def test_promote_to_admin(self, client: TestClient, admin_headers, reception_user):
        response = client.put(f"/api/users/{reception_user.id}", headers=admin_headers, json={
            "role": "ADMIN"
        })
        assert response.status_code == 200
        assert response.json()["role"] == "ADMIN"

    def test_rename_to_taken_username(self, client: TestClient, admin_headers, maid_user, reception_user):
        response = client.put(f"/api/users/{maid_user.id}", headers=admin_headers, json={
            "username": "front1"
        })
        assert response.status_code == 400

    def test_update_missing_user(self, client: TestClient, admin_headers):
        response = client.put("/api/users/999", headers=admin_headers, json={"name": "X"})
        assert response.status_code == 404


class TestUserQueries:

    def test_list_and_get(self, client: TestClient, admin_headers, maid_user):
        response = client.get("/api/users", headers=admin_headers)
        assert {u["username"] for u in response.json()} == {"admin", "mucama1"}

        response = client.get(f"/api/users/{maid_user.id}", headers=admin_headers)
        assert response.json()["role"] == "MAID"

        assert client.get("/api/users/999", headers=admin_headers).status_code == 404

    def test_by_role(self, client: TestClient, admin_headers, maid_user, reception_user):
        response = client.get("/api/users/role/MAID", headers=admin_headers)
        assert [u["username"] for u in response.json()] == ["mucama1"]

        response = client.get("/api/users/role/maid", headers=admin_headers)
        assert [u["username"] for u in response.json()] == ["mucama1"]

    def test_by_unknown_role(self, client: TestClient, admin_headers, maid_user):
        response = client.get("/api/users/role/JANITOR", headers=admin_headers)
        assert response.status_code == 200
        assert response.json() == []

    def test_by_hotel(self, client: TestClient, admin_headers, db_session, sample_hotel, maid_user):
        maid_user.hotel_id = sample_hotel.id
        db_session.commit()

        response = client.get(f"/api/users/hotel/{sample_hotel.id}", headers=admin_headers)
        assert [u["username"] for u in response.json()] == ["mucama1"]

    def test_active_only(self, client: TestClient, admin_headers, db_session, maid_user, reception_user):
        reception_user.is_active = False
        db_session.commit()

        response = client.get("/api/users/active", headers=admin_headers)
        assert {u["username"] for u in response.json()} == {"admin", "mucama1"}


class TestActivation:

    def test_deactivate_and_reactivate(self, client: TestClient, admin_headers, maid_user):
        response = client.patch(f"/api/users/{maid_user.id}/activate", headers=admin_headers,
                                json={"active": False})
        assert response.status_code == 200
        assert response.json()["is_active"] is False

        response = client.patch(f"/api/users/{maid_user.id}/activate", headers=admin_headers,
                                json={"active": True})
        assert response.json()["is_active"] is True

    def test_cannot_deactivate_admin(self, client: TestClient, admin_headers, db_session, admin_user):
        response = client.patch(f"/api/users/{admin_user.id}/activate", headers=admin_headers,
                                json={"active": False})

        assert response.status_code == 400
        db_session.expire_all()
        assert db_session.get(User, admin_user.id).is_active is True

    def test_soft_delete(self, client: TestClient, admin_headers, db_session, maid_user):
        response = client.delete(f"/api/users/{maid_user.id}", headers=admin_headers)

        assert response.status_code == 200
        db_session.expire_all()
        assert db_session.get(User, maid_user.id).is_active is False

    def test_cannot_delete_admin(self, client: TestClient, admin_headers, db_session, admin_user):
        response = client.delete(f"/api/users/{admin_user.id}", headers=admin_headers)

        assert response.status_code == 400
        db_session.expire_all()
        assert db_session.get(User, admin_user.id).is_active is True


class TestHardDelete:

    def test_hard_delete_clears_assignments(self, client: TestClient, admin_headers, db_session,
                                            make_rooms, maid_user):
        rooms = make_rooms(RoomStatus.DIRTY, 2, assigned_to_id=maid_user.id)
        db_session.add(Incident(room_id=rooms[0].id, reported_by_id=maid_user.id,
                                description="Toalla faltante", status=IncidentStatus.OPEN))
        db_session.commit()

        response = client.delete(f"/api/users/{maid_user.id}/hard", headers=admin_headers)

        assert response.status_code == 200
        db_session.expire_all()
        assert db_session.get(User, maid_user.id) is None
        assert [db_session.get(Room, r.id).assigned_to_id for r in rooms] == [None, None]
        assert db_session.query(Incident).count() == 0

    def test_hard_delete_admin_rejected(self, client: TestClient, admin_headers, db_session, admin_user):
        response = client.delete(f"/api/users/{admin_user.id}/hard", headers=admin_headers)

        assert response.status_code == 400
        db_session.expire_all()
        assert db_session.get(User, admin_user.id) is not None

    def test_hard_delete_requires_admin(self, client: TestClient, reception_headers, db_session, maid_user):
        response = client.delete(f"/api/users/{maid_user.id}/hard", headers=reception_headers)

        assert response.status_code == 403
        assert db_session.get(User, maid_user.id) is not None

    def test_hard_delete_missing_user(self, client: TestClient, admin_headers):
        assert client.delete("/api/users/999/hard", headers=admin_headers).status_code == 404
