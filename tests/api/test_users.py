"""
Tests for user profile, balance, and beneficiary endpoints.
"""


class TestProfile:

    def test_me(self, seeded_client, login):
        response = seeded_client.get("/users/me", headers=login("admin"))
        assert response.status_code == 200
        user = response.json()["user"]
        assert user["id"] == 1
        assert user["beneficiaries"] == [2]

    def test_get_user_by_id(self, seeded_client, login):
        response = seeded_client.get("/users/2", headers=login("admin"))
        assert response.status_code == 200
        assert response.json()["user"]["username"] == "user1"

    def test_get_missing_user_returns_404(self, seeded_client, login):
        response = seeded_client.get("/users/99", headers=login("admin"))
        assert response.status_code == 404
        assert response.json()["error"] == "User not found"

    def test_requires_token(self, seeded_client):
        assert seeded_client.get("/users/me").status_code == 401


class TestBalance:

    def test_balance(self, seeded_client, login):
        response = seeded_client.get("/users/balance", headers=login("user1"))
        assert response.status_code == 200
        assert response.json()["balance"] == 5000.0


class TestListUsers:

    def test_admin_can_list(self, seeded_client, login):
        response = seeded_client.get("/users", headers=login("admin"))
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert all("password_hash" not in u for u in data["users"])

    def test_non_admin_forbidden(self, seeded_client, login):
        response = seeded_client.get("/users", headers=login("user1"))
        assert response.status_code == 403


class TestUpdate:

    def test_update_own_email(self, seeded_client, login):
        response = seeded_client.put(
            "/users/2", json={"email": "new@example.com"}, headers=login("user1")
        )
        assert response.status_code == 200
        assert response.json()["user"]["email"] == "new@example.com"

    def test_update_other_user_forbidden(self, seeded_client, login):
        response = seeded_client.put(
            "/users/1", json={"email": "x@example.com"}, headers=login("user1")
        )
        assert response.status_code == 403

    def test_protected_field_rejected(self, seeded_client, login):
        response = seeded_client.put(
            "/users/2", json={"balance": 1000000}, headers=login("user1")
        )
        assert response.status_code == 400

    def test_empty_update_returns_400(self, seeded_client, login):
        response = seeded_client.put("/users/2", json={}, headers=login("user1"))
        assert response.status_code == 400
        assert response.json()["error"] == "No valid fields provided for update"


class TestBeneficiaries:

    def test_add_beneficiary(self, seeded_client, login):
        response = seeded_client.post(
            "/users/beneficiaries", json={"beneficiary_id": 1}, headers=login("user1")
        )
        assert response.status_code == 200
        assert response.json()["user"]["beneficiaries"] == [1]

    def test_add_unknown_returns_404(self, seeded_client, login):
        response = seeded_client.post(
            "/users/beneficiaries", json={"beneficiary_id": 50}, headers=login("user1")
        )
        assert response.status_code == 404

    def test_add_duplicate_returns_400(self, seeded_client, login):
        response = seeded_client.post(
            "/users/beneficiaries", json={"beneficiary_id": 2}, headers=login("admin")
        )
        assert response.status_code == 400

    def test_remove_beneficiary(self, seeded_client, login):
        response = seeded_client.delete("/users/beneficiaries/2", headers=login("admin"))
        assert response.status_code == 200
        assert response.json()["user"]["beneficiaries"] == []

    def test_remove_absent_returns_400(self, seeded_client, login):
        response = seeded_client.delete("/users/beneficiaries/1", headers=login("user1"))
        assert response.status_code == 400
