"""
Tests for transfer and statement endpoints.

The seeded store has admin (id 1, 10000.00, beneficiary user1)
and user1 (id 2, 5000.00, no beneficiaries).
"""


def send(client, headers, beneficiary_id, amount, description="test"):
    return client.post("/transactions/transfer", headers=headers, json={
        "beneficiary_id": beneficiary_id,
        "amount": amount,
        "description": description,
    })


class TestTransfer:

    def test_transfer_returns_201_with_balances(self, seeded_client, login):
        response = send(seeded_client, login("admin"), 2, 6000.00)
        assert response.status_code == 201
        data = response.json()
        assert data["transaction"]["amount"] == 6000.0
        assert data["transaction"]["status"] == "completed"
        assert data["transaction"]["transaction_type"] == "transfer"
        assert data["previous_sender_balance"] == 10000.0
        assert data["new_sender_balance"] == 4000.0
        assert data["previous_beneficiary_balance"] == 5000.0
        assert data["new_beneficiary_balance"] == 11000.0

    def test_non_beneficiary_limit_returns_403(self, seeded_client, login):
        response = send(seeded_client, login("user1"), 1, 5000.01)
        assert response.status_code == 403
        assert response.json()["error"] == (
            "Transfers to non-beneficiaries are limited to $5000.00"
        )

    def test_limit_boundary_allowed(self, seeded_client, login):
        response = send(seeded_client, login("user1"), 1, 5000.00)
        assert response.status_code == 201

    def test_self_transfer_returns_400(self, seeded_client, login):
        response = send(seeded_client, login("admin"), 1, 10)
        assert response.status_code == 400
        assert response.json()["error"] == "Cannot transfer to yourself"

    def test_unknown_beneficiary_returns_404(self, seeded_client, login):
        response = send(seeded_client, login("admin"), 42, 10)
        assert response.status_code == 404

    def test_insufficient_balance_returns_400(self, seeded_client, login):
        response = send(seeded_client, login("admin"), 2, 10000.01)
        assert response.status_code == 400
        assert response.json()["error"] == "Insufficient balance"

    def test_zero_amount_rejected_by_validation(self, seeded_client, login):
        response = send(seeded_client, login("admin"), 2, 0)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid input data"

    def test_fraction_of_a_cent_rejected(self, seeded_client, login):
        response = send(seeded_client, login("user1"), 1, 5000.004)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid input data"

        balance = seeded_client.get("/users/balance", headers=login("user1")).json()
        assert balance["balance"] == 5000.0

    def test_long_description_rejected(self, seeded_client, login):
        response = send(seeded_client, login("admin"), 2, 1, "x" * 256)
        assert response.status_code == 400

    def test_requires_token(self, seeded_client):
        response = seeded_client.post("/transactions/transfer", json={
            "beneficiary_id": 2, "amount": 1,
        })
        assert response.status_code == 401

    def test_balances_visible_after_transfer(self, seeded_client, login):
        send(seeded_client, login("admin"), 2, 6000)
        send(seeded_client, login("user1"), 1, 5000)

        admin = seeded_client.get("/users/balance", headers=login("admin")).json()
        user1 = seeded_client.get("/users/balance", headers=login("user1")).json()
        assert admin["balance"] == 9000.0
        assert user1["balance"] == 6000.0


class TestStatement:

    def test_statement_tags_direction(self, seeded_client, login):
        send(seeded_client, login("admin"), 2, 100, "first")
        send(seeded_client, login("user1"), 1, 40, "second")

        response = seeded_client.get("/transactions/statement", headers=login("admin"))
        assert response.status_code == 200
        data = response.json()
        assert data["user"] == {"id": 1, "username": "admin", "current_balance": 9940.0}
        assert [t["operation_type"] for t in data["transactions"]] == ["received", "sent"]
        assert data["transactions"][0]["sender_name"] == "user1"
        assert data["transactions"][0]["beneficiary_name"] == "admin"

    def test_statement_limit(self, seeded_client, login):
        headers = login("admin")
        for _ in range(3):
            send(seeded_client, headers, 2, 1)
        response = seeded_client.get(
            "/transactions/statement", params={"limit": 2}, headers=headers
        )
        assert len(response.json()["transactions"]) == 2

    def test_statement_limit_out_of_range(self, seeded_client, login):
        response = seeded_client.get(
            "/transactions/statement", params={"limit": 101}, headers=login("admin")
        )
        assert response.status_code == 400


class TestStats:

    def test_stats(self, seeded_client, login):
        send(seeded_client, login("admin"), 2, 100)
        send(seeded_client, login("user1"), 1, 25.5)

        response = seeded_client.get("/transactions/stats", headers=login("admin"))
        assert response.status_code == 200
        stats = response.json()["statistics"]
        assert stats == {
            "total_transactions": 2,
            "total_sent": 100.0,
            "total_received": 25.5,
            "current_balance": 9925.5,
        }


class TestTransactionById:

    def test_participant_can_view(self, seeded_client, login):
        txn_id = send(seeded_client, login("admin"), 2, 10).json()["transaction"]["id"]

        response = seeded_client.get(f"/transactions/{txn_id}", headers=login("user1"))
        assert response.status_code == 200
        txn = response.json()["transaction"]
        assert txn["operation_type"] == "received"
        assert txn["sender_name"] == "admin"

    def test_outsider_gets_403(self, seeded_client, login):
        txn_id = send(seeded_client, login("admin"), 2, 10).json()["transaction"]["id"]
        seeded_client.post("/auth/register", json={
            "username": "carol", "password": "secret1", "email": "carol@example.com",
        })

        response = seeded_client.get(
            f"/transactions/{txn_id}", headers=login("carol", "secret1")
        )
        assert response.status_code == 403

    def test_missing_returns_404(self, seeded_client, login):
        response = seeded_client.get("/transactions/555", headers=login("admin"))
        assert response.status_code == 404
        assert response.json()["error"] == "Transaction not found"


class TestAllTransactions:

    def test_admin_lists_all(self, seeded_client, login):
        send(seeded_client, login("admin"), 2, 10)
        send(seeded_client, login("user1"), 1, 5)

        response = seeded_client.get("/transactions/all", headers=login("admin"))
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert [t["id"] for t in data["transactions"]] == [1, 2]

    def test_non_admin_forbidden(self, seeded_client, login):
        response = seeded_client.get("/transactions/all", headers=login("user1"))
        assert response.status_code == 403
        assert response.json()["error"] == "Administrator access required"
