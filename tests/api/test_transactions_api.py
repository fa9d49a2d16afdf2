"""
API tests for transaction endpoints.

Tests cover:
- Create, update and delete with balance effects
- Windowed listing and summaries
- Partial updates through the request body
- Error mapping (400, 401, 403, 404)
- Admin reads
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient


# =============================================================================
# HELPER FIXTURES
# =============================================================================


@pytest.fixture
def account(client: TestClient) -> dict:
    """Create an account with 100.00 and return its data."""
    response = client.post("/accounts", json={"method": "Cash", "balance": "100.00"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def category(client: TestClient) -> dict:
    response = client.post("/categories", json={"name": "Food", "type": "Expense"})
    assert response.status_code == 201
    return response.json()


def _balance(client: TestClient, account_id: int) -> Decimal:
    return Decimal(client.get(f"/accounts/{account_id}").json()["balance"])


def _create(client: TestClient, account: dict, category: dict, **overrides) -> dict:
    body = {
        "accountId": account["account_id"],
        "categoryId": category["category_id"],
        "amount": "20.00",
        "type": "expense",
        "note": "Groceries",
        "date": "2024-03-10T09:00:00",
    }
    body.update(overrides)
    response = client.post("/transactions", json=body)
    assert response.status_code == 201, response.text
    return response.json()


# =============================================================================
# COMMAND ENDPOINTS
# =============================================================================


class TestCreateTransactionAPI:
    """Tests for POST /transactions."""

    def test_create_returns_enriched_transaction(self, client, account, category):
        """
        GIVEN an account with 100.00
        WHEN I POST a 20.00 expense
        THEN response is 201 with category and account summaries and balance 80.00
        """
        data = _create(client, account, category)

        assert data["id"] is not None
        assert Decimal(data["amount"]) == Decimal("20.00")
        assert data["type"] == "expense"
        assert data["category"]["name"] == "Food"
        assert data["account"]["id"] == account["account_id"]
        assert Decimal(data["account"]["balance"]) == Decimal("80.00")
        assert _balance(client, account["account_id"]) == Decimal("80.00")

    def test_zero_amount_is_400(self, client, account, category):
        response = client.post("/transactions", json={
            "accountId": account["account_id"],
            "categoryId": category["category_id"],
            "amount": "0",
            "type": "expense",
        })

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"
        assert response.json()["field"] == "amount"

    def test_non_numeric_amount_is_400(self, client, account, category):
        """
        GIVEN a valid account and category
        WHEN I POST an amount that is not a number
        THEN response is 400 on the amount field, like any other bad amount
        """
        response = client.post("/transactions", json={
            "accountId": account["account_id"],
            "categoryId": category["category_id"],
            "amount": "abc",
            "type": "expense",
        })

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"
        assert response.json()["field"] == "amount"
        assert _balance(client, account["account_id"]) == Decimal("100.00")

    def test_oversized_amount_is_400(self, client, account, category):
        response = client.post("/transactions", json={
            "accountId": account["account_id"],
            "categoryId": category["category_id"],
            "amount": "10000000000000000.00",
            "type": "expense",
        })

        assert response.status_code == 400
        assert response.json()["field"] == "amount"

    def test_unknown_category_is_404(self, client, account):
        response = client.post("/transactions", json={
            "accountId": account["account_id"],
            "categoryId": 999,
            "amount": "5.00",
            "type": "expense",
        })

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"

    def test_other_users_account_is_404(self, client, account, category, other_user_headers):
        response = client.post(
            "/transactions",
            json={
                "accountId": account["account_id"],
                "categoryId": category["category_id"],
                "amount": "5.00",
                "type": "expense",
            },
            headers=other_user_headers,
        )

        assert response.status_code == 404
        assert _balance(client, account["account_id"]) == Decimal("100.00")

    def test_missing_identity_is_401(self, client, account, category):
        response = client.post(
            "/transactions",
            json={
                "accountId": account["account_id"],
                "categoryId": category["category_id"],
                "amount": "5.00",
                "type": "expense",
            },
            headers={"X-User-Id": ""},
        )

        assert response.status_code == 401

    def test_missing_field_is_422(self, client, account):
        response = client.post("/transactions", json={"accountId": account["account_id"]})

        assert response.status_code == 422


class TestUpdateTransactionAPI:
    """Tests for PUT /transactions/{id}."""

    def test_amount_update(self, client, account, category):
        created = _create(client, account, category)

        response = client.put(f"/transactions/{created['id']}", json={"amount": "30.00"})

        assert response.status_code == 200
        assert Decimal(response.json()["amount"]) == Decimal("30.00")
        assert response.json()["note"] == "Groceries"
        assert _balance(client, account["account_id"]) == Decimal("70.00")

    def test_null_note_clears_it(self, client, account, category):
        """
        GIVEN a transaction with a note
        WHEN I PUT {"note": null}
        THEN the note is cleared and the balance is unchanged
        """
        created = _create(client, account, category)

        response = client.put(f"/transactions/{created['id']}", json={"note": None})

        assert response.status_code == 200
        assert response.json()["note"] is None
        assert _balance(client, account["account_id"]) == Decimal("80.00")

    def test_empty_body_changes_nothing(self, client, account, category):
        created = _create(client, account, category)

        response = client.put(f"/transactions/{created['id']}", json={})

        assert response.status_code == 200
        assert response.json()["note"] == "Groceries"
        assert _balance(client, account["account_id"]) == Decimal("80.00")

    def test_move_between_accounts(self, client, category):
        account_a = client.post("/accounts", json={"method": "Cash", "balance": "50.00"}).json()
        account_b = client.post("/accounts", json={"method": "Bank", "balance": "50.00"}).json()
        created = _create(client, account_a, category, amount="40.00", type="income")

        response = client.put(
            f"/transactions/{created['id']}",
            json={"accountId": account_b["account_id"]},
        )

        assert response.status_code == 200
        assert _balance(client, account_a["account_id"]) == Decimal("50.00")
        assert _balance(client, account_b["account_id"]) == Decimal("90.00")

    def test_bad_type_is_400(self, client, account, category):
        created = _create(client, account, category)

        response = client.put(f"/transactions/{created['id']}", json={"type": "gift"})

        assert response.status_code == 400
        assert response.json()["field"] == "type"

    def test_non_numeric_amount_is_400(self, client, account, category):
        created = _create(client, account, category)

        response = client.put(f"/transactions/{created['id']}", json={"amount": "abc"})

        assert response.status_code == 400
        assert response.json()["field"] == "amount"
        assert _balance(client, account["account_id"]) == Decimal("80.00")

    def test_unknown_transaction_is_404(self, client):
        response = client.put("/transactions/999", json={"note": "x"})

        assert response.status_code == 404


class TestDeleteTransactionAPI:
    """Tests for DELETE /transactions/{id}."""

    def test_delete_restores_balance(self, client, account, category):
        created = _create(client, account, category)

        response = client.delete(f"/transactions/{created['id']}")

        assert response.status_code == 204
        assert _balance(client, account["account_id"]) == Decimal("100.00")

    def test_other_user_cannot_delete(self, client, account, category, other_user_headers):
        created = _create(client, account, category)

        response = client.delete(f"/transactions/{created['id']}", headers=other_user_headers)

        assert response.status_code == 404
        assert _balance(client, account["account_id"]) == Decimal("80.00")


# =============================================================================
# QUERY ENDPOINTS
# =============================================================================


class TestListTransactionsAPI:
    """Tests for GET /transactions/{account_id}."""

    def test_custom_interval(self, client, account, category):
        inside = _create(client, account, category, date="2024-03-10T09:00:00")
        _create(client, account, category, date="2023-01-10T09:00:00")

        response = client.get(
            f"/transactions/{account['account_id']}",
            params={"interval": "interval", "startDate": "2024-03-01", "endDate": "2024-03-31"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["transactions"][0]["id"] == inside["id"]

    def test_all_newest_first(self, client, account, category):
        older = _create(client, account, category, date="2023-01-10T09:00:00")
        newer = _create(client, account, category, date="2024-03-10T09:00:00")

        response = client.get(f"/transactions/{account['account_id']}", params={"interval": "all"})

        assert [t["id"] for t in response.json()["transactions"]] == [newer["id"], older["id"]]

    def test_bogus_interval_is_400(self, client, account):
        response = client.get(f"/transactions/{account['account_id']}", params={"interval": "bogus"})

        assert response.status_code == 400
        assert response.json()["field"] == "interval"

    def test_missing_end_date_is_400(self, client, account):
        response = client.get(
            f"/transactions/{account['account_id']}",
            params={"interval": "interval", "startDate": "2024-03-01"},
        )

        assert response.status_code == 400

    def test_other_users_account_is_404(self, client, account, other_user_headers):
        response = client.get(
            f"/transactions/{account['account_id']}",
            params={"interval": "all"},
            headers=other_user_headers,
        )

        assert response.status_code == 404

    def test_summary(self, client, account, category):
        _create(client, account, category, amount="20.00", date="2024-03-10T09:00:00")
        _create(client, account, category, amount="100.00", type="income", date="2024-03-11T09:00:00")

        response = client.get(
            f"/transactions/{account['account_id']}/summary",
            params={"interval": "interval", "startDate": "2024-03-01", "endDate": "2024-03-31"},
        )

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["income_total"]) == Decimal("100.00")
        assert Decimal(data["expense_total"]) == Decimal("20.00")
        assert Decimal(data["net"]) == Decimal("80.00")
        assert data["transaction_count"] == 2


class TestAdminTransactionsAPI:
    """Tests for the admin listing endpoints."""

    def test_requires_admin_role(self, client):
        response = client.get("/transactions/admin/all")

        assert response.status_code == 403

    def test_all_transactions(self, client, account, category, admin_headers):
        _create(client, account, category)

        response = client.get("/transactions/admin/all", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["count"] == 1

    def test_account_regardless_of_owner(self, client, account, category, admin_headers):
        _create(client, account, category)

        response = client.get(f"/transactions/admin/{account['account_id']}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["transactions"][0]["user_id"] == "farmer-1"

    def test_unknown_account_is_404(self, client, admin_headers):
        response = client.get("/transactions/admin/999", headers=admin_headers)

        assert response.status_code == 404
